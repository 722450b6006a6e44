"""Procedural sky and ground art.

The sky (gradient plus two puffy clouds) is the fallback whenever the
background image is missing; the ground band with grass tufts is always
procedural. Positions are proportions of a 800x450 reference frame so the
art follows the window size. Expects an orthographic pixel projection with
the origin at the top-left.
"""

from __future__ import annotations

import numpy as np
from OpenGL.GL import (
    glBegin,
    glEnd,
    glColor4f,
    glVertex2f,
    glLineWidth,
    glEnableClientState,
    glDisableClientState,
    glVertexPointer,
    glDrawArrays,
    GL_QUADS,
    GL_LINES,
    GL_TRIANGLE_FAN,
    GL_VERTEX_ARRAY,
    GL_FLOAT,
)

from config import GROUND_TOP_OFFSET

REFERENCE_SIZE = (800.0, 450.0)

SKY_TOP = (135, 206, 235)
SKY_BOTTOM = (224, 247, 250)
GROUND_TOP = (76, 175, 80)
GROUND_BOTTOM = (46, 125, 50)
GRASS = (56, 142, 60)
CLOUD_ALPHA = 0.8

# (x, y, radius) lobes in reference pixels
CLOUDS = (
    ((100.0, 80.0, 30.0), (140.0, 80.0, 40.0), (180.0, 80.0, 30.0)),
    ((600.0, 120.0, 25.0), (640.0, 120.0, 35.0), (680.0, 120.0, 25.0)),
)

GRASS_SPACING = 20.0
GRASS_LEAN = 5.0
GRASS_HEIGHT = 10.0


def _rgb(c):
    return c[0] / 255.0, c[1] / 255.0, c[2] / 255.0


def _vertical_gradient(x0, y0, x1, y1, top, bottom) -> None:
    glBegin(GL_QUADS)
    glColor4f(*_rgb(top), 1.0)
    glVertex2f(x0, y0)
    glVertex2f(x1, y0)
    glColor4f(*_rgb(bottom), 1.0)
    glVertex2f(x1, y1)
    glVertex2f(x0, y1)
    glEnd()


class SkyRenderer:
    def __init__(self, segments: int = 24) -> None:
        angles = np.linspace(0.0, 2.0 * np.pi, segments + 1, dtype=np.float32)
        # Unit fan: centre then rim
        self._unit_fan = np.vstack(
            [np.zeros((1, 2), dtype=np.float32), np.column_stack([np.cos(angles), np.sin(angles)])]
        ).astype(np.float32)

    def draw_sky(self, width: float, height: float) -> None:  # pragma: no cover - visual
        _vertical_gradient(0.0, 0.0, width, height, SKY_TOP, SKY_BOTTOM)
        sx = width / REFERENCE_SIZE[0]
        sy = height / REFERENCE_SIZE[1]
        glColor4f(1.0, 1.0, 1.0, CLOUD_ALPHA)
        glEnableClientState(GL_VERTEX_ARRAY)
        for cloud in CLOUDS:
            for cx, cy, r in cloud:
                fan = self.circle_fan(cx * sx, cy * sy, r * sy)
                glVertexPointer(2, GL_FLOAT, 0, fan)
                glDrawArrays(GL_TRIANGLE_FAN, 0, len(fan))
        glDisableClientState(GL_VERTEX_ARRAY)

    def draw_ground(self, ground_y: float, width: float, height: float) -> None:  # pragma: no cover - visual
        top = ground_y + GROUND_TOP_OFFSET
        if top >= height:
            return
        _vertical_gradient(0.0, top, width, height, GROUND_TOP, GROUND_BOTTOM)

        tufts = self.grass_lines(top, width)
        if len(tufts):
            glColor4f(*_rgb(GRASS), 1.0)
            glLineWidth(2.0)
            glEnableClientState(GL_VERTEX_ARRAY)
            glVertexPointer(2, GL_FLOAT, 0, tufts)
            glDrawArrays(GL_LINES, 0, len(tufts))
            glDisableClientState(GL_VERTEX_ARRAY)

    def circle_fan(self, cx: float, cy: float, radius: float) -> np.ndarray:
        return (self._unit_fan * np.float32(radius) + np.array([cx, cy], dtype=np.float32)).astype(np.float32)

    @staticmethod
    def grass_lines(top: float, width: float) -> np.ndarray:
        """Line-segment vertex pairs for one grass tuft every GRASS_SPACING px."""
        xs = np.arange(0.0, max(0.0, width), GRASS_SPACING, dtype=np.float32)
        if xs.size == 0:
            return np.zeros((0, 2), dtype=np.float32)
        verts = np.empty((xs.size * 2, 2), dtype=np.float32)
        verts[0::2, 0] = xs
        verts[0::2, 1] = top
        verts[1::2, 0] = xs + GRASS_LEAN
        verts[1::2, 1] = top - GRASS_HEIGHT
        return verts
