"""OpenGL implementation of the scene's render surface.

Sets up a top-left-origin orthographic projection each frame and draws
textured quads for sprites. Sprites without a texture are drawn with the
checkerboard placeholder; a missing background image is replaced by the
procedural sky.
"""

from __future__ import annotations

from typing import Dict, Optional

from OpenGL.GL import (
    glBindTexture,
    glBegin,
    glEnd,
    glTexCoord2f,
    glVertex2f,
    glColor4f,
    glEnable,
    glDisable,
    glBlendFunc,
    glClear,
    glViewport,
    glMatrixMode,
    glLoadIdentity,
    glOrtho,
    GL_TEXTURE_2D,
    GL_QUADS,
    GL_BLEND,
    GL_SRC_ALPHA,
    GL_ONE_MINUS_SRC_ALPHA,
    GL_DEPTH_TEST,
    GL_COLOR_BUFFER_BIT,
    GL_PROJECTION,
    GL_MODELVIEW,
)

from config import PARTICLE_COLOR, PARTICLE_FONT_SIZE
from render.sky_renderer import SkyRenderer
from textures.resourcepath import BACKGROUND_KEY
from textures.texture_utils import create_test_texture
from ui.text_renderer import TextRenderer


def begin_ortho(width: float, height: float) -> None:  # pragma: no cover - visual
    """Pixel projection, origin top-left, alpha blending on."""
    glViewport(0, 0, max(1, int(width)), max(1, int(height)))
    glMatrixMode(GL_PROJECTION)
    glLoadIdentity()
    glOrtho(0, width, height, 0, -1, 1)
    glMatrixMode(GL_MODELVIEW)
    glLoadIdentity()
    glDisable(GL_DEPTH_TEST)
    glEnable(GL_BLEND)
    glBlendFunc(GL_SRC_ALPHA, GL_ONE_MINUS_SRC_ALPHA)


def draw_textured_quad(tex_id: int, x: float, y: float, w: float, h: float) -> None:  # pragma: no cover - visual
    glEnable(GL_TEXTURE_2D)
    glBindTexture(GL_TEXTURE_2D, tex_id)
    glColor4f(1.0, 1.0, 1.0, 1.0)
    glBegin(GL_QUADS)
    glTexCoord2f(0.0, 1.0)
    glVertex2f(x, y)
    glTexCoord2f(1.0, 1.0)
    glVertex2f(x + w, y)
    glTexCoord2f(1.0, 0.0)
    glVertex2f(x + w, y + h)
    glTexCoord2f(0.0, 0.0)
    glVertex2f(x, y + h)
    glEnd()
    glDisable(GL_TEXTURE_2D)


class GLRenderSurface:
    def __init__(
        self,
        text: TextRenderer,
        sky: Optional[SkyRenderer] = None,
        textures: Optional[Dict[str, int]] = None,
    ) -> None:
        self.text = text
        self.sky = sky or SkyRenderer()
        # Filled in by the engine once the asset gate is ready
        self.textures: Dict[str, int] = dict(textures or {})
        self.width = 0.0
        self.height = 0.0

    def begin_frame(self, width: float, height: float) -> None:  # pragma: no cover - visual
        self.width, self.height = width, height
        glClear(GL_COLOR_BUFFER_BIT)
        begin_ortho(width, height)

    def draw_background(self) -> None:  # pragma: no cover - visual
        tex = self.textures.get(BACKGROUND_KEY)
        if tex:
            draw_textured_quad(tex, 0.0, 0.0, self.width, self.height)
        else:
            self.sky.draw_sky(self.width, self.height)

    def draw_ground(self, ground_y: float) -> None:  # pragma: no cover - visual
        self.sky.draw_ground(ground_y, self.width, self.height)

    def draw_sprite(self, key: str, x: float, y: float, w: float, h: float) -> None:  # pragma: no cover - visual
        tex = self.textures.get(key) or create_test_texture()
        draw_textured_quad(tex, x, y, w, h)

    def draw_text(self, glyph: str, x: float, y: float, alpha: float) -> None:  # pragma: no cover - visual
        # (x, y) is the baseline-left corner, like a canvas fillText
        self.text.draw_text(
            glyph,
            x,
            y,
            PARTICLE_COLOR,
            alpha=alpha,
            size=PARTICLE_FONT_SIZE,
            align="bottomleft",
        )

    def end_frame(self) -> None:  # pragma: no cover - visual
        glColor4f(1.0, 1.0, 1.0, 1.0)
