"""Screen-space overlays around the vignette: loading, rotate prompt, letter.

These only react to engine state (gate pending, portrait window) or to the
scene's milestone notification; none of them touch the simulation.
"""

from __future__ import annotations

import logging
from typing import Tuple

from OpenGL.GL import (
    glBegin,
    glEnd,
    glColor4f,
    glVertex2f,
    glLineWidth,
    GL_QUADS,
    GL_LINE_LOOP,
)

from config import MILESTONE_MESSAGE, MILESTONE_TITLE, PARTICLE_GLYPH
from ui.text_renderer import TextRenderer

logger = logging.getLogger(__name__)

PINK = (233, 30, 99)
GREY = (85, 85, 85)
ROTATE_BG = (255, 183, 178)


def is_portrait(width: float, height: float) -> bool:
    """The vignette only runs in landscape; a square window counts as portrait."""
    return width <= height


def _fill_rect(x, y, w, h, rgb: Tuple[int, int, int], alpha: float = 1.0) -> None:  # pragma: no cover - visual
    glColor4f(rgb[0] / 255.0, rgb[1] / 255.0, rgb[2] / 255.0, alpha)
    glBegin(GL_QUADS)
    glVertex2f(x, y)
    glVertex2f(x + w, y)
    glVertex2f(x + w, y + h)
    glVertex2f(x, y + h)
    glEnd()


def _stroke_rect(x, y, w, h, rgb: Tuple[int, int, int], width: float) -> None:  # pragma: no cover - visual
    glColor4f(rgb[0] / 255.0, rgb[1] / 255.0, rgb[2] / 255.0, 1.0)
    glLineWidth(width)
    glBegin(GL_LINE_LOOP)
    glVertex2f(x, y)
    glVertex2f(x + w, y)
    glVertex2f(x + w, y + h)
    glVertex2f(x, y + h)
    glEnd()


class LoadingOverlay:
    def __init__(self, text: TextRenderer, caption: str = "Loading Love...") -> None:
        self.text = text
        self.caption = caption

    def draw(self, width: float, height: float) -> None:  # pragma: no cover - visual
        _fill_rect(0, 0, width, height, (255, 255, 255))
        cx, cy = width / 2, height / 2
        self.text.draw_text(PARTICLE_GLYPH, cx, cy - 30, PINK, size=48, align="center")
        self.text.draw_text(self.caption, cx, cy + 20, PINK, align="center")


class RotateOverlay:
    def __init__(
        self,
        text: TextRenderer,
        caption: str = "Please rotate your device to landscape mode!",
    ) -> None:
        self.text = text
        self.caption = caption

    def draw(self, width: float, height: float) -> None:  # pragma: no cover - visual
        _fill_rect(0, 0, width, height, ROTATE_BG)
        self.text.draw_text(
            self.caption, width / 2, height / 2, (255, 255, 255), align="center"
        )


class MilestoneLetter:
    """Congratulatory panel revealed by the milestone notification."""

    def __init__(
        self,
        text: TextRenderer,
        title: str = MILESTONE_TITLE,
        message: str = MILESTONE_MESSAGE,
    ) -> None:
        self.text = text
        self.title = f"{PARTICLE_GLYPH} {title} {PARTICLE_GLYPH}"
        self.message = message
        self.visible = False

    def reveal(self) -> None:
        if not self.visible:
            logger.info("Showing milestone letter")
        self.visible = True

    def draw(self, width: float, height: float) -> None:  # pragma: no cover - visual
        if not self.visible:
            return
        panel_w = max(300.0, min(width * 0.7, 560.0))
        panel_h = 150.0
        x = (width - panel_w) / 2
        y = (height - panel_h) / 2
        _fill_rect(x, y, panel_w, panel_h, (255, 255, 255), 0.95)
        _stroke_rect(x, y, panel_w, panel_h, PINK, 4.0)
        self.text.draw_text(self.title, width / 2, y + 50, PINK, size=32, align="center")
        self.text.draw_text(self.message, width / 2, y + 105, GREY, size=20, align="center")
