"""Simple text rendering for OpenGL with pygame fonts.

Draws 2D text and glyphs (hearts, overlay captions) in screen space. Each
distinct (text, colour, size) is rendered once to a texture and reused;
per-draw transparency is applied with the vertex colour so fading glyphs do
not re-upload anything.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple, Optional

import pygame
from OpenGL.GL import (
    glGenTextures,
    glBindTexture,
    glTexImage2D,
    glTexParameteri,
    glBegin,
    glEnd,
    glTexCoord2f,
    glVertex2f,
    glColor4f,
    glEnable,
    glDisable,
    GL_TEXTURE_2D,
    GL_TEXTURE_MIN_FILTER,
    GL_TEXTURE_MAG_FILTER,
    GL_LINEAR,
    GL_RGBA,
    GL_UNSIGNED_BYTE,
    GL_QUADS,
)

Color = Tuple[int, int, int]


@dataclass
class _TexSlot:
    id: int
    size: Tuple[int, int]


def aligned_origin(x: float, y: float, w: float, h: float, align: str) -> Tuple[float, float]:
    """Top-left corner for a w x h box anchored at (x, y) by `align`."""
    if align == "bottomleft":
        return x, y - h
    if align == "center":
        return x - w / 2, y - h / 2
    return x, y


class TextRenderer:
    """2D text renderer for OpenGL using pygame.font.

    Assumes the caller has set an orthographic pixel projection with the
    origin at the top-left and enabled alpha blending.
    """

    def __init__(self, size: int = 24, font_name: Optional[str] = None) -> None:
        if not pygame.font.get_init():
            pygame.font.init()
        self._font_name = font_name
        self._default_size = size
        self._fonts: Dict[int, pygame.font.Font] = {}
        self._cache: Dict[Tuple[str, Color, int], _TexSlot] = {}

    def font(self, size: Optional[int] = None) -> pygame.font.Font:
        size = size or self._default_size
        f = self._fonts.get(size)
        if f is None:
            f = pygame.font.Font(self._font_name, size)
            self._fonts[size] = f
        return f

    # --------------------------- rendering ------------------------------
    def _upload_surface(self, slot: _TexSlot, surf: pygame.Surface) -> None:
        data = pygame.image.tostring(surf, "RGBA", True)
        w, h = surf.get_width(), surf.get_height()
        glBindTexture(GL_TEXTURE_2D, slot.id)
        glTexImage2D(
            GL_TEXTURE_2D,
            0,
            GL_RGBA,
            w,
            h,
            0,
            GL_RGBA,
            GL_UNSIGNED_BYTE,
            data,
        )
        glTexParameteri(GL_TEXTURE_2D, GL_TEXTURE_MIN_FILTER, GL_LINEAR)
        glTexParameteri(GL_TEXTURE_2D, GL_TEXTURE_MAG_FILTER, GL_LINEAR)
        slot.size = (w, h)

    def _get_slot(self, text: str, color: Color, size: int) -> _TexSlot:
        cache_key = (text, color, size)
        slot = self._cache.get(cache_key)
        if slot is None:
            slot = _TexSlot(id=glGenTextures(1), size=(0, 0))
            surf = self.font(size).render(text, True, color).convert_alpha()
            self._upload_surface(slot, surf)
            self._cache[cache_key] = slot
        return slot

    def draw_text(
        self,
        text: str,
        x: float,
        y: float,
        color: Color = (255, 255, 255),
        *,
        alpha: float = 1.0,
        size: Optional[int] = None,
        align: str = "topleft",
    ) -> Tuple[int, int]:  # returns (w, h)
        """Draw a single line of text at screen coords.

        align: 'topleft' | 'bottomleft' | 'center'
        """
        if not text or alpha <= 0.0:
            return 0, 0
        slot = self._get_slot(text, color, size or self._default_size)
        w, h = slot.size
        draw_x, draw_y = aligned_origin(x, y, w, h, align)

        glEnable(GL_TEXTURE_2D)
        glBindTexture(GL_TEXTURE_2D, slot.id)
        glColor4f(1.0, 1.0, 1.0, min(1.0, alpha))
        glBegin(GL_QUADS)
        # Note: pygame.image.tostring with True gives origin at top-left, so v coords flipped
        glTexCoord2f(0.0, 1.0)
        glVertex2f(draw_x, draw_y)
        glTexCoord2f(1.0, 1.0)
        glVertex2f(draw_x + w, draw_y)
        glTexCoord2f(1.0, 0.0)
        glVertex2f(draw_x + w, draw_y + h)
        glTexCoord2f(0.0, 0.0)
        glVertex2f(draw_x, draw_y + h)
        glEnd()
        glDisable(GL_TEXTURE_2D)
        return w, h
