"""Texture upload utilities for OpenGL.

Uploads decoded pygame surfaces and builds the placeholder texture.
Decoding happens elsewhere (worker threads); everything here needs the GL
context and must run on the main thread.
"""

import logging
import pygame
from typing import Optional
from OpenGL.GL import (
    glGenTextures,
    glBindTexture,
    glTexImage2D,
    glTexParameteri,
    GL_TEXTURE_2D,
    GL_RGBA,
    GL_UNSIGNED_BYTE,
    GL_TEXTURE_MIN_FILTER,
    GL_TEXTURE_MAG_FILTER,
    GL_TEXTURE_WRAP_S,
    GL_TEXTURE_WRAP_T,
    GL_NEAREST,
    GL_CLAMP_TO_EDGE,
    GL_REPEAT,
)

logger = logging.getLogger(__name__)

_TEST_TEXTURE: Optional[int] = None


def upload_surface(surface: pygame.Surface) -> int:
    """Upload a decoded pygame surface and return its GL texture ID."""
    # convert_alpha needs the display, hence main-thread only
    surface = surface.convert_alpha()
    texture_data = pygame.image.tostring(surface, "RGBA", True)
    width, height = surface.get_size()

    texture_id = glGenTextures(1)
    glBindTexture(GL_TEXTURE_2D, texture_id)
    glTexImage2D(
        GL_TEXTURE_2D,
        0,
        GL_RGBA,
        width,
        height,
        0,
        GL_RGBA,
        GL_UNSIGNED_BYTE,
        texture_data,
    )

    # Nearest keeps pixel-art sprites crisp
    glTexParameteri(GL_TEXTURE_2D, GL_TEXTURE_MIN_FILTER, GL_NEAREST)
    glTexParameteri(GL_TEXTURE_2D, GL_TEXTURE_MAG_FILTER, GL_NEAREST)
    glTexParameteri(GL_TEXTURE_2D, GL_TEXTURE_WRAP_S, GL_CLAMP_TO_EDGE)
    glTexParameteri(GL_TEXTURE_2D, GL_TEXTURE_WRAP_T, GL_CLAMP_TO_EDGE)

    return texture_id


def create_test_texture() -> int:
    """Return the shared red/transparent checkerboard placeholder texture.

    Built once per GL context and reused for every missing sprite.
    """
    global _TEST_TEXTURE
    if _TEST_TEXTURE is not None:
        return _TEST_TEXTURE

    size = 64
    surface = pygame.Surface((size, size), pygame.SRCALPHA)

    # Checkerboard tile size in pixels
    tile = 8
    red = (255, 0, 0, 255)
    transparent = (0, 0, 0, 0)

    for y in range(size):
        ty = y // tile
        for x in range(size):
            tx = x // tile
            if (tx + ty) % 2 == 0:
                surface.set_at((x, y), red)
            else:
                surface.set_at((x, y), transparent)

    texture_data = pygame.image.tostring(surface, "RGBA", True)

    texture_id = glGenTextures(1)
    glBindTexture(GL_TEXTURE_2D, texture_id)
    glTexImage2D(
        GL_TEXTURE_2D,
        0,
        GL_RGBA,
        size,
        size,
        0,
        GL_RGBA,
        GL_UNSIGNED_BYTE,
        texture_data,
    )
    glTexParameteri(GL_TEXTURE_2D, GL_TEXTURE_MIN_FILTER, GL_NEAREST)
    glTexParameteri(GL_TEXTURE_2D, GL_TEXTURE_MAG_FILTER, GL_NEAREST)
    glTexParameteri(GL_TEXTURE_2D, GL_TEXTURE_WRAP_S, GL_REPEAT)
    glTexParameteri(GL_TEXTURE_2D, GL_TEXTURE_WRAP_T, GL_REPEAT)

    _TEST_TEXTURE = texture_id

    logger.debug("Created checkerboard test texture (ID: %s)", texture_id)
    return texture_id
