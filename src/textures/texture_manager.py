"""Centralized texture upload for the vignette.

Provides `upload_vignette_textures()` which turns the gate's decoded
surfaces into GL textures once the gate is ready. Keys that failed, were
still pending at the timeout, or fail to upload are left out; the render
surface draws a placeholder for them (or procedural art for the background).
"""

from __future__ import annotations

import logging
from typing import Dict

from textures.asset_gate import AssetGate, AssetStatus
from textures.texture_utils import upload_surface

logger = logging.getLogger(__name__)


def upload_vignette_textures(gate: AssetGate) -> Dict[str, int]:
    """Return {asset key: texture id} for every asset the gate loaded."""
    textures: Dict[str, int] = {}
    for descriptor in gate.descriptors:
        if gate.status(descriptor.key) is not AssetStatus.LOADED:
            continue
        try:
            textures[descriptor.key] = upload_surface(gate.payload(descriptor.key))
        except Exception as e:
            logger.warning("Failed to upload texture %s: %s", descriptor.key, e)
    return textures
