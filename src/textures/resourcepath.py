"""Asset locations and the fixed, ordered descriptor list for the vignette."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Tuple

ASSETS_PATH: str = "./assets/"

PROTAGONIST_DIR: str = "protagonist"
COMPANION_DIR: str = "companion"
ITEM_FILE: str = "item.png"
BACKGROUND_FILE: str = "background.png"

PROTAGONIST_FRAME_KEY: str = "protagonist-frame-{}"
COMPANION_FRAME_KEY: str = "companion-frame-{}"
ITEM_KEY: str = "item"
BACKGROUND_KEY: str = "background"


@dataclass(frozen=True)
class AssetDescriptor:
    key: str
    source: str


def protagonist_frame_key(index: int) -> str:
    """Key of the zero-based walk frame `index`."""
    return PROTAGONIST_FRAME_KEY.format(index + 1)


def companion_frame_key(index: int) -> str:
    return COMPANION_FRAME_KEY.format(index + 1)


def vignette_descriptors(
    root: str = ASSETS_PATH,
    *,
    protagonist_frames: int = 4,
    companion_frames: int = 7,
) -> Tuple[AssetDescriptor, ...]:
    """Build the ordered descriptor tuple.

    Order: protagonist frames, companion frames, item, background.
    """
    descriptors = []
    for i in range(protagonist_frames):
        descriptors.append(
            AssetDescriptor(
                protagonist_frame_key(i),
                os.path.join(root, PROTAGONIST_DIR, f"{i + 1}.png"),
            )
        )
    for i in range(companion_frames):
        descriptors.append(
            AssetDescriptor(
                companion_frame_key(i),
                os.path.join(root, COMPANION_DIR, f"{i + 1}.png"),
            )
        )
    descriptors.append(AssetDescriptor(ITEM_KEY, os.path.join(root, ITEM_FILE)))
    descriptors.append(
        AssetDescriptor(BACKGROUND_KEY, os.path.join(root, BACKGROUND_FILE))
    )
    return tuple(descriptors)
