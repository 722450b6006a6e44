"""Scene anchors derived from the viewport size.

Recomputed every tick; nothing is cached because the window may be resized
between two frames.
"""

from __future__ import annotations

from dataclasses import dataclass

from config import GROUND_Y_RATIO, ITEM_X_RATIO, TARGET_X_RATIO


@dataclass(frozen=True)
class SceneGeometry:
    width: float
    height: float
    ground_y: float
    target_x: float
    item_x: float

    @property
    def degenerate(self) -> bool:
        """True while the surface has no area (e.g. mid-resize or minimised)."""
        return self.width <= 0.0 or self.height <= 0.0


def geometry(
    width: float,
    height: float,
    *,
    ground_ratio: float = GROUND_Y_RATIO,
    target_ratio: float = TARGET_X_RATIO,
    item_ratio: float = ITEM_X_RATIO,
) -> SceneGeometry:
    # Negative sizes reported by a half-resized surface clamp to zero
    w = max(0.0, float(width))
    h = max(0.0, float(height))
    return SceneGeometry(
        width=w,
        height=h,
        ground_y=ground_ratio * h,
        target_x=target_ratio * w,
        item_x=item_ratio * w,
    )
