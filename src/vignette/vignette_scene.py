"""The vignette: one owned simulation state, stepped and painted per tick.

Each tick samples the viewport, derives the scene anchors, advances the
characters and the hearts with one shared time sample, then paints the
result. The scene is the only holder of its `SimulationState`; the engine
and overlays only observe it through the milestone notification.
"""

from __future__ import annotations

import logging
import random
from typing import Callable, List, Optional

from config import (
    CHARACTER_SIZE,
    CHARACTER_Y_OFFSET,
    HELD_ITEM_OFFSET,
    HELD_ITEM_SIZE,
    ITEM_SIZE,
    ITEM_Y_OFFSET,
    RANDOM_SEED,
)
from core.drawable import RenderSurface, ViewportProvider
from core.scene import Scene
from core.timers import TimerQueue
from textures.resourcepath import (
    ITEM_KEY,
    companion_frame_key,
    protagonist_frame_key,
)
from vignette.characters import CharacterStateMachine
from vignette.geometry import SceneGeometry, geometry
from vignette.particles import ParticleSystem
from vignette.state import SimulationState

logger = logging.getLogger(__name__)

MilestoneListener = Callable[[], None]


class VignetteScene(Scene):
    def __init__(
        self,
        viewport: ViewportProvider,
        surface: RenderSurface,
        timers: TimerQueue,
        *,
        characters: Optional[CharacterStateMachine] = None,
        particles: Optional[ParticleSystem] = None,
        state: Optional[SimulationState] = None,
        seed: Optional[int] = RANDOM_SEED,
    ) -> None:
        super().__init__()
        self.viewport = viewport
        self.surface = surface
        self.state = state or SimulationState()
        if characters is None:
            characters = CharacterStateMachine(timers, self._emit_milestone)
        else:
            # Listeners hang off the scene, whoever built the state machine
            characters.on_milestone = self._emit_milestone
        self.characters = characters
        self.particles = particles or ParticleSystem(random.Random(seed))
        self.geometry: Optional[SceneGeometry] = None
        self._listeners: List[MilestoneListener] = []
        self._milestone_delivered = False

    # ------------------------------------------------------------------
    def add_milestone_listener(self, listener: MilestoneListener) -> None:
        self._listeners.append(listener)

    @property
    def milestone_delivered(self) -> bool:
        return self._milestone_delivered

    def _emit_milestone(self) -> None:
        if self._milestone_delivered:
            return
        self._milestone_delivered = True
        logger.info("Milestone reached; notifying %d listener(s)", len(self._listeners))
        for listener in list(self._listeners):
            try:
                listener()
            except Exception:
                logger.exception("Milestone listener failed")

    # ------------------------------------------------------------------
    def companion_y(self, geo: SceneGeometry) -> float:
        return geo.ground_y + CHARACTER_Y_OFFSET - self.state.companion_bob

    def update(self, now: float) -> None:
        width, height = self.viewport.size()
        geo = geometry(width, height)
        self.geometry = geo
        if geo.degenerate:
            return
        self.characters.update(self.state, geo, now)
        self.particles.update(self.state, geo.target_x, self.companion_y(geo))
        super().update(now)

    def tick(self, now: float) -> None:
        self.update(now)
        if self.geometry is None or self.geometry.degenerate:
            return
        self.draw(self.geometry)

    def draw(self, geo: SceneGeometry) -> None:
        s = self.state
        surface = self.surface
        surface.begin_frame(geo.width, geo.height)
        try:
            surface.draw_background()
            surface.draw_ground(geo.ground_y)

            if s.item_on_ground:
                surface.draw_sprite(
                    ITEM_KEY, geo.item_x, geo.ground_y + ITEM_Y_OFFSET,
                    ITEM_SIZE, ITEM_SIZE,
                )

            hero_y = geo.ground_y + CHARACTER_Y_OFFSET
            surface.draw_sprite(
                protagonist_frame_key(s.protagonist_frame),
                s.protagonist_x, hero_y, CHARACTER_SIZE, CHARACTER_SIZE,
            )
            if s.has_item:
                hx, hy = HELD_ITEM_OFFSET
                surface.draw_sprite(
                    ITEM_KEY, s.protagonist_x + hx, hero_y + hy,
                    HELD_ITEM_SIZE, HELD_ITEM_SIZE,
                )

            surface.draw_sprite(
                companion_frame_key(s.companion_frame),
                geo.target_x, self.companion_y(geo), CHARACTER_SIZE, CHARACTER_SIZE,
            )

            for p in s.particles:
                if p.life > 0.0:
                    surface.draw_text(p.glyph, p.x, p.y, p.life)
        finally:
            surface.end_frame()

    def dispose(self) -> None:
        """Cancel the pending milestone timer; nothing fires after this."""
        self.characters.cancel_pending()
        self._listeners.clear()
        super().dispose()
