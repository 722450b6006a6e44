"""Scripted character logic: the protagonist's walk and the companion's reaction.

The protagonist walks right at a fixed per-tick speed, picks the item up as
it passes, and stops short of the companion. Arrival flips the companion to
its celebratory bob and arms a one-shot delayed milestone notification.

Animation frames are picked from wall-clock time, not from the tick count,
so the walk cycle plays at the same speed whatever the refresh rate.
"""

from __future__ import annotations

import logging
import math
from typing import Callable, Optional

from config import (
    ARRIVAL_THRESHOLD,
    BOB_AMPLITUDE,
    BOB_PERIOD_MS,
    COMPANION_FRAME_COUNT,
    COMPANION_FRAME_MS,
    MILESTONE_DELAY_MS,
    PICKUP_RADIUS,
    PROTAGONIST_FRAME_COUNT,
    PROTAGONIST_FRAME_MS,
    PROTAGONIST_SPEED,
)
from core.timers import TimerHandle, TimerQueue
from vignette.geometry import SceneGeometry
from vignette.state import CompanionPhase, Motion, SimulationState

logger = logging.getLogger(__name__)


def frame_index(now: float, duration_ms: float, frame_count: int) -> int:
    """floor(now / duration_ms) mod frame_count; 0 when there are no frames."""
    if frame_count <= 0:
        return 0
    return int(math.floor(now / duration_ms)) % frame_count


def bob_offset(now: float, amplitude: float, period_ms: float) -> float:
    return amplitude * abs(math.sin(now / period_ms))


class CharacterStateMachine:
    def __init__(
        self,
        timers: TimerQueue,
        on_milestone: Callable[[], None],
        *,
        speed: float = PROTAGONIST_SPEED,
        arrival_threshold: float = ARRIVAL_THRESHOLD,
        pickup_radius: float = PICKUP_RADIUS,
        walk_frame_ms: float = PROTAGONIST_FRAME_MS,
        walk_frame_count: int = PROTAGONIST_FRAME_COUNT,
        idle_frame_ms: float = COMPANION_FRAME_MS,
        idle_frame_count: int = COMPANION_FRAME_COUNT,
        bob_amplitude: float = BOB_AMPLITUDE,
        bob_period_ms: float = BOB_PERIOD_MS,
        milestone_delay_ms: float = MILESTONE_DELAY_MS,
    ) -> None:
        if walk_frame_ms <= 0 or idle_frame_ms <= 0 or bob_period_ms <= 0:
            raise ValueError("frame durations and bob period must be positive")
        if milestone_delay_ms < 0:
            raise ValueError("milestone_delay_ms must be >= 0")
        self._timers = timers
        self.on_milestone = on_milestone
        self.speed = float(speed)
        self.arrival_threshold = float(arrival_threshold)
        self.pickup_radius = float(pickup_radius)
        self.walk_frame_ms = float(walk_frame_ms)
        self.walk_frame_count = int(walk_frame_count)
        self.idle_frame_ms = float(idle_frame_ms)
        self.idle_frame_count = int(idle_frame_count)
        self.bob_amplitude = float(bob_amplitude)
        self.bob_period_ms = float(bob_period_ms)
        self.milestone_delay_ms = float(milestone_delay_ms)
        self._milestone_timer: Optional[TimerHandle] = None

    # ------------------------------------------------------------------
    def arrival_x(self, geo: SceneGeometry) -> float:
        return geo.target_x - self.arrival_threshold

    def update(self, state: SimulationState, geo: SceneGeometry, now: float) -> None:
        """Advance one tick. `now` is the single time sample for this tick."""
        stop_x = self.arrival_x(geo)

        if state.motion is Motion.WALKING:
            if state.protagonist_x < stop_x:
                state.protagonist_x += self.speed
                self._try_pickup(state, geo)
            # Re-checked after the move: the tick that crosses stop_x arrives, so
            # the companion only turns Active once the threshold already holds.
            if state.protagonist_x >= stop_x:
                self._arrive(state, now)

        if state.motion is Motion.WALKING:
            state.protagonist_frame = frame_index(
                now, self.walk_frame_ms, self.walk_frame_count
            )
        else:
            state.protagonist_frame = 0

        if state.companion_phase is CompanionPhase.ACTIVE:
            state.companion_bob = bob_offset(
                now, self.bob_amplitude, self.bob_period_ms
            )
        state.companion_frame = frame_index(
            now, self.idle_frame_ms, self.idle_frame_count
        )

    def _try_pickup(self, state: SimulationState, geo: SceneGeometry) -> None:
        if not state.item_on_ground:
            return
        if abs(state.protagonist_x - geo.item_x) < self.pickup_radius:
            state.item_on_ground = False
            state.has_item = True
            logger.debug("Item picked up at x=%.1f", state.protagonist_x)

    def _arrive(self, state: SimulationState, now: float) -> None:
        state.motion = Motion.ARRIVED
        if state.companion_phase is CompanionPhase.IDLE:
            state.companion_phase = CompanionPhase.ACTIVE
            state.milestone_reached = True
            logger.info("Protagonist arrived at t=%.0f ms", now)
        if not state.milestone_notified:
            # Guard first so later ticks never re-arm; the timer does the emitting
            state.milestone_notified = True
            self._milestone_timer = self._timers.call_later(
                self.milestone_delay_ms, self.on_milestone, now
            )
            logger.info(
                "Milestone notification due in %.0f ms", self.milestone_delay_ms
            )

    # ------------------------------------------------------------------
    @property
    def milestone_pending(self) -> bool:
        return self._milestone_timer is not None and self._milestone_timer.active

    def cancel_pending(self) -> None:
        if self._milestone_timer is not None:
            self._milestone_timer.cancel()
            self._milestone_timer = None
