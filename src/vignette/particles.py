"""Heart particles emitted around the companion once it is celebrating.

Each tick a Bernoulli trial may spawn one heart; every live heart then
drifts upward and fades by a fixed step. Hearts whose life reaches zero are
removed in the same pass, iterating from the back so removal never skips an
unvisited particle.

There is no cap on the list: the live count settles around
p * ticks_per_life (about 5 hearts with the default constants).
"""

from __future__ import annotations

import random
from typing import Optional

from config import (
    PARTICLE_GLYPH,
    PARTICLE_JITTER_X,
    PARTICLE_LIFE_DECREMENT,
    PARTICLE_OFFSET_X,
    PARTICLE_SPAWN_PROBABILITY,
    PARTICLE_SPEED_MAX,
    PARTICLE_SPEED_MIN,
)
from vignette.state import CompanionPhase, Particle, SimulationState


class ParticleSystem:
    def __init__(
        self,
        rng: Optional[random.Random] = None,
        *,
        spawn_probability: float = PARTICLE_SPAWN_PROBABILITY,
        offset_x: float = PARTICLE_OFFSET_X,
        jitter_x: float = PARTICLE_JITTER_X,
        speed_min: float = PARTICLE_SPEED_MIN,
        speed_max: float = PARTICLE_SPEED_MAX,
        life_decrement: float = PARTICLE_LIFE_DECREMENT,
        glyph: str = PARTICLE_GLYPH,
    ) -> None:
        if not 0.0 <= spawn_probability <= 1.0:
            raise ValueError(
                f"spawn_probability must be in [0, 1], got {spawn_probability}"
            )
        if life_decrement <= 0.0:
            raise ValueError("life_decrement must be positive")
        if speed_min > speed_max:
            raise ValueError("speed_min must not exceed speed_max")
        self.rng = rng or random.Random()
        self.spawn_probability = float(spawn_probability)
        self.offset_x = float(offset_x)
        self.jitter_x = float(jitter_x)
        self.speed_min = float(speed_min)
        self.speed_max = float(speed_max)
        self.life_decrement = float(life_decrement)
        self.glyph = glyph

    def max_live_estimate(self) -> float:
        """Expected steady-state particle count."""
        return self.spawn_probability * (1.0 / self.life_decrement)

    def update(self, state: SimulationState, origin_x: float, origin_y: float) -> None:
        """Spawn (while the companion is active), then advance and retire.

        `origin_x`/`origin_y` is the companion's top-left corner this tick.
        """
        if state.companion_phase is CompanionPhase.ACTIVE:
            self._maybe_spawn(state, origin_x, origin_y)

        particles = state.particles
        for i in range(len(particles) - 1, -1, -1):
            p = particles[i]
            p.y += p.velocity_y
            p.life -= self.life_decrement
            if p.life <= 0.0:
                del particles[i]

    def _maybe_spawn(self, state: SimulationState, x: float, y: float) -> None:
        # random() is in [0, 1), so p == 1.0 always spawns and p == 0.0 never does
        if self.rng.random() >= self.spawn_probability:
            return
        jitter = self.rng.uniform(-self.jitter_x, self.jitter_x)
        speed = self.rng.uniform(self.speed_min, self.speed_max)
        state.particles.append(
            Particle(
                x=x + self.offset_x + jitter,
                y=y,
                velocity_y=-speed,
                life=1.0,
                glyph=self.glyph,
            )
        )
