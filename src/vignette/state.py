"""Simulation state: the single mutable aggregate owned by the scene.

Only the scene's tick mutates it; renderers read it after the update step.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List

from config import PARTICLE_GLYPH, PROTAGONIST_START_X


class CompanionPhase(Enum):
    IDLE = "idle"
    ACTIVE = "active"


class Motion(Enum):
    WALKING = "walking"
    ARRIVED = "arrived"


@dataclass
class Particle:
    x: float
    y: float
    velocity_y: float
    life: float = 1.0
    glyph: str = PARTICLE_GLYPH


@dataclass
class SimulationState:
    protagonist_x: float = PROTAGONIST_START_X
    motion: Motion = Motion.WALKING
    has_item: bool = False
    item_on_ground: bool = True
    companion_phase: CompanionPhase = CompanionPhase.IDLE
    companion_bob: float = 0.0
    milestone_reached: bool = False
    milestone_notified: bool = False
    protagonist_frame: int = 0
    companion_frame: int = 0
    particles: List[Particle] = field(default_factory=list)
