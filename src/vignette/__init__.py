"""Vignette package: re-export the simulation types for simpler imports.

    from vignette import VignetteScene, SimulationState, geometry
"""

from .state import CompanionPhase, Motion, Particle, SimulationState
from .geometry import SceneGeometry, geometry
from .characters import CharacterStateMachine, bob_offset, frame_index
from .particles import ParticleSystem
from .vignette_scene import VignetteScene

__all__ = [
    "CompanionPhase",
    "Motion",
    "Particle",
    "SimulationState",
    "SceneGeometry",
    "geometry",
    "CharacterStateMachine",
    "bob_offset",
    "frame_index",
    "ParticleSystem",
    "VignetteScene",
]
