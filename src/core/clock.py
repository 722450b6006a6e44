"""Millisecond wall-clock sources for the frame loop.

The loop samples the clock once per refresh and hands the same value to
everything that runs in that tick.
"""

from __future__ import annotations

from typing import Protocol

import pygame


class Clock(Protocol):
    def now_ms(self) -> float: ...  # noqa: D401


class PygameClock:
    """Milliseconds since pygame.init(); monotonic."""

    def now_ms(self) -> float:
        return float(pygame.time.get_ticks())
