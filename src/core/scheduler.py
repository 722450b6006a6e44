"""Frame scheduler: owns the start/stop lifecycle of the per-frame tick.

The scheduler asks its host for one callback per display refresh and
re-requests after each tick. A tick that raises is logged and counted, and
the next frame is still requested, so a single bad frame never stalls the
loop.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional, Protocol

logger = logging.getLogger(__name__)

TickFn = Callable[[float], None]


class FrameHost(Protocol):
    def request(self, callback: Callable[[float], None]) -> int: ...
    def cancel(self, handle: int) -> None: ...


class FrameScheduler:
    def __init__(self, host: FrameHost, tick: TickFn) -> None:
        self._host = host
        self._tick = tick
        self._handle: Optional[int] = None
        self._running = False
        self.tick_count = 0
        self.fault_count = 0

    @property
    def running(self) -> bool:
        return self._running

    def start(self) -> None:
        if self._running:
            return
        self._running = True
        self._handle = self._host.request(self._on_frame)
        logger.debug("Frame scheduler started")

    def stop(self) -> None:
        if not self._running:
            return
        self._running = False
        if self._handle is not None:
            self._host.cancel(self._handle)
            self._handle = None
        logger.debug("Frame scheduler stopped after %d ticks", self.tick_count)

    def _on_frame(self, now: float) -> None:
        self._handle = None
        if not self._running:
            return
        try:
            self._tick(now)
        except Exception:
            self.fault_count += 1
            logger.exception("Tick failed at t=%.1f ms; continuing", now)
        finally:
            self.tick_count += 1
            # tick() may have stopped us
            if self._running and self._handle is None:
                self._handle = self._host.request(self._on_frame)
