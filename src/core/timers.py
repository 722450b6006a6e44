"""One-shot deferred callbacks driven by the host loop.

`TimerQueue` plays the role of a browser's setTimeout: callbacks are queued
with a due time and run from the main loop between frames via `run_due()`.
Nothing here sleeps or spawns threads.
"""

from __future__ import annotations

import heapq
import itertools
import logging
from typing import Callable, List, Tuple

logger = logging.getLogger(__name__)


class TimerHandle:
    """Returned by `TimerQueue.call_later`; cancel() is idempotent."""

    __slots__ = ("due", "callback", "cancelled", "fired")

    def __init__(self, due: float, callback: Callable[[], None]) -> None:
        self.due = due
        self.callback = callback
        self.cancelled = False
        self.fired = False

    def cancel(self) -> None:
        self.cancelled = True

    @property
    def active(self) -> bool:
        return not (self.cancelled or self.fired)


class TimerQueue:
    def __init__(self) -> None:
        self._heap: List[Tuple[float, int, TimerHandle]] = []
        self._seq = itertools.count()

    def call_later(
        self, delay_ms: float, callback: Callable[[], None], now: float
    ) -> TimerHandle:
        if delay_ms < 0:
            raise ValueError(f"delay_ms must be >= 0, got {delay_ms}")
        handle = TimerHandle(now + delay_ms, callback)
        heapq.heappush(self._heap, (handle.due, next(self._seq), handle))
        return handle

    def run_due(self, now: float) -> int:
        """Run every live callback due at or before `now`. Returns how many ran."""
        ran = 0
        while self._heap and self._heap[0][0] <= now:
            _, _, handle = heapq.heappop(self._heap)
            if handle.cancelled:
                continue
            handle.fired = True
            try:
                handle.callback()
            except Exception:
                logger.exception("Deferred callback failed")
            ran += 1
        return ran

    @property
    def pending(self) -> int:
        return sum(1 for _, _, h in self._heap if not h.cancelled)

    def cancel_all(self) -> None:
        for _, _, handle in self._heap:
            handle.cancel()
        self._heap.clear()
