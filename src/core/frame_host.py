"""Per-refresh callback queue (the requestAnimationFrame of the pygame loop).

The engine calls `run(now)` once per display refresh. Callbacks requested
while a run is in progress wait for the next refresh, so a callback that
re-requests itself runs exactly once per frame.
"""

from __future__ import annotations

import itertools
from typing import Callable, Dict

FrameCallback = Callable[[float], None]


class FrameQueue:
    def __init__(self) -> None:
        self._pending: Dict[int, FrameCallback] = {}
        self._ids = itertools.count(1)

    def request(self, callback: FrameCallback) -> int:
        handle = next(self._ids)
        self._pending[handle] = callback
        return handle

    def cancel(self, handle: int) -> None:
        self._pending.pop(handle, None)

    def run(self, now: float) -> int:
        batch = self._pending
        self._pending = {}
        for callback in batch.values():
            callback(now)
        return len(batch)

    def __len__(self) -> int:
        return len(self._pending)
