"""Asset gate: withholds the frame loop until images are resolved or time runs out.

Loads run on a thread pool and may finish in any order. Workers never touch
gate state; they post their outcome to a thread-safe queue that the main
loop drains in `poll(now)`. Status changes and the readiness decision
therefore happen on the main thread, between ticks.

A failed load still counts as resolved: the gate prefers starting with
fallback art over waiting for a resource that will never arrive. Once ready,
the gate ignores further completions.
"""

from __future__ import annotations

import logging
import queue
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Dict, Mapping, Optional, Sequence, Tuple

import pygame

from config import ASSET_LOAD_WORKERS, ASSET_TIMEOUT_MS
from textures.resourcepath import AssetDescriptor

logger = logging.getLogger(__name__)

Loader = Callable[[str], Any]


class AssetStatus(Enum):
    PENDING = "pending"
    LOADED = "loaded"
    FAILED = "failed"


def load_image(path: str) -> pygame.Surface:
    """Decode an image file; safe to call from a worker thread."""
    return pygame.image.load(path)


class AssetGate:
    def __init__(
        self,
        descriptors: Sequence[AssetDescriptor],
        loader: Loader = load_image,
        *,
        executor: Optional[Executor] = None,
        timeout_ms: float = ASSET_TIMEOUT_MS,
        max_workers: int = ASSET_LOAD_WORKERS,
        on_ready: Optional[Callable[["AssetGate"], None]] = None,
    ) -> None:
        if timeout_ms < 0:
            raise ValueError(f"timeout_ms must be >= 0, got {timeout_ms}")
        self._descriptors: Tuple[AssetDescriptor, ...] = tuple(descriptors)
        keys = [d.key for d in self._descriptors]
        if len(set(keys)) != len(keys):
            raise ValueError("asset keys must be unique")

        self._loader = loader
        self._executor = executor
        self._owns_executor = executor is None
        self._max_workers = max(1, int(max_workers))
        self.timeout_ms = float(timeout_ms)
        self._on_ready = on_ready

        self._statuses: Dict[str, AssetStatus] = {
            k: AssetStatus.PENDING for k in keys
        }
        self._payloads: Dict[str, Any] = {}
        self._completions: "queue.SimpleQueue[Tuple[str, Any, Optional[BaseException]]]" = (
            queue.SimpleQueue()
        )
        self._started_at: Optional[float] = None
        self._resolved = 0
        self.ready_at: Optional[float] = None
        self.timed_out = False

    # ------------------------------------------------------------------
    @property
    def descriptors(self) -> Tuple[AssetDescriptor, ...]:
        return self._descriptors

    @property
    def statuses(self) -> Mapping[str, AssetStatus]:
        return MappingProxyType(self._statuses)

    def status(self, key: str) -> AssetStatus:
        return self._statuses.get(key, AssetStatus.FAILED)

    def payload(self, key: str) -> Any:
        return self._payloads.get(key)

    @property
    def resolved_count(self) -> int:
        return self._resolved

    @property
    def dispatched(self) -> bool:
        return self._started_at is not None

    @property
    def is_ready(self) -> bool:
        return self.ready_at is not None

    # ------------------------------------------------------------------
    def begin(self, now: float) -> None:
        """Dispatch one load per descriptor. Calling twice is a no-op."""
        if self._started_at is not None:
            return
        if self._executor is None:
            self._executor = ThreadPoolExecutor(
                max_workers=self._max_workers, thread_name_prefix="asset-load"
            )
        for descriptor in self._descriptors:
            future = self._executor.submit(self._loader, descriptor.source)
            future.add_done_callback(self._completion_poster(descriptor.key))
        # Only after every load is dispatched may poll() declare readiness
        self._started_at = now
        logger.debug("Dispatched %d asset loads", len(self._descriptors))

    def _completion_poster(self, key: str) -> Callable[[Future], None]:
        def _post(future: Future) -> None:
            if future.cancelled():
                return
            exc = future.exception()
            self._completions.put((key, None if exc else future.result(), exc))

        return _post

    def poll(self, now: float) -> bool:
        """Apply finished loads and decide readiness. Returns `is_ready`."""
        if self._started_at is None:
            return False

        while True:
            try:
                key, value, exc = self._completions.get_nowait()
            except queue.Empty:
                break
            self._resolve(key, value, exc)

        if self.ready_at is None:
            if self._resolved >= len(self._descriptors):
                self._become_ready(now, timed_out=False)
            elif now - self._started_at >= self.timeout_ms:
                self._become_ready(now, timed_out=True)
        return self.ready_at is not None

    def _resolve(self, key: str, value: Any, exc: Optional[BaseException]) -> None:
        if self.ready_at is not None:
            logger.debug("Ignoring late completion for %s", key)
            return
        if self._statuses.get(key) is not AssetStatus.PENDING:
            return
        if exc is None and value is not None:
            self._statuses[key] = AssetStatus.LOADED
            self._payloads[key] = value
        else:
            self._statuses[key] = AssetStatus.FAILED
            logger.warning("Failed to load asset %s: %s", key, exc or "no data")
        self._resolved += 1

    def _become_ready(self, now: float, *, timed_out: bool) -> None:
        self.ready_at = now
        self.timed_out = timed_out
        counts = {s: 0 for s in AssetStatus}
        for status in self._statuses.values():
            counts[status] += 1
        if timed_out:
            logger.warning(
                "Asset loading timed out after %.0f ms; starting anyway "
                "(%d loaded, %d failed, %d pending)",
                self.timeout_ms,
                counts[AssetStatus.LOADED],
                counts[AssetStatus.FAILED],
                counts[AssetStatus.PENDING],
            )
        else:
            logger.info(
                "Assets ready at %.0f ms (%d loaded, %d failed)",
                now,
                counts[AssetStatus.LOADED],
                counts[AssetStatus.FAILED],
            )
        if self._on_ready is not None:
            self._on_ready(self)

    def shutdown(self) -> None:
        if self._owns_executor and self._executor is not None:
            self._executor.shutdown(wait=False, cancel_futures=True)
            self._executor = None
