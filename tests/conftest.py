from concurrent.futures import Executor, Future

import pytest

from core.timers import TimerQueue


class RecordingSurface:
    """Render surface that records every draw call instead of painting."""

    def __init__(self, fail_on=None):
        self.calls = []
        self.fail_on = fail_on

    def _record(self, name, *args):
        self.calls.append((name,) + args)
        if self.fail_on == name:
            raise RuntimeError(f"{name} exploded")

    def begin_frame(self, width, height):
        self._record("begin_frame", width, height)

    def draw_background(self):
        self._record("draw_background")

    def draw_ground(self, ground_y):
        self._record("draw_ground", ground_y)

    def draw_sprite(self, key, x, y, w, h):
        self._record("draw_sprite", key, x, y, w, h)

    def draw_text(self, glyph, x, y, alpha):
        self._record("draw_text", glyph, x, y, alpha)

    def end_frame(self):
        self._record("end_frame")

    def named(self, name):
        return [c for c in self.calls if c[0] == name]

    def sprites(self, key_prefix=""):
        return [c for c in self.named("draw_sprite") if c[1].startswith(key_prefix)]


class FixedViewport:
    def __init__(self, width=720.0, height=405.0):
        self.width = width
        self.height = height

    def size(self):
        return self.width, self.height


class ManualExecutor(Executor):
    """Executor whose jobs run only when the test says so, in any order."""

    def __init__(self):
        self.jobs = []

    def submit(self, fn, *args, **kwargs):
        future = Future()
        self.jobs.append((fn, args, kwargs, future))
        return future

    def complete(self, index):
        fn, args, kwargs, future = self.jobs[index]
        try:
            future.set_result(fn(*args, **kwargs))
        except Exception as exc:
            future.set_exception(exc)

    def complete_all(self, indices=None):
        for i in indices if indices is not None else range(len(self.jobs)):
            self.complete(i)


@pytest.fixture
def surface():
    return RecordingSurface()


@pytest.fixture
def viewport():
    return FixedViewport()


@pytest.fixture
def timers():
    return TimerQueue()


@pytest.fixture
def executor():
    return ManualExecutor()
