import types

import pytest

import core.engine as engine_module
from core.engine import Engine
from core.frame_host import FrameQueue
from core.scheduler import FrameScheduler
from textures.asset_gate import AssetGate
from textures.resourcepath import AssetDescriptor
from vignette import VignetteScene

TICK_MS = 16.0


@pytest.fixture
def engine(monkeypatch, viewport, surface, timers, executor):
    """Engine wired by hand so no window or GL context is opened."""
    monkeypatch.setattr(
        engine_module, "upload_vignette_textures", lambda gate: {"item": 1}
    )
    eng = object.__new__(Engine)
    eng.viewport = viewport
    eng.surface = types.SimpleNamespace(textures={})
    eng.frames = FrameQueue()
    eng.scene = VignetteScene(viewport, surface, timers, seed=5)
    eng.scheduler = FrameScheduler(eng.frames, eng.scene.tick)
    eng.gate = AssetGate(
        [AssetDescriptor("item", "item.png"), AssetDescriptor("background", "bg.png")],
        lambda source: f"surface:{source}",
        executor=executor,
        on_ready=eng._on_assets_ready,
    )
    eng._portrait = False
    return eng


def step(eng, now, count=1):
    """One pass of the main loop minus the window: gate, lifecycle, frames."""
    for _ in range(count):
        eng.gate.poll(now)
        eng._sync_lifecycle()
        eng.frames.run(now)
        now += TICK_MS
    return now


def test_loop_waits_for_assets_then_pauses_in_portrait(engine, viewport, executor):
    engine.gate.begin(0.0)
    now = step(engine, 0.0, 5)
    assert not engine.scheduler.running
    assert engine.scene.state.protagonist_x == 50

    executor.complete_all()
    now = step(engine, now)
    assert engine.gate.is_ready
    assert engine.scheduler.running
    assert engine.surface.textures == {"item": 1}

    now = step(engine, now, 20)
    assert engine.scene.state.protagonist_x > 50

    state = engine.scene.state
    viewport.width, viewport.height = 300.0, 450.0
    now = step(engine, now)
    paused_x = state.protagonist_x
    now = step(engine, now, 10)
    assert not engine.scheduler.running
    assert state.protagonist_x == paused_x

    viewport.width, viewport.height = 800.0, 450.0
    now = step(engine, now)
    assert engine.scheduler.running
    assert engine.scene.state is state
    assert state.protagonist_x == pytest.approx(paused_x + 1.2)
    step(engine, now, 5)
    assert state.protagonist_x > paused_x + 1.2


def test_square_window_counts_as_portrait(engine, viewport, executor):
    viewport.width, viewport.height = 450.0, 450.0
    engine.gate.begin(0.0)
    executor.complete_all()
    step(engine, 0.0, 3)
    assert engine.gate.is_ready
    assert not engine.scheduler.running
    assert engine.scene.state.protagonist_x == 50


def test_sync_before_assets_never_starts(engine):
    engine._sync_lifecycle()
    engine._sync_lifecycle()
    assert not engine.scheduler.running
    assert len(engine.frames) == 0
