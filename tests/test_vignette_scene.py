import logging

import pytest

from core.frame_host import FrameQueue
from core.scheduler import FrameScheduler
from vignette import CompanionPhase, Motion, VignetteScene
from vignette.characters import CharacterStateMachine

TICK_MS = 16.0


@pytest.fixture
def scene(viewport, surface, timers):
    return VignetteScene(viewport, surface, timers, seed=7)


def run_ticks(scene, timers, start, count):
    now = start
    for _ in range(count):
        scene.tick(now)
        timers.run_due(now)
        now += TICK_MS
    return now


def test_tick_draws_layers_in_order(scene, surface):
    scene.tick(0.0)
    names = [c[0] for c in surface.calls]
    assert names[:3] == ["begin_frame", "draw_background", "draw_ground"]
    assert names[-1] == "end_frame"
    keys = [c[1] for c in surface.named("draw_sprite")]
    assert keys == ["item", "protagonist-frame-1", "companion-frame-1"]
    ground = surface.named("draw_ground")[0]
    assert ground[1] == pytest.approx(0.81 * 405)


def test_item_moves_to_hand_after_pickup(scene, surface, timers):
    run_ticks(scene, timers, 0.0, 160)
    assert scene.state.has_item
    surface.calls.clear()
    scene.tick(160 * TICK_MS)
    items = surface.sprites("item")
    assert len(items) == 1
    _, _, x, _, w, h = items[0]
    assert x == pytest.approx(scene.state.protagonist_x + 45)
    assert (w, h) == (25, 25)


def test_milestone_delivered_once_after_delay(scene, timers):
    deliveries = []
    scene.add_milestone_listener(lambda: deliveries.append(True))
    now = 0.0
    arrived_at = None
    delivered_at = None
    for _ in range(600):
        scene.tick(now)
        if arrived_at is None and scene.state.companion_phase is CompanionPhase.ACTIVE:
            arrived_at = now
        timers.run_due(now)
        if delivered_at is None and deliveries:
            delivered_at = now
        now += TICK_MS
    assert scene.state.motion is Motion.ARRIVED
    assert deliveries == [True]
    assert scene.milestone_delivered
    assert delivered_at - arrived_at >= 500


def test_failing_listener_does_not_block_others(scene, timers, caplog):
    seen = []

    def broken():
        raise RuntimeError("letter jammed")

    scene.add_milestone_listener(broken)
    scene.add_milestone_listener(lambda: seen.append(1))
    scene.state.protagonist_x = 1000
    with caplog.at_level(logging.ERROR, logger="vignette.vignette_scene"):
        run_ticks(scene, timers, 0.0, 60)
    assert seen == [1]
    assert "Milestone listener failed" in caplog.text


def test_dispose_cancels_pending_notification(scene, timers):
    seen = []
    scene.add_milestone_listener(lambda: seen.append(1))
    scene.state.protagonist_x = 1000
    scene.tick(0.0)
    assert scene.state.milestone_notified
    scene.dispose()
    timers.run_due(10_000)
    assert seen == []


def test_degenerate_viewport_is_a_no_op(scene, surface, viewport):
    viewport.width, viewport.height = 0, 0
    before = scene.state.protagonist_x
    scene.tick(0.0)
    assert scene.state.protagonist_x == before
    assert surface.calls == []
    viewport.width, viewport.height = 720, 405
    scene.tick(16.0)
    assert scene.state.protagonist_x > before


def test_geometry_follows_resize(scene, viewport):
    scene.tick(0.0)
    assert scene.geometry.target_x == pytest.approx(540)
    viewport.width = 1440
    scene.tick(16.0)
    assert scene.geometry.target_x == pytest.approx(1080)


def test_no_dead_particle_is_drawn(scene, surface, timers):
    scene.particles.spawn_probability = 1.0
    scene.state.protagonist_x = 1000
    run_ticks(scene, timers, 0.0, 250)
    alphas = [c[4] for c in surface.named("draw_text")]
    assert alphas
    assert all(a > 0 for a in alphas)


def test_render_fault_keeps_loop_and_state(scene, surface, timers, caplog):
    frames = FrameQueue()
    scheduler = FrameScheduler(frames, scene.tick)
    surface.fail_on = "draw_sprite"
    scheduler.start()
    with caplog.at_level(logging.ERROR):
        for i in range(10):
            frames.run(i * TICK_MS)
    assert scheduler.fault_count == 10
    assert scheduler.running
    assert scene.state.protagonist_x == pytest.approx(50 + 1.2 * 10)
    assert len(surface.named("begin_frame")) == len(surface.named("end_frame"))


def test_state_survives_stop_and_restart(scene):
    frames = FrameQueue()
    scheduler = FrameScheduler(frames, scene.tick)
    scheduler.start()
    for i in range(20):
        frames.run(i * TICK_MS)
    scheduler.stop()
    x = scene.state.protagonist_x
    frames.run(20 * TICK_MS)
    assert scene.state.protagonist_x == x
    scheduler.start()
    frames.run(21 * TICK_MS)
    assert scene.state.protagonist_x == pytest.approx(x + 1.2)


def test_extra_updaters_receive_tick_time(scene):
    seen = []
    scene.updaters.append(seen.append)
    scene.tick(42.0)
    assert seen == [42.0]


def test_same_seed_gives_same_hearts(viewport, surface, timers):
    runs = []
    for _ in range(2):
        scene = VignetteScene(viewport, surface, timers, seed=99)
        scene.particles.spawn_probability = 0.5
        scene.state.protagonist_x = 1000
        for i in range(40):
            scene.tick(i * TICK_MS)
        runs.append([(p.x, p.velocity_y) for p in scene.state.particles])
        scene.dispose()
    assert runs[0] == runs[1]


def test_injected_characters_still_notify_listeners(viewport, surface, timers):
    stray = []
    characters = CharacterStateMachine(
        timers, lambda: stray.append(True), speed=50.0, milestone_delay_ms=100
    )
    scene = VignetteScene(viewport, surface, timers, characters=characters, seed=3)
    deliveries = []
    scene.add_milestone_listener(lambda: deliveries.append(True))
    run_ticks(scene, timers, 0.0, 40)
    assert scene.state.motion is Motion.ARRIVED
    assert deliveries == [True]
    assert stray == []
