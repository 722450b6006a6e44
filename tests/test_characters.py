import math

import pytest

from vignette.characters import CharacterStateMachine, bob_offset, frame_index
from vignette.geometry import geometry
from vignette.state import CompanionPhase, Motion, SimulationState

TICK_MS = 16.0


class Recorder:
    def __init__(self):
        self.count = 0

    def __call__(self):
        self.count += 1


@pytest.fixture
def notified():
    return Recorder()


@pytest.fixture
def machine(timers, notified):
    return CharacterStateMachine(timers, notified, speed=1.2)


def test_frame_index_follows_wall_clock():
    assert frame_index(0, 150, 4) == 0
    assert frame_index(149, 150, 4) == 0
    assert frame_index(150, 150, 4) == 1
    assert frame_index(450, 150, 4) == 3
    assert frame_index(600, 150, 4) == 0
    assert frame_index(1234, 150, 0) == 0


def test_bob_is_bounded_and_periodic():
    assert bob_offset(0, 30, 150) == 0
    samples = [bob_offset(t, 30, 150) for t in range(0, 5000, 7)]
    assert all(0 <= s <= 30 for s in samples)
    assert bob_offset(100, 30, 150) == pytest.approx(bob_offset(100 + 150 * math.pi, 30, 150))


def test_arrives_after_exact_tick_count(machine):
    # 720 wide -> target 540; stop at 480; (480 - 50) / 1.2 -> 359 ticks
    geo = geometry(720, 405)
    state = SimulationState(protagonist_x=50)
    expected = math.ceil((540 - 60 - 50) / 1.2)
    for i in range(expected - 1):
        machine.update(state, geo, i * TICK_MS)
    assert state.motion is Motion.WALKING
    assert state.protagonist_x < 480
    assert state.companion_phase is CompanionPhase.IDLE
    machine.update(state, geo, expected * TICK_MS)
    assert state.motion is Motion.ARRIVED
    assert state.companion_phase is CompanionPhase.ACTIVE
    assert state.protagonist_x >= 480


def test_position_never_decreases_and_stops_on_arrival(machine):
    geo = geometry(720, 405)
    state = SimulationState()
    last = state.protagonist_x
    for i in range(500):
        machine.update(state, geo, i * TICK_MS)
        assert state.protagonist_x >= last
        last = state.protagonist_x
    arrived_x = state.protagonist_x
    for i in range(500, 600):
        machine.update(state, geo, i * TICK_MS)
    assert state.protagonist_x == arrived_x


def test_item_picked_up_once_inside_radius(machine):
    # item at 270; first x inside (240, 300) is 240.8 after 159 ticks
    geo = geometry(720, 405)
    state = SimulationState()
    for i in range(158):
        machine.update(state, geo, i * TICK_MS)
    assert state.item_on_ground and not state.has_item
    machine.update(state, geo, 158 * TICK_MS)
    assert state.has_item and not state.item_on_ground

    transitions = 0
    had = state.has_item
    for i in range(159, 500):
        machine.update(state, geo, i * TICK_MS)
        assert not (state.has_item and state.item_on_ground)
        if state.has_item and not had:
            transitions += 1
        had = state.has_item
    assert transitions == 0


def test_walk_frame_uses_time_and_resets_on_arrival(machine):
    geo = geometry(720, 405)
    state = SimulationState()
    machine.update(state, geo, 300.0)
    assert state.protagonist_frame == 2
    assert state.companion_frame == 1
    state.protagonist_x = 1000
    machine.update(state, geo, 300.0)
    assert state.protagonist_frame == 0


def test_milestone_notified_once_after_delay(machine, timers, notified):
    geo = geometry(720, 405)
    state = SimulationState(protagonist_x=470)
    now = 0.0
    arrived_at = None
    fired_at = None
    for _ in range(200):
        machine.update(state, geo, now)
        if arrived_at is None and state.companion_phase is CompanionPhase.ACTIVE:
            arrived_at = now
            assert state.milestone_reached and state.milestone_notified
            assert notified.count == 0
        timers.run_due(now)
        if fired_at is None and notified.count:
            fired_at = now
        now += TICK_MS
    assert notified.count == 1
    assert fired_at - arrived_at >= 500
    assert timers.pending == 0


def test_shrinking_window_arrives_without_moving(machine):
    state = SimulationState(protagonist_x=300)
    machine.update(state, geometry(400, 300), 0.0)
    assert state.protagonist_x == 300
    assert state.motion is Motion.ARRIVED


def test_arrival_is_one_way_when_window_grows(machine):
    state = SimulationState(protagonist_x=300)
    machine.update(state, geometry(400, 300), 0.0)
    machine.update(state, geometry(1600, 900), 16.0)
    assert state.motion is Motion.ARRIVED
    assert state.protagonist_x == 300


def test_companion_bobs_only_when_active(machine):
    geo = geometry(720, 405)
    state = SimulationState()
    machine.update(state, geo, 100.0)
    assert state.companion_bob == 0.0
    state.protagonist_x = 500
    machine.update(state, geo, 100.0)
    assert state.companion_bob == pytest.approx(30 * abs(math.sin(100 / 150)))


def test_cancel_pending_suppresses_notification(machine, timers, notified):
    state = SimulationState(protagonist_x=1000)
    machine.update(state, geometry(720, 405), 0.0)
    assert machine.milestone_pending
    machine.cancel_pending()
    timers.run_due(10_000)
    assert notified.count == 0
    assert not machine.milestone_pending


@pytest.mark.parametrize(
    "kwargs",
    [{"walk_frame_ms": 0}, {"bob_period_ms": -1}, {"milestone_delay_ms": -5}],
)
def test_invalid_constants_rejected(timers, kwargs):
    with pytest.raises(ValueError):
        CharacterStateMachine(timers, lambda: None, **kwargs)
