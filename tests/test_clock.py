import pytest

from charge_sim.clock import ClockState, SimulationClock
from charge_sim.driver import ManualFrameDriver
from charge_sim.errors import ConfigurationError


class Recorder:
    def __init__(self):
        self.calls = []

    def __call__(self, dt, frame_dt):
        self.calls.append((dt, frame_dt))


def test_tick_is_noop_while_stopped():
    rec = Recorder()
    clock = SimulationClock(rec)
    assert clock.state is ClockState.STOPPED
    assert not clock.tick(1.0)
    assert rec.calls == []


def test_tick_uses_wall_clock_delta():
    rec = Recorder()
    clock = SimulationClock(rec)
    clock.start(10.0)
    assert clock.tick(10.25)
    assert clock.tick(10.5)
    assert rec.calls == [(0.25, 0.25), (0.25, 0.25)]
    assert clock.last_time == 10.5


def test_large_delta_is_clamped():
    rec = Recorder()
    clock = SimulationClock(rec, max_dt=0.1)
    clock.start(0.0)
    clock.tick(5.0)
    assert rec.calls == [(0.1, 5.0)]


def test_backwards_time_gives_zero_step():
    rec = Recorder()
    clock = SimulationClock(rec)
    clock.start(3.0)
    clock.tick(2.0)
    assert rec.calls == [(0.0, 0.0)]


def test_time_scale_applies_before_clamp():
    rec = Recorder()
    clock = SimulationClock(rec, max_dt=0.125)
    clock.set_time_scale(2.0)
    clock.start(0.0)
    clock.tick(0.03125)
    clock.tick(0.125)
    assert rec.calls[0][0] == 0.0625
    assert rec.calls[1][0] == 0.125


def test_start_uses_time_source_when_no_timestamp():
    clock = SimulationClock(Recorder(), now=lambda: 42.0)
    clock.start()
    assert clock.last_time == 42.0


def test_each_tick_schedules_exactly_one_frame():
    driver = ManualFrameDriver()
    rec = Recorder()
    clock = SimulationClock(rec, request_frame=driver.request_frame)

    clock.start(driver.time)
    assert driver.pending == 1
    clock.start(driver.time)
    assert driver.pending == 1

    for _ in range(10):
        assert driver.advance(1 / 60) == 1
        assert driver.pending == 1
    assert len(rec.calls) == 10
    assert clock.frames == 10


def test_pause_leaves_no_orphaned_frames():
    driver = ManualFrameDriver()
    rec = Recorder()
    clock = SimulationClock(rec, request_frame=driver.request_frame)
    clock.start(driver.time)
    driver.run(3, 1 / 60)

    clock.pause()
    # the wake-up already requested arrives, does nothing and asks for nothing
    assert driver.advance(1 / 60) == 1
    assert driver.pending == 0
    assert not clock.frame_pending
    assert len(rec.calls) == 3


def test_restart_while_frame_pending_does_not_double_schedule():
    driver = ManualFrameDriver()
    rec = Recorder()
    clock = SimulationClock(rec, request_frame=driver.request_frame)
    clock.start(driver.time)
    clock.pause()
    clock.start(driver.time)
    assert driver.pending == 1

    driver.advance(0.05)
    assert len(rec.calls) == 1
    assert driver.pending == 1


def test_stop_forgets_reference():
    clock = SimulationClock(Recorder())
    clock.start(1.0)
    clock.stop()
    assert clock.state is ClockState.STOPPED
    assert clock.last_time is None


def test_invalid_settings_rejected():
    with pytest.raises(ConfigurationError):
        SimulationClock(Recorder(), max_dt=0.0)
    clock = SimulationClock(Recorder())
    with pytest.raises(ConfigurationError):
        clock.set_time_scale(-1.0)
    with pytest.raises(ConfigurationError):
        clock.set_time_scale(float("inf"))
    assert clock.time_scale == 1.0


@pytest.mark.parametrize("bad", [float("inf"), float("-inf"), float("nan")])
def test_non_finite_time_is_zero_length_frame(bad):
    rec = Recorder()
    clock = SimulationClock(rec, max_dt=0.1)
    clock.start(1.0)
    assert clock.tick(bad)
    assert clock.tick(bad)
    assert clock.last_time == 1.0

    clock.tick(1.05)
    assert rec.calls[:2] == [(0.0, 0.0), (0.0, 0.0)]
    assert rec.calls[2] == pytest.approx((0.05, 0.05))
    assert clock.last_time == 1.05


def test_non_finite_start_time_falls_back_to_now():
    rec = Recorder()
    clock = SimulationClock(rec, now=lambda: 4.0)
    clock.start(float("nan"))
    assert clock.last_time == 4.0
    clock.tick(4.5)
    assert rec.calls == [(0.1, 0.5)]
