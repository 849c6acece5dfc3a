"""Tests for the countdown timer and the asyncio scheduler."""

import asyncio

import pytest

from movemoro.core.scheduler import AsyncioScheduler
from movemoro.core.timer import CountdownTimer, format_clock


class TimerProbe:
    def __init__(self):
        self.ticks = []
        self.completions = 0

    def on_tick(self, remaining):
        self.ticks.append(remaining)

    def on_complete(self):
        self.completions += 1


@pytest.fixture
def probe():
    return TimerProbe()


@pytest.fixture
def make_timer(probe, scheduler, clock):
    def factory(duration, remaining=None):
        return CountdownTimer(
            duration,
            probe.on_tick,
            probe.on_complete,
            scheduler=scheduler,
            clock=clock,
            remaining_seconds=remaining,
        )

    return factory


class TestCountdown:
    def test_runs_to_zero_and_completes_once(self, make_timer, probe, scheduler):
        timer = make_timer(3)
        timer.start()
        scheduler.advance(10)

        assert timer.remaining == 0
        assert timer.is_completed
        assert not timer.is_running
        assert probe.ticks == [2, 1, 0]
        assert probe.completions == 1

    def test_no_checks_left_after_completion(self, make_timer, scheduler):
        timer = make_timer(2)
        timer.start()
        scheduler.advance(5)

        assert timer.is_completed
        assert scheduler.active == []

    def test_start_is_idempotent(self, make_timer, scheduler):
        timer = make_timer(30)
        timer.start()
        timer.start()

        assert len(scheduler.active) == 1

    def test_start_after_completion_is_noop(self, make_timer, probe, scheduler):
        timer = make_timer(1)
        timer.start()
        scheduler.advance(2)
        timer.start()
        scheduler.advance(2)

        assert not timer.is_running
        assert probe.completions == 1

    def test_tick_once_per_distinct_value(self, make_timer, probe, scheduler):
        timer = make_timer(5)
        timer.start()
        scheduler.advance(2.55)

        assert probe.ticks == [4, 3]
        assert len(probe.ticks) == len(set(probe.ticks))

    def test_invalid_duration(self, make_timer):
        with pytest.raises(ValueError):
            make_timer(0)

    def test_progress(self, make_timer, scheduler):
        timer = make_timer(10)
        timer.start()
        scheduler.advance(5)

        assert timer.progress == pytest.approx(0.5)
        assert timer.snapshot().remaining_seconds == 5


class TestDriftCorrection:
    def test_catches_up_after_suspension(self, make_timer, probe, scheduler, clock):
        timer = make_timer(60)
        timer.start()
        clock.jump(10)
        scheduler.advance(0.1)

        assert timer.remaining == 50
        # One tick for the whole jump, not ten.
        assert probe.ticks == [50]

    def test_suspension_past_the_end_clamps_at_zero(self, make_timer, probe, scheduler, clock):
        timer = make_timer(5)
        timer.start()
        clock.jump(100)
        scheduler.advance(0.1)

        assert timer.remaining == 0
        assert probe.ticks == [0]
        assert probe.completions == 1

    def test_clock_stepping_back_does_not_add_time(self, make_timer, scheduler, clock):
        timer = make_timer(60)
        timer.start()
        scheduler.advance(10)
        clock.jump(-30)
        timer.check()

        assert timer.remaining == 50


class TestPauseResume:
    def test_pause_freezes_remaining(self, make_timer, probe, scheduler, clock):
        timer = make_timer(60)
        timer.start()
        scheduler.advance(5)
        timer.pause()

        clock.jump(3600)
        scheduler.advance(10)
        assert timer.remaining == 55

        timer.start()
        assert timer.remaining == 55
        scheduler.advance(1)
        assert timer.remaining == 54
        assert probe.completions == 0

    def test_pause_cancels_checks(self, make_timer, scheduler):
        timer = make_timer(60)
        timer.start()
        timer.pause()

        assert scheduler.active == []


class TestDurationChanges:
    def test_extend_adds_bonus_and_keeps_progress(self, make_timer, probe, scheduler):
        timer = make_timer(10)
        timer.start()
        scheduler.advance(4)

        timer.extend(5)

        assert timer.duration == 15
        assert timer.remaining == 11
        assert timer.is_running
        assert probe.ticks[-1] == 11
        scheduler.advance(1)
        assert timer.remaining == 10

    def test_extend_starts_a_paused_timer(self, make_timer):
        timer = make_timer(10)
        timer.extend(30)

        assert timer.is_running
        assert timer.remaining == 40

    def test_extend_rejects_non_positive_bonus(self, make_timer):
        timer = make_timer(10)
        with pytest.raises(ValueError):
            timer.extend(0)

    def test_set_duration_keeps_paused_timer_paused(self, make_timer, probe):
        timer = make_timer(10)
        timer.set_duration(20)

        assert timer.remaining == 20
        assert not timer.is_running
        assert probe.ticks == [20]

    def test_set_duration_restarts_running_timer(self, make_timer, scheduler):
        timer = make_timer(10)
        timer.start()
        scheduler.advance(3)
        timer.set_duration(20)

        assert timer.is_running
        assert timer.remaining == 20
        scheduler.advance(1)
        assert timer.remaining == 19

    def test_resume_from_saved_remaining(self, make_timer):
        assert make_timer(60, remaining=30).remaining == 30
        assert make_timer(60, remaining=600).remaining == 60


def test_format_clock():
    assert format_clock(0) == "00:00"
    assert format_clock(65) == "01:05"
    assert format_clock(1500) == "25:00"
    assert format_clock(-3) == "00:00"


class TestAsyncioScheduler:
    async def test_call_later_runs_once(self):
        fired = []
        scheduler = AsyncioScheduler()
        scheduler.call_later(0.01, lambda: fired.append(1))
        await asyncio.sleep(0.05)

        assert fired == [1]

    async def test_repeating_call_stops_when_cancelled(self):
        fired = []
        scheduler = AsyncioScheduler()
        handle = scheduler.call_repeatedly(0.01, lambda: fired.append(1))
        await asyncio.sleep(0.055)
        handle.cancel()
        count = len(fired)
        await asyncio.sleep(0.03)

        assert count >= 2
        assert len(fired) == count

    async def test_repeating_call_rejects_zero_interval(self):
        with pytest.raises(ValueError):
            AsyncioScheduler().call_repeatedly(0, lambda: None)
