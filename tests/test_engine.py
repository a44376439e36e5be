"""Tests for the countdown engine."""

from __future__ import annotations

from typing import Callable

import pytest

from countdown.engine import TimerEngine
from countdown.entry import DigitEntryBuffer
from countdown.models import EnteredTime, RunState, TimerState
from countdown.scheduler import Handle, ManualScheduler


def _engine(digits: str = "000000") -> tuple[TimerEngine, ManualScheduler]:
    scheduler = ManualScheduler()
    buffer = DigitEntryBuffer(EnteredTime(digits=digits))
    return TimerEngine(scheduler, buffer=buffer), scheduler


class _RecordingScheduler:
    """Hands out handles whose cancel does nothing, so stale wake-ups still fire."""

    def __init__(self) -> None:
        self.callbacks: list[Callable[[], None]] = []

    def call_later(self, delay: float, callback: Callable[[], None]) -> Handle:
        self.callbacks.append(callback)
        return Handle()


class TestDigitEntry:
    def test_idle_clock_mirrors_buffer(self) -> None:
        engine, _ = _engine()
        for d in (1, 3, 0):
            engine.press_digit(d)
        assert engine.buffer.digits == "000130"
        assert engine.clock.label == "00h 01m 30s"

    def test_backspace_updates_clock(self) -> None:
        engine, _ = _engine("000130")
        engine.backspace()
        assert (engine.minutes.value, engine.seconds.value) == (0, 13)

    def test_blocked_press_does_not_notify(self) -> None:
        engine, _ = _engine("120000")
        seen: list[int] = []
        engine.seconds.subscribe(seen.append)
        engine.press_digit(5)
        assert engine.buffer.digits == "120000"
        assert seen == [0]

    def test_entry_frozen_while_running(self) -> None:
        engine, _ = _engine("000130")
        engine.start()
        engine.press_digit(9)
        engine.backspace()
        assert engine.buffer.digits == "000130"
        assert engine.clock.label == "00h 01m 30s"


class TestStart:
    def test_seeds_state(self) -> None:
        engine, _ = _engine("000130")
        engine.start()
        state = engine.snapshot()
        assert state.is_running
        assert state.total_seconds == 90
        assert state.seconds_remaining == 90
        assert state.percent_remaining == 1.0
        assert engine.run_state == RunState.RUNNING

    def test_publishes_snapshot_immediately(self) -> None:
        engine, _ = _engine("000130")
        states: list[TimerState] = []
        engine.state.subscribe(states.append)
        engine.start()
        assert len(states) == 2
        assert states[-1].is_running

    def test_clock_shows_countdown_reading(self) -> None:
        engine, _ = _engine("009900")
        engine.start()
        assert engine.clock.label == "01h 39m 00s"

    def test_one_tick(self) -> None:
        engine, scheduler = _engine("000130")
        engine.start()
        scheduler.advance(1)
        state = engine.snapshot()
        assert state.seconds_remaining == 89
        assert state.percent_remaining == pytest.approx(0.9889, abs=1e-4)
        assert engine.clock.label == "00h 01m 29s"
        assert engine.is_running.value

    def test_no_tick_before_interval(self) -> None:
        engine, scheduler = _engine("000130")
        engine.start()
        scheduler.advance(0.5)
        assert engine.snapshot().seconds_remaining == 90

    def test_start_while_running_is_noop(self) -> None:
        engine, scheduler = _engine("000010")
        engine.start()
        scheduler.advance(3)
        engine.start()
        assert engine.snapshot().seconds_remaining == 7
        assert scheduler.pending == 1
        scheduler.advance(1)
        assert engine.snapshot().seconds_remaining == 6

    def test_custom_tick_interval(self) -> None:
        scheduler = ManualScheduler()
        engine = TimerEngine(
            scheduler, buffer=DigitEntryBuffer.from_digits("5"), tick_interval=0.25
        )
        engine.start()
        scheduler.advance(0.5)
        assert engine.snapshot().seconds_remaining == 3


class TestZeroDuration:
    def test_completes_immediately(self) -> None:
        engine, scheduler = _engine("000000")
        running: list[bool] = []
        engine.is_running.subscribe(running.append)
        engine.start()
        assert not engine.is_running.value
        assert running == [False, True, False]
        assert scheduler.pending == 0
        state = engine.snapshot()
        assert state.seconds_remaining == 0
        assert state.percent_remaining == 1.0


class TestNaturalExpiry:
    def test_two_second_countdown(self) -> None:
        engine, scheduler = _engine("000002")
        remaining: list[int] = []
        engine.seconds_remaining.subscribe(remaining.append)
        engine.start()
        scheduler.advance(10)
        assert remaining == [0, 2, 1, 0, 0]
        state = engine.snapshot()
        assert state.seconds_remaining == 0
        assert state.percent_remaining == 1.0
        assert not state.is_running
        assert scheduler.pending == 0

    def test_tick_count(self) -> None:
        engine, scheduler = _engine("000002")
        ticks: list[TimerState] = []
        engine.state.subscribe(
            lambda s: ticks.append(s) if s.is_running and s.seconds_remaining < s.total_seconds else None
        )
        engine.start()
        scheduler.advance(10)
        assert [s.seconds_remaining for s in ticks] == [1, 0]

    def test_clock_returns_to_entry(self) -> None:
        engine, scheduler = _engine("000102")
        engine.start()
        scheduler.advance(62)
        assert not engine.is_running.value
        assert engine.clock.label == "00h 01m 02s"

    def test_buffer_editable_after_expiry(self) -> None:
        engine, scheduler = _engine("000001")
        engine.start()
        scheduler.advance(1)
        engine.press_digit(5)
        assert engine.buffer.digits == "000015"


class TestStop:
    def test_stop_mid_run(self) -> None:
        engine, scheduler = _engine("000130")
        engine.start()
        scheduler.advance(3)
        engine.stop()
        assert not engine.is_running.value
        state = engine.snapshot()
        assert state.seconds_remaining == 87
        assert state.percent_remaining == pytest.approx(87 / 90)
        scheduler.advance(10)
        assert engine.snapshot().seconds_remaining == 87

    def test_stop_resyncs_clock(self) -> None:
        engine, scheduler = _engine("000130")
        engine.start()
        scheduler.advance(5)
        assert engine.clock.label == "00h 01m 25s"
        engine.stop()
        assert engine.clock.label == "00h 01m 30s"

    def test_stale_wake_up_does_not_decrement(self) -> None:
        scheduler = _RecordingScheduler()
        engine = TimerEngine(scheduler, buffer=DigitEntryBuffer.from_digits("130"))
        engine.start()
        engine.stop()
        scheduler.callbacks[0]()
        assert engine.snapshot().seconds_remaining == 90
        assert len(scheduler.callbacks) == 1

    def test_stop_from_tick_observer_resyncs_clock(self) -> None:
        engine, scheduler = _engine("000130")
        states: list[TimerState] = []
        engine.state.subscribe(states.append)
        engine.seconds_remaining.subscribe(lambda r: engine.stop() if r == 85 else None)
        engine.start()
        scheduler.advance(10)
        assert not engine.is_running.value
        assert engine.snapshot().seconds_remaining == 85
        assert engine.clock.label == "00h 01m 30s"
        assert not states[-1].is_running
        assert scheduler.pending == 0

    def test_stop_from_start_observer_skips_ticker(self) -> None:
        engine, scheduler = _engine("009900")
        engine.is_running.subscribe(lambda running: engine.stop() if running else None)
        engine.start()
        assert not engine.is_running.value
        assert engine.clock.label == "00h 99m 00s"
        assert scheduler.pending == 0
        scheduler.advance(5)
        assert engine.snapshot().seconds_remaining == 5940

    def test_stop_when_idle_is_noop(self) -> None:
        engine, _ = _engine("000130")
        states: list[TimerState] = []
        engine.state.subscribe(states.append)
        engine.stop()
        assert len(states) == 1

    def test_restart_after_stop(self) -> None:
        engine, scheduler = _engine("000010")
        engine.start()
        scheduler.advance(4)
        engine.stop()
        engine.start()
        assert engine.snapshot().seconds_remaining == 10
        scheduler.advance(1)
        assert engine.snapshot().seconds_remaining == 9
        assert scheduler.pending == 1

    def test_reset_clears_entry(self) -> None:
        engine, scheduler = _engine("000130")
        engine.start()
        scheduler.advance(1)
        engine.reset()
        assert not engine.is_running.value
        assert engine.buffer.digits == "000000"
        assert engine.clock.label == "00h 00m 00s"
