"""Countdown state machine driving the timer display."""

from __future__ import annotations

import logging
from typing import Optional

from countdown.entry import DigitEntryBuffer
from countdown.models import ClockFields, RunState, TimerState
from countdown.observable import Observable
from countdown.scheduler import Scheduler, Ticker

log = logging.getLogger(__name__)

DEFAULT_TICK_INTERVAL: float = 1.0


class TimerEngine:
    """Owns the entry buffer, the run state and everything the view shows.

    While idle the clock fields mirror the entry buffer and digit input is
    accepted. While running the buffer is frozen and the clock fields follow
    the countdown. Returning to idle (stop or expiry) puts the buffer's digits
    back on the clock.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        buffer: Optional[DigitEntryBuffer] = None,
        tick_interval: float = DEFAULT_TICK_INTERVAL,
    ) -> None:
        self._scheduler = scheduler
        self._tick_interval = tick_interval
        self.buffer = buffer if buffer is not None else DigitEntryBuffer()
        self._ticker: Optional[Ticker] = None
        self._state = TimerState()

        clock = ClockFields.from_entry(self.buffer.entered)
        self.is_running: Observable[bool] = Observable(False, "is_running")
        self.seconds_remaining: Observable[int] = Observable(0, "seconds_remaining")
        self.percent_remaining: Observable[float] = Observable(1.0, "percent_remaining")
        self.hours: Observable[int] = Observable(clock.hours, "hours")
        self.minutes: Observable[int] = Observable(clock.minutes, "minutes")
        self.seconds: Observable[int] = Observable(clock.seconds, "seconds")
        self.state: Observable[TimerState] = Observable(self._state, "state")

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def run_state(self) -> RunState:
        return RunState.RUNNING if self._state.is_running else RunState.IDLE

    @property
    def clock(self) -> ClockFields:
        return ClockFields(
            hours=self.hours.value, minutes=self.minutes.value, seconds=self.seconds.value
        )

    def snapshot(self) -> TimerState:
        return self._state

    # ------------------------------------------------------------------
    # Digit entry
    # ------------------------------------------------------------------

    def press_digit(self, digit: int) -> None:
        if self._state.is_running:
            log.debug("Ignoring digit %d while running", digit)
            return
        if self.buffer.press_digit(digit):
            self._show_entry()

    def backspace(self) -> None:
        if self._state.is_running:
            log.debug("Ignoring backspace while running")
            return
        self.buffer.backspace()
        self._show_entry()

    # ------------------------------------------------------------------
    # Run control
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Start counting down from the entered time. No-op while running."""
        if self._state.is_running:
            log.info("Timer already running, ignoring start")
            return

        total = self.buffer.total_seconds
        log.info("Starting timer: %s (%d seconds)", self.buffer.digits, total)
        self._publish(
            TimerState(
                is_running=True,
                seconds_remaining=total,
                total_seconds=total,
                percent_remaining=1.0,
            )
        )
        if not self._state.is_running:
            # Stopped by an observer of the start snapshot.
            return
        self._show_remaining(total)

        if total == 0:
            self._finish()
            return

        self._ticker = Ticker(self._scheduler, self._tick_interval, self._tick)
        self._ticker.start()

    def stop(self) -> None:
        """Stop a running countdown. No-op while idle.

        The last remaining/percent values stay published; the clock fields go
        back to the entry buffer.
        """
        if not self._state.is_running:
            log.debug("Timer not running, ignoring stop")
            return
        log.info("Timer stopped with %d seconds left", self._state.seconds_remaining)
        self._cancel_ticker()
        self._publish(self._state.model_copy(update={"is_running": False}))
        self._show_entry()

    def reset(self) -> None:
        """Stop any run and clear the entry buffer."""
        self.stop()
        self.buffer.clear()
        self._show_entry()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _tick(self) -> bool:
        state = self._state
        if not state.is_running or state.seconds_remaining <= 0:
            return False

        remaining = state.seconds_remaining - 1
        log.debug("Tick: %d seconds left", remaining)
        self._publish(
            state.model_copy(
                update={
                    "seconds_remaining": remaining,
                    "percent_remaining": _percent(remaining, state.total_seconds),
                }
            )
        )
        if not self._state.is_running:
            return False
        self._show_remaining(remaining)

        if remaining == 0:
            self._finish()
            return False
        return True

    def _finish(self) -> None:
        log.info("Timer finished after %d seconds", self._state.total_seconds)
        self._cancel_ticker()
        self._publish(
            self._state.model_copy(
                update={"is_running": False, "seconds_remaining": 0, "percent_remaining": 1.0}
            )
        )
        self._show_entry()

    def _cancel_ticker(self) -> None:
        if self._ticker is not None:
            self._ticker.cancel()
            self._ticker = None

    def _publish(self, state: TimerState) -> None:
        previous = self._state
        self._state = state
        if state.is_running != previous.is_running:
            self.is_running.set(state.is_running)
        updates = (
            (self.seconds_remaining, state.seconds_remaining),
            (self.percent_remaining, state.percent_remaining),
            (self.state, state),
        )
        for field, value in updates:
            if self._state is not state:
                # An observer moved the engine on; the newer state was already published.
                return
            field.set(value)

    def _show_clock(self, clock: ClockFields) -> None:
        self.hours.set(clock.hours)
        self.minutes.set(clock.minutes)
        self.seconds.set(clock.seconds)

    def _show_remaining(self, remaining: int) -> None:
        self._show_clock(ClockFields.from_seconds(remaining))

    def _show_entry(self) -> None:
        self._show_clock(ClockFields.from_entry(self.buffer.entered))


def _percent(remaining: int, total: int) -> float:
    """Fraction of ``total`` still left; a zero-length run counts as full."""
    if total <= 0:
        return 1.0
    return remaining / total
