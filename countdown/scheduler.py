"""Scheduling primitives: delayed callbacks and a cancellable repeating ticker.

Every scheduler here runs callbacks on the thread that drives it, so engine
state is only ever touched from one thread.
"""

from __future__ import annotations

import heapq
import itertools
import logging
import time
from typing import Any, Callable, Optional, Protocol

log = logging.getLogger(__name__)


class Handle:
    """A scheduled callback that can be cancelled before it runs."""

    def __init__(self, on_cancel: Optional[Callable[[], None]] = None) -> None:
        self._cancelled = False
        self._on_cancel = on_cancel

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        if self._cancelled:
            return
        self._cancelled = True
        if self._on_cancel is not None:
            self._on_cancel()


class Scheduler(Protocol):
    def call_later(self, delay: float, callback: Callable[[], None]) -> Handle: ...


class _QueueScheduler:
    """Time-ordered callback queue shared by the manual and blocking schedulers."""

    def __init__(self) -> None:
        self._queue: list[tuple[float, int, Handle, Callable[[], None]]] = []
        self._seq = itertools.count()

    def _now(self) -> float:
        raise NotImplementedError

    def call_later(self, delay: float, callback: Callable[[], None]) -> Handle:
        handle = Handle()
        heapq.heappush(self._queue, (self._now() + max(0.0, delay), next(self._seq), handle, callback))
        return handle

    @property
    def pending(self) -> int:
        """Number of callbacks still waiting to run."""
        return sum(1 for _, _, handle, _ in self._queue if not handle.cancelled)

    def _pop_next(self) -> Optional[tuple[float, Handle, Callable[[], None]]]:
        while self._queue:
            due, _, handle, callback = heapq.heappop(self._queue)
            if not handle.cancelled:
                return due, handle, callback
        return None


class ManualScheduler(_QueueScheduler):
    """Scheduler on a virtual clock, moved forward explicitly with ``advance``."""

    def __init__(self) -> None:
        super().__init__()
        self._time = 0.0

    def _now(self) -> float:
        return self._time

    @property
    def now(self) -> float:
        return self._time

    def advance(self, seconds: float) -> int:
        """Run every callback due within ``seconds``. Returns how many ran."""
        target = self._time + seconds
        ran = 0
        while self._queue and self._queue[0][0] <= target:
            due, _, handle, callback = heapq.heappop(self._queue)
            if handle.cancelled:
                continue
            self._time = due
            callback()
            ran += 1
        self._time = target
        return ran


class BlockingScheduler(_QueueScheduler):
    """Scheduler that sleeps the calling thread until each callback is due."""

    def _now(self) -> float:
        return time.monotonic()

    def run(self) -> None:
        """Run callbacks in order until none are left."""
        while True:
            item = self._pop_next()
            if item is None:
                return
            due, _, callback = item
            delay = due - self._now()
            if delay > 0:
                time.sleep(delay)
            callback()


class TkScheduler:
    """Scheduler backed by a tkinter widget's ``after`` event loop timers."""

    def __init__(self, widget: Any) -> None:
        self._widget = widget

    def call_later(self, delay: float, callback: Callable[[], None]) -> Handle:
        after_id = self._widget.after(max(0, int(delay * 1000)), callback)
        return Handle(on_cancel=lambda: self._widget.after_cancel(after_id))


class Ticker:
    """Repeating timer that calls ``on_tick`` once per ``interval``.

    The first call happens one interval after ``start``. The ticker keeps
    going while ``on_tick`` returns True; ``cancel`` stops it, including a
    wake-up that is already queued.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        interval: float,
        on_tick: Callable[[], bool],
    ) -> None:
        if interval <= 0:
            raise ValueError(f"Tick interval must be positive, got {interval}")
        self._scheduler = scheduler
        self._interval = interval
        self._on_tick = on_tick
        self._handle: Optional[Handle] = None
        self._started = False
        self._cancelled = False
        self.ticks = 0

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def active(self) -> bool:
        return self._handle is not None and not self._cancelled

    def start(self) -> None:
        if self._started:
            raise RuntimeError("Ticker already started")
        self._started = True
        self._schedule()

    def cancel(self) -> None:
        self._cancelled = True
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _schedule(self) -> None:
        self._handle = self._scheduler.call_later(self._interval, self._fire)

    def _fire(self) -> None:
        self._handle = None
        if self._cancelled:
            log.debug("Ignoring wake-up of cancelled ticker")
            return
        self.ticks += 1
        if self._on_tick() and not self._cancelled:
            self._schedule()
