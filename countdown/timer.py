"""Terminal countdown runner."""

from __future__ import annotations

from typing import Optional

from countdown.display import console, create_timer_progress, print_success
from countdown.engine import DEFAULT_TICK_INTERVAL, TimerEngine
from countdown.entry import DigitEntryBuffer
from countdown.models import ClockFields, TimerState
from countdown.scheduler import BlockingScheduler


def run_timer(
    buffer: DigitEntryBuffer,
    tick_interval: float = DEFAULT_TICK_INTERVAL,
    scheduler: Optional[BlockingScheduler] = None,
) -> bool:
    """Count down the time in ``buffer``. Returns True if completed, False if interrupted."""
    scheduler = scheduler or BlockingScheduler()
    engine = TimerEngine(scheduler, buffer=buffer, tick_interval=tick_interval)
    total = buffer.total_seconds

    progress = create_timer_progress()
    task = progress.add_task(ClockFields.from_seconds(total).label, total=max(total, 1))

    def _render(state: TimerState) -> None:
        if state.is_running:
            progress.update(
                task,
                completed=state.elapsed_seconds,
                description=ClockFields.from_seconds(state.seconds_remaining).label,
            )

    try:
        with progress:
            engine.state.subscribe(_render)
            engine.start()
            scheduler.run()
            progress.update(task, completed=max(total, 1), description=ClockFields().label)
    except KeyboardInterrupt:
        engine.stop()
        console.print("\n[yellow]Timer stopped early.[/yellow]")
        return False

    print_success("Time's up.")
    return True


def run_digits(digits: str, tick_interval: float = DEFAULT_TICK_INTERVAL) -> bool:
    """Key ``digits`` into a fresh entry buffer and run it."""
    return run_timer(DigitEntryBuffer.from_digits(digits), tick_interval=tick_interval)
