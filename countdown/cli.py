"""Countdown CLI -- key in a time and watch it run down."""

from __future__ import annotations

import logging
from typing import Optional

import typer
from pydantic import ValidationError

from countdown import config as cfg
from countdown import display, timer
from countdown.entry import DigitEntryBuffer
from countdown.models import ClockFields, WindowPosition

app = typer.Typer(
    name="countdown",
    help="A single-screen countdown timer.",
    no_args_is_help=True,
)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """A single-screen countdown timer."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG, format="%(asctime)s %(name)s %(levelname)s %(message)s"
        )


# ---------------------------------------------------------------------------
# Countdown
# ---------------------------------------------------------------------------


@app.command()
def run(
    digits: str = typer.Argument(..., help="Up to six digits, HHMMSS, e.g. 130 for 1m 30s"),
) -> None:
    """Run a countdown in the terminal. Ctrl-C stops it early."""
    try:
        buffer = DigitEntryBuffer()
        ignored = buffer.press_digits(digits)
    except ValueError:
        display.print_warning(f"'{digits}' is not a time. Use digits only, e.g. 0130.")
        raise typer.Exit(1)

    if ignored:
        display.print_info(f"Entry is full, ignored {ignored} digit(s), using {buffer.digits}.")

    config = cfg.load_config()
    display.print_clock(ClockFields.from_entry(buffer.entered), title="Starting")
    timer.run_timer(buffer, tick_interval=config.tick_interval)


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


@app.command()
def config(
    tick_interval: Optional[float] = typer.Option(
        None, "--tick-interval", help="Seconds between countdown ticks"
    ),
    position: Optional[str] = typer.Option(
        None, "--position", help="Window position on launch: centre or top-left"
    ),
    reset: bool = typer.Option(False, "--reset", help="Restore default settings"),
    show: bool = typer.Option(False, "--show", help="Show current config"),
) -> None:
    """Configure tick speed and window placement."""
    if reset:
        cfg.reset_config()
        display.print_success("Config reset to defaults.")
        return

    changed = False
    if tick_interval is not None:
        try:
            cfg.set_tick_interval(tick_interval)
        except ValidationError:
            display.print_warning("Tick interval must be above 0 and at most 60 seconds.")
            raise typer.Exit(1)
        display.print_success(f"Tick interval set to {tick_interval:g}s.")
        changed = True

    if position is not None:
        try:
            pos = WindowPosition(position.lower())
        except ValueError:
            display.print_warning(f"Unknown position '{position}'. Use 'centre' or 'top-left'.")
            raise typer.Exit(1)
        cfg.set_window_position(pos)
        display.print_success(f"Window will open at: {pos.value}")
        changed = True

    if show:
        display.print_config(cfg.load_config())
    elif not changed:
        display.print_info("Use --tick-interval, --position, --reset, or --show.")


# ---------------------------------------------------------------------------
# GUI
# ---------------------------------------------------------------------------


@app.command()
def gui() -> None:
    """Open the keypad timer window."""
    from countdown.gui import run_gui

    run_gui()
