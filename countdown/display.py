"""Rich terminal formatting helpers."""

from __future__ import annotations

from rich.console import Console
from rich.panel import Panel
from rich.progress import BarColumn, Progress, TextColumn
from rich.text import Text

from countdown.models import AppConfig, ClockFields

console = Console()


def format_clock(hours: int, minutes: int, seconds: int) -> str:
    """Render clock fields the way the digit display shows them."""
    return ClockFields(hours=hours, minutes=minutes, seconds=seconds).label


def print_clock(clock: ClockFields, title: str = "Countdown") -> None:
    """Print a clock reading in a panel."""
    text = Text(clock.label, justify="center", style="bold yellow")
    console.print(Panel(text, title=title, border_style="blue", padding=(1, 4)))


def print_config(config: AppConfig) -> None:
    """Print the current settings."""
    lines = [
        f"Tick interval: {config.tick_interval:g}s",
        f"Window position: {config.window_position.value}",
    ]
    console.print(Panel("\n".join(lines), title="Config", border_style="green"))


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]{message}[/green]")


def print_info(message: str) -> None:
    """Print an informational message."""
    console.print(f"[blue]{message}[/blue]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[yellow]{message}[/yellow]")


def create_timer_progress() -> Progress:
    """Create a Rich progress bar for the countdown.

    The bar fills with elapsed time; the description column carries the
    remaining clock reading.
    """
    return Progress(
        TextColumn("[bold blue]{task.description}"),
        BarColumn(bar_width=40),
        TextColumn("[progress.percentage]{task.percentage:>3.0f}%"),
        console=console,
    )
