"""Pydantic models — single source of truth for all data types."""

from __future__ import annotations

import enum

from pydantic import BaseModel, ConfigDict, Field

ENTRY_WIDTH: int = 6


class RunState(str, enum.Enum):
    """Timer lifecycle states."""

    IDLE = "idle"
    RUNNING = "running"


class EnteredTime(BaseModel):
    """Six raw HHMMSS digits as keyed in on the pad.

    Minutes and seconds are not clamped: "009999" is a valid entry that reads
    as 99 minutes and 99 seconds.
    """

    model_config = ConfigDict(frozen=True)

    digits: str = Field(default="0" * ENTRY_WIDTH, pattern=r"^\d{6}$")

    @property
    def hours(self) -> int:
        return int(self.digits[0:2])

    @property
    def minutes(self) -> int:
        return int(self.digits[2:4])

    @property
    def seconds(self) -> int:
        return int(self.digits[4:6])

    @property
    def total_seconds(self) -> int:
        return self.hours * 3600 + self.minutes * 60 + self.seconds


class ClockFields(BaseModel):
    """Hours, minutes and seconds as shown on the digit display."""

    hours: int = Field(default=0, ge=0)
    minutes: int = Field(default=0, ge=0)
    seconds: int = Field(default=0, ge=0)

    @classmethod
    def from_seconds(cls, remaining: int) -> ClockFields:
        return cls(
            hours=remaining // 3600,
            minutes=(remaining // 60) % 60,
            seconds=remaining % 60,
        )

    @classmethod
    def from_entry(cls, entered: EnteredTime) -> ClockFields:
        return cls(hours=entered.hours, minutes=entered.minutes, seconds=entered.seconds)

    @property
    def label(self) -> str:
        return f"{self.hours:02d}h {self.minutes:02d}m {self.seconds:02d}s"


class TimerState(BaseModel):
    """Snapshot of a countdown, published on start, every tick and on finish."""

    is_running: bool = False
    seconds_remaining: int = Field(default=0, ge=0)
    total_seconds: int = Field(default=0, ge=0)
    percent_remaining: float = Field(default=1.0, ge=0.0, le=1.0)

    @property
    def elapsed_seconds(self) -> int:
        return self.total_seconds - self.seconds_remaining


class WindowPosition(str, enum.Enum):
    """Where the GUI window appears on launch."""

    CENTRE = "centre"
    TOP_LEFT = "top-left"


class AppConfig(BaseModel):
    """Application configuration (persisted to ~/.config/countdown/config.json)."""

    tick_interval: float = Field(default=1.0, gt=0, le=60)
    window_position: WindowPosition = WindowPosition.CENTRE
