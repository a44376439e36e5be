"""Digit entry buffer behind the numeric keypad."""

from __future__ import annotations

import logging

from countdown.models import ENTRY_WIDTH, EnteredTime

log = logging.getLogger(__name__)

# Presses are ignored once the hours field reaches double digits.
_MAX_SHIFTABLE_HOURS: int = 9


class DigitEntryBuffer:
    """Six HHMMSS digits edited by shifting.

    Pressing a digit shifts everything one place left and appends the digit on
    the right, so keying 1, 3, 0 reads as 00:01:30. Backspace shifts right and
    pads with a leading zero.
    """

    def __init__(self, entered: EnteredTime | None = None) -> None:
        self._entered = entered if entered is not None else EnteredTime()

    @classmethod
    def from_digits(cls, text: str) -> DigitEntryBuffer:
        """Build a buffer by pressing each character of ``text`` in turn."""
        buffer = cls()
        buffer.press_digits(text)
        return buffer

    @property
    def entered(self) -> EnteredTime:
        return self._entered

    @property
    def digits(self) -> str:
        return self._entered.digits

    @property
    def hours(self) -> int:
        return self._entered.hours

    @property
    def minutes(self) -> int:
        return self._entered.minutes

    @property
    def seconds(self) -> int:
        return self._entered.seconds

    @property
    def total_seconds(self) -> int:
        return self._entered.total_seconds

    def press_digit(self, digit: int) -> bool:
        """Append ``digit`` on the right. Returns False if the press was ignored."""
        if not 0 <= digit <= 9:
            raise ValueError(f"Digit must be 0-9, got {digit}")
        if self.hours > _MAX_SHIFTABLE_HOURS:
            log.debug("Ignoring digit %d, entry %s is full", digit, self.digits)
            return False
        self._set(self.digits[1:] + str(digit))
        return True

    def press_digits(self, text: str) -> int:
        """Press each digit of ``text``. Returns how many presses were ignored."""
        for char in text:
            if char not in "0123456789":
                raise ValueError(f"Not a digit: {char!r}")
        return sum(1 for char in text if not self.press_digit(int(char)))

    def backspace(self) -> None:
        """Drop the rightmost digit."""
        self._set("0" + self.digits[: ENTRY_WIDTH - 1])

    def clear(self) -> None:
        self._set("0" * ENTRY_WIDTH)

    def _set(self, digits: str) -> None:
        self._entered = EnteredTime(digits=digits)
        log.debug("Entry is now %s", digits)

    def __str__(self) -> str:
        return self.digits

    def __repr__(self) -> str:
        return f"DigitEntryBuffer({self.digits!r})"
