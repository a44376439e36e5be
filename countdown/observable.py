"""Subscribable value holders for the presentation layer."""

from __future__ import annotations

from typing import Callable, Generic, TypeVar

T = TypeVar("T")

Observer = Callable[[T], None]


class Observable(Generic[T]):
    """A value that notifies observers every time it is set.

    New observers receive the current value straight away. Every ``set`` is
    delivered, even when the value did not change, so a view can treat each
    call as a render request.
    """

    def __init__(self, initial: T, name: str = "") -> None:
        self._value = initial
        self._name = name
        self._observers: list[Observer[T]] = []

    @property
    def value(self) -> T:
        return self._value

    def set(self, value: T) -> None:
        self._value = value
        # Copy so observers may unsubscribe while being notified.
        for observer in list(self._observers):
            observer(value)

    def subscribe(self, observer: Observer[T]) -> Callable[[], None]:
        """Register ``observer`` and return a function that unregisters it."""
        self._observers.append(observer)
        observer(self._value)

        def _unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return _unsubscribe

    @property
    def observer_count(self) -> int:
        return len(self._observers)

    def __repr__(self) -> str:
        return f"Observable({self._name or '?'}={self._value!r})"
