"""Observable value cell with explicit subscription."""

from __future__ import annotations

from collections.abc import Callable
from typing import Generic, TypeVar

T = TypeVar("T")

Listener = Callable[[T], None]


class Observable(Generic[T]):
    """A single owned mutable value that notifies subscribers on change.

    Listeners are called synchronously, in subscription order, with the new
    value. Exceptions raised by a listener propagate to the caller of
    ``set()``.
    """

    __slots__ = ("_value", "_listeners")

    def __init__(self, value: T) -> None:
        self._value = value
        self._listeners: list[Listener[T]] = []

    def get(self) -> T:
        """Current value."""
        return self._value

    def set(self, value: T, *, force: bool = False, notify: bool = True) -> bool:
        """Replace the value. Returns True if the value changed."""
        if not force and value == self._value:
            return False
        self._value = value
        if notify:
            for listener in list(self._listeners):
                listener(value)
        return True

    def subscribe(self, listener: Listener[T]) -> Callable[[], None]:
        """Register a listener; returns a function that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def clear_subscribers(self) -> None:
        """Drop every listener."""
        self._listeners.clear()

    @property
    def subscriber_count(self) -> int:
        return len(self._listeners)
