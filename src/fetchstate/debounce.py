"""Debounced values driven by the running event loop."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import Generic, TypeVar

from fetchstate.duration import parse_duration
from fetchstate.observable import Observable
from fetchstate.types import Duration

T = TypeVar("T")


class Debounced(Generic[T]):
    """A value that only follows its input once the input stops changing.

    Every ``set()`` cancels the pending update and schedules a new one
    ``delay`` from now, so ``value`` only ever holds an input that stayed put
    for at least ``delay``. Must be driven from inside a running event loop.
    """

    def __init__(self, value: T, delay: Duration) -> None:
        self._delay = parse_duration(delay)
        self._state: Observable[T] = Observable(value)
        self._handle: asyncio.TimerHandle | None = None
        self._latest: T = value
        self._closed = False

    @property
    def value(self) -> T:
        """The last settled input."""
        return self._state.get()

    @property
    def latest(self) -> T:
        """The most recent raw input, settled or not."""
        return self._latest

    @property
    def pending(self) -> bool:
        return self._handle is not None

    @property
    def delay(self) -> float:
        return self._delay

    @delay.setter
    def delay(self, delay: Duration) -> None:
        self._delay = parse_duration(delay)
        if self._handle is not None:
            self._schedule(self._latest)

    def subscribe(self, listener: Callable[[T], None]) -> Callable[[], None]:
        """Call ``listener`` with each newly settled value."""
        return self._state.subscribe(listener)

    def set(self, value: T) -> None:
        """Feed a new input value, restarting the stability timer."""
        if self._closed:
            raise RuntimeError("Debounced value is closed")
        self._latest = value
        self._schedule(value)

    def _schedule(self, value: T) -> None:
        self._cancel_pending()
        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(self._delay / 1000, self._settle, value)

    def _settle(self, value: T) -> None:
        self._handle = None
        self._state.set(value)

    def _cancel_pending(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def reset(self, value: T) -> None:
        """Settle on ``value`` at once, dropping any pending update.

        Subscribers are not notified; the owner is expected to act on the
        reset itself.
        """
        self._cancel_pending()
        self._latest = value
        self._state.set(value, notify=False)

    def close(self) -> None:
        """Drop any pending update without publishing it."""
        self._cancel_pending()
        self._closed = True
        self._state.clear_subscribers()

    def __enter__(self) -> Debounced[T]:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
