"""Fetch state: one logical async read with status, caching and supersession."""

from __future__ import annotations

import asyncio
import inspect
import itertools
import logging
from collections.abc import Callable
from dataclasses import replace
from typing import Any, Generic, TypeVar

from fetchstate.cache import ResultCache, monotonic_ms
from fetchstate.duration import parse_duration
from fetchstate.errors import error_message
from fetchstate.observable import Observable
from fetchstate.types import Clock, FetchFn, FetchOptions, FetchStatus, Snapshot

T = TypeVar("T")

logger = logging.getLogger(__name__)

_attempt_ids = itertools.count(1)


class _Attempt:
    """Cancellation signal for one invocation of the wrapped function."""

    __slots__ = ("id", "aborted")

    def __init__(self) -> None:
        self.id = next(_attempt_ids)
        self.aborted = False

    def abort(self) -> None:
        self.aborted = True


class FetchState(Generic[T]):
    """Tracks one async read operation and publishes its progress.

    Usage:
        users = FetchState(client.users.get_all, cache_key="users-all")
        async with users:              # mount; runs execute() when immediate
            ...
            await users.refresh()      # bypass the cache

    At most one invocation is live at a time. Starting another one (or
    serving a cache hit) supersedes it: the older invocation's result or
    failure is discarded, never published, and its caller gets ``None``.
    """

    def __init__(
        self,
        fn: FetchFn[T],
        options: FetchOptions[T] | None = None,
        *,
        clock: Clock | None = None,
        **overrides: Any,
    ) -> None:
        options = options or FetchOptions()
        if overrides:
            options = replace(options, **overrides)
        self._fn = fn
        self._options = options
        self._cache = ResultCache(
            parse_duration(options.cache_duration),
            clock or monotonic_ms,
            max_items=options.cache_max_items,
        )
        self._state: Observable[Snapshot[T]] = Observable(Snapshot())
        self._current: _Attempt | None = None
        self._dependencies: tuple[Any, ...] = tuple(options.dependencies)
        self._background_tasks: set[asyncio.Task[None]] = set()
        self._last_failure: BaseException | None = None
        self._mounted = False
        self._closed = False

    # -------------------- published state --------------------

    @property
    def options(self) -> FetchOptions[T]:
        return self._options

    @property
    def snapshot(self) -> Snapshot[T]:
        return self._state.get()

    @property
    def status(self) -> FetchStatus:
        return self.snapshot.status

    @property
    def data(self) -> T | None:
        return self.snapshot.data

    @property
    def error(self) -> str | None:
        return self.snapshot.error

    @property
    def loading(self) -> bool:
        return self.snapshot.is_loading

    @property
    def is_idle(self) -> bool:
        return self.snapshot.is_idle

    @property
    def is_loading(self) -> bool:
        return self.snapshot.is_loading

    @property
    def is_success(self) -> bool:
        return self.snapshot.is_success

    @property
    def is_error(self) -> bool:
        return self.snapshot.is_error

    @property
    def in_flight(self) -> bool:
        """Whether an invocation is live."""
        return self._current is not None

    @property
    def cache(self) -> ResultCache:
        return self._cache

    @property
    def mounted(self) -> bool:
        return self._mounted

    def subscribe(self, listener: Callable[[Snapshot[T]], None]) -> Callable[[], None]:
        """Call ``listener`` with every new snapshot; returns an unsubscriber."""
        return self._state.subscribe(listener)

    def _publish(self, snapshot: Snapshot[T]) -> None:
        self._state.set(snapshot)

    # -------------------- operations --------------------

    def _supersede(self) -> None:
        if self._current is not None:
            logger.debug("superseding attempt %d", self._current.id)
            self._current.abort()
            self._current = None

    async def execute(self, *args: Any, **kwargs: Any) -> T | None:
        """Run the wrapped function, serving from the cache when possible.

        Returns the result, or ``None`` if this invocation was superseded.
        Failures are published as ``error`` state and then re-raised.
        """
        if self._closed:
            raise RuntimeError("FetchState is unmounted")

        key = self._options.cache_key
        cached = self._cache.lookup(key)
        if cached is not None:
            logger.debug("cache hit for %r", key)
            self._supersede()
            self._publish(Snapshot(FetchStatus.SUCCESS, cached.value, None))
            return cached.value

        self._supersede()
        attempt = _Attempt()
        self._current = attempt
        self._publish(Snapshot(FetchStatus.LOADING, self.data, None))

        try:
            result = self._fn(*args, **kwargs)
            if inspect.isawaitable(result):
                result = await result
        except asyncio.CancelledError:
            if self._current is attempt:
                # No outcome; leave loading but keep what is on screen.
                self._current = None
                data = self.data
                status = FetchStatus.IDLE if data is None else FetchStatus.SUCCESS
                self._publish(Snapshot(status, data, None))
            raise
        except Exception as exc:
            if attempt.aborted:
                logger.debug("discarding failure of attempt %d", attempt.id)
                return None
            self._current = None
            self._last_failure = exc
            self._publish(Snapshot(FetchStatus.ERROR, self.data, error_message(exc)))
            if self._options.on_error is not None:
                self._options.on_error(exc)
            raise

        if attempt.aborted:
            logger.debug("discarding result of attempt %d", attempt.id)
            return None
        self._current = None
        self._publish(Snapshot(FetchStatus.SUCCESS, result, None))
        self._cache.store(key, result)
        if self._options.on_success is not None:
            self._options.on_success(result)
        return result

    async def refresh(self, *args: Any, **kwargs: Any) -> T | None:
        """Invalidate the cached result for this key, then execute."""
        self._cache.delete(self._options.cache_key)
        return await self.execute(*args, **kwargs)

    def reset(self) -> None:
        """Return to idle. A live invocation is left running."""
        self._publish(Snapshot())

    # -------------------- lifecycle --------------------

    async def _run_automatic(self) -> None:
        try:
            await self.execute()
        except Exception as exc:
            if exc is self._last_failure:
                logger.debug("automatic fetch failed: %s", error_message(exc))
            else:
                logger.exception("callback raised during automatic fetch")
        finally:
            self._last_failure = None

    def _schedule(self) -> None:
        task = asyncio.get_running_loop().create_task(self._run_automatic())
        self._background_tasks.add(task)
        task.add_done_callback(self._background_tasks.discard)

    def mount(self) -> None:
        """Start the instance; runs ``execute()`` in the background if immediate."""
        if self._closed:
            raise RuntimeError("FetchState is unmounted")
        if self._mounted:
            return
        self._mounted = True
        if self._options.immediate:
            self._schedule()

    def configure(self, **changes: Any) -> None:
        """Replace options, as when an owner re-renders with new ones.

        The cache table is kept, so switching ``cache_key`` back and forth
        still hits entries stored under either key.
        """
        dependencies = changes.pop("dependencies", None)
        self._options = replace(self._options, **changes)
        if "cache_duration" in changes:
            self._cache.duration = parse_duration(self._options.cache_duration)
        if "cache_max_items" in changes:
            self._cache.max_items = self._options.cache_max_items
        if dependencies is not None:
            self.set_dependencies(*dependencies)

    def set_dependencies(self, *values: Any) -> bool:
        """Replace the dependency values; re-runs automatic fetch on change."""
        new = tuple(values)
        if new == self._dependencies:
            return False
        self._dependencies = new
        if self._mounted and self._options.immediate:
            self._supersede()
            self._schedule()
        return True

    async def unmount(self) -> None:
        """Discard any live invocation and release the cache."""
        self._mounted = False
        self._closed = True
        self._supersede()
        tasks = list(self._background_tasks)
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        self._cache.clear()
        self._state.clear_subscribers()

    async def __aenter__(self) -> FetchState[T]:
        self.mount()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.unmount()

    def __repr__(self) -> str:
        return (
            f"FetchState(status={self.status.value!r}, "
            f"cache_key={self._options.cache_key!r})"
        )
