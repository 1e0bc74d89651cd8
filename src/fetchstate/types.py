"""Core types for fetchstate."""

from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass, field
from datetime import timedelta
from enum import Enum
from typing import Any, Generic, TypeVar

T = TypeVar("T")

# Duration type alias
Duration = str | int | float | timedelta  # "300ms", "5m" or milliseconds

# Milliseconds since an arbitrary epoch
Clock = Callable[[], float]

FetchFn = Callable[..., Awaitable[T]]


class FetchStatus(str, Enum):
    """Lifecycle status of a fetch state."""

    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class CacheEntry(Generic[T]):
    """A cached result with the time it was stored."""

    value: T
    stored_at: float  # clock milliseconds


@dataclass(frozen=True, slots=True)
class FetchOptions(Generic[T]):
    """Configuration for a fetch state."""

    immediate: bool = True
    cache_key: str | None = None
    cache_duration: Duration = "5m"
    cache_max_items: int | None = None  # None = unbounded
    on_success: Callable[[T], Any] | None = None
    on_error: Callable[[BaseException], Any] | None = None
    dependencies: Sequence[Any] = field(default_factory=tuple)


@dataclass(frozen=True, slots=True)
class Snapshot(Generic[T]):
    """Published view of a fetch state."""

    status: FetchStatus = FetchStatus.IDLE
    data: T | None = None
    error: str | None = None

    @property
    def loading(self) -> bool:
        return self.status is FetchStatus.LOADING

    @property
    def is_idle(self) -> bool:
        return self.status is FetchStatus.IDLE

    @property
    def is_loading(self) -> bool:
        return self.status is FetchStatus.LOADING

    @property
    def is_success(self) -> bool:
        return self.status is FetchStatus.SUCCESS

    @property
    def is_error(self) -> bool:
        return self.status is FetchStatus.ERROR


@dataclass(frozen=True, slots=True)
class Page(Generic[T]):
    """One page of a paginated listing."""

    items: list[T]
    page: int
    limit: int
    total: int | None = None  # from X-Total-Count when the server sends it

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        """Whether another page follows this one.

        Uses the server-reported total when known; otherwise a full page is
        taken to mean more may follow.
        """
        if self.total is not None:
            return self.page * self.limit < self.total
        return len(self.items) >= self.limit
