"""Error boundary: isolate a failing render step behind a fallback."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, Generic, TypeVar

R = TypeVar("R")

logger = logging.getLogger(__name__)


class ErrorBoundary(Generic[R]):
    """Wraps a render step so one failure does not take down its caller.

    Once a render fails, the boundary stays in the error state and returns
    the fallback without calling the wrapped step again until ``reset()``.
    ``fallback`` is either a value or a callable receiving the exception.
    """

    def __init__(self, fallback: Any = None, *, name: str = "boundary") -> None:
        self._fallback = fallback
        self._name = name
        self._error: Exception | None = None

    @property
    def has_error(self) -> bool:
        return self._error is not None

    @property
    def error(self) -> Exception | None:
        return self._error

    def _fallback_for(self, error: Exception) -> Any:
        if callable(self._fallback):
            return self._fallback(error)
        return self._fallback

    def render(self, fn: Callable[..., R], *args: Any, **kwargs: Any) -> R | Any:
        """Call ``fn`` and return its result, or the fallback on failure."""
        if self._error is not None:
            return self._fallback_for(self._error)
        try:
            return fn(*args, **kwargs)
        except Exception as exc:
            logger.error("%s caught an error: %s", self._name, exc, exc_info=exc)
            self._error = exc
            return self._fallback_for(exc)

    def reset(self) -> None:
        """Clear the error state so the next render retries."""
        self._error = None
