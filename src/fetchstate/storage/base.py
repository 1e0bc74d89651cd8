"""Base protocol for key-value storage backends."""

from typing import Protocol, runtime_checkable

THEME_KEY = "theme"
API_CACHE_KEY = "api_cache"
USER_PREFERENCES_KEY = "user_preferences"
SEARCH_HISTORY_KEY = "search_history"
TASKS_KEY = "tasks"


@runtime_checkable
class KeyValueStorage(Protocol):
    """String key-value store, in the manner of browser local storage."""

    def get_item(self, key: str) -> str | None:
        """Get the value stored under key."""
        ...

    def set_item(self, key: str, value: str) -> None:
        """Store a value."""
        ...

    def remove_item(self, key: str) -> None:
        """Remove a key if present."""
        ...

    def clear(self) -> None:
        """Remove every key."""
        ...

    def keys(self) -> list[str]:
        """All stored keys."""
        ...
