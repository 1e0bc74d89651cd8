"""Key-value storage backends."""

from fetchstate.storage.base import (
    API_CACHE_KEY,
    SEARCH_HISTORY_KEY,
    TASKS_KEY,
    THEME_KEY,
    USER_PREFERENCES_KEY,
    KeyValueStorage,
)
from fetchstate.storage.local import LocalStorage
from fetchstate.storage.memory import MemoryStorage

__all__ = [
    "API_CACHE_KEY",
    "KeyValueStorage",
    "LocalStorage",
    "MemoryStorage",
    "SEARCH_HISTORY_KEY",
    "TASKS_KEY",
    "THEME_KEY",
    "USER_PREFERENCES_KEY",
]
