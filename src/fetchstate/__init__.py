"""fetchstate - async fetch state with caching, supersession and debounce."""

from fetchstate.api import PlaceholderClient, fetch_json
from fetchstate.app import App, create_app
from fetchstate.boundary import ErrorBoundary
from fetchstate.browser import DataBrowser
from fetchstate.cache import ResultCache
from fetchstate.config import Settings, load_settings
from fetchstate.debounce import Debounced
from fetchstate.duration import parse_duration
from fetchstate.errors import (
    GENERIC_ERROR_MESSAGE,
    ApiError,
    FetchStateError,
    ThemeError,
    error_message,
)
from fetchstate.hook import FetchState
from fetchstate.logging_setup import setup_logging
from fetchstate.observable import Observable
from fetchstate.storage import KeyValueStorage, LocalStorage, MemoryStorage
from fetchstate.tasks import Task, TaskList
from fetchstate.theme import ThemeStore

# Core types
from fetchstate.types import (
    CacheEntry,
    Duration,
    FetchOptions,
    FetchStatus,
    Page,
    Snapshot,
)

__version__ = "0.1.0"

__all__ = [
    "GENERIC_ERROR_MESSAGE",
    "ApiError",
    "App",
    "CacheEntry",
    "DataBrowser",
    "Debounced",
    "Duration",
    "ErrorBoundary",
    "FetchOptions",
    "FetchState",
    "FetchStateError",
    "FetchStatus",
    "KeyValueStorage",
    "LocalStorage",
    "MemoryStorage",
    "Observable",
    "Page",
    "PlaceholderClient",
    "ResultCache",
    "Settings",
    "Snapshot",
    "Task",
    "TaskList",
    "ThemeError",
    "ThemeStore",
    "create_app",
    "error_message",
    "fetch_json",
    "load_settings",
    "parse_duration",
    "setup_logging",
]
