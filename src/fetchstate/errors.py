"""Error types and user-facing messages."""

from __future__ import annotations

NETWORK_ERROR_MESSAGE = "Network error occurred. Please check your connection."
SERVER_ERROR_MESSAGE = "Server error occurred. Please try again later."
NOT_FOUND_MESSAGE = "The requested data was not found."
TIMEOUT_MESSAGE = "Request timed out. Please try again."
GENERIC_ERROR_MESSAGE = "An unexpected error occurred. Please try again."

ERROR_MESSAGES: dict[str, str] = {
    "network_error": NETWORK_ERROR_MESSAGE,
    "server_error": SERVER_ERROR_MESSAGE,
    "not_found": NOT_FOUND_MESSAGE,
    "timeout": TIMEOUT_MESSAGE,
    "generic": GENERIC_ERROR_MESSAGE,
}


def error_message(exc: BaseException | None) -> str:
    """Human-readable message for a failure, falling back to a generic one."""
    if exc is None:
        return GENERIC_ERROR_MESSAGE
    message = str(exc).strip()
    return message or GENERIC_ERROR_MESSAGE


class FetchStateError(Exception):
    """Base class for errors raised by fetchstate."""


class ApiError(FetchStateError):
    """Non-success HTTP response from the sample API."""

    def __init__(self, status_code: int, endpoint: str = "") -> None:
        super().__init__(f"HTTP error! status: {status_code}")
        self.status_code = status_code
        self.endpoint = endpoint


class ThemeError(FetchStateError, ValueError):
    """Unknown theme name."""
