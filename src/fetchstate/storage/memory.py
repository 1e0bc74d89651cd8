"""In-memory storage backend."""


class MemoryStorage:
    """Key-value storage that lives only as long as the object."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._items: dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> str | None:
        """Get the value stored under key."""
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        """Store a value."""
        self._items[key] = str(value)

    def remove_item(self, key: str) -> None:
        """Remove a key if present."""
        self._items.pop(key, None)

    def clear(self) -> None:
        """Remove every key."""
        self._items.clear()

    def keys(self) -> list[str]:
        """All stored keys."""
        return list(self._items)
