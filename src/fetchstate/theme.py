"""Light/dark theme state persisted to key-value storage."""

from __future__ import annotations

import logging
from collections.abc import Callable

from fetchstate.errors import ThemeError
from fetchstate.observable import Observable
from fetchstate.storage import THEME_KEY, KeyValueStorage

logger = logging.getLogger(__name__)

LIGHT = "light"
DARK = "dark"
THEMES = (LIGHT, DARK)

_THEME_COLORS = {LIGHT: "#ffffff", DARK: "#1f2937"}


class ThemeStore:
    """App-wide theme with a single writer path.

    The initial theme is the saved preference if there is one, otherwise the
    system theme. Explicit choices are written back to storage; until one is
    made the store keeps following the system theme.
    """

    def __init__(self, storage: KeyValueStorage, system_theme: str = LIGHT) -> None:
        if system_theme not in THEMES:
            raise ThemeError(f"Unknown theme: {system_theme!r}")
        self._storage = storage
        self._system_theme = system_theme
        saved = storage.get_item(THEME_KEY)
        if saved is not None and saved not in THEMES:
            logger.warning("ignoring unknown saved theme %r", saved)
            saved = None
        self._state = Observable(saved or system_theme)

    @property
    def theme(self) -> str:
        return self._state.get()

    @property
    def is_dark(self) -> bool:
        return self.theme == DARK

    @property
    def is_light(self) -> bool:
        return self.theme == LIGHT

    @property
    def theme_color(self) -> str:
        """Browser chrome color matching the theme."""
        return _THEME_COLORS[self.theme]

    def subscribe(self, listener: Callable[[str], None]) -> Callable[[], None]:
        return self._state.subscribe(listener)

    def _apply(self, theme: str) -> None:
        self._storage.set_item(THEME_KEY, theme)
        if self._state.set(theme):
            logger.debug("theme changed to %s", theme)

    def toggle(self) -> str:
        """Switch between light and dark."""
        self._apply(LIGHT if self.is_dark else DARK)
        return self.theme

    def set_theme(self, theme: str) -> None:
        """Set a specific theme."""
        if theme not in THEMES:
            raise ThemeError(f"Unknown theme: {theme!r}")
        self._apply(theme)

    def reset_to_system(self) -> None:
        """Forget the saved preference and follow the system theme."""
        self._storage.remove_item(THEME_KEY)
        self._state.set(self._system_theme)

    def on_system_change(self, theme: str) -> None:
        """Record a new system theme; adopted only without a saved preference."""
        if theme not in THEMES:
            raise ThemeError(f"Unknown theme: {theme!r}")
        self._system_theme = theme
        if self._storage.get_item(THEME_KEY) is None:
            self._state.set(theme)
