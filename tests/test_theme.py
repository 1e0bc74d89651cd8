"""Tests for the theme store."""

import pytest

from fetchstate import MemoryStorage, ThemeError, ThemeStore


class TestThemeStore:
    """Tests for ThemeStore."""

    def test_defaults_to_system_theme(self, storage: MemoryStorage) -> None:
        """Test that without a saved preference the system theme is used."""
        themes = ThemeStore(storage, system_theme="dark")
        assert themes.theme == "dark"
        assert themes.is_dark
        assert storage.get_item("theme") is None

    def test_saved_preference_wins(self) -> None:
        """Test that a saved theme overrides the system one."""
        themes = ThemeStore(MemoryStorage({"theme": "light"}), system_theme="dark")
        assert themes.is_light

    def test_unknown_saved_theme_is_ignored(self) -> None:
        """Test that garbage in storage falls back to the system theme."""
        themes = ThemeStore(MemoryStorage({"theme": "purple"}), system_theme="dark")
        assert themes.theme == "dark"

    def test_toggle_persists_and_notifies(self, storage: MemoryStorage) -> None:
        """Test that toggling writes storage and notifies subscribers."""
        themes = ThemeStore(storage)
        seen: list[str] = []
        themes.subscribe(seen.append)

        assert themes.toggle() == "dark"
        assert storage.get_item("theme") == "dark"
        assert themes.toggle() == "light"
        assert seen == ["dark", "light"]

    def test_set_theme(self, storage: MemoryStorage) -> None:
        """Test setting a specific theme."""
        themes = ThemeStore(storage)
        themes.set_theme("dark")
        assert themes.theme == "dark"
        assert themes.theme_color == "#1f2937"

    def test_set_unknown_theme_raises(self, storage: MemoryStorage) -> None:
        """Test that only light and dark are accepted."""
        themes = ThemeStore(storage)
        with pytest.raises(ThemeError):
            themes.set_theme("sepia")
        assert themes.theme == "light"

    def test_system_change_followed_without_preference(
        self, storage: MemoryStorage
    ) -> None:
        """Test that system changes apply until the user picks a theme."""
        themes = ThemeStore(storage)
        themes.on_system_change("dark")
        assert themes.is_dark

        themes.set_theme("light")
        themes.on_system_change("dark")
        assert themes.is_light

    def test_reset_to_system(self, storage: MemoryStorage) -> None:
        """Test that reset forgets the preference."""
        themes = ThemeStore(storage, system_theme="dark")
        themes.set_theme("light")
        themes.reset_to_system()
        assert themes.is_dark
        assert storage.get_item("theme") is None
