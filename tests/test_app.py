"""Tests for wiring settings into the application objects."""

import json
from pathlib import Path

import httpx
import pytest
import respx

from fetchstate import MemoryStorage, Settings, create_app
from fetchstate import app as app_module

from .conftest import API_BASE_URL, API_HOST
from .fakes import wait_until


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        api_base_url=API_BASE_URL,
        api_timeout=1500,
        search_debounce=20,
        storage_path=tmp_path / "store.json",
        log_level="WARNING",
    )


class TestCreateApp:
    """Tests for create_app."""

    async def test_client_uses_settings(
        self, settings: Settings, api_mock: respx.MockRouter
    ) -> None:
        """Test that the browser talks to the configured base URL."""
        route = api_mock.get(host=API_HOST, path="/posts").mock(
            return_value=httpx.Response(200, json=[{"id": 1, "title": "t"}])
        )
        async with create_app(settings, configure_logging=False) as app:
            assert app.client._client.timeout.read == 1.5
            await wait_until(lambda: not app.browser.busy)
            assert app.browser.visible_items == [{"id": 1, "title": "t"}]
        assert route.called
        assert app.client._client.is_closed

    async def test_storage_path_backs_theme_and_tasks(self, settings: Settings) -> None:
        """Test that theme and tasks persist to the configured file."""
        app = create_app(settings, configure_logging=False)
        app.theme.set_theme("dark")
        app.tasks.add("write docs")
        await app.aclose()

        saved = json.loads(settings.storage_path.read_text(encoding="utf-8"))
        assert saved["theme"] == "dark"
        assert "tasks" in saved
        reopened = create_app(settings, configure_logging=False)
        assert reopened.theme.is_dark
        await reopened.aclose()

    async def test_explicit_storage_wins(self, settings: Settings) -> None:
        """Test that a given storage replaces the file backend."""
        storage = MemoryStorage()
        app = create_app(settings, storage=storage, configure_logging=False)
        app.theme.toggle()
        await app.aclose()
        assert storage.get_item("theme") == "dark"
        assert not settings.storage_path.exists()

    async def test_log_level_is_applied(
        self, settings: Settings, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test that logging is configured from settings.log_level."""
        calls = []
        monkeypatch.setattr(
            app_module, "setup_logging", lambda **kw: calls.append(kw)
        )
        app = create_app(settings, storage=MemoryStorage())
        await app.aclose()
        assert calls == [{"console_level": "WARNING"}]

    async def test_defaults_come_from_environment(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
    ) -> None:
        """Test that settings are loaded from FETCHSTATE_* when not given."""
        monkeypatch.setenv("FETCHSTATE_API_BASE_URL", API_BASE_URL)
        monkeypatch.setenv("FETCHSTATE_STORAGE_PATH", str(tmp_path / "env.json"))
        app = create_app(configure_logging=False)
        await app.aclose()
        assert app.settings.api_base_url == API_BASE_URL
        assert app.storage.path == tmp_path / "env.json"
