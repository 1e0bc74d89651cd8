"""Application wiring: settings into logging, storage, client and browser."""

from __future__ import annotations

from dataclasses import dataclass

import httpx

from fetchstate.api import PlaceholderClient
from fetchstate.browser import DataBrowser
from fetchstate.config import Settings, load_settings
from fetchstate.logging_setup import setup_logging
from fetchstate.storage import KeyValueStorage, LocalStorage
from fetchstate.tasks import TaskList
from fetchstate.theme import ThemeStore


@dataclass
class App:
    settings: Settings
    client: PlaceholderClient
    storage: KeyValueStorage
    theme: ThemeStore
    tasks: TaskList
    browser: DataBrowser

    async def aclose(self) -> None:
        """Tear down the browser, then close the HTTP client."""
        await self.browser.close()
        await self.client.aclose()

    async def __aenter__(self) -> App:
        self.browser.start()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()


def create_app(
    settings: Settings | None = None,
    *,
    storage: KeyValueStorage | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
    configure_logging: bool = True,
) -> App:
    """Build the app from ``settings`` (default: the environment).

    Usage:
        async with create_app() as app:
            await app.browser.load()
    """
    settings = settings or load_settings()
    if configure_logging:
        setup_logging(console_level=settings.log_level)
    if storage is None:
        storage = LocalStorage(settings.storage_path)
    client = PlaceholderClient.from_settings(settings, transport=transport)
    return App(
        settings=settings,
        client=client,
        storage=storage,
        theme=ThemeStore(storage),
        tasks=TaskList(storage),
        browser=DataBrowser(client, settings),
    )
