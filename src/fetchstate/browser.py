"""Data browser: tabs, debounced search and pagination over the sample API."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from fetchstate.api import PlaceholderClient
from fetchstate.config import Settings
from fetchstate.debounce import Debounced
from fetchstate.errors import error_message
from fetchstate.hook import FetchState
from fetchstate.types import Clock, Page

logger = logging.getLogger(__name__)

POSTS = "posts"
USERS = "users"
PHOTOS = "photos"


@dataclass(frozen=True, slots=True)
class Tab:
    id: str
    label: str
    searchable: bool


TABS: tuple[Tab, ...] = (
    Tab(POSTS, "Posts", searchable=True),
    Tab(USERS, "Users", searchable=True),
    Tab(PHOTOS, "Photos", searchable=False),
)
_TABS_BY_ID = {tab.id: tab for tab in TABS}


def _matches(item: dict[str, Any], tab: str, query: str) -> bool:
    if tab == POSTS:
        fields = [item.get("title"), item.get("body")]
    elif tab == USERS:
        company = item.get("company") or {}
        fields = [item.get("name"), item.get("email"), company.get("name")]
    else:
        return True
    return any(query in str(f).lower() for f in fields if f is not None)


class DataBrowser:
    """Browses posts, users and photos with search and paging.

    Each listing has its own FetchState, so switching tabs or pages back and
    forth is served from that listing's cache. Search text goes through a
    Debounced value; only a settled query triggers a request.
    """

    def __init__(
        self,
        client: PlaceholderClient,
        settings: Settings | None = None,
        *,
        clock: Clock | None = None,
    ) -> None:
        self._settings = settings = settings or Settings()
        self._tab = POSTS
        self._page = 1
        self._search: Debounced[str] = Debounced("", settings.search_debounce)
        self._search.subscribe(self._on_search_settled)
        self._tasks: set[asyncio.Task[None]] = set()

        common: dict[str, Any] = {
            "immediate": False,
            "cache_duration": settings.cache_duration,
            "clock": clock,
        }
        self.posts = FetchState(client.posts.get_paginated, **common)
        self.users = FetchState(client.users.get_all, cache_key="users-all", **common)
        self.photos = FetchState(client.photos.get_paginated, **common)
        self.posts_search = FetchState(client.posts.search_by_title, **common)
        self.users_search = FetchState(client.users.search_by_name, **common)
        self._sync_cache_keys()

    # -------------------- view state --------------------

    @property
    def tab(self) -> Tab:
        return _TABS_BY_ID[self._tab]

    @property
    def page(self) -> int:
        return self._page

    @property
    def search_text(self) -> str:
        """Raw search input."""
        return self._search.latest

    @property
    def query(self) -> str:
        """Settled search query, empty when the tab is not searchable."""
        return self._search.value if self.tab.searchable else ""

    @property
    def current(self) -> FetchState[Any]:
        """The FetchState backing what is on screen."""
        if self._tab == POSTS:
            return self.posts_search if self.query else self.posts
        if self._tab == USERS:
            return self.users_search if self.query else self.users
        return self.photos

    @property
    def visible_items(self) -> list[Any]:
        """Items of the current listing, filtered by the settled query."""
        data = self.current.data
        if data is None:
            return []
        items = data.items if isinstance(data, Page) else list(data)
        query = self.query.lower()
        if not query:
            return items
        return [item for item in items if _matches(item, self._tab, query)]

    @property
    def has_next(self) -> bool:
        data = self.current.data
        return isinstance(data, Page) and data.has_next

    @property
    def has_previous(self) -> bool:
        return self._page > 1 and not self.query

    @property
    def busy(self) -> bool:
        """Whether a background load is still running."""
        return bool(self._tasks)

    def _sync_cache_keys(self) -> None:
        size = self._settings.page_size
        photos_size = self._settings.photos_page_size
        query = self._search.value
        self.posts.configure(cache_key=f"posts-{self._page}-{size}")
        self.photos.configure(cache_key=f"photos-{self._page}-{photos_size}")
        self.posts_search.configure(cache_key=f"posts-search-{query}")
        self.users_search.configure(cache_key=f"users-search-{query}")

    # -------------------- loading --------------------

    async def _invoke(self, refresh: bool) -> Any:
        self._sync_cache_keys()
        state = self.current
        run = state.refresh if refresh else state.execute
        query = self.query
        if query:
            return await run(query)
        if self._tab == POSTS:
            return await run(self._page, self._settings.page_size)
        if self._tab == PHOTOS:
            return await run(self._page, self._settings.photos_page_size)
        return await run()

    async def load(self) -> Any:
        """Load the current listing, from cache when possible."""
        return await self._invoke(refresh=False)

    async def refresh(self) -> Any:
        """Reload the current listing, bypassing the cache."""
        return await self._invoke(refresh=True)

    def _spawn(self, factory: Callable[[], Awaitable[Any]]) -> None:
        async def run() -> None:
            try:
                await factory()
            except Exception as exc:
                logger.debug("background load failed: %s", error_message(exc))

        task = asyncio.get_running_loop().create_task(run())
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    def start(self) -> None:
        """Kick off the initial load in the background."""
        self._spawn(self.load)

    # -------------------- user actions --------------------

    def set_search(self, text: str) -> None:
        """Feed raw search input; loading waits for it to settle."""
        self._search.set(text.strip())

    def _on_search_settled(self, query: str) -> None:
        logger.debug("search settled on %r", query)
        self._page = 1
        self._spawn(self.load)

    async def select_tab(self, tab: str) -> Any:
        """Switch tab, clearing the search and returning to page one."""
        if tab not in _TABS_BY_ID:
            raise ValueError(f"Unknown tab: {tab!r}")
        self._tab = tab
        self._page = 1
        self._search.reset("")
        return await self.load()

    async def go_to_page(self, page: int) -> Any:
        if page < 1:
            raise ValueError(f"page must be at least 1, got {page}")
        self._page = page
        return await self.load()

    async def next_page(self) -> Any:
        if not self.has_next:
            return None
        return await self.go_to_page(self._page + 1)

    async def previous_page(self) -> Any:
        if not self.has_previous:
            return None
        return await self.go_to_page(self._page - 1)

    # -------------------- lifecycle --------------------

    async def close(self) -> None:
        """Drop pending search input and tear down every listing."""
        self._search.close()
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        for state in (
            self.posts,
            self.users,
            self.photos,
            self.posts_search,
            self.users_search,
        ):
            await state.unmount()

    async def __aenter__(self) -> DataBrowser:
        self.start()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()
