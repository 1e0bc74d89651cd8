"""Async client for the JSONPlaceholder sample REST API."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import httpx

from fetchstate.duration import parse_duration
from fetchstate.errors import ApiError
from fetchstate.types import Duration, Page

if TYPE_CHECKING:
    from fetchstate.config import Settings

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://jsonplaceholder.typicode.com"
DEFAULT_TIMEOUT = 10_000  # ms
DEFAULT_PAGE_SIZE = 10
PHOTOS_PAGE_SIZE = 12
COMMENTS_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100

POSTS = "/posts"
USERS = "/users"
COMMENTS = "/comments"
ALBUMS = "/albums"
PHOTOS = "/photos"

Json = Any


class PlaceholderClient:
    """HTTP client for posts, users, comments, albums and photos.

    Usage:
        async with PlaceholderClient() as client:
            users = await client.users.get_all()
            page = await client.posts.get_paginated(2)
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        *,
        timeout: Duration = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._client = httpx.AsyncClient(
            base_url=base_url,
            headers={"Content-Type": "application/json"},
            timeout=parse_duration(timeout) / 1000,
            transport=transport,
        )
        self.posts = PostsApi(self)
        self.users = UsersApi(self)
        self.comments = CommentsApi(self)
        self.albums = AlbumsApi(self)
        self.photos = PhotosApi(self)

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> PlaceholderClient:
        """Create a client for ``settings.api_base_url`` and ``api_timeout``."""
        return cls(
            settings.api_base_url, timeout=settings.api_timeout, transport=transport
        )

    async def _request(
        self, endpoint: str, params: dict[str, Any] | None = None
    ) -> httpx.Response:
        """Make a GET request, raising ApiError on a non-success status."""
        try:
            response = await self._client.get(endpoint, params=params)
        except httpx.HTTPError as exc:
            logger.error("API request failed for %s: %s", endpoint, exc)
            raise
        if not response.is_success:
            logger.error(
                "API request failed for %s: HTTP %d", endpoint, response.status_code
            )
            raise ApiError(response.status_code, endpoint)
        return response

    @staticmethod
    def _decode(endpoint: str, response: httpx.Response) -> Json:
        try:
            return response.json()
        except ValueError:
            logger.error("API request for %s returned malformed JSON", endpoint)
            raise

    async def get_json(self, endpoint: str, params: dict[str, Any] | None = None) -> Json:
        """GET an endpoint and decode its JSON body."""
        response = await self._request(endpoint, params)
        return self._decode(endpoint, response)

    async def get_page(
        self,
        endpoint: str,
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE,
        params: dict[str, Any] | None = None,
    ) -> Page[Json]:
        """GET one page of a listing using ``_page``/``_limit``."""
        if page < 1:
            raise ValueError(f"page must be at least 1, got {page}")
        if not 1 <= limit <= MAX_PAGE_SIZE:
            raise ValueError(f"limit must be between 1 and {MAX_PAGE_SIZE}, got {limit}")
        query = {**(params or {}), "_page": page, "_limit": limit}
        response = await self._request(endpoint, query)
        items = self._decode(endpoint, response)
        total_header = response.headers.get("x-total-count")
        total = int(total_header) if total_header and total_header.isdigit() else None
        return Page(items=list(items), page=page, limit=limit, total=total)

    async def aclose(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> PlaceholderClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()


class _Resource:
    __slots__ = ("_client",)

    def __init__(self, client: PlaceholderClient) -> None:
        self._client = client


class PostsApi(_Resource):
    async def get_all(self) -> list[Json]:
        return await self._client.get_json(POSTS)

    async def get_paginated(
        self, page: int = 1, limit: int = DEFAULT_PAGE_SIZE
    ) -> Page[Json]:
        return await self._client.get_page(POSTS, page, limit)

    async def get_by_id(self, id: int) -> Json:
        return await self._client.get_json(f"{POSTS}/{id}")

    async def get_by_user_id(self, user_id: int) -> list[Json]:
        return await self._client.get_json(POSTS, {"userId": user_id})

    async def search_by_title(self, query: str) -> list[Json]:
        return await self._client.get_json(POSTS, {"title_like": query})


class UsersApi(_Resource):
    async def get_all(self) -> list[Json]:
        return await self._client.get_json(USERS)

    async def get_by_id(self, id: int) -> Json:
        return await self._client.get_json(f"{USERS}/{id}")

    async def search_by_name(self, query: str) -> list[Json]:
        return await self._client.get_json(USERS, {"name_like": query})


class CommentsApi(_Resource):
    async def get_all(self) -> list[Json]:
        return await self._client.get_json(COMMENTS)

    async def get_by_post_id(self, post_id: int) -> list[Json]:
        return await self._client.get_json(COMMENTS, {"postId": post_id})

    async def get_paginated(
        self, page: int = 1, limit: int = COMMENTS_PAGE_SIZE
    ) -> Page[Json]:
        return await self._client.get_page(COMMENTS, page, limit)


class AlbumsApi(_Resource):
    async def get_all(self) -> list[Json]:
        return await self._client.get_json(ALBUMS)

    async def get_by_user_id(self, user_id: int) -> list[Json]:
        return await self._client.get_json(ALBUMS, {"userId": user_id})

    async def get_by_id(self, id: int) -> Json:
        return await self._client.get_json(f"{ALBUMS}/{id}")


class PhotosApi(_Resource):
    async def get_all(self) -> list[Json]:
        """All photos (5000 items)."""
        return await self._client.get_json(PHOTOS)

    async def get_paginated(
        self, page: int = 1, limit: int = PHOTOS_PAGE_SIZE
    ) -> Page[Json]:
        return await self._client.get_page(PHOTOS, page, limit)

    async def get_by_album_id(self, album_id: int) -> list[Json]:
        return await self._client.get_json(PHOTOS, {"albumId": album_id})

    async def get_by_id(self, id: int) -> Json:
        return await self._client.get_json(f"{PHOTOS}/{id}")


async def fetch_json(
    url: str,
    *,
    timeout: Duration = DEFAULT_TIMEOUT,
    transport: httpx.AsyncBaseTransport | None = None,
) -> Json:
    """One-off GET of an absolute URL, decoded as JSON.

    Raises ApiError ("HTTP error! status: N") on a non-success status.
    Wrap it in a FetchState for loading and error state.
    """
    async with PlaceholderClient("", timeout=timeout, transport=transport) as client:
        return await client.get_json(url)
