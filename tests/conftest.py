"""Shared pytest fixtures."""

from collections.abc import AsyncIterator, Iterator

import pytest
import respx

from fetchstate import MemoryStorage, PlaceholderClient

from .fakes import FakeClock

API_HOST = "api.test.dev"
API_BASE_URL = f"https://{API_HOST}"


@pytest.fixture
def clock() -> FakeClock:
    """Create a fake clock starting at t=0."""
    return FakeClock()


@pytest.fixture
def storage() -> MemoryStorage:
    """Create a fresh MemoryStorage for each test."""
    return MemoryStorage()


@pytest.fixture
def api_mock() -> Iterator[respx.MockRouter]:
    """Intercept HTTP traffic to the test API host."""
    with respx.mock(assert_all_called=False) as mock:
        yield mock


@pytest.fixture
async def client() -> AsyncIterator[PlaceholderClient]:
    """Create a PlaceholderClient pointed at the test API host."""
    async with PlaceholderClient(API_BASE_URL, timeout="1s") as c:
        yield c
