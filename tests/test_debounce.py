"""Tests for debounced values."""

import asyncio

import pytest

from fetchstate import Debounced

DELAY = 0.05  # seconds
# asyncio timers may fire up to one clock tick early
TOLERANCE = 0.005


class TestDebounced:
    """Tests for Debounced settle behavior."""

    async def test_initial_value(self) -> None:
        """Test that the initial value is settled immediately."""
        debounced = Debounced("start", "50ms")
        assert debounced.value == "start"
        assert not debounced.pending

    async def test_only_final_value_of_a_burst_is_published(self) -> None:
        """Test that rapid changes collapse to the last one."""
        debounced = Debounced("", "50ms")
        published: list[str] = []
        debounced.subscribe(published.append)

        for text in ("a", "ab", "abc"):
            debounced.set(text)
            await asyncio.sleep(DELAY / 3)

        assert debounced.value == ""
        assert debounced.latest == "abc"
        assert debounced.pending

        await asyncio.sleep(DELAY * 2)
        assert debounced.value == "abc"
        assert published == ["abc"]
        assert not debounced.pending

    async def test_published_no_earlier_than_delay(self) -> None:
        """Test that settling waits the full delay after the last change."""
        loop = asyncio.get_running_loop()
        debounced = Debounced(0, "50ms")
        settled_at: list[float] = []
        debounced.subscribe(lambda _: settled_at.append(loop.time()))

        debounced.set(1)
        await asyncio.sleep(DELAY / 2)
        last_change = loop.time()
        debounced.set(2)
        await asyncio.sleep(DELAY * 3)

        assert len(settled_at) == 1
        assert settled_at[0] - last_change >= DELAY - TOLERANCE

    async def test_separate_stable_values_each_publish(self) -> None:
        """Test that values stable for the delay are each published."""
        debounced = Debounced("", "20ms")
        published: list[str] = []
        debounced.subscribe(published.append)

        debounced.set("one")
        await asyncio.sleep(0.06)
        debounced.set("two")
        await asyncio.sleep(0.06)
        assert published == ["one", "two"]

    async def test_close_cancels_pending_update(self) -> None:
        """Test that teardown drops the pending value."""
        debounced = Debounced("old", "20ms")
        published: list[str] = []
        debounced.subscribe(published.append)

        debounced.set("new")
        debounced.close()
        await asyncio.sleep(0.06)
        assert debounced.value == "old"
        assert published == []

    async def test_set_after_close_raises(self) -> None:
        """Test that a closed value rejects input."""
        debounced = Debounced("", "20ms")
        debounced.close()
        with pytest.raises(RuntimeError):
            debounced.set("x")

    async def test_context_manager_closes(self) -> None:
        """Test that leaving the context closes the value."""
        with Debounced("", "20ms") as debounced:
            debounced.set("x")
        assert not debounced.pending

    async def test_reset_settles_silently(self) -> None:
        """Test that reset drops pending input without notifying."""
        debounced = Debounced("q", "20ms")
        published: list[str] = []
        debounced.subscribe(published.append)

        debounced.set("qu")
        debounced.reset("")
        await asyncio.sleep(0.06)
        assert debounced.value == ""
        assert debounced.latest == ""
        assert published == []

    async def test_changing_delay_restarts_pending(self) -> None:
        """Test that a new delay applies to the pending update."""
        debounced = Debounced("", "20ms")
        debounced.set("x")
        debounced.delay = "200ms"
        await asyncio.sleep(0.06)
        assert debounced.value == ""
        assert debounced.delay == 200
        debounced.close()

    def test_invalid_delay(self) -> None:
        """Test that a bad delay is rejected up front."""
        with pytest.raises(ValueError):
            Debounced("", "soon")
