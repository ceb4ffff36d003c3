# tests/test_correlation_id.py
"""
Tests for correlation ID context management.
"""

import asyncio

from folio.utils.context import clear_correlation_id, get_correlation_id, set_correlation_id


class TestCorrelationIdContext:
    """Tests for correlation ID context functions."""

    def test_get_returns_none_when_not_set(self):
        """Should return None when correlation ID is not set."""
        clear_correlation_id()
        assert get_correlation_id() is None

    def test_set_and_get_correlation_id(self):
        """Should set and retrieve correlation ID."""
        set_correlation_id("test-correlation-123")
        assert get_correlation_id() == "test-correlation-123"
        clear_correlation_id()

    def test_clear_correlation_id(self):
        """Should clear correlation ID."""
        set_correlation_id("test-correlation-456")
        clear_correlation_id()
        assert get_correlation_id() is None

    def test_isolated_per_task(self):
        """Concurrent tasks each see their own ID."""

        async def worker(name: str) -> str | None:
            set_correlation_id(name)
            await asyncio.sleep(0)
            return get_correlation_id()

        async def main():
            return await asyncio.gather(worker("a"), worker("b"))

        assert asyncio.run(main()) == ["a", "b"]
        assert get_correlation_id() is None
