# tests/test_common.py

"""
Tests for the shared logger and cache modules.
"""

from unittest.mock import patch

import pytest

import common
from common.cache import CacheFactory, CacheType, InMemoryCache
from common.logger import LoggerFactory, LoggerType, LogLevel, PrintLogger


class TestLoggerFactory:
    """Test cases for logger creation and caching."""

    def test_named_loggers_cached(self):
        first = LoggerFactory.get_logger(name="test-cached", level=LogLevel.DEBUG)
        second = LoggerFactory.get_logger(name="test-cached")
        assert first is second

    def test_create_logger_not_cached(self):
        first = LoggerFactory.create_logger(name="test-fresh", logger_type=LoggerType.PRINT)
        second = LoggerFactory.create_logger(name="test-fresh", logger_type=LoggerType.PRINT)

        assert isinstance(first, PrintLogger)
        assert first is not second

    def test_log_file_written(self, tmp_path):
        log_file = tmp_path / "nested" / "service.log"
        logger = LoggerFactory.create_logger(
            name="test-file",
            level=LogLevel.DEBUG,
            file_level=LogLevel.DEBUG,
            log_file=str(log_file),
        )

        logger.info("written to file")

        assert "written to file" in log_file.read_text(encoding="utf-8")

    def test_module_version(self):
        assert common.__version__


class TestInMemoryCache:
    """Test cases for TTL expiry, LRU eviction and statistics."""

    @pytest.mark.asyncio
    async def test_set_get_delete(self):
        cache = InMemoryCache(max_size=10)

        await cache.set("a", {"value": 1})

        assert await cache.get("a") == {"value": 1}
        assert await cache.exists("a")
        assert await cache.delete("a") is True
        assert await cache.get("a") is None
        assert await cache.delete("a") is False

    @pytest.mark.asyncio
    async def test_lru_eviction(self):
        cache = InMemoryCache(max_size=2)

        await cache.set("a", 1)
        await cache.set("b", 2)
        await cache.get("a")
        await cache.set("c", 3)

        assert await cache.get("b") is None
        assert await cache.get("a") == 1
        assert cache.get_stats().evictions == 1

    @pytest.mark.asyncio
    async def test_ttl_expiry(self):
        cache = InMemoryCache(default_ttl=30)

        with patch("common.cache.in_memory_cache.time.monotonic", return_value=100.0):
            await cache.set("k", "v")
        with patch("common.cache.in_memory_cache.time.monotonic", return_value=129.0):
            assert await cache.get("k") == "v"
        with patch("common.cache.in_memory_cache.time.monotonic", return_value=131.0):
            assert await cache.get("k") is None

    @pytest.mark.asyncio
    async def test_no_ttl(self):
        cache = InMemoryCache(default_ttl=None)
        await cache.set("k", "v")
        assert await cache.get("k") == "v"

    @pytest.mark.asyncio
    async def test_stats(self):
        cache = InMemoryCache()

        await cache.set("k", 1)
        await cache.get("k")
        await cache.get("missing")
        stats = cache.get_stats()

        assert (stats.hits, stats.misses, stats.sets) == (1, 1, 1)
        assert stats.hit_rate == 0.5

    @pytest.mark.asyncio
    async def test_key_prefix_and_clear(self):
        cache = InMemoryCache(key_prefix="news:")

        await cache.set("global", [1])
        await cache.clear()

        assert await cache.get("global") is None
        assert cache.get_stats().current_size == 0

    def test_invalid_size(self):
        with pytest.raises(ValueError):
            InMemoryCache(max_size=0)


class TestCacheFactory:
    """Test cases for named cache instances."""

    def setup_method(self):
        CacheFactory.clear_instances()

    def teardown_method(self):
        CacheFactory.clear_instances()

    def test_named_cache_singleton(self):
        first = CacheFactory.get_cache("tokens", CacheType.MEMORY, max_size=5)
        second = CacheFactory.get_cache("tokens")

        assert first is second
        assert first.max_size == 5

    def test_create_cache_unregistered(self):
        assert CacheFactory.create_cache() is not CacheFactory.create_cache()
