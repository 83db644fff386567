# tests/test_dependencies.py

"""
Tests for container wiring: cache toggling, log locations and repository lifecycle.
"""

import logging
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from dependency_injector import providers

from common.cache import CacheFactory, InMemoryCache
from common.logger import LoggerFactory
from portfolio_service.core.config import settings
from portfolio_service.repositories.mongo_repository import MongoContactRepository
from portfolio_service.schemas.news_schemas import (
    AggregationResult,
    NewsArticle,
    NewsRegion,
)
from portfolio_service.services.crypto_service import CryptoService
from portfolio_service.services.news_aggregator_service import NewsAggregatorService
from portfolio_service.utils.dependencies import (
    cleanup_services,
    container,
    create_contact_repository,
    create_news_cache,
    create_private_item_repository,
)

MOTOR_CLIENT = "portfolio_service.repositories.mongo_repository.AsyncIOMotorClient"


class CountingFetcher:
    def __init__(self):
        self.calls = 0

    async def fetch_multiple_feeds(self, feeds):
        self.calls += 1
        return AggregationResult(articles=[NewsArticle(title="Story")])


class TestNewsCacheWiring:
    """Test cases for the caching toggle."""

    def setup_method(self):
        CacheFactory.clear_instances()

    def teardown_method(self):
        CacheFactory.clear_instances()

    def test_disabled_cache_is_none(self):
        assert create_news_cache(False, max_size=10, default_ttl=60) is None

    def test_enabled_cache_is_named_singleton(self):
        cache = create_news_cache(True, max_size=10, default_ttl=60)

        assert isinstance(cache, InMemoryCache)
        assert CacheFactory.get_cache("news") is cache

    @pytest.mark.asyncio
    async def test_aggregator_without_cache_refetches(self):
        fetcher = CountingFetcher()
        service = NewsAggregatorService(fetcher, cache=None)

        await service.get_news(NewsRegion.GLOBAL)
        await service.get_news(NewsRegion.GLOBAL)

        assert fetcher.calls == 2


class TestLogLocations:
    """Test cases for log files following the configured directory."""

    def setup_method(self):
        LoggerFactory.clear()

    def teardown_method(self):
        LoggerFactory.clear()

    def test_service_log_under_configured_path(self, tmp_path):
        with patch.object(settings, "log_file_path", f"{tmp_path}/"):
            service = CryptoService(iterations=1000)

        file_handlers = [
            h for h in service.logger.handlers if isinstance(h, logging.FileHandler)
        ]
        assert [h.baseFilename for h in file_handlers] == [
            str(tmp_path / "crypto_service.log")
        ]
        for handler in file_handlers:
            handler.close()


class TestRepositoryLifecycle:
    """Test cases for MongoDB client sharing and shutdown."""

    def test_contact_repository_shares_client(self):
        with patch(MOTOR_CLIENT) as client_cls:
            items = create_private_item_repository(
                "mongodb", "mongodb://db:27017", "portfolio", "private_items"
            )
            contacts = create_contact_repository(
                "mongodb",
                "mongodb://db:27017",
                "portfolio",
                "contact_messages",
                item_repository=items,
            )

        assert client_cls.call_count == 1
        assert contacts.client is items.client

    @pytest.mark.asyncio
    async def test_shared_client_left_to_owner(self):
        client = MagicMock()
        repository = MongoContactRepository("mongodb://db:27017", client=client)

        await repository.close()

        client.close.assert_not_called()

    @pytest.mark.asyncio
    async def test_own_client_closed(self):
        with patch(MOTOR_CLIENT) as client_cls:
            repository = MongoContactRepository("mongodb://db:27017")

        await repository.close()

        client_cls.return_value.close.assert_called_once()

    @pytest.mark.asyncio
    async def test_cleanup_closes_repositories(self):
        items = AsyncMock()
        contacts = AsyncMock()
        uploads = MagicMock()

        with container.private_item_repository.override(providers.Object(items)):
            with container.contact_repository.override(providers.Object(contacts)):
                with container.upload_service.override(providers.Object(uploads)):
                    await cleanup_services()

        contacts.close.assert_awaited_once()
        items.close.assert_awaited_once()
        uploads.cleanup.assert_called_once()
