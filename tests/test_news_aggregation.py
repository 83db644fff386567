# tests/test_news_aggregation.py

"""
Tests for the provider chain, batched feed fetching and news aggregation.
"""

import asyncio
from typing import Dict, List
from unittest.mock import AsyncMock, patch

import pytest

from common.cache import InMemoryCache
from portfolio_service.adapters.http_feed_provider import (
    AllOriginsProvider,
    CodeTabsProvider,
    DirectFeedProvider,
    HttpFeedProvider,
    Rss2JsonProvider,
    RssToJsonProvider,
)
from portfolio_service.core.feed_catalog import FALLBACK_MESSAGE, get_feeds
from portfolio_service.core.feed_fetcher import FeedFetcher
from portfolio_service.core.feed_provider_factory import FeedProviderFactory
from portfolio_service.interfaces.feed_provider_interface import FeedProviderInterface
from portfolio_service.schemas.news_schemas import (
    AggregationResult,
    FeedConfig,
    NewsArticle,
    NewsRegion,
    ProviderConfig,
    ProviderType,
)
from portfolio_service.services.news_aggregator_service import NewsAggregatorService
from portfolio_service.utils.exceptions import FeedFetchError

RSS_XML = """<?xml version="1.0"?>
<rss version="2.0"><channel><title>Proxy Channel</title>
<item><title>Via proxy</title><link>https://example.com/p</link>
<pubDate>Tue, 06 Oct 2026 09:00:00 GMT</pubDate></item>
</channel></rss>"""


class FakeProvider(FeedProviderInterface):
    """Provider answering from a dict of url -> articles or exception"""

    def __init__(self, provider_type: ProviderType, responses: Dict[str, object]):
        super().__init__(ProviderConfig(provider_type=provider_type))
        self.responses = responses
        self.calls: List[str] = []

    async def fetch(self, feed_url: str) -> List[NewsArticle]:
        self.calls.append(feed_url)
        response = self.responses.get(feed_url, ValueError("HTTP 404: Not Found"))
        if isinstance(response, Exception):
            raise response
        return response


def article(title: str, pub_date: str = "", description: str = "") -> NewsArticle:
    return NewsArticle(title=title, pub_date=pub_date, description=description)


class TestHttpFeedProviders:
    """Test cases for request URL building and raw XML parsing."""

    def test_json_provider_urls(self):
        rss2json = Rss2JsonProvider(
            ProviderConfig(provider_type=ProviderType.RSS2JSON, base_url="https://api.test/v1")
        )
        rss_to_json = RssToJsonProvider(
            ProviderConfig(provider_type=ProviderType.RSS_TO_JSON, base_url="https://conv.test/api")
        )

        assert (
            rss2json.build_request_url("https://a.com/rss?x=1")
            == "https://api.test/v1?rss_url=https%3A%2F%2Fa.com%2Frss%3Fx%3D1"
        )
        assert rss_to_json.build_request_url("https://a.com/rss").startswith(
            "https://conv.test/api?feedURL=https%3A%2F%2F"
        )

    def test_proxy_and_direct_urls(self):
        proxy = CodeTabsProvider(
            ProviderConfig(provider_type=ProviderType.CODETABS, base_url="https://proxy.test/?q=")
        )
        direct = DirectFeedProvider(ProviderConfig(provider_type=ProviderType.DIRECT))

        assert proxy.build_request_url("https://a.com/rss") == (
            "https://proxy.test/?q=https%3A%2F%2Fa.com%2Frss"
        )
        assert direct.build_request_url("https://a.com/rss") == "https://a.com/rss"

    @pytest.mark.asyncio
    async def test_raw_xml_provider_parses_body(self):
        provider = CodeTabsProvider(ProviderConfig(provider_type=ProviderType.CODETABS))

        with patch.object(provider, "_get", AsyncMock(return_value=RSS_XML)):
            articles = await provider.fetch("https://a.com/rss")

        assert len(articles) == 1
        assert articles[0].title == "Via proxy"
        assert articles[0].source == "Proxy Channel"

    @pytest.mark.asyncio
    async def test_json_provider_parses_body(self):
        provider = Rss2JsonProvider(ProviderConfig(provider_type=ProviderType.RSS2JSON))
        body = (
            '{"status": "ok", "feed": {"title": "JSON Feed"},'
            ' "items": [{"title": "From JSON", "link": "https://example.com/j"}]}'
        )

        with patch.object(provider, "_get", AsyncMock(return_value=body)):
            articles = await provider.fetch("https://a.com/rss")

        assert [a.title for a in articles] == ["From JSON"]
        assert articles[0].source == "JSON Feed"

    @pytest.mark.asyncio
    async def test_json_provider_reports_api_error(self):
        provider = Rss2JsonProvider(ProviderConfig(provider_type=ProviderType.RSS2JSON))
        body = '{"status": "error", "message": "Invalid feed"}'

        with patch.object(provider, "_get", AsyncMock(return_value=body)):
            with pytest.raises(ValueError, match="RSS2JSON API error: Invalid feed"):
                await provider.fetch("https://a.com/rss")

    def test_base_provider_is_abstract(self):
        with pytest.raises(TypeError):
            HttpFeedProvider(ProviderConfig(provider_type=ProviderType.DIRECT))

    def test_provider_info(self):
        provider = AllOriginsProvider(
            ProviderConfig(provider_type=ProviderType.ALLORIGINS, base_url="https://ao.test/get?url=")
        )
        info = provider.get_provider_info()

        assert info["provider"] == "allorigins"
        assert info["max_items"] == 20


class TestFeedProviderFactory:
    """Test cases for the provider factory."""

    def setup_method(self):
        FeedProviderFactory.clear_cache()

    def test_default_chain_order(self):
        providers = FeedProviderFactory.get_providers()
        assert [p.name for p in providers] == [
            "rss2json",
            "rss_to_json",
            "allorigins",
            "codetabs",
        ]

    def test_instances_cached(self):
        first = FeedProviderFactory.get_provider(ProviderType.DIRECT)
        second = FeedProviderFactory.get_provider(ProviderType.DIRECT)
        assert first is second

    def test_overrides_bypass_cache(self):
        cached = FeedProviderFactory.get_provider(ProviderType.RSS2JSON)
        custom = FeedProviderFactory.get_provider(
            ProviderType.RSS2JSON, config_overrides={"max_items": 5}
        )
        assert custom is not cached
        assert custom.config.max_items == 5

    def test_supported_providers(self):
        assert set(FeedProviderFactory.get_supported_providers()) == set(ProviderType)


class TestFeedFetcher:
    """Test cases for the provider fallback chain and batching."""

    @pytest.mark.asyncio
    async def test_first_successful_provider_wins(self):
        failing = FakeProvider(ProviderType.RSS2JSON, {})
        working = FakeProvider(ProviderType.RSS_TO_JSON, {"u1": [article("A")]})
        unused = FakeProvider(ProviderType.ALLORIGINS, {"u1": [article("B")]})
        fetcher = FeedFetcher([failing, working, unused])

        result = await fetcher.fetch_feed("u1")

        assert result.provider == "rss_to_json"
        assert [a.title for a in result.articles] == ["A"]
        assert unused.calls == []

    @pytest.mark.asyncio
    async def test_all_providers_fail(self):
        fetcher = FeedFetcher(
            [
                FakeProvider(ProviderType.RSS2JSON, {"u1": ValueError("RSS2JSON API error: bad")}),
                FakeProvider(ProviderType.CODETABS, {"u1": ValueError("XML parsing error")}),
            ]
        )

        with pytest.raises(FeedFetchError) as exc_info:
            await fetcher.fetch_feed("u1")

        assert exc_info.value.message == "XML parsing error"

    @pytest.mark.asyncio
    async def test_no_providers(self):
        with pytest.raises(FeedFetchError, match="All RSS APIs failed"):
            await FeedFetcher([]).fetch_feed("u1")

    @pytest.mark.asyncio
    async def test_multiple_feeds_tagged_and_sorted(self):
        provider = FakeProvider(
            ProviderType.RSS2JSON,
            {
                "u1": [article("old", "2026-10-01T00:00:00Z"), article("undated")],
                "u2": [article("new", "2026-10-05T00:00:00Z")],
            },
        )
        feeds = [
            FeedConfig(name="One", url="u1", category="Business"),
            FeedConfig(name="Two", url="u2"),
            FeedConfig(name="Broken", url="u3", category="Science"),
        ]

        result = await FeedFetcher([provider]).fetch_multiple_feeds(feeds)

        assert [a.title for a in result.articles] == ["new", "old", "undated"]
        assert result.articles[0].source_name == "Two"
        assert result.articles[0].source_category == "General"
        assert result.articles[1].source_category == "Business"
        assert result.errors == ["Broken: HTTP 404: Not Found"]
        assert result.total_articles == 3

    @pytest.mark.asyncio
    async def test_feed_result_reports_failure(self):
        provider = FakeProvider(ProviderType.RSS2JSON, {"u1": [article("A")]})
        fetcher = FeedFetcher([provider])

        ok = await fetcher.fetch_feed_result(FeedConfig(name="One", url="u1"))
        failed = await fetcher.fetch_feed_result(FeedConfig(name="Broken", url="u2"))

        assert (ok.feed_name, ok.success, ok.error) == ("One", True, None)
        assert ok.provider == "rss2json"
        assert (failed.feed_name, failed.success) == ("Broken", False)
        assert failed.error == "HTTP 404: Not Found"
        assert failed.articles == []

    @pytest.mark.asyncio
    async def test_batches_limit_concurrency(self):
        in_flight = 0
        peak = 0

        class SlowProvider(FakeProvider):
            async def fetch(self, feed_url):
                nonlocal in_flight, peak
                in_flight += 1
                peak = max(peak, in_flight)
                await asyncio.sleep(0.01)
                in_flight -= 1
                return [article(feed_url)]

        feeds = [FeedConfig(name=f"f{i}", url=f"u{i}") for i in range(7)]
        fetcher = FeedFetcher([SlowProvider(ProviderType.DIRECT, {})], batch_size=3)

        result = await fetcher.fetch_multiple_feeds(feeds)

        assert len(result.articles) == 7
        assert peak == 3


class FakeFetcher:
    """Fetcher stand-in returning canned articles per region"""

    def __init__(self, articles: List[NewsArticle], errors: List[str] = None):
        self.articles = articles
        self.errors = errors or []
        self.calls = 0

    async def fetch_multiple_feeds(self, feeds):
        self.calls += 1
        return AggregationResult(articles=list(self.articles), errors=list(self.errors))


def tagged(title: str, category: str, source: str = "Feed", description: str = "") -> NewsArticle:
    return NewsArticle(
        title=title,
        description=description,
        source_name=source,
        source_category=category,
    )


class TestNewsAggregatorService:
    """Test cases for aggregation, caching, filtering and paging."""

    @pytest.mark.asyncio
    async def test_results_cached_per_region(self):
        fetcher = FakeFetcher([tagged("A", "Business")])
        service = NewsAggregatorService(fetcher, cache=InMemoryCache())

        first = await service.get_news(NewsRegion.GLOBAL)
        second = await service.get_news(NewsRegion.GLOBAL)
        await service.get_news(NewsRegion.NEPALI)

        assert first.region == NewsRegion.GLOBAL
        assert second.articles[0].title == "A"
        assert fetcher.calls == 2

    @pytest.mark.asyncio
    async def test_refresh_bypasses_cache(self):
        fetcher = FakeFetcher([tagged("A", "Business")])
        service = NewsAggregatorService(fetcher, cache=InMemoryCache())

        await service.get_news(NewsRegion.GLOBAL)
        await service.refresh(NewsRegion.GLOBAL)

        assert fetcher.calls == 2

    @pytest.mark.asyncio
    async def test_fallback_when_everything_fails(self):
        fetcher = FakeFetcher([], errors=["BBC News: HTTP 500: Server Error"])
        service = NewsAggregatorService(fetcher, cache=InMemoryCache())

        result = await service.get_news(NewsRegion.NEPALI)
        await service.get_news(NewsRegion.NEPALI)

        assert result.used_fallback is True
        assert result.message == FALLBACK_MESSAGE
        assert result.articles
        assert result.errors == ["BBC News: HTTP 500: Server Error"]
        # fallback is not cached, so the second call fetched again
        assert fetcher.calls == 2

    def test_filter_by_category_and_search(self):
        articles = [
            tagged("Markets rally", "Business", "Bloomberg"),
            tagged("New chip", "Technology", "TechCrunch", "Faster markets ahead"),
            tagged("Election", "International", "BBC News"),
        ]

        by_category = NewsAggregatorService.filter_articles(articles, "Business")
        by_search = NewsAggregatorService.filter_articles(articles, "all", "MARKETS")
        by_source = NewsAggregatorService.filter_articles(articles, None, "bbc")

        assert [a.title for a in by_category] == ["Markets rally"]
        assert [a.title for a in by_search] == ["Markets rally", "New chip"]
        assert [a.title for a in by_source] == ["Election"]

    def test_paginate(self):
        articles = [tagged(str(i), "General") for i in range(30)]

        items, has_more, remaining = NewsAggregatorService.paginate(articles, 12)
        assert len(items) == 12 and has_more and remaining == 18

        items, has_more, remaining = NewsAggregatorService.paginate(articles, 36)
        assert len(items) == 30 and not has_more and remaining == 0

    @pytest.mark.asyncio
    async def test_news_page(self):
        articles = [tagged(f"Story {i}", "Business" if i % 2 else "Science") for i in range(20)]
        service = NewsAggregatorService(FakeFetcher(articles), page_size=12)

        page = await service.get_news_page(NewsRegion.GLOBAL, category="Business")

        assert page.total_count == 10
        assert len(page.items) == 10
        assert page.has_more is False
        assert page.limit == 12
        assert page.category == "Business"

    @pytest.mark.asyncio
    async def test_stats(self):
        articles = [
            tagged("a", "Business", "Bloomberg"),
            tagged("b", "Business", "BBC Business"),
            tagged("c", "Science", "BBC Science"),
        ]
        service = NewsAggregatorService(FakeFetcher(articles, errors=["X: failed"]))

        stats = service.get_stats(await service.get_news(NewsRegion.GLOBAL))

        assert stats.total_articles == 3
        assert stats.articles_by_category == {"Business": 2, "Science": 1}
        assert stats.articles_by_source["Bloomberg"] == 1
        assert stats.failed_feeds == 1

    def test_catalog(self):
        service = NewsAggregatorService(FakeFetcher([]))
        catalog = service.get_catalog()

        assert catalog.global_feeds == get_feeds(NewsRegion.GLOBAL)
        assert "Technology" in service.get_categories(NewsRegion.GLOBAL)
        assert "nepali" in catalog.categories
