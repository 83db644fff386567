# services/news_aggregator_service.py

from collections import Counter
from typing import List, Optional, Tuple

from ..core.config import settings
from ..core.feed_catalog import (
    FALLBACK_MESSAGE,
    GLOBAL_NEWS_FEEDS,
    NEPALI_NEWS_FEEDS,
    NEWS_CATEGORIES,
    get_fallback_articles,
    get_feeds,
)
from ..core.feed_fetcher import FeedFetcher
from ..schemas.news_schemas import (
    AggregationResult,
    FeedCatalogResponse,
    NewsArticle,
    NewsPageResponse,
    NewsRegion,
    NewsStatsResponse,
)
from common.cache import CacheInterface
from common.logger import LoggerFactory, LoggerType, LogLevel


class NewsAggregatorService:
    """
    Aggregates regional feeds, caches the result and serves filtered pages.
    Falls back to placeholder articles when nothing could be fetched.
    """

    def __init__(
        self,
        fetcher: FeedFetcher,
        cache: Optional[CacheInterface] = None,
        cache_ttl: int = 600,
        page_size: int = 12,
    ):
        """
        Initialize news aggregator service

        Args:
            fetcher: Feed fetcher with its provider chain
            cache: Optional cache for aggregated results
            cache_ttl: Seconds an aggregation stays cached
            page_size: Default number of articles per page
        """
        self.fetcher = fetcher
        self.cache = cache
        self.cache_ttl = cache_ttl
        self.page_size = page_size
        self.logger = LoggerFactory.get_logger(
            name="news-aggregator-service",
            logger_type=LoggerType.STANDARD,
            level=LogLevel.INFO,
            file_level=LogLevel.DEBUG,
            log_file=f"{settings.log_file_path}news_aggregator_service.log",
        )
        self.logger.info("NewsAggregatorService initialized")

    def _cache_key(self, region: NewsRegion) -> str:
        return f"news:{region.value}"

    async def get_news(self, region: NewsRegion, refresh: bool = False) -> AggregationResult:
        """
        Get aggregated articles for a region

        Args:
            region: News region
            refresh: Bypass the cache and fetch again

        Returns:
            AggregationResult, with fallback articles if every feed came back empty
        """
        key = self._cache_key(region)
        if self.cache and not refresh:
            cached = await self.cache.get(key)
            if cached is not None:
                self.logger.debug(f"Cache hit for {key}")
                return cached

        self.logger.info(f"Fetching {region.value} news")
        result = await self.fetcher.fetch_multiple_feeds(get_feeds(region))
        result.region = region

        if not result.articles:
            self.logger.warning(
                f"No articles fetched for {region.value}, using fallback content"
            )
            result = AggregationResult(
                region=region,
                articles=get_fallback_articles(region),
                errors=result.errors,
                used_fallback=True,
                message=FALLBACK_MESSAGE,
            )

        # Fallback content is never cached
        if self.cache and not result.used_fallback:
            await self.cache.set(key, result, ttl=self.cache_ttl)

        return result

    async def refresh(self, region: NewsRegion) -> AggregationResult:
        return await self.get_news(region, refresh=True)

    @staticmethod
    def filter_articles(
        articles: List[NewsArticle],
        category: Optional[str] = "all",
        search: Optional[str] = None,
    ) -> List[NewsArticle]:
        """
        Filter articles by category and search term

        Args:
            articles: Articles to filter
            category: Source category, "all" keeps everything
            search: Case-insensitive term matched against title, description and source

        Returns:
            Matching articles in their original order
        """
        filtered = articles
        if category and category.lower() != "all":
            filtered = [a for a in filtered if a.source_category == category]

        term = (search or "").strip().lower()
        if term:
            filtered = [
                a
                for a in filtered
                if term in a.title.lower()
                or term in a.description.lower()
                or term in (a.source_name or "").lower()
            ]
        return filtered

    @staticmethod
    def paginate(articles: List[NewsArticle], limit: int) -> Tuple[List[NewsArticle], bool, int]:
        """Return the first ``limit`` articles, whether more exist and how many"""
        limit = max(0, limit)
        remaining = max(0, len(articles) - limit)
        return articles[:limit], remaining > 0, remaining

    async def get_news_page(
        self,
        region: NewsRegion,
        category: str = "all",
        search: Optional[str] = None,
        limit: Optional[int] = None,
        refresh: bool = False,
    ) -> NewsPageResponse:
        """
        Get a filtered page of articles for a region

        Args:
            region: News region
            category: Category filter
            search: Search term
            limit: Articles to display, defaults to the page size
            refresh: Bypass the cache

        Returns:
            NewsPageResponse
        """
        limit = limit or self.page_size
        result = await self.get_news(region, refresh=refresh)
        filtered = self.filter_articles(result.articles, category, search)
        items, has_more, remaining = self.paginate(filtered, limit)

        return NewsPageResponse(
            region=region,
            items=items,
            total_count=len(filtered),
            limit=limit,
            has_more=has_more,
            remaining=remaining,
            category=category or "all",
            search=search,
            used_fallback=result.used_fallback,
            message=result.message,
            errors=result.errors,
            last_updated=result.fetched_at,
        )

    def get_stats(self, result: AggregationResult) -> NewsStatsResponse:
        """
        Compute article counts for an aggregation

        Args:
            result: Aggregation to summarise

        Returns:
            NewsStatsResponse with per-category and per-source counts
        """
        by_category = Counter(a.source_category or "General" for a in result.articles)
        by_source = Counter(a.source_name or a.source for a in result.articles)

        return NewsStatsResponse(
            region=result.region or NewsRegion.GLOBAL,
            total_articles=result.total_articles,
            articles_by_category=dict(by_category),
            articles_by_source=dict(by_source),
            failed_feeds=len(result.errors),
            used_fallback=result.used_fallback,
        )

    def get_categories(self, region: NewsRegion) -> List[str]:
        return NEWS_CATEGORIES[region.value]

    def get_catalog(self) -> FeedCatalogResponse:
        return FeedCatalogResponse(
            global_feeds=GLOBAL_NEWS_FEEDS,
            nepali_feeds=NEPALI_NEWS_FEEDS,
            categories=NEWS_CATEGORIES,
        )
