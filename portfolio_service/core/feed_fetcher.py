# core/feed_fetcher.py

import asyncio
from datetime import datetime, timezone
from typing import List, Optional

from ..interfaces.feed_provider_interface import FeedProviderInterface
from ..schemas.news_schemas import (
    AggregationResult,
    FeedConfig,
    FeedFetchResult,
    NewsArticle,
)
from ..utils.exceptions import FeedFetchError
from .config import settings
from .feed_parsing_strategies import parse_date
from common.logger import LoggerFactory, LoggerType, LogLevel

_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


class FeedFetcher:
    """
    Fetches feeds through an ordered chain of providers.
    The first provider that succeeds wins; failures fall through to the next.
    """

    def __init__(self, providers: List[FeedProviderInterface], batch_size: int = 3):
        """
        Initialize the fetcher

        Args:
            providers: Providers in fallback order
            batch_size: Feeds fetched concurrently per batch
        """
        self.providers = providers
        self.batch_size = max(1, batch_size)
        self.logger = LoggerFactory.get_logger(
            name="feed-fetcher",
            logger_type=LoggerType.STANDARD,
            level=LogLevel.INFO,
            file_level=LogLevel.DEBUG,
            log_file=f"{settings.log_file_path}feed_fetcher.log",
        )

    async def fetch_feed(self, feed_url: str) -> FeedFetchResult:
        """
        Fetch one feed, trying each provider in order

        Args:
            feed_url: RSS feed URL

        Returns:
            FeedFetchResult from the first provider that succeeded

        Raises:
            FeedFetchError: If every provider failed
        """
        last_error: Optional[str] = None

        for provider in self.providers:
            try:
                articles = await provider.fetch(feed_url)
                return FeedFetchResult(
                    feed_name=feed_url,
                    articles=articles,
                    provider=provider.name,
                )
            except Exception as e:
                last_error = str(e) or type(e).__name__
                self.logger.warning(f"{provider.name} failed for {feed_url}: {last_error}")

        raise FeedFetchError(last_error or "All RSS APIs failed", {"url": feed_url})

    async def fetch_feed_result(self, feed: FeedConfig) -> FeedFetchResult:
        """Fetch a configured feed, reporting failure in the result instead of raising"""
        try:
            result = await self.fetch_feed(feed.url)
        except Exception as e:
            message = getattr(e, "message", None) or str(e) or type(e).__name__
            self.logger.error(f"Feed {feed.name} failed: {message}")
            return FeedFetchResult(feed_name=feed.name, success=False, error=message)
        return result.model_copy(update={"feed_name": feed.name})

    async def fetch_multiple_feeds(self, feeds: List[FeedConfig]) -> AggregationResult:
        """
        Fetch several feeds in batches, tag and sort the articles

        Args:
            feeds: Feeds to fetch

        Returns:
            AggregationResult with articles newest first and per-feed errors
        """
        articles: List[NewsArticle] = []
        errors: List[str] = []

        for start in range(0, len(feeds), self.batch_size):
            batch = feeds[start : start + self.batch_size]
            results = await asyncio.gather(*[self.fetch_feed_result(feed) for feed in batch])

            for feed, result in zip(batch, results):
                if not result.success:
                    errors.append(f"{feed.name}: {result.error}")
                    continue

                for article in result.articles:
                    articles.append(
                        article.model_copy(
                            update={
                                "source_name": feed.name,
                                "source_category": feed.category or "General",
                            }
                        )
                    )
                self.logger.debug(
                    f"Fetched {len(result.articles)} articles from {feed.name} "
                    f"via {result.provider}"
                )

        articles.sort(key=self._sort_key, reverse=True)

        self.logger.info(
            f"Fetched {len(articles)} articles from {len(feeds) - len(errors)}/"
            f"{len(feeds)} feeds"
        )
        return AggregationResult(articles=articles, errors=errors)

    @staticmethod
    def _sort_key(article: NewsArticle) -> datetime:
        return parse_date(article.pub_date) or _OLDEST
