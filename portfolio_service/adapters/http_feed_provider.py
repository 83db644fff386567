# adapters/http_feed_provider.py

import json
from abc import abstractmethod
from typing import List
from urllib.parse import quote

import aiohttp
import feedparser

from ..core.config import settings
from ..interfaces.feed_provider_interface import FeedProviderInterface
from ..schemas.news_schemas import NewsArticle, ProviderConfig
from ..core.feed_parsing_strategies import get_parsing_strategy
from common.logger import LoggerFactory, LoggerType, LogLevel


class HttpFeedProvider(FeedProviderInterface):
    """Base provider issuing one GET per feed through aiohttp"""

    accept_header = "application/json"

    def __init__(self, config: ProviderConfig):
        super().__init__(config)
        self.logger = LoggerFactory.get_logger(
            name=f"feed-provider-{config.provider_type.value}",
            logger_type=LoggerType.STANDARD,
            level=LogLevel.INFO,
            file_level=LogLevel.DEBUG,
            log_file=f"{settings.log_file_path}feed_providers.log",
        )
        self.parsing_strategy = get_parsing_strategy(config.provider_type)

    def build_request_url(self, feed_url: str) -> str:
        return f"{self.config.base_url}{quote(feed_url, safe='')}"

    async def fetch(self, feed_url: str) -> List[NewsArticle]:
        request_url = self.build_request_url(feed_url)
        self.logger.debug(f"Requesting {request_url}")

        body = await self._get(request_url)
        articles = self.parse_body(body)

        self.logger.debug(f"{self.name} returned {len(articles)} articles for {feed_url}")
        return articles

    async def _get(self, request_url: str) -> str:
        headers = {
            "User-Agent": self.config.user_agent,
            "Accept": self.accept_header,
        }
        timeout = aiohttp.ClientTimeout(total=self.config.timeout)

        async with aiohttp.ClientSession(timeout=timeout) as session:
            async with session.get(request_url, headers=headers) as response:
                if not 200 <= response.status < 300:
                    raise ValueError(f"HTTP {response.status}: {response.reason}")
                return await response.text()

    @abstractmethod
    def parse_body(self, body: str) -> List[NewsArticle]:
        """Turn the response body into articles"""
        pass


class JsonFeedProvider(HttpFeedProvider):
    """Provider whose API converts RSS to JSON server side"""

    query_param = "rss_url"

    def build_request_url(self, feed_url: str) -> str:
        return f"{self.config.base_url}?{self.query_param}={quote(feed_url, safe='')}"

    def parse_body(self, body: str) -> List[NewsArticle]:
        payload = json.loads(body) or {}
        return self.parsing_strategy.parse_feed(payload, self.config.max_items)


class Rss2JsonProvider(JsonFeedProvider):
    """rss2json.com conversion API"""

    query_param = "rss_url"


class RssToJsonProvider(JsonFeedProvider):
    """rss-to-json serverless conversion API"""

    query_param = "feedURL"


class RawXmlFeedProvider(HttpFeedProvider):
    """Provider returning the feed XML as is, directly or through a CORS proxy"""

    accept_header = "application/rss+xml, application/xml, text/xml, */*"

    def parse_body(self, body: str) -> List[NewsArticle]:
        return self.parse_xml(body)

    def parse_xml(self, xml_content: str) -> List[NewsArticle]:
        feed = feedparser.parse(xml_content)
        if feed.bozo:
            self.logger.warning(f"Feed has parsing issues: {feed.bozo_exception}")
        return self.parsing_strategy.parse_feed(feed, self.config.max_items)


class AllOriginsProvider(RawXmlFeedProvider):
    """allorigins.win proxy, which wraps the XML in a JSON "contents" field"""

    async def fetch(self, feed_url: str) -> List[NewsArticle]:
        timeout = aiohttp.ClientTimeout(total=self.config.timeout)

        async with aiohttp.ClientSession(timeout=timeout) as session:
            async with session.get(self.build_request_url(feed_url)) as response:
                if not 200 <= response.status < 300:
                    raise ValueError(f"HTTP {response.status}: {response.reason}")
                payload = await response.json(content_type=None)

        contents = (payload or {}).get("contents")
        if not contents:
            raise ValueError("No content received from RSS feed")
        return self.parse_xml(contents)


class CodeTabsProvider(RawXmlFeedProvider):
    """codetabs.com proxy returning the raw XML"""


class DirectFeedProvider(RawXmlFeedProvider):
    """Fetch the feed URL itself"""

    def build_request_url(self, feed_url: str) -> str:
        return feed_url
