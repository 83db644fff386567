# core/feed_parsing_strategies.py

import html
import re
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from dateutil import parser as date_parser

from ..schemas.news_schemas import NewsArticle, ProviderType

_TAG_RE = re.compile(r"<[^>]*>")
_IMG_RE = re.compile(r"<img[^>]+src=[\"']([^\"']+)[\"']", re.IGNORECASE)
_IMAGE_URL_RE = re.compile(r"(https?://[^\s]+\.(jpg|jpeg|png|gif|webp))", re.IGNORECASE)

JSON_DESCRIPTION_LIMIT = 300
XML_DESCRIPTION_LIMIT = 200
UNKNOWN_DATE = "Unknown Date"


def clean_description(description: Optional[str], limit: int) -> str:
    """
    Strip HTML, decode entities and truncate a description

    Args:
        description: Raw description, possibly HTML
        limit: Maximum characters kept before "..." is appended

    Returns:
        Plain text description
    """
    if not description:
        return ""

    cleaned = html.unescape(_TAG_RE.sub("", description)).strip()
    if len(cleaned) > limit:
        cleaned = cleaned[:limit].rstrip() + "..."
    return cleaned


def extract_image_from_content(content: Optional[str]) -> str:
    """Find the first <img> source, or failing that a bare image URL"""
    if not content:
        return ""

    img_match = _IMG_RE.search(content)
    if img_match:
        return img_match.group(1)

    url_match = _IMAGE_URL_RE.search(content)
    if url_match:
        return url_match.group(1)

    return ""


def parse_date(date_str: Optional[str]) -> Optional[datetime]:
    """Parse a feed date, returning an aware datetime or None"""
    if not date_str:
        return None
    try:
        parsed = date_parser.parse(date_str)
    except (ValueError, OverflowError):
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_date(date_str: Optional[str]) -> str:
    """Format a feed date like "Oct 19, 2026, 02:30 PM" """
    parsed = parse_date(date_str)
    if parsed is None:
        return UNKNOWN_DATE
    return f"{parsed.strftime('%b')} {parsed.day}, {parsed.year}, {parsed.strftime('%I:%M %p')}"


class FeedParsingStrategy(ABC):
    """Abstract strategy turning provider payloads into articles"""

    description_limit: int = JSON_DESCRIPTION_LIMIT

    @abstractmethod
    def parse_feed(self, payload: Any, max_items: int) -> List[NewsArticle]:
        """
        Parse a provider payload into articles

        Args:
            payload: Decoded provider response
            max_items: Maximum number of articles to keep

        Returns:
            Parsed articles

        Raises:
            ValueError: If the payload reports an error or has no items
        """
        pass


class Rss2JsonParsingStrategy(FeedParsingStrategy):
    """Parsing strategy for the rss2json.com API"""

    def parse_feed(self, payload: Dict[str, Any], max_items: int) -> List[NewsArticle]:
        if payload.get("status") != "ok":
            raise ValueError(
                "RSS2JSON API error: " + (payload.get("message") or "Unknown error")
            )

        feed_title = (payload.get("feed") or {}).get("title") or "News Source"
        articles = []
        for item in (payload.get("items") or [])[:max_items]:
            content = item.get("content") or item.get("description") or ""
            categories = item.get("categories") or []
            articles.append(
                NewsArticle(
                    title=item.get("title") or "No Title",
                    description=clean_description(
                        item.get("description") or item.get("content") or "",
                        self.description_limit,
                    ),
                    link=item.get("link") or "",
                    pub_date=item.get("pubDate") or "",
                    author=item.get("author") or "Unknown Author",
                    category=", ".join(str(c) for c in categories),
                    guid=item.get("guid") or item.get("link") or "",
                    image=item.get("thumbnail") or extract_image_from_content(content),
                    source=feed_title,
                    formatted_date=format_date(item.get("pubDate")),
                )
            )
        return articles


class RssToJsonParsingStrategy(FeedParsingStrategy):
    """Parsing strategy for the rss-to-json serverless API"""

    def parse_feed(self, payload: Dict[str, Any], max_items: int) -> List[NewsArticle]:
        items = payload.get("items")
        if not items:
            raise ValueError("RSS-to-JSON API error: No items found")

        feed_title = payload.get("title") or "News Source"
        articles = []
        for item in items[:max_items]:
            published = item.get("published") or item.get("pubDate") or ""
            category = item.get("category") or ""
            if isinstance(category, list):
                category = ", ".join(str(c) for c in category)
            articles.append(
                NewsArticle(
                    title=item.get("title") or "No Title",
                    description=clean_description(
                        item.get("description") or item.get("summary") or "",
                        self.description_limit,
                    ),
                    link=item.get("link") or "",
                    pub_date=str(published),
                    author=item.get("author") or "Unknown Author",
                    category=str(category),
                    guid=str(item.get("id") or item.get("link") or ""),
                    image=item.get("image")
                    or extract_image_from_content(item.get("description") or ""),
                    source=feed_title,
                    formatted_date=format_date(str(published)),
                )
            )
        return articles


class FeedparserParsingStrategy(FeedParsingStrategy):
    """Parsing strategy for raw RSS/Atom XML via feedparser"""

    description_limit = XML_DESCRIPTION_LIMIT

    def parse_feed(self, payload: Any, max_items: int) -> List[NewsArticle]:
        """Parse a feedparser result (FeedParserDict)"""
        if payload.get("bozo") and not payload.get("entries"):
            raise ValueError("XML parsing error")

        channel_title = (payload.get("feed") or {}).get("title") or "Unknown Source"
        articles = []
        for entry in payload.get("entries", [])[:max_items]:
            raw_description = entry.get("summary") or entry.get("description") or ""
            published = entry.get("published") or entry.get("updated") or ""
            articles.append(
                NewsArticle(
                    title=entry.get("title") or "No Title",
                    description=clean_description(
                        raw_description, self.description_limit
                    ),
                    link=entry.get("link") or "",
                    pub_date=published,
                    author=self._extract_author(entry),
                    category=self._extract_category(entry),
                    guid=entry.get("id") or entry.get("guid") or "",
                    image=self._extract_image(entry, raw_description),
                    source=channel_title,
                    formatted_date=format_date(published),
                )
            )
        return articles

    def _extract_author(self, entry: Dict[str, Any]) -> str:
        # feedparser maps dc:creator onto author as well
        author = entry.get("author")
        if not author and entry.get("authors"):
            author = entry["authors"][0].get("name")
        return author or "Unknown Author"

    def _extract_category(self, entry: Dict[str, Any]) -> str:
        tags = entry.get("tags") or []
        for tag in tags:
            term = tag.get("term") if isinstance(tag, dict) else tag
            if term:
                return str(term).strip()
        return ""

    def _extract_image(self, entry: Dict[str, Any], raw_description: str) -> str:
        for thumbnail in entry.get("media_thumbnail") or []:
            if thumbnail.get("url"):
                return thumbnail["url"]

        for enclosure in entry.get("enclosures") or []:
            if "image" in (enclosure.get("type") or ""):
                url = enclosure.get("href") or enclosure.get("url")
                if url:
                    return url

        img_match = _IMG_RE.search(raw_description or "")
        return img_match.group(1) if img_match else ""


def get_parsing_strategy(provider_type: ProviderType) -> FeedParsingStrategy:
    """
    Get parsing strategy for a provider

    Args:
        provider_type: Feed provider identifier

    Returns:
        Appropriate parsing strategy
    """
    strategies = {
        ProviderType.RSS2JSON: Rss2JsonParsingStrategy(),
        ProviderType.RSS_TO_JSON: RssToJsonParsingStrategy(),
    }

    return strategies.get(provider_type, FeedparserParsingStrategy())
