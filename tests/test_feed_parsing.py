# tests/test_feed_parsing.py

"""
Tests for feed payload parsing strategies and date/description helpers.
"""

import feedparser
import pytest

from portfolio_service.core.feed_parsing_strategies import (
    FeedparserParsingStrategy,
    Rss2JsonParsingStrategy,
    RssToJsonParsingStrategy,
    clean_description,
    extract_image_from_content,
    format_date,
    get_parsing_strategy,
    parse_date,
)
from portfolio_service.schemas.news_schemas import ProviderType

RSS_XML = """<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0" xmlns:media="http://search.yahoo.com/mrss/">
  <channel>
    <title>Example Channel</title>
    <item>
      <title>First story</title>
      <link>https://example.com/first</link>
      <description>&lt;p&gt;Hello &amp;amp; welcome&lt;/p&gt;</description>
      <pubDate>Mon, 05 Oct 2026 14:30:00 GMT</pubDate>
      <category>Politics</category>
      <guid>first-guid</guid>
      <media:thumbnail url="https://example.com/thumb.jpg"/>
    </item>
    <item>
      <title>Second story</title>
      <link>https://example.com/second</link>
      <description>Plain text</description>
      <enclosure url="https://example.com/photo.png" type="image/png" length="100"/>
    </item>
  </channel>
</rss>
"""


class TestHelpers:
    """Test cases for description, image and date helpers."""

    def test_clean_description_strips_tags_and_entities(self):
        assert clean_description("<p>Tom &amp; Jerry</p>", 300) == "Tom & Jerry"

    def test_clean_description_truncates(self):
        cleaned = clean_description("a" * 250, 200)
        assert cleaned == "a" * 200 + "..."

    def test_clean_description_empty(self):
        assert clean_description(None, 200) == ""

    def test_extract_image_prefers_img_tag(self):
        content = '<div><img class="x" src="https://cdn.example.com/a.jpg"/></div>'
        assert extract_image_from_content(content) == "https://cdn.example.com/a.jpg"

    def test_extract_image_bare_url(self):
        content = "see https://cdn.example.com/pic.webp for details"
        assert extract_image_from_content(content) == "https://cdn.example.com/pic.webp"

    def test_extract_image_none(self):
        assert extract_image_from_content("no pictures here") == ""

    def test_parse_date_naive_assumed_utc(self):
        parsed = parse_date("2026-10-05 14:30:00")
        assert parsed.tzinfo is not None
        assert parsed.hour == 14

    def test_parse_date_invalid(self):
        assert parse_date("not a date") is None
        assert parse_date("") is None

    def test_format_date(self):
        assert format_date("Mon, 05 Oct 2026 14:30:00 GMT") == "Oct 5, 2026, 02:30 PM"

    def test_format_date_unknown(self):
        assert format_date("garbage") == "Unknown Date"


class TestRss2JsonParsingStrategy:
    """Test cases for the rss2json payload strategy."""

    def test_parses_items(self):
        payload = {
            "status": "ok",
            "feed": {"title": "BBC News"},
            "items": [
                {
                    "title": " Headline ",
                    "description": "<b>Summary</b>",
                    "link": "https://bbc.co.uk/1",
                    "pubDate": "2026-10-05 10:00:00",
                    "author": "",
                    "categories": ["World", "UK"],
                    "thumbnail": "",
                    "content": '<img src="https://bbc.co.uk/i.jpg">',
                }
            ],
        }
        articles = Rss2JsonParsingStrategy().parse_feed(payload, 20)

        assert len(articles) == 1
        article = articles[0]
        assert article.title == "Headline"
        assert article.description == "Summary"
        assert article.author == "Unknown Author"
        assert article.category == "World, UK"
        assert article.image == "https://bbc.co.uk/i.jpg"
        assert article.source == "BBC News"
        assert article.guid == "https://bbc.co.uk/1"

    def test_respects_max_items(self):
        payload = {"status": "ok", "items": [{"title": str(i)} for i in range(30)]}
        assert len(Rss2JsonParsingStrategy().parse_feed(payload, 20)) == 20

    def test_error_status(self):
        with pytest.raises(ValueError, match="RSS2JSON API error: Invalid feed"):
            Rss2JsonParsingStrategy().parse_feed(
                {"status": "error", "message": "Invalid feed"}, 20
            )

    def test_error_without_message(self):
        with pytest.raises(ValueError, match="Unknown error"):
            Rss2JsonParsingStrategy().parse_feed({"status": "error"}, 20)


class TestRssToJsonParsingStrategy:
    """Test cases for the rss-to-json payload strategy."""

    def test_parses_items(self):
        payload = {
            "title": "Kathmandu Post",
            "items": [
                {
                    "title": "Budget passed",
                    "description": "Details",
                    "link": "https://kathmandupost.com/1",
                    "published": "2026-10-05T08:00:00Z",
                    "category": ["National"],
                }
            ],
        }
        articles = RssToJsonParsingStrategy().parse_feed(payload, 20)

        assert articles[0].source == "Kathmandu Post"
        assert articles[0].category == "National"
        assert articles[0].guid == "https://kathmandupost.com/1"

    def test_no_items(self):
        with pytest.raises(ValueError, match="No items found"):
            RssToJsonParsingStrategy().parse_feed({"items": []}, 20)


class TestFeedparserParsingStrategy:
    """Test cases for raw XML parsing through feedparser."""

    def test_parses_rss(self):
        parsed = feedparser.parse(RSS_XML)
        articles = FeedparserParsingStrategy().parse_feed(parsed, 20)

        assert [a.title for a in articles] == ["First story", "Second story"]
        first = articles[0]
        assert first.source == "Example Channel"
        assert first.category == "Politics"
        assert first.image == "https://example.com/thumb.jpg"
        assert first.formatted_date == "Oct 5, 2026, 02:30 PM"
        assert articles[1].image == "https://example.com/photo.png"
        assert articles[1].formatted_date == "Unknown Date"

    def test_invalid_xml(self):
        parsed = feedparser.parse("<<< definitely not xml")
        with pytest.raises(ValueError, match="XML parsing error"):
            FeedparserParsingStrategy().parse_feed(parsed, 20)


class TestStrategySelection:
    """Test cases for strategy lookup."""

    def test_json_providers(self):
        assert isinstance(
            get_parsing_strategy(ProviderType.RSS2JSON), Rss2JsonParsingStrategy
        )
        assert isinstance(
            get_parsing_strategy(ProviderType.RSS_TO_JSON), RssToJsonParsingStrategy
        )

    def test_xml_providers(self):
        for provider in (ProviderType.ALLORIGINS, ProviderType.CODETABS, ProviderType.DIRECT):
            assert isinstance(get_parsing_strategy(provider), FeedparserParsingStrategy)
