# core/feed_catalog.py

"""
Trusted RSS feeds, news categories and placeholder articles per region.
"""

from datetime import datetime, timezone
from typing import Dict, List

from ..schemas.news_schemas import FeedConfig, NewsArticle, NewsRegion

GLOBAL_NEWS_FEEDS: List[FeedConfig] = [
    FeedConfig(name="BBC News", url="http://feeds.bbci.co.uk/news/rss.xml", category="International"),
    FeedConfig(name="Reuters Top News", url="https://feeds.reuters.com/reuters/topNews", category="International"),
    FeedConfig(name="Associated Press", url="https://feeds.apnews.com/rss/apf-topnews", category="International"),
    FeedConfig(name="CNN Top Stories", url="http://rss.cnn.com/rss/edition.rss", category="International"),
    FeedConfig(name="Al Jazeera", url="https://www.aljazeera.com/xml/rss/all.xml", category="International"),
    FeedConfig(name="The Guardian International", url="https://www.theguardian.com/international/rss", category="International"),
    FeedConfig(name="NPR News", url="https://feeds.npr.org/1001/rss.xml", category="International"),
    FeedConfig(name="BBC Technology", url="http://feeds.bbci.co.uk/news/technology/rss.xml", category="Technology"),
    FeedConfig(name="TechCrunch", url="https://techcrunch.com/feed/", category="Technology"),
    FeedConfig(name="Ars Technica", url="https://feeds.arstechnica.com/arstechnica/index", category="Technology"),
    FeedConfig(name="BBC Business", url="http://feeds.bbci.co.uk/news/business/rss.xml", category="Business"),
    FeedConfig(name="Bloomberg", url="https://feeds.bloomberg.com/markets/news.rss", category="Business"),
    FeedConfig(name="BBC Science", url="http://feeds.bbci.co.uk/news/science_and_environment/rss.xml", category="Science"),
    FeedConfig(name="Scientific American", url="https://rss.sciam.com/ScientificAmerican-Global", category="Science"),
    FeedConfig(name="BBC Health", url="http://feeds.bbci.co.uk/news/health/rss.xml", category="Health"),
]

NEPALI_NEWS_FEEDS: List[FeedConfig] = [
    FeedConfig(name="Kantipur Daily", url="https://ekantipur.com/rss", category="General"),
    FeedConfig(name="The Himalayan Times", url="https://thehimalayantimes.com/rss", category="General"),
    FeedConfig(name="Kathmandu Post", url="https://kathmandupost.com/rss", category="General"),
    FeedConfig(name="Republica", url="https://myrepublica.nagariknetwork.com/rss/", category="General"),
    FeedConfig(name="Online Khabar", url="https://www.onlinekhabar.com/feed", category="General"),
    FeedConfig(name="Setopati", url="https://setopati.com/rss", category="General"),
    FeedConfig(name="Nepal News", url="https://www.nepalnews.com/rss", category="General"),
    FeedConfig(name="Ratopati", url="https://ratopati.com/rss", category="General"),
    FeedConfig(name="Arthik Abhiyan", url="https://arthikabhiyan.com/rss", category="Business"),
    FeedConfig(name="Naya Patrika", url="https://www.nayapatrikadaily.com/rss", category="General"),
]

NEWS_CATEGORIES: Dict[str, List[str]] = {
    NewsRegion.GLOBAL.value: ["International", "Technology", "Business", "Science", "Health"],
    NewsRegion.NEPALI.value: ["General", "Business", "Politics", "Sports"],
}

FALLBACK_MESSAGE = "RSS feeds temporarily unavailable. Showing fallback content."

_FALLBACK_TEMPLATES: Dict[NewsRegion, List[dict]] = {
    NewsRegion.GLOBAL: [
        {
            "title": "RSS Feed Service Currently Unavailable",
            "description": "We're working to restore the RSS feed service. Please check back later for the latest global news updates.",
            "link": "#",
            "category": "System",
            "guid": "fallback-1",
            "source_category": "International",
        },
        {
            "title": "Alternative News Sources",
            "description": "While we work on the RSS feed issue, you can visit BBC News, CNN, or Reuters directly for the latest international news.",
            "link": "https://www.bbc.com/news",
            "category": "Information",
            "guid": "fallback-2",
            "source_category": "International",
        },
    ],
    NewsRegion.NEPALI: [
        {
            "title": "आरएसएस फिड सेवा अहिले उपलब्ध छैन",
            "description": "हामी आरएसएस फिड सेवा पुनर्स्थापना गर्न काम गरिरहेका छौं। कृपया नवीनतम नेपाली समाचारका लागि पछि फर्केर हेर्नुहोस्।",
            "link": "#",
            "category": "System",
            "guid": "fallback-nepali-1",
            "source_category": "General",
        },
        {
            "title": "वैकल्पिक समाचार स्रोतहरू",
            "description": "हामीले आरएसएस फिड समस्या समाधान गर्दै गर्दा, तपाईं नवीनतम नेपाली समाचारका लागि कान्तिपुर, हिमालयन टाइम्स, वा सेतोपाटीमा सीधै जान सक्नुहुन्छ।",
            "link": "https://ekantipur.com",
            "category": "Information",
            "guid": "fallback-nepali-2",
            "source_category": "General",
        },
    ],
}


def get_feeds(region: NewsRegion) -> List[FeedConfig]:
    """Get configured feeds for a region"""
    if region == NewsRegion.NEPALI:
        return list(NEPALI_NEWS_FEEDS)
    return list(GLOBAL_NEWS_FEEDS)


def get_fallback_articles(region: NewsRegion) -> List[NewsArticle]:
    """
    Build placeholder articles shown when every feed fails

    Args:
        region: News region

    Returns:
        Placeholder articles stamped with the current time
    """
    now = datetime.now(timezone.utc)
    formatted = f"{now.month}/{now.day}/{now.year}"
    return [
        NewsArticle(
            pub_date=now.isoformat(),
            author="System",
            image="",
            source="System Notice",
            source_name="Portfolio News",
            formatted_date=formatted,
            **template,
        )
        for template in _FALLBACK_TEMPLATES[region]
    ]
