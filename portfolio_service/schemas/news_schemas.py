# schemas/news_schemas.py

from typing import Optional, List, Dict
from datetime import datetime, timezone
from enum import Enum
from pydantic import BaseModel, Field, field_validator, model_validator


class NewsRegion(str, Enum):
    GLOBAL = "global"
    NEPALI = "nepali"


class ProviderType(str, Enum):
    """Feed providers, tried in configured order"""

    RSS2JSON = "rss2json"
    RSS_TO_JSON = "rss_to_json"
    ALLORIGINS = "allorigins"
    CODETABS = "codetabs"
    DIRECT = "direct"


class FeedConfig(BaseModel):
    name: str = Field(..., description="Display name of the feed")
    url: str = Field(..., description="RSS feed URL")
    category: Optional[str] = Field(None, description="Feed category")


class NewsArticle(BaseModel):
    title: str = Field("No Title", description="Article title")
    description: str = Field("", description="Cleaned, truncated summary")
    link: str = Field("", description="Article URL")
    pub_date: str = Field("", description="Publication date as given by the feed")
    author: str = Field("Unknown Author", description="Article author")
    category: str = Field("", description="Categories reported by the feed")
    guid: str = Field("", description="Unique identifier from the feed")
    image: str = Field("", description="Image URL if available")
    source: str = Field("News Source", description="Channel title")
    formatted_date: str = Field("", description="Human readable date")
    source_name: Optional[str] = Field(None, description="Configured feed name")
    source_category: Optional[str] = Field(None, description="Configured category")

    @field_validator("title", "author", "source", mode="before")
    @classmethod
    def strip_text(cls, v):
        if v is None:
            return v
        return str(v).strip()


class FeedFetchResult(BaseModel):
    feed_name: str
    success: bool = True
    articles: List[NewsArticle] = Field(default_factory=list)
    error: Optional[str] = None
    provider: Optional[str] = Field(None, description="Provider that succeeded")


class AggregationResult(BaseModel):
    region: Optional[NewsRegion] = None
    articles: List[NewsArticle] = Field(default_factory=list)
    errors: List[str] = Field(default_factory=list)
    used_fallback: bool = False
    message: Optional[str] = None
    fetched_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    total_articles: int = 0

    @model_validator(mode="after")
    def compute_total(self):
        self.total_articles = len(self.articles)
        return self


class ProviderConfig(BaseModel):
    provider_type: ProviderType
    base_url: str = ""
    timeout: int = Field(15, description="Request timeout in seconds")
    max_items: int = Field(20, description="Maximum items kept per feed")
    user_agent: str = Field(
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36",
        description="User agent for HTTP requests",
    )


class NewsPageResponse(BaseModel):
    """Paged news response consumed by the news pages"""

    region: NewsRegion
    items: List[NewsArticle]
    total_count: int = Field(..., description="Articles matching the filters")
    limit: int
    has_more: bool
    remaining: int
    category: str = "all"
    search: Optional[str] = None
    used_fallback: bool = False
    message: Optional[str] = None
    errors: List[str] = Field(default_factory=list)
    last_updated: datetime


class NewsStatsResponse(BaseModel):
    region: NewsRegion
    total_articles: int
    articles_by_category: Dict[str, int]
    articles_by_source: Dict[str, int]
    failed_feeds: int
    used_fallback: bool


class FeedCatalogResponse(BaseModel):
    global_feeds: List[FeedConfig]
    nepali_feeds: List[FeedConfig]
    categories: Dict[str, List[str]]
