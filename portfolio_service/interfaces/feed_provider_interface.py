# interfaces/feed_provider_interface.py

from abc import ABC, abstractmethod
from typing import Any, Dict, List

from ..schemas.news_schemas import NewsArticle, ProviderConfig


class FeedProviderInterface(ABC):
    """Abstract interface for services that turn a feed URL into articles"""

    def __init__(self, config: ProviderConfig):
        """
        Initialize the provider

        Args:
            config: Provider configuration
        """
        self.config = config

    @property
    def name(self) -> str:
        return self.config.provider_type.value

    @abstractmethod
    async def fetch(self, feed_url: str) -> List[NewsArticle]:
        """
        Fetch and parse a feed

        Args:
            feed_url: RSS feed URL

        Returns:
            Parsed articles

        Raises:
            Exception: On transport, HTTP or parse failure
        """
        pass

    def get_provider_info(self) -> Dict[str, Any]:
        """Get information about this provider"""
        return {
            "provider": self.name,
            "base_url": self.config.base_url,
            "timeout": self.config.timeout,
            "max_items": self.config.max_items,
        }
