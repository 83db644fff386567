# core/feed_provider_factory.py

from typing import Dict, Optional, Any, List

from ..interfaces.feed_provider_interface import FeedProviderInterface
from ..adapters.http_feed_provider import (
    AllOriginsProvider,
    CodeTabsProvider,
    DirectFeedProvider,
    Rss2JsonProvider,
    RssToJsonProvider,
)
from ..schemas.news_schemas import ProviderConfig, ProviderType
from .config import settings
from common.logger import LoggerFactory, LoggerType, LogLevel


class FeedProviderFactory:
    """Factory for creating feed provider instances"""

    _instances: Dict[str, FeedProviderInterface] = {}

    _provider_classes = {
        ProviderType.RSS2JSON: Rss2JsonProvider,
        ProviderType.RSS_TO_JSON: RssToJsonProvider,
        ProviderType.ALLORIGINS: AllOriginsProvider,
        ProviderType.CODETABS: CodeTabsProvider,
        ProviderType.DIRECT: DirectFeedProvider,
    }

    @classmethod
    def get_provider(
        cls,
        provider_type: ProviderType,
        config_overrides: Optional[Dict[str, Any]] = None,
        use_cache: bool = True,
    ) -> FeedProviderInterface:
        """
        Get or create a feed provider instance

        Args:
            provider_type: Provider to create
            config_overrides: Configuration overrides
            use_cache: Whether to use cached instances

        Returns:
            FeedProviderInterface instance
        """
        logger = LoggerFactory.get_logger(
            name="feed-provider-factory",
            logger_type=LoggerType.STANDARD,
            level=LogLevel.INFO,
            file_level=LogLevel.DEBUG,
            log_file=f"{settings.log_file_path}feed_provider_factory.log",
        )

        cache_key = provider_type.value
        if use_cache and not config_overrides and cache_key in cls._instances:
            return cls._instances[cache_key]

        config = cls._build_config(provider_type, config_overrides)
        provider = cls._provider_classes[provider_type](config)

        if use_cache and not config_overrides:
            cls._instances[cache_key] = provider
            logger.info(f"Created and cached provider: {cache_key}")

        return provider

    @classmethod
    def get_providers(cls, names: Optional[List[str]] = None) -> List[FeedProviderInterface]:
        """
        Build the ordered provider chain

        Args:
            names: Provider names in fallback order, defaults to settings

        Returns:
            Provider instances in the same order
        """
        names = names if names is not None else settings.news_providers
        return [cls.get_provider(ProviderType(name)) for name in names]

    @classmethod
    def _build_config(
        cls,
        provider_type: ProviderType,
        config_overrides: Optional[Dict[str, Any]] = None,
    ) -> ProviderConfig:
        config_dict = {
            "provider_type": provider_type,
            "base_url": settings.provider_base_urls.get(provider_type.value, ""),
            "timeout": settings.news_request_timeout,
            "max_items": settings.news_max_items_per_feed,
            "user_agent": settings.news_user_agent,
        }
        if config_overrides:
            config_dict.update(config_overrides)
        return ProviderConfig(**config_dict)

    @classmethod
    def get_supported_providers(cls) -> List[ProviderType]:
        """Get list of supported providers"""
        return list(cls._provider_classes.keys())

    @classmethod
    def clear_cache(cls) -> None:
        """Clear cached provider instances"""
        cls._instances.clear()
