# utils/dependencies.py

"""
Dependency injection utilities for the portfolio service.
"""

from typing import Any, Dict, Optional

from dependency_injector import containers, providers
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ..core.config import settings
from ..core.feed_fetcher import FeedFetcher
from ..core.feed_provider_factory import FeedProviderFactory
from ..interfaces.private_item_repository_interface import (
    ContactRepositoryInterface,
    PrivateItemRepositoryInterface,
)
from ..repositories.in_memory_repository import (
    InMemoryContactRepository,
    InMemoryPrivateItemRepository,
)
from ..services.auth_service import AuthService
from ..services.crypto_service import CryptoService
from ..services.news_aggregator_service import NewsAggregatorService
from ..services.pdf_service import PdfService
from ..services.portfolio_service import PortfolioService
from ..services.private_item_service import PrivateItemService
from ..services.transliteration_service import TransliterationService
from ..services.upload_service import UploadService
from .exceptions import AuthenticationError
from common.cache import CacheFactory, CacheInterface, CacheType
from common.logger import LoggerFactory, LoggerType, LogLevel


def create_news_cache(
    enabled: bool, max_size: int, default_ttl: int
) -> Optional[CacheInterface]:
    if not enabled:
        return None
    return CacheFactory.get_cache(
        name="news",
        cache_type=CacheType.MEMORY,
        max_size=max_size,
        default_ttl=default_ttl,
    )


def create_private_item_repository(
    backend: str, mongo_url: str, database_name: str, collection_name: str
) -> PrivateItemRepositoryInterface:
    if backend == "mongodb":
        from ..repositories.mongo_repository import MongoPrivateItemRepository

        return MongoPrivateItemRepository(mongo_url, database_name, collection_name)
    return InMemoryPrivateItemRepository()


def create_contact_repository(
    backend: str,
    mongo_url: str,
    database_name: str,
    collection_name: str,
    item_repository: Optional[PrivateItemRepositoryInterface] = None,
) -> ContactRepositoryInterface:
    if backend == "mongodb":
        from ..repositories.mongo_repository import MongoContactRepository

        return MongoContactRepository(
            mongo_url,
            database_name,
            collection_name,
            client=getattr(item_repository, "client", None),
        )
    return InMemoryContactRepository()


class Container(containers.DeclarativeContainer):
    """Dependency injection container using dependency-injector"""

    # Configuration
    config = providers.Configuration()

    # Logger
    logger = providers.Singleton(
        LoggerFactory.get_logger,
        name="dependency-container",
        logger_type=LoggerType.STANDARD,
        level=LogLevel.INFO,
    )

    # Caches
    news_cache = providers.Singleton(
        create_news_cache,
        enabled=config.use_cache.as_(bool),
        max_size=config.cache_max_size.as_(int),
        default_ttl=config.cache_ttl_news.as_(int),
    )
    token_cache = providers.Singleton(
        CacheFactory.get_cache,
        name="auth-tokens",
        cache_type=CacheType.MEMORY,
        max_size=config.cache_max_size.as_(int),
        default_ttl=config.token_ttl.as_(int),
    )

    # Repositories
    private_item_repository = providers.Singleton(
        create_private_item_repository,
        backend=config.repository_backend.as_(str),
        mongo_url=config.mongo_url.as_(str),
        database_name=config.database_name.as_(str),
        collection_name=config.private_items_collection.as_(str),
    )
    contact_repository = providers.Singleton(
        create_contact_repository,
        backend=config.repository_backend.as_(str),
        mongo_url=config.mongo_url.as_(str),
        database_name=config.database_name.as_(str),
        collection_name=config.contact_messages_collection.as_(str),
        item_repository=private_item_repository,
    )

    # News
    feed_fetcher = providers.Singleton(
        FeedFetcher,
        providers=providers.Callable(FeedProviderFactory.get_providers),
        batch_size=config.news_batch_size.as_(int),
    )
    news_aggregator_service = providers.Singleton(
        NewsAggregatorService,
        fetcher=feed_fetcher,
        cache=news_cache,
        cache_ttl=config.cache_ttl_news.as_(int),
        page_size=config.news_page_size.as_(int),
    )

    # Tools
    crypto_service = providers.Singleton(
        CryptoService,
        iterations=config.pbkdf2_iterations.as_(int),
    )
    upload_service = providers.Singleton(
        UploadService,
        temp_dir=config.upload_temp_dir.as_(str),
        max_upload_bytes=config.max_upload_bytes.as_(int),
    )
    pdf_service = providers.Singleton(
        PdfService,
        upload_service=upload_service,
        max_pdf_size_bytes=config.max_pdf_size_bytes.as_(int),
        max_image_files=config.max_image_files.as_(int),
        max_total_upload_bytes=config.max_total_upload_bytes.as_(int),
    )
    transliteration_service = providers.Singleton(
        TransliterationService,
        dictionary_path=config.nepali_dictionary_path,
        use_itrans=config.enable_itrans.as_(bool),
    )

    # Portfolio and auth
    portfolio_service = providers.Singleton(
        PortfolioService,
        contact_repository=contact_repository,
    )
    auth_service = providers.Singleton(
        AuthService,
        token_cache=token_cache,
        username=config.admin_username.as_(str),
        password_hash=config.admin_password_hash,
        password=config.admin_password,
        token_ttl=config.token_ttl.as_(int),
        iterations=config.pbkdf2_iterations.as_(int),
    )
    private_item_service = providers.Singleton(
        PrivateItemService,
        repository=private_item_repository,
    )


# Global container instance
container = Container()

# Configure default values from settings
container.config.use_cache.from_value(settings.enable_caching)
container.config.cache_max_size.from_value(settings.cache_max_size)
container.config.cache_ttl_news.from_value(settings.cache_ttl_news)
container.config.token_ttl.from_value(settings.token_ttl_seconds)
container.config.repository_backend.from_value(settings.repository_backend)
container.config.mongo_url.from_value(settings.mongodb_url)
container.config.database_name.from_value(settings.mongodb_database)
container.config.private_items_collection.from_value(
    settings.mongodb_collection_private_items
)
container.config.contact_messages_collection.from_value(
    settings.mongodb_collection_contact_messages
)
container.config.news_batch_size.from_value(settings.news_batch_size)
container.config.news_page_size.from_value(settings.news_page_size)
container.config.pbkdf2_iterations.from_value(settings.pbkdf2_iterations)
container.config.upload_temp_dir.from_value(settings.upload_temp_dir)
container.config.max_upload_bytes.from_value(settings.max_upload_bytes)
container.config.max_pdf_size_bytes.from_value(settings.max_pdf_size_bytes)
container.config.max_image_files.from_value(settings.max_image_files)
container.config.max_total_upload_bytes.from_value(settings.max_total_upload_bytes)
container.config.nepali_dictionary_path.from_value(settings.nepali_dictionary_path)
container.config.enable_itrans.from_value(settings.enable_itrans)
container.config.admin_username.from_value(settings.admin_username)
container.config.admin_password_hash.from_value(settings.admin_password_hash)
container.config.admin_password.from_value(settings.admin_password)


async def initialize_services() -> None:
    """Initialize repositories and load the transliteration dictionary"""
    logger = container.logger()
    logger.info("Initializing services...")

    try:
        repository = container.private_item_repository()
        await repository.initialize()
        logger.info(f"Private item repository initialized ({settings.repository_backend})")

        words = await container.transliteration_service().load_dictionary()
        logger.info(f"Transliteration dictionary ready ({words} words)")

        logger.info("All services initialized successfully")
    except Exception as e:
        logger.error(f"Failed to initialize services: {e}")
        raise


async def cleanup_services() -> None:
    """Cleanup all services and resources"""
    logger = container.logger()
    logger.info("Cleaning up services...")

    try:
        await container.contact_repository().close()
        await container.private_item_repository().close()
        container.upload_service().cleanup()
        logger.info("Services cleaned up successfully")
    except Exception as e:
        logger.error(f"Error during cleanup: {e}")


def get_news_aggregator_service() -> NewsAggregatorService:
    """Get news aggregator service instance"""
    return container.news_aggregator_service()


def get_crypto_service() -> CryptoService:
    """Get crypto service instance"""
    return container.crypto_service()


def get_upload_service() -> UploadService:
    """Get upload service instance"""
    return container.upload_service()


def get_pdf_service() -> PdfService:
    """Get PDF service instance"""
    return container.pdf_service()


def get_transliteration_service() -> TransliterationService:
    """Get transliteration service instance"""
    return container.transliteration_service()


def get_portfolio_service() -> PortfolioService:
    """Get portfolio service instance"""
    return container.portfolio_service()


def get_auth_service() -> AuthService:
    """Get auth service instance"""
    return container.auth_service()


def get_private_item_service() -> PrivateItemService:
    """Get private item service instance"""
    return container.private_item_service()


# Security
security = HTTPBearer(auto_error=False)


def get_bearer_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[str]:
    return credentials.credentials if credentials else None


async def get_current_user(
    token: Optional[str] = Depends(get_bearer_token),
    auth_service: AuthService = Depends(get_auth_service),
) -> str:
    """
    Resolve the bearer token to a username.

    Raises:
        AuthenticationError: Missing or unknown token, answered as 401
    """
    if not token:
        raise AuthenticationError("Not authenticated")
    return await auth_service.verify_token(token)


def get_container_info() -> Dict[str, Any]:
    """Describe the wiring for the /metrics endpoint"""
    news_cache = container.news_cache()
    return {
        "repository_backend": settings.repository_backend,
        "news_providers": settings.news_providers,
        "news_cache": news_cache.get_stats().model_dump() if news_cache else None,
        "token_cache": container.token_cache().get_stats().model_dump(),
    }
