# routers/news_router.py

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request

from ..core.config import settings
from ..schemas.news_schemas import (
    FeedCatalogResponse,
    NewsPageResponse,
    NewsRegion,
    NewsStatsResponse,
)
from ..services.news_aggregator_service import NewsAggregatorService
from ..utils.dependencies import get_news_aggregator_service
from ..utils.rate_limiting import limiter
from common.logger import LoggerFactory, LoggerType, LogLevel

router = APIRouter(prefix="/news", tags=["news"])

logger = LoggerFactory.get_logger(
    name="news-router",
    logger_type=LoggerType.STANDARD,
    level=LogLevel.INFO,
    file_level=LogLevel.DEBUG,
    log_file=f"{settings.log_file_path}news_router.log",
)


@router.get("/feeds", response_model=FeedCatalogResponse)
async def get_feed_catalog(
    news_service: NewsAggregatorService = Depends(get_news_aggregator_service),
) -> FeedCatalogResponse:
    """List the configured feeds for both regions"""
    return news_service.get_catalog()


@router.get("/{region}/categories", response_model=List[str])
async def get_categories(
    region: NewsRegion,
    news_service: NewsAggregatorService = Depends(get_news_aggregator_service),
) -> List[str]:
    """Categories offered by the region's filter"""
    return news_service.get_categories(region)


@router.get("/{region}/stats", response_model=NewsStatsResponse)
async def get_news_stats(
    region: NewsRegion,
    news_service: NewsAggregatorService = Depends(get_news_aggregator_service),
) -> NewsStatsResponse:
    """Article counts per category and per source"""
    result = await news_service.get_news(region)
    return news_service.get_stats(result)


@router.post("/{region}/refresh", response_model=NewsPageResponse)
@limiter.limit(settings.rate_limit_refresh)
async def refresh_news(
    request: Request,
    region: NewsRegion,
    news_service: NewsAggregatorService = Depends(get_news_aggregator_service),
) -> NewsPageResponse:
    """Fetch the region's feeds again, bypassing the cache"""
    logger.info(f"Manual refresh requested for {region.value}")
    return await news_service.get_news_page(region, refresh=True)


@router.get("/{region}", response_model=NewsPageResponse)
async def get_news(
    region: NewsRegion,
    category: str = Query("all", description="Category filter, 'all' for everything"),
    search: Optional[str] = Query(None, description="Search title, description, source"),
    limit: Optional[int] = Query(
        None, ge=1, le=500, description="Articles to display (page step of 12)"
    ),
    refresh: bool = Query(False, description="Bypass the cache"),
    news_service: NewsAggregatorService = Depends(get_news_aggregator_service),
) -> NewsPageResponse:
    """
    Get aggregated news for a region

    - **category**: Filter by feed category
    - **search**: Case-insensitive search term
    - **limit**: Number of articles to display; grow by 12 for "load more"
    - **refresh**: Fetch feeds again instead of serving the cache
    """
    logger.info(
        f"News request: region={region.value}, category={category}, search={search}, limit={limit}"
    )
    return await news_service.get_news_page(
        region, category=category, search=search, limit=limit, refresh=refresh
    )
