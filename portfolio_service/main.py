# main.py

"""
FastAPI application for the portfolio service.
Entry point for the portfolio, news and tools REST API.
"""

import sys
import time
import uuid
from contextlib import asynccontextmanager

import uvicorn
from common.logger import LoggerFactory, LoggerType, LogLevel
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from .core.config import settings
from .routers import (
    auth_router,
    image_router,
    news_router,
    pdf_router,
    portfolio_router,
    secure_router,
    transliteration_router,
)
from .schemas.common_schemas import ErrorResponseSchema, HealthCheckSchema
from .utils.dependencies import (
    cleanup_services,
    get_container_info,
    get_private_item_service,
    get_transliteration_service,
    initialize_services,
)
from .utils.exceptions import PortfolioServiceError
from .utils.rate_limiting import limiter

# Setup application logger
logger = LoggerFactory.get_logger(
    name="portfolio-service",
    logger_type=LoggerType.STANDARD,
    level=LogLevel.INFO,
    console_level=LogLevel.INFO,
    use_colors=True,
    log_file=f"{settings.log_file_path}portfolio_main.log",
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.
    Initializes repositories and the transliteration dictionary, and releases
    them on shutdown.
    """
    logger.info(f"🚀 Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"📊 Environment: {settings.environment}")
    logger.info(f"🌐 FastAPI Host: {settings.host}:{settings.port}")
    logger.info(f"🗄️ Repository backend: {settings.repository_backend}")
    logger.info(
        f"💾 Cache: {'in-memory' if settings.enable_caching else 'Disabled'}"
    )

    try:
        await initialize_services()
        logger.info("🎉 Portfolio service is fully operational!")
    except Exception as e:
        logger.error(f"❌ Critical startup error: {str(e)}")
        logger.warning("🔧 Starting service in degraded mode due to startup errors")

    yield

    logger.info("🛑 Shutting down services...")
    try:
        await cleanup_services()
        logger.info("✅ All services cleaned up successfully")
    except Exception as e:
        logger.error(f"❌ Error during cleanup: {str(e)}")

    logger.info(f"👋 {settings.app_name} shutdown complete")


# Create FastAPI application
app = FastAPI(
    title="Portfolio Service",
    description="Personal portfolio API with news aggregation, file tools and a private area",
    version=settings.app_version,
    lifespan=lifespan,
    debug=settings.debug,
)

# Rate limiting
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.debug else settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["*"],
    expose_headers=[
        "Content-Disposition",
        "X-Page-Count",
        "X-Skipped-Files",
        "X-Original-Size",
        "X-Compressed-Size",
        "X-Compression-Ratio",
        "X-Image-Width",
        "X-Image-Height",
        "X-Is-Pdf",
    ],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Tag each request with an id and log its timing"""
    start_time = time.time()
    request.state.request_id = uuid.uuid4().hex[:12]

    response = await call_next(request)

    process_time = (time.time() - start_time) * 1000
    logger.debug(
        f"{request.method} {request.url.path} -> {response.status_code} "
        f"({process_time:.2f} ms) [{request.state.request_id}]"
    )
    response.headers["X-Request-ID"] = request.state.request_id
    return response


# Include routers
app.include_router(news_router.router)
app.include_router(secure_router.router)
app.include_router(pdf_router.router)
app.include_router(image_router.router)
app.include_router(transliteration_router.router)
app.include_router(portfolio_router.router)
app.include_router(auth_router.router)
# Catalog routes last so /tools/{slug} does not shadow the tool endpoints
app.include_router(portfolio_router.tools_router)


@app.get("/")
async def root():
    """Root endpoint with service information."""
    return {
        "service": settings.app_name,
        "status": "running",
        "version": settings.app_version,
        "environment": settings.environment,
        "description": "Portfolio, news aggregation and browser tools API",
        "docs_url": "/docs",
        "features": {
            "news_aggregation": True,
            "file_encryption": True,
            "text_encryption": True,
            "pdf_tools": True,
            "image_compression": True,
            "nepali_transliteration": True,
            "private_area": True,
            "caching": settings.enable_caching,
            "rate_limiting": settings.rate_limit_enabled,
        },
    }


@app.get("/health", response_model=HealthCheckSchema)
async def health_check():
    """Health check covering the repository and dictionary state."""
    components = {}
    try:
        repository_healthy = await get_private_item_service().health_check()
        components["repository"] = "healthy" if repository_healthy else "unhealthy"

        dictionary = get_transliteration_service().status()
        components["dictionary"] = "loaded" if dictionary.loaded else "loading"

        status = "healthy" if repository_healthy else "degraded"
        return HealthCheckSchema(
            status=status,
            service=settings.app_name,
            version=settings.app_version,
            components=components,
        )

    except Exception as e:
        logger.error(f"Health check failed: {str(e)}")
        return JSONResponse(
            status_code=503,
            content={
                "status": "unhealthy",
                "service": settings.app_name,
                "error": str(e),
            },
        )


@app.get("/metrics")
async def get_metrics():
    """Get service metrics and configuration."""
    try:
        return {
            "service": settings.app_name,
            "version": settings.app_version,
            "environment": settings.environment,
            "container": get_container_info(),
            "configuration": {
                "cache_enabled": settings.enable_caching,
                "cache_ttl_news": settings.cache_ttl_news,
                "news_batch_size": settings.news_batch_size,
                "rate_limit_login": settings.rate_limit_login,
                "rate_limit_refresh": settings.rate_limit_refresh,
                "max_pdf_size_bytes": settings.max_pdf_size_bytes,
                "max_image_files": settings.max_image_files,
            },
        }

    except Exception as e:
        logger.error(f"Metrics retrieval failed: {str(e)}")
        return JSONResponse(
            status_code=500,
            content={"error": "Failed to retrieve metrics", "detail": str(e)},
        )


@app.exception_handler(PortfolioServiceError)
async def service_error_handler(request: Request, exc: PortfolioServiceError):
    """Domain errors carry their own status code and user facing message."""
    logger.warning(f"{request.method} {request.url.path}: {exc.message}")
    content = ErrorResponseSchema(
        error=type(exc).__name__, message=exc.message, details=exc.details or None
    ).model_dump(mode="json")
    content["detail"] = exc.message
    return JSONResponse(status_code=exc.status_code, content=content)


# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler with proper logging."""
    logger.error(f"Unhandled exception on {request.method} {request.url}: {str(exc)}")
    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal server error",
            "detail": "An unexpected error occurred. Please try again later.",
            "request_id": getattr(request.state, "request_id", "unknown"),
        },
    )


def main():
    """Main function for running the FastAPI server."""
    try:
        logger.info(f"🚀 Starting FastAPI server on {settings.host}:{settings.port}")

        uvicorn.run(
            "portfolio_service.main:app",
            host=settings.host,
            port=settings.port,
            reload=settings.debug,
            log_level=settings.log_level.lower(),
            access_log=settings.debug,
        )

    except KeyboardInterrupt:
        logger.info("🛑 Server stopped by user")
    except Exception as e:
        logger.error(f"❌ Failed to start server: {str(e)}")
        sys.exit(1)


if __name__ == "__main__":
    main()
