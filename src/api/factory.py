"""
API Factory

Builds the FastAPI application: middleware, CORS, error handling,
Logfire instrumentation and the versioned router.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from src.api.errors import register_exception_handlers
from src.api.middleware import RequestContextMiddleware
from src.api.router import router
from src.core.config import settings
from src.core.logger import get_logger

logger = get_logger(__name__)


def setup_cors(app: FastAPI) -> None:
    """
    Setup CORS middleware with configurable origins.

    Args:
        app: FastAPI application instance
    """
    cors_origins = settings.cors_allow_origins_list

    # Only add CORS middleware if origins are configured
    if not cors_origins:
        logger.info("CORS middleware skipped (no origins configured)")
        return

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=settings.cors__allow_credentials,
        allow_methods=settings.cors_allow_methods_list,
        allow_headers=settings.cors_allow_headers_list,
    )
    logger.info(
        "CORS middleware configured: origins=%s methods=%s",
        cors_origins,
        settings.cors_allow_methods_list,
    )


def setup_compression(app: FastAPI) -> None:
    """Enable GZip for responses larger than 1KB (the field list is)."""
    app.add_middleware(GZipMiddleware, minimum_size=1000)
    logger.debug("GZip compression middleware configured")


def setup_logfire_instrumentation(app: FastAPI) -> None:
    """
    Configure Logfire and instrument FastAPI/SQLAlchemy when enabled.

    Failures are logged and never prevent the API from starting.
    """
    try:
        from src.core.logfire_config import initialize_logfire

        results = initialize_logfire(app)
    except ImportError:
        logger.debug("Logfire not available for instrumentation")
        return
    except Exception as e:
        logger.warning("Failed to initialize Logfire: %s", e)
        return

    if not results["configured"]:
        logger.debug("Logfire initialization skipped (disabled)")
        return

    enabled_instruments = [
        name for name, enabled in results["instrumentation"].items() if enabled
    ]
    logger.info(
        "Logfire initialized; instrumentation: %s",
        ", ".join(enabled_instruments) or "none",
    )


def create_api(
    title: str = "restaurant-settings API",
    description: str = "Admin settings for restaurant websites",
    version: str = "1.0.0",
    docs_url: str = "/docs",
    redoc_url: str = "/redoc",
    enable_cors: bool = True,
    enable_compression: bool = True,
    enable_logfire: bool = True,
    mount_prefix: str = "/api",
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        title: API title
        description: API description
        version: API version
        docs_url: URL path for API documentation (Swagger UI)
        redoc_url: URL path for ReDoc documentation
        enable_cors: Whether to enable CORS middleware
        enable_compression: Whether to enable GZip compression
        enable_logfire: Whether to configure Logfire instrumentation
        mount_prefix: Prefix for mounting the API router

    Returns:
        Configured FastAPI application
    """
    app = FastAPI(
        title=title,
        description=description,
        version=version,
        docs_url=docs_url,
        redoc_url=redoc_url,
        debug=settings.debug,
    )

    # Last added middleware runs first
    if enable_compression:
        setup_compression(app)
    if enable_cors:
        setup_cors(app)
    app.add_middleware(RequestContextMiddleware)

    register_exception_handlers(app)

    if enable_logfire:
        setup_logfire_instrumentation(app)

    app.include_router(router, prefix=mount_prefix)

    logger.info("API factory created: %s v%s", title, version)
    return app
