"""Main FastAPI application for the Norfork report feed."""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import structlog
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from norfork_feed.api.routes import router
from norfork_feed.clients.http_client import DocumentFetcher
from norfork_feed.configuration.settings import Settings, get_settings
from norfork_feed.core.cache import ResultCache
from norfork_feed.core.report_service import ReportService
from norfork_feed.utils.exceptions import (
    ConfigurationError,
    NetworkError,
    ReportFormatError,
)


def configure_logging(log_level: str = "INFO", log_format: str = "json") -> None:
    """Configure structured logging.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_format: "json" for machine-readable output, "text" for console
    """
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=log_level.upper())

    renderer = (
        structlog.dev.ConsoleRenderer()
        if log_format == "text"
        else structlog.processors.JSONRenderer()
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Args:
        app: FastAPI application instance

    Yields:
        None
    """
    logger = structlog.get_logger()
    settings: Settings = app.state.settings
    logger.info(
        "application_starting",
        environment=settings.environment,
        port=settings.api.port,
        log_level=settings.logging.level,
        cache_ttl_seconds=settings.cache.ttl_seconds,
    )

    yield

    logger.info("application_shutting_down")


def create_app(
    settings: Optional[Settings] = None,
    service: Optional[ReportService] = None,
) -> FastAPI:
    """Create and configure FastAPI application.

    Args:
        settings: Settings override (loaded from YAML when omitted)
        service: Report service override

    Returns:
        Configured FastAPI application
    """
    if settings is None:
        try:
            settings = get_settings()
        except ConfigurationError as e:
            configure_logging("INFO")
            logger = structlog.get_logger()
            logger.error("failed_to_load_settings", error=str(e))
            raise

    configure_logging(settings.logging.level, settings.logging.format)

    if service is None:
        service = ReportService(
            settings=settings,
            fetcher=DocumentFetcher(settings.sources),
            cache=ResultCache(ttl_seconds=settings.cache.ttl_seconds),
        )

    app = FastAPI(
        title="Norfork Feed - Lake Level and Generation Schedule",
        description="Normalized USACE reservoir and SWPA generation schedule reports",
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )
    app.state.settings = settings
    app.state.report_service = service

    app.include_router(router, prefix="/api/v1", tags=["Reports"])

    @app.get("/", include_in_schema=False)
    async def root() -> dict[str, str]:
        return {"service": "norfork-feed", "status": "running", "version": "1.0.0"}

    @app.exception_handler(NetworkError)
    async def network_error_handler(request: Request, exc: NetworkError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY,
            content={"detail": "Upstream report unavailable", "message": str(exc)},
        )

    @app.exception_handler(ReportFormatError)
    async def report_format_error_handler(
        request: Request, exc: ReportFormatError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY,
            content={"detail": "Upstream report format not recognised", "message": str(exc)},
        )

    logger = structlog.get_logger()
    logger.info(
        "fastapi_app_created",
        environment=settings.environment,
        docs_url="/docs",
        api_prefix="/api/v1",
    )

    return app


# Create app instance
app = create_app()
