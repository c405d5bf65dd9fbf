"""FastAPI application factory and configuration."""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse

from formatconverter import __version__
from formatconverter.api.exceptions import (
    GENERIC_ERROR_MESSAGE,
    FormatConverterAPIException,
)
from formatconverter.api.middleware import (
    CORSHeadersMiddleware,
    LoggingMiddleware,
    RequestIDMiddleware,
)
from formatconverter.api.routers import conversion_router, health_router
from formatconverter.config import get_settings
from formatconverter.conversion.dispatcher import ConversionDispatcher

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan manager.

    Args:
        app: FastAPI application instance

    Yields:
        None
    """
    settings = get_settings()
    logger.info(
        "application_starting",
        host=settings.converter_host,
        port=settings.converter_port,
        version=__version__,
        conversions=len(app.state.dispatcher.list_supported_formats()),
    )

    yield

    logger.info("application_shutting_down")


def create_app(dispatcher: Optional[ConversionDispatcher] = None) -> FastAPI:
    """
    Create and configure FastAPI application.

    Args:
        dispatcher: Dispatcher to serve; defaults to the built-in converters
            configured from settings

    Returns:
        Configured FastAPI application instance
    """
    if dispatcher is None:
        dispatcher = ConversionDispatcher.default(get_settings().conversion_config())

    app = FastAPI(
        title="FormatConverter API",
        description="Convert tabular files between CSV, JSON, Excel and Parquet",
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )
    app.state.dispatcher = dispatcher

    app.add_middleware(CORSHeadersMiddleware)
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(conversion_router)

    logger.info("application_created", title=app.title, version=app.version)
    return app


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register custom exception handlers.

    Error bodies are plain text.

    Args:
        app: FastAPI application instance
    """

    @app.exception_handler(FormatConverterAPIException)
    async def api_exception_handler(
        request: Request,
        exc: FormatConverterAPIException,
    ) -> PlainTextResponse:
        """Render API exceptions as their plain-text detail."""
        logger.warning(
            "request_rejected",
            path=request.url.path,
            status_code=exc.status_code,
            error_kind=exc.error_kind.value if exc.error_kind else None,
            detail=exc.detail,
        )
        return PlainTextResponse(str(exc.detail), status_code=exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> PlainTextResponse:
        """Report malformed requests as 400."""
        logger.warning(
            "request_validation_failed",
            path=request.url.path,
            errors=len(exc.errors()),
        )
        return PlainTextResponse(
            "Invalid request", status_code=status.HTTP_400_BAD_REQUEST
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request,
        exc: Exception,
    ) -> PlainTextResponse:
        """Handle unexpected exceptions."""
        logger.error(
            "unexpected_error",
            path=request.url.path,
            error=str(exc),
            exc_info=True,
        )
        return PlainTextResponse(
            GENERIC_ERROR_MESSAGE,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )


app = create_app()
