"""
FastAPI application factory and configuration.
"""

import time
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from loguru import logger
from starlette.exceptions import HTTPException

from dayprism import __version__
from dayprism.core.config import ConfigManager, DayPrismConfig
from dayprism.core.exceptions import (
    ConfigurationError,
    DataValidationError,
    DayPrismError,
    ErrorCode,
    ErrorMessageTemplate,
    UpstreamError,
)
from dayprism.core.logging import configure_logging
from dayprism.core.services.orchestrator import TieredFetchOrchestrator
from dayprism.web.models import ErrorResponse
from dayprism.web.routes import health_router, intraday_router, metrics_router
from dayprism.web.utils import get_request_id

GENERIC_ERROR_MESSAGE = ErrorMessageTemplate.get_message(ErrorCode.INTERNAL_ERROR)


def create_app(
    config: DayPrismConfig | None = None,
    orchestrator: TieredFetchOrchestrator | None = None,
) -> FastAPI:
    """Create the FastAPI application.

    Args:
        config: configuration to use; loaded by :class:`ConfigManager` when omitted
        orchestrator: pre-built orchestrator, mainly for tests
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        active_config = config or ConfigManager().get_config()
        configure_logging(
            level=active_config.logging.level,
            file_output=bool(active_config.logging.file),
            file_path=active_config.logging.file,
        )
        active_orchestrator = orchestrator or TieredFetchOrchestrator.from_config(active_config.alpha_vantage)

        app.state.config = active_config
        app.state.orchestrator = active_orchestrator
        app.state.started_at = time.monotonic()
        logger.info("dayprism web service started", version=__version__)

        yield

        await active_orchestrator.close()

    app = FastAPI(
        title="dayprism",
        description="Intraday market data aggregated per calendar day, with premium to free tier fallback",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    _setup_middleware(app)
    _setup_routes(app)
    _setup_exception_handlers(app)

    return app


def _setup_middleware(app: FastAPI) -> None:
    app.add_middleware(GZipMiddleware, minimum_size=1000)


def _setup_routes(app: FastAPI) -> None:
    app.include_router(intraday_router, prefix="/api/v1", tags=["intraday"])
    app.include_router(health_router, prefix="/api/v1", tags=["health"])
    app.include_router(metrics_router)


def _error_response(
    request: Request,
    status_code: int,
    error: str,
    message: str,
    details: dict | None = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(
            error=error,
            message=message,
            details=details,
            request_id=get_request_id(request),
        ).model_dump(mode="json"),
    )


def _setup_exception_handlers(app: FastAPI) -> None:
    """Map exceptions to responses.

    Validation and configuration problems are client errors and keep their
    message. Everything else is a server error with a generic message; the
    details only go to the logs.
    """

    async def client_error_handler(request: Request, exc: DayPrismError) -> JSONResponse:
        logger.bind(error_code=exc.error_code).warning(
            "Rejected request {path}: {message}", path=request.url.path, message=exc.message
        )
        return _error_response(
            request,
            400,
            exc.__class__.__name__,
            exc.message,
            {"error_code": exc.error_code},
        )

    app.add_exception_handler(DataValidationError, client_error_handler)
    app.add_exception_handler(ConfigurationError, client_error_handler)

    @app.exception_handler(UpstreamError)
    async def upstream_error_handler(request: Request, exc: UpstreamError) -> JSONResponse:
        logger.bind(provider=exc.provider_name, error_code=exc.error_code).error(
            "Upstream failure for {path}: {message}",
            path=request.url.path,
            message=exc.message,
            details=exc.details,
        )
        return _error_response(
            request,
            500,
            "InternalServerError",
            GENERIC_ERROR_MESSAGE,
            {"error_code": exc.error_code},
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        return _error_response(
            request,
            exc.status_code,
            "HTTPException",
            str(exc.detail),
            {"status_code": exc.status_code},
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.opt(exception=exc).error("Unhandled error for {path}", path=request.url.path)
        return _error_response(
            request,
            500,
            "InternalServerError",
            GENERIC_ERROR_MESSAGE,
            {"type": type(exc).__name__},
        )
