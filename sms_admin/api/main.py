"""FastAPI application factory and configuration."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from sms_admin.api.dependencies import get_storage
from sms_admin.api.routes import (
    activity_router,
    dashboard_router,
    health_router,
    organizations_router,
    templates_router,
)
from sms_admin.core.config import settings
from sms_admin.core.exceptions import AppException, DuplicateOverride, NotFoundError
from sms_admin.storage.memory import InMemoryStorage


# Configure structured logging
logging.basicConfig(format="%(message)s", level=settings.log_level.upper())

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
        structlog.processors.JSONRenderer() if settings.log_format == "json" else structlog.dev.ConsoleRenderer(),
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    logger.info(
        "Starting SMS Admin API",
        environment=settings.app_env,
        debug=settings.app_debug,
        latency_scale=settings.mock_latency_scale,
    )

    storage = get_storage()
    if settings.seed_fixtures and isinstance(storage, InMemoryStorage):
        fixtures = await storage.seed_demo_data()
        logger.info(
            "Seeded demo data",
            organizations=len(fixtures.organizations),
            templates=len(fixtures.templates),
            logs=len(fixtures.logs),
        )

    yield

    logger.info("Shutting down SMS Admin API")


def _error_response(status_code: int, exc: AppException) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": exc.code,
            "message": exc.message,
            "details": exc.details,
        },
    )


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="SMS Admin API",
        description="Admin dashboard for multi-tenant SMS messaging",
        version="0.1.0",
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
        lifespan=lifespan,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.is_development else [],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Exception handlers
    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
        """Handle missing records."""
        logger.info("Record not found", code=exc.code, details=exc.details)
        return _error_response(status.HTTP_404_NOT_FOUND, exc)

    @app.exception_handler(DuplicateOverride)
    async def duplicate_override_handler(request: Request, exc: DuplicateOverride) -> JSONResponse:
        """Handle a second override of the same template."""
        logger.warning("Duplicate override", details=exc.details)
        return _error_response(status.HTTP_409_CONFLICT, exc)

    @app.exception_handler(AppException)
    async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
        """Handle application-specific exceptions."""
        logger.warning(
            "Application exception",
            code=exc.code,
            message=exc.message,
            details=exc.details,
        )
        return _error_response(status.HTTP_400_BAD_REQUEST, exc)

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Handle unexpected exceptions."""
        logger.error("Unhandled exception", error=str(exc), exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": "INTERNAL_ERROR",
                "message": "An unexpected error occurred",
            },
        )

    # Include routers
    app.include_router(health_router)
    app.include_router(dashboard_router)
    app.include_router(organizations_router)
    app.include_router(templates_router)
    app.include_router(activity_router)

    # Root endpoint
    @app.get("/")
    async def root() -> dict[str, str]:
        """Root endpoint."""
        return {
            "service": "SMS Admin API",
            "version": "0.1.0",
            "status": "running",
        }

    return app


# Create default app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "sms_admin.api.main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=settings.is_development,
    )
