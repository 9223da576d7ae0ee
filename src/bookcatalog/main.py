"""FastAPI application factory for BookCatalog.

This module creates and configures the FastAPI application with:
- Application-scoped services (repository, cache, book service)
- Lifespan management for startup/shutdown events
- Middleware configuration (CORS, request ID, logging)
- Exception handlers
- API routers
"""

import time
import uuid
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import Depends, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from bookcatalog.config import Settings, get_settings
from bookcatalog.core.exceptions import BookCatalogError, ValidationError
from bookcatalog.core.logging import (
    clear_correlation_id,
    configure_logging,
    get_logger,
    set_correlation_id,
)
from bookcatalog.repositories import SEED_BOOKS, InMemoryBookRepository
from bookcatalog.schemas.common import HealthCheckResponse
from bookcatalog.services.books import BookService
from bookcatalog.services.cache import create_cache_service
from bookcatalog.services.refresher import BookRefresher

# Initialize logger for this module
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Manage application lifespan events.

    Handles:
    - Logging configuration
    - Background catalogue refresh task
    - Cache backend shutdown

    Args:
        app: The FastAPI application instance

    Yields:
        None: Control back to the application
    """
    settings: Settings = app.state.settings

    # ========================================
    # Startup
    # ========================================
    configure_logging(settings)

    # Re-get logger after configuration
    startup_logger = get_logger(__name__)

    refresher: BookRefresher = app.state.refresher
    if settings.book_refresh_enabled:
        refresher.start()

    startup_logger.info(
        "Application starting",
        app_name=settings.app_name,
        version=settings.app_version,
        environment=settings.app_env.value,
        cache_backend=settings.cache_backend.value,
        auth_mode=settings.auth_mode.value,
    )

    yield

    # ========================================
    # Shutdown
    # ========================================
    await refresher.stop()
    await app.state.cache.close()

    startup_logger.info("Application shutting down", app_name=settings.app_name)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Each call builds its own repository, cache and book service, so two
    apps never share state.

    Args:
        settings: Optional settings override for testing

    Returns:
        FastAPI: Configured application instance
    """
    if settings is None:
        settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description=(
            "Book catalogue API with paged, searchable listings served "
            "through a short-lived cache."
        ),
        version=settings.app_version,
        lifespan=lifespan,
    )

    # ========================================
    # Application State
    # ========================================
    configure_state(app, settings)

    # ========================================
    # Middleware
    # ========================================
    configure_middleware(app, settings)

    # ========================================
    # Exception Handlers
    # ========================================
    configure_exception_handlers(app)

    # ========================================
    # Routes
    # ========================================
    configure_routes(app)

    return app


def configure_state(app: FastAPI, settings: Settings) -> None:
    """Create the application-scoped services.

    Args:
        app: The FastAPI application instance
        settings: Application settings
    """
    repository = InMemoryBookRepository(seed=SEED_BOOKS if settings.seed_books else ())
    cache = create_cache_service(settings)

    app.state.settings = settings
    app.state.repository = repository
    app.state.cache = cache
    app.state.book_service = BookService(
        repository,
        cache,
        cache_ttl_seconds=settings.paged_cache_ttl_seconds,
    )
    app.state.refresher = BookRefresher(
        repository,
        interval_seconds=settings.book_refresh_interval_seconds,
    )


def configure_middleware(app: FastAPI, settings: Settings) -> None:
    """Configure application middleware.

    Args:
        app: The FastAPI application instance
        settings: Application settings
    """
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.is_development else [],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def logging_middleware(request: Request, call_next: Any) -> Any:
        """Log requests and responses with correlation ID."""
        request_id = request.headers.get("X-Request-ID", str(uuid.uuid4()))
        request.state.request_id = request_id

        set_correlation_id(request_id)

        request_logger = get_logger("bookcatalog.request")
        start_time = time.perf_counter()

        request_logger.info(
            "Request started",
            method=request.method,
            path=request.url.path,
            query=str(request.query_params) if request.query_params else None,
        )

        try:
            response = await call_next(request)

            duration_ms = (time.perf_counter() - start_time) * 1000
            request_logger.info(
                "Request completed",
                method=request.method,
                path=request.url.path,
                status_code=response.status_code,
                duration_ms=round(duration_ms, 2),
            )

            response.headers["X-Request-ID"] = request_id
            return response

        except Exception as exc:
            duration_ms = (time.perf_counter() - start_time) * 1000
            request_logger.error(
                "Request failed",
                method=request.method,
                path=request.url.path,
                duration_ms=round(duration_ms, 2),
                error=str(exc),
            )
            raise

        finally:
            clear_correlation_id()


def validation_errors_by_field(exc: RequestValidationError) -> dict[str, list[str]]:
    """Group FastAPI validation errors by field name.

    ``("body", "title")`` becomes ``"title"``; ``("query", "pageSize")``
    becomes ``"pageSize"``.
    """
    errors: dict[str, list[str]] = {}
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ())]
        field = ".".join(loc[1:]) or (loc[0] if loc else "request")
        errors.setdefault(field, []).append(error.get("msg", "Invalid value"))
    return errors


def configure_exception_handlers(app: FastAPI) -> None:
    """Configure global exception handlers.

    Args:
        app: The FastAPI application instance
    """
    exception_logger = get_logger("bookcatalog.exceptions")

    @app.exception_handler(BookCatalogError)
    async def bookcatalog_exception_handler(
        request: Request, exc: BookCatalogError
    ) -> JSONResponse:
        """Handle BookCatalog custom exceptions with structured error response."""
        request_id = getattr(request.state, "request_id", None)

        if exc.status_code >= 500:
            exception_logger.error(
                "Application error",
                error_code=exc.code,
                error_message=exc.message,
                status_code=exc.status_code,
                path=request.url.path,
            )
        else:
            exception_logger.warning(
                "Client error",
                error_code=exc.code,
                error_message=exc.message,
                status_code=exc.status_code,
                path=request.url.path,
            )

        return JSONResponse(
            status_code=exc.status_code,
            content=exc.to_dict(request_id=request_id),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Report invalid input as 400 with per-field messages."""
        error = ValidationError(
            message="Invalid request parameters",
            errors=validation_errors_by_field(exc),
        )
        return await bookcatalog_exception_handler(request, error)

    @app.exception_handler(Exception)
    async def global_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        """Handle unexpected exceptions with a consistent error response."""
        request_id = getattr(request.state, "request_id", None)

        exception_logger.exception(
            "Unhandled exception",
            error_type=type(exc).__name__,
            error_message=str(exc),
            path=request.url.path,
        )

        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": {
                    "code": "INTERNAL_SERVER_ERROR",
                    "message": "An unexpected error occurred",
                    "request_id": request_id,
                }
            },
        )


def configure_routes(app: FastAPI) -> None:
    """Configure application routes.

    Args:
        app: The FastAPI application instance
    """

    @app.get(
        "/health/live",
        tags=["Health"],
        summary="Liveness check",
        description="Returns OK if the service is running",
    )
    async def liveness() -> dict[str, str]:
        """Liveness check for container orchestration."""
        return {"status": "ok"}

    @app.get(
        "/health/ready",
        response_model=HealthCheckResponse,
        tags=["Health"],
        summary="Readiness check",
        description="Returns OK if the service is ready to accept requests",
    )
    async def readiness(request: Request) -> HealthCheckResponse:
        """Readiness check checking the cache backend and the book store."""
        checks: dict[str, str] = {}

        cache_ok = await request.app.state.cache.ping()
        checks["cache"] = "ok" if cache_ok else "error"

        book_count = await request.app.state.repository.count()
        checks["repository"] = f"ok ({book_count} books)"

        return HealthCheckResponse(
            status="ok" if cache_ok else "degraded",
            checks=checks,
        )

    @app.get(
        "/",
        tags=["Root"],
        summary="API root",
        description="Returns API information",
    )
    async def root(request: Request) -> dict[str, str]:
        """API root endpoint with service information."""
        settings: Settings = request.app.state.settings
        return {
            "service": settings.app_name,
            "version": settings.app_version,
            "docs": "/docs",
            "health": "/health/live",
        }

    from bookcatalog.api.cache import router as cache_router
    from bookcatalog.api.v1.router import router as v1_router
    from bookcatalog.api.v2.router import router as v2_router
    from bookcatalog.dependencies import require_auth

    app.include_router(v1_router, prefix="/api/v1")
    app.include_router(v2_router, prefix="/api/v2")
    app.include_router(
        cache_router,
        prefix="/api/cache",
        tags=["Cache"],
        dependencies=[Depends(require_auth)],
    )


# Create the application instance
app = create_app()


def cli() -> None:
    """CLI entry point for running the application."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "bookcatalog.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.is_development,
        log_level=settings.log_level.value.lower(),
    )


if __name__ == "__main__":
    cli()
