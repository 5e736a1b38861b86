"""FastAPI application factory and configuration.

This module provides the application factory function for creating
and configuring the FastAPI application with all middleware, routes,
and lifecycle handlers.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from itemvault.core.config import get_settings
from itemvault.core.exceptions import ItemVaultError, ValidationError
from itemvault.core.logging import (
    bind_correlation_id,
    clear_context,
    configure_logging,
    get_logger,
    new_correlation_id,
)
from itemvault.infrastructure.api.responses import error_body, status_for_exception
from itemvault.infrastructure.persistence.database import (
    close_database,
    init_database,
)
from itemvault.infrastructure.storage import build_item_store

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Initializes the database and the item store on startup and closes the
    database on shutdown.

    Args:
        app: FastAPI application instance.

    Yields:
        None: Control is yielded to the application during its lifetime.
    """
    settings = get_settings()
    configure_logging(settings)

    logger.info(
        "Starting ItemVault",
        app_name=settings.app_name,
        version=settings.app_version,
        environment=settings.environment,
        storage_backend=settings.storage_backend,
    )

    try:
        await init_database()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error("Failed to initialize database", error=str(e))
        raise

    if getattr(app.state, "item_store", None) is None:
        app.state.item_store = build_item_store(settings)

    yield

    logger.info("Shutting down ItemVault")
    await close_database()
    logger.info("Database connection closed")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        FastAPI: Configured FastAPI application instance.
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Schema-validated JSON item collections on object storage",
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
        openapi_url="/openapi.json" if settings.is_development else None,
        lifespan=lifespan,
    )
    app.state.item_store = None

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    register_health_check(app)
    register_routes(app)
    register_exception_handlers(app)
    register_middleware(app)

    return app


def register_health_check(app: FastAPI) -> None:
    """Register health check endpoints.

    Args:
        app: FastAPI application instance.
    """

    @app.get("/health", tags=["health"])
    async def health_check():
        """Basic health check endpoint.

        Returns 200 if the service is running. Does not check the database
        or the object store.
        """
        return {
            "status": "healthy",
            "service": "ItemVault",
            "version": get_settings().app_version,
        }

    @app.get("/ready", tags=["health"])
    async def readiness_check(request: Request):
        """Readiness check endpoint.

        Returns 200 when both the database and the object store answer.
        """
        from itemvault.infrastructure.api.dependencies import get_item_store
        from itemvault.infrastructure.persistence.database import get_db_manager

        db_healthy = await get_db_manager().check_connection()
        store_healthy, store_error = await get_item_store(
            request
        ).object_store.test_connection()

        content = {
            "service": "ItemVault",
            "version": get_settings().app_version,
            "database": "connected" if db_healthy else "disconnected",
            "object_store": "connected" if store_healthy else "disconnected",
        }
        if db_healthy and store_healthy:
            return {"status": "ready", **content}

        if store_error:
            content["object_store_error"] = store_error
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", **content},
        )

    @app.get("/live", tags=["health"])
    async def liveness_check():
        """Liveness check endpoint."""
        return {
            "status": "alive",
            "service": "ItemVault",
            "version": get_settings().app_version,
        }


def register_routes(app: FastAPI) -> None:
    """Register API routes.

    Args:
        app: FastAPI application instance.
    """
    from itemvault.infrastructure.api.routes import (
        collections_router,
        items_router,
        tools_router,
    )

    settings = get_settings()

    app.include_router(
        collections_router, prefix=f"{settings.api_prefix}/collections", tags=["collections"]
    )
    app.include_router(
        items_router,
        prefix=f"{settings.api_prefix}/collections/{{collection_id}}/items",
        tags=["items"],
    )
    app.include_router(tools_router, prefix=f"{settings.api_prefix}/tools", tags=["tools"])

    @app.get(settings.api_prefix, tags=["root"])
    async def api_root():
        """API root endpoint."""
        return {
            "name": settings.app_name,
            "version": settings.app_version,
            "api_version": "v1",
        }


def register_exception_handlers(app: FastAPI) -> None:
    """Register global exception handlers.

    Args:
        app: FastAPI application instance.
    """

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        """Answer malformed request bodies and parameters with 400."""
        errors = [
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in exc.errors()
        ]
        logger.info("Request validation failed", path=str(request.url.path), errors=errors)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Request validation failed", "errors": errors},
        )

    @app.exception_handler(ItemVaultError)
    async def itemvault_exception_handler(request: Request, exc: ItemVaultError):
        """Map domain errors that escape a route to their status codes."""
        status_code = status_for_exception(exc)
        logger.warning(
            "Domain error",
            path=str(request.url.path),
            error=exc.message,
            exc_type=type(exc).__name__,
            status_code=status_code,
        )
        errors = exc.errors if isinstance(exc, ValidationError) else None
        return JSONResponse(status_code=status_code, content=error_body(exc.message, errors))

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Handle uncaught exceptions."""
        logger.error(
            "Unhandled exception",
            path=str(request.url),
            method=request.method,
            error=str(exc),
            exc_type=type(exc).__name__,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": "Internal server error",
                "detail": str(exc) if get_settings().debug else "An unexpected error occurred",
            },
        )


def register_middleware(app: FastAPI) -> None:
    """Register custom middleware.

    Args:
        app: FastAPI application instance.
    """

    @app.middleware("http")
    async def logging_middleware(request: Request, call_next):
        """Log every request and propagate the correlation ID."""
        correlation_id = request.headers.get("X-Correlation-ID") or new_correlation_id()
        bind_correlation_id(correlation_id)

        logger.info(
            "Request started",
            method=request.method,
            path=str(request.url.path),
        )

        try:
            response = await call_next(request)
            logger.info(
                "Request completed",
                method=request.method,
                path=str(request.url.path),
                status_code=response.status_code,
            )
            response.headers["X-Correlation-ID"] = correlation_id
            return response
        finally:
            clear_context()


# Create the application instance
app = create_app()
