"""FastAPI application factory.

Exposes the product store over HTTP under ``/api``. Every error leaves
the service as a ``{"success": false, "message": ...}`` envelope.
"""

from __future__ import annotations

import time
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from catalog.application.product_store import ProductStore
from catalog.config import Settings, get_settings
from catalog.domain.exceptions import PersistenceError, ValidationError
from catalog.infrastructure.api.routes.health import router as health_router
from catalog.infrastructure.api.routes.products import router as products_router
from catalog.infrastructure.api.schemas import ErrorResponse
from catalog.infrastructure.bootstrap import product_store
from catalog.infrastructure.logging import get_logger

logger = get_logger(__name__)

ENDPOINTS = {
    "GET /api/products": "List all products",
    "GET /api/products/{id}": "Get a product by id",
    "POST /api/products": "Create a product",
    "PUT /api/products/{id}": "Update a product",
    "DELETE /api/products/{id}": "Delete a product",
    "GET /api/health": "Check that the API is up",
}


def _error(status_code: int, message: str, error: str | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(message=message, error=error).model_dump(exclude_none=True),
    )


def create_app(settings: Settings | None = None, store: ProductStore | None = None) -> FastAPI:
    """Build the API around ``store``, or around one built from ``settings``."""
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        logger.info("Catalog API starting", version=settings.version, data_file=str(settings.data_file))
        yield
        logger.info("Catalog API shutting down")

    app = FastAPI(
        title="Product Catalog API",
        version=settings.version,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.store = store or product_store(settings)
    app.state.started_at = time.monotonic()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # =========================================================================
    # Exception Handlers
    # =========================================================================

    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
        return _error(status.HTTP_400_BAD_REQUEST, str(exc))

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return _error(status.HTTP_400_BAD_REQUEST, "Invalid request body", str(exc.errors()))

    @app.exception_handler(PersistenceError)
    async def persistence_error_handler(request: Request, exc: PersistenceError) -> JSONResponse:
        logger.error("Catalog storage failure", path=request.url.path, error=str(exc))
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Catalog storage error", str(exc))

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        message = "Route not found" if exc.status_code == 404 else str(exc.detail)
        return _error(exc.status_code, message)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error(
            "Unhandled exception",
            error=str(exc),
            error_type=type(exc).__name__,
            path=request.url.path,
            exc_info=True,
        )
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error", str(exc))

    # =========================================================================
    # Routers
    # =========================================================================

    app.include_router(products_router, prefix="/api/products", tags=["Products"])
    app.include_router(health_router, prefix="/api", tags=["Health"])

    @app.get("/api")
    def index() -> dict:
        """Describe the available endpoints."""
        return {
            "message": "Product Catalog API",
            "version": settings.version,
            "endpoints": ENDPOINTS,
        }

    return app
