"""FastAPI application configuration (Marketplace API)."""

from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from prometheus_client import CollectorRegistry, make_asgi_app, multiprocess

from ..application.admin.use_cases.admin_auth import AdminAuthService
from ..domain.errors import AccountStateError, MarketplaceError, ValidationError
from ..env import Settings, get_settings
from ..infrastructure.admin.admin_repository_impl import AdminRepositoryImpl
from ..infrastructure.catalog.category_repository_impl import CategoryRepositoryImpl
from ..infrastructure.catalog.product_repository_impl import ProductRepositoryImpl
from ..infrastructure.database import get_database_client
from ..infrastructure.vendor.vendor_repository_impl import VendorRepositoryImpl
from .dependencies import (
    get_email_sender,
    get_key_value_store,
    get_token_service,
)
from .routers import admin_vendors, categories, products, vendor_auth, vendor_profile

logger = logging.getLogger(__name__)


def _error_body(exc: MarketplaceError, include_details: bool) -> Dict[str, Any]:
    body: Dict[str, Any] = {"error": exc.kind, "message": exc.message}
    if isinstance(exc, AccountStateError):
        body["status"] = exc.account_status
    if include_details and exc.details is not None:
        body["details"] = exc.details
    return body


def _metrics_app():
    if os.environ.get("PROMETHEUS_MULTIPROC_DIR"):
        registry = CollectorRegistry()
        multiprocess.MultiProcessCollector(registry)
        return make_asgi_app(registry=registry)
    return make_asgi_app()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure FastAPI application."""
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        db_client = get_database_client(settings)
        store = get_key_value_store(db_client)
        await VendorRepositoryImpl(store).initialize()
        await CategoryRepositoryImpl(store).initialize()
        await ProductRepositoryImpl(store).initialize()
        await AdminAuthService(
            AdminRepositoryImpl(store), get_token_service(settings)
        ).ensure_bootstrap_admin(settings.admin_email, settings.admin_password)
        logger.info("Redis scripts registered; %s ready", settings.app_name)
        yield
        await get_email_sender(settings).aclose()
        await db_client.close()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Marketplace vendor onboarding API",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.api_cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(MarketplaceError)
    async def marketplace_error_handler(
        request: Request, exc: MarketplaceError
    ) -> JSONResponse:
        if exc.http_status >= 500:
            logger.error("%s on %s: %s", exc.kind, request.url.path, exc.message)
        return JSONResponse(
            status_code=exc.http_status,
            content=_error_body(exc, include_details=settings.is_development),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        errors = exc.errors()
        missing = [
            ".".join(str(part) for part in e["loc"][1:]) or "body"
            for e in errors
            if e.get("type") == "missing"
        ]
        if missing:
            error = ValidationError(
                f"Missing required fields: {', '.join(missing)}",
                details=jsonable_encoder(errors),
            )
        else:
            error = ValidationError(
                "Invalid request", details=jsonable_encoder(errors)
            )
        return JSONResponse(
            status_code=error.http_status,
            content=_error_body(error, include_details=settings.is_development),
        )

    # Include routers
    app.include_router(vendor_auth.router, prefix="/api/v1")
    app.include_router(vendor_profile.router, prefix="/api/v1")
    app.include_router(categories.router, prefix="/api/v1")
    app.include_router(products.router, prefix="/api/v1")
    app.include_router(admin_vendors.router, prefix="/api/v1")

    app.mount("/metrics", _metrics_app())

    @app.get("/")
    async def root() -> dict[str, str]:
        """Root endpoint."""
        return {
            "message": f"Welcome to {settings.app_name} API",
            "version": settings.app_version,
            "docs": "/docs",
        }

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        """Health check endpoint."""
        return {
            "status": "healthy",
            "service": settings.app_name,
            "version": settings.app_version,
        }

    return app


app = create_app()
