"""FastAPI application for the Store Service."""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from libs.common.config import Settings, get_settings
from libs.common.middleware import add_observability_middleware
from libs.common.rate_limit import limiter, rate_limit_exceeded_handler
from libs.db.config import build_engine, build_sessionmaker
from services.store_service.exceptions import register_error_handlers
from services.store_service.routers import (
    admin_catalog_router,
    catalog_router,
    contact_router,
    orders_router,
)
from services.store_service.services.notifications import NotificationDispatcher
from slowapi.errors import RateLimitExceeded


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure the Store Service FastAPI app."""
    settings = settings or get_settings()
    engine = build_engine(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        await engine.dispose()

    app = FastAPI(
        title="SmartMeter Store Service",
        version="0.1.0",
        description="B2B storefront API - product catalog, discounts, checkout, order history.",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_sessionmaker(engine)
    app.state.notifier = NotificationDispatcher(settings)
    app.state.limiter = limiter

    add_observability_middleware(app, settings)
    register_error_handlers(app)
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

    @app.get("/health", tags=["system"])
    async def health_check() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "ok", "service": settings.SERVICE_NAME}

    # Public store routes (catalog, discounts, checkout, order lookup, contact)
    app.include_router(catalog_router, prefix="/api")
    app.include_router(orders_router, prefix="/api")
    app.include_router(contact_router, prefix="/api")

    # Admin routes
    app.include_router(admin_catalog_router, prefix="/api/admin")

    return app


app = create_app()
