"""
travel_stay.api.app

FastAPI app factory for the Travel Stay service.

Responsibilities:
- Build the FastAPI application and register routers/middleware/error handlers.
- Initialize and dispose shared infrastructure (DB engine/session factory).
- Provide a single composition root where cross-cutting concerns live.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from travel_stay import __version__
from travel_stay.api.errors import register_error_handlers
from travel_stay.api.routers.analytics import router as analytics_router
from travel_stay.api.routers.auth import router as auth_router
from travel_stay.api.routers.health import router as health_router
from travel_stay.api.routers.listings import owner_router, router as listings_router
from travel_stay.api.routers.users import router as users_router
from travel_stay.db.init_db import init_db, seed_admin
from travel_stay.db.session import create_engine, create_sessionmaker
from travel_stay.observability.logging import configure_logging, get_logger
from travel_stay.observability.middleware import RequestContextMiddleware
from travel_stay.settings import Settings

log = get_logger(__name__)


def create_app(*, settings: Settings) -> FastAPI:
    configure_logging(
        service_name=settings.service_name,
        level=settings.log_level,
        json_logs=settings.env != "dev",
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        log.info("startup", env=settings.env)
        # One engine per process; handlers get sessions via `api.deps.db_session`.
        engine = create_engine(settings)
        app.state.engine = engine
        app.state.sessionmaker = create_sessionmaker(engine)
        if settings.env in ("dev", "test"):
            await init_db(engine)
        if settings.bootstrap_admin_email:
            await seed_admin(app.state.sessionmaker, settings.bootstrap_admin_email)
            log.info("bootstrap_admin_seeded", email=settings.bootstrap_admin_email)
        try:
            yield
        finally:
            await engine.dispose()
            log.info("shutdown")

    app = FastAPI(
        title="Travel Stay API",
        version=__version__,
        docs_url="/docs",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(RequestContextMiddleware)
    register_error_handlers(app)

    app.include_router(health_router, tags=["health"])
    app.include_router(auth_router)
    app.include_router(users_router)
    app.include_router(listings_router)
    app.include_router(owner_router)
    app.include_router(analytics_router)

    return app
