"""storefront-admin FastAPI application."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api import register_exception_handlers
from .config.settings import AppSettings, get_settings
from .container import ServiceContainer
from .database import DatabaseManager
from .features.admin import admin_router, public_router
from .features.auth.routers import auth_router

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[AppSettings] = None,
    services: Optional[ServiceContainer] = None,
) -> FastAPI:
    """Create the application.

    When ``services`` is given it is used as is and no database pool is
    opened; otherwise the lifespan connects asyncpg and builds the
    container over the database repositories.
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        container = services
        if container is None:
            database = DatabaseManager(
                settings.get_database_dsn(),
                application_name=settings.app_name,
                min_size=settings.db_pool_min_size,
                max_size=settings.db_pool_max_size,
                command_timeout=settings.db_command_timeout,
            )
            await database.connect()
            container = ServiceContainer.from_database(settings, database)

        container.wire_subscribers()
        app.state.services = container
        logger.info(f"{settings.app_name} {settings.app_version} started ({settings.environment})")

        yield

        await container.shutdown()
        logger.info(f"{settings.app_name} stopped")

    app = FastAPI(
        title="Storefront Admin API",
        version=settings.app_version,
        debug=settings.debug,
        lifespan=lifespan,
    )

    if settings.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    register_exception_handlers(app, is_production=settings.is_production)

    app.include_router(auth_router, prefix="/api")
    app.include_router(admin_router, prefix="/api")
    app.include_router(public_router, prefix="/api")

    @app.get("/health", tags=["Health"])
    async def health():
        container = getattr(app.state, "services", None)
        database_ok = True
        if container is not None and container.database is not None:
            database_ok = await container.database.health_check()
        return {"status": "healthy" if database_ok else "degraded", "database": database_ok}

    return app
