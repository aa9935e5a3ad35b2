"""FastAPI application factory."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from sqlalchemy.exc import SQLAlchemyError

from crossfire.auth.router import router as auth_router
from crossfire.config import get_settings
from crossfire.container import build_services
from crossfire.database import close_db, get_session, get_session_factory, init_db
from crossfire.health.router import router as health_router
from crossfire.middleware import setup_middleware
from crossfire.players.router import router as players_router
from crossfire.redis_client import close_redis, init_redis
from crossfire.static_data.router import router as static_data_router
from crossfire.static_data.seed import seed_static_data

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup and shutdown lifecycle."""
    settings = get_settings()
    await init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    await init_redis(settings.redis_url)
    app.state.services = build_services(get_session_factory(), settings)

    # Default weapons and maps (idempotent)
    if settings.seed_static_data:
        try:
            async for db in get_session():
                await seed_static_data(db)
                break
        except SQLAlchemyError:
            logger.warning("Static data seeding failed (tables may not exist yet)", exc_info=True)

    yield

    await close_db()
    await close_redis()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Backend API for Crossfire: accounts, sessions, player profiles and game data",
        version=settings.app_version,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan,
    )

    setup_middleware(app, settings)
    app.include_router(health_router, tags=["Health"])

    @app.get("/api", tags=["Health"])
    async def api_info() -> dict[str, str]:
        return {"name": settings.app_name, "version": settings.app_version, "status": "running"}

    app.include_router(auth_router)
    app.include_router(players_router)
    app.include_router(static_data_router)

    return app


app = create_app()
