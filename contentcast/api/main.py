"""
Main FastAPI application for the ContentCast backend.
Configures the API server with routes, middleware, and documentation.
"""

from fastapi import FastAPI, status
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager

import structlog

from contentcast.core.config import settings
from contentcast.core.database import init_database, close_database, check_database
from contentcast.core.logging import setup_logging
from contentcast.api.middleware import add_middleware, add_exception_handlers
from contentcast.api.schemas.common import HealthCheckResponse, APIResponse
from contentcast.api.routes import (
    users, drafts, content, farcaster, quests, sbt, leaderboards, cast_limits, feedback
)
from contentcast.storage import MemoryStorage


logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    # Startup
    logger.info("Starting ContentCast API server", storage_backend=settings.storage_backend)

    use_memory = settings.storage_backend == "memory"
    if use_memory:
        if getattr(app.state, "memory_storage", None) is None:
            app.state.memory_storage = MemoryStorage()
        logger.info("Using in-memory storage")
    else:
        await init_database()

    yield

    # Shutdown
    logger.info("Shutting down ContentCast API server")
    if not use_memory:
        await close_database()


def create_app() -> FastAPI:
    """Create and configure FastAPI application."""

    # Setup logging
    setup_logging(settings.log_file)

    app_config = {
        "title": "ContentCast API",
        "description": """
        Backend API for ContentCast - a Farcaster mini app for drafting and casting content.

        ## Features

        * **Content** - AI post drafts, short answers and stock image search
        * **Casting** - Compose links with a daily cast limit
        * **Quests** - Daily and one-time quests with points and streaks
        * **Leaderboard** - Ranking by total quest points
        * **SBT & Rewards** - Soulbound badge mints and DEGEN claims

        ## Daily reset

        Daily cast limits roll over at 03:00 Europe/Istanbul.
        Quest cooldowns are a rolling 24 hours from the last completion.

        ## Error Handling

        All endpoints return consistent error responses with:
        - Error codes for programmatic handling
        - Human-readable messages
        - Additional details when available
        """,
        "version": settings.app_version,
        "lifespan": lifespan,
    }

    app = FastAPI(**app_config)

    # Add middleware
    add_middleware(app)
    add_exception_handlers(app)

    # Health check endpoint
    @app.get(
        "/health",
        response_model=HealthCheckResponse,
        tags=["System"],
        summary="Health Check",
        description="Check API server health and service status"
    )
    async def health_check():
        """Health check endpoint."""
        memory = getattr(app.state, "memory_storage", None)
        if memory is not None:
            healthy = await memory.ping()
        else:
            healthy = await check_database()

        if healthy:
            return HealthCheckResponse(
                version=settings.app_version,
                services={
                    "storage": "healthy",
                    "api": "healthy"
                }
            )

        logger.error("Health check failed", storage_backend=settings.storage_backend)
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "unhealthy",
                "version": settings.app_version,
                "services": {
                    "storage": "unhealthy",
                    "api": "healthy"
                }
            }
        )

    # Root endpoint
    @app.get(
        "/",
        response_model=APIResponse,
        tags=["System"],
        summary="API Information",
        description="Get basic API information and status"
    )
    async def root():
        """Root endpoint with API information."""
        return APIResponse(
            message=f"ContentCast API v{settings.app_version} - Ready to serve!"
        )

    # Include routers
    api = settings.api_prefix

    app.include_router(users.router, prefix=f"{api}/users", tags=["Users"])
    app.include_router(drafts.router, prefix=f"{api}/drafts", tags=["Drafts"])
    app.include_router(content.router, prefix=api, tags=["Content"])
    app.include_router(content.images_router, prefix=f"{api}/images", tags=["Images"])
    app.include_router(farcaster.router, prefix=api, tags=["Farcaster"])
    app.include_router(quests.router, prefix=f"{api}/quests", tags=["Quests"])
    app.include_router(sbt.router, prefix=f"{api}/sbt", tags=["SBT"])
    app.include_router(sbt.rewards_router, prefix=f"{api}/rewards", tags=["Rewards"])
    app.include_router(leaderboards.router, prefix=f"{api}/leaderboard", tags=["Leaderboard"])
    app.include_router(cast_limits.router, prefix=f"{api}/cast-limits", tags=["Cast Limits"])
    app.include_router(feedback.router, prefix=f"{api}/feedback", tags=["Feedback"])

    logger.info("FastAPI application created successfully")
    return app


# Create app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "contentcast.api.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.is_development,
        log_level=settings.log_level.lower()
    )
