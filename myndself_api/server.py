"""
FastAPI server for the MyndSelf API.

This module wires the request handlers to HTTP routes, installs the CORS
policy and error handlers, and provides the uvicorn entry point.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__, handlers
from .config import Settings, get_settings
from .errors import register_error_handlers
from .handlers import (
    DailyCountsResponse,
    ErrorResponse,
    MoodItemResponse,
    MoodListResponse,
    OkResponse,
    ProfileResponse,
    TagCountsResponse,
)
from .observability import setup_logging
from .store import RecordStore
from .validation import MoodEntryRequest, SubscribeRequest

logger = logging.getLogger(__name__)


def create_app(store: RecordStore, settings: Settings | None = None) -> FastAPI:
    """
    Create a FastAPI application backed by the given record store.

    Args:
        store: The RecordStore instance the handlers read and write
        settings: Configuration to use; defaults to the process settings

    Returns:
        Configured FastAPI application
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Lifespan context manager for FastAPI application."""
        signups = await store.list_signups()
        moods = await store.list_moods()
        logger.info(
            "MyndSelf API started",
            extra={"signups": len(signups), "moods": len(moods)},
        )
        yield
        # Records are in memory only and vanish with the process
        logger.info("MyndSelf API shutting down")

    app = FastAPI(
        title="MyndSelf API",
        description="Early-access signups and mood journal for the MyndSelf beta",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins(),
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )
    register_error_handlers(app)

    @app.get("/healthz")
    async def healthz() -> OkResponse:
        """Liveness check endpoint."""
        return handlers.health()

    @app.post(
        "/api/subscribe",
        responses={400: {"model": ErrorResponse, "description": "Invalid email"}},
    )
    async def subscribe(payload: SubscribeRequest | None = None) -> OkResponse:
        """
        Register an email for early access.

        Returns:
            ``{"ok": true}``, or 400 ``{"ok": false, "error": "invalid_email"}``
        """
        return await handlers.create_signup(store, payload)

    @app.get("/api/mood")
    async def get_moods() -> MoodListResponse:
        """List all mood entries, oldest first."""
        return await handlers.list_mood_entries(store)

    @app.post("/api/mood")
    async def post_mood(payload: MoodEntryRequest | None = None) -> MoodItemResponse:
        """
        Record a mood entry.

        Args:
            payload: Optional ``mood`` and ``note``; missing values are defaulted

        Returns:
            The stored entry
        """
        return await handlers.create_mood_entry(store, payload)

    @app.get("/api/mood/profile")
    async def get_profile() -> ProfileResponse:
        """Dominant emotion tags across the most recent entries."""
        return await handlers.get_mood_profile(store)

    @app.get("/api/analytics/tags")
    async def get_tag_analytics() -> TagCountsResponse:
        """Emotion tag counts across all entries, most frequent first."""
        return await handlers.get_tag_analytics(store)

    @app.get("/api/analytics/daily")
    async def get_daily_analytics() -> DailyCountsResponse:
        """Number of entries per UTC day, oldest first."""
        return await handlers.get_daily_analytics(store)

    return app


# Default app instance used by uvicorn
app = create_app(RecordStore())


def main() -> None:
    """Main entry point for the server."""
    import uvicorn

    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)

    uvicorn.run(
        "myndself_api.server:app",
        host=settings.host,
        port=settings.port,
        reload=settings.reload,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
