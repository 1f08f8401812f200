"""FastAPI application entrypoint for the LAN lobby server."""

from __future__ import annotations

from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from lansync import __version__
from lansync.api.http import handle_http_exception
from lansync.api.http import guard_requests
from lansync.api.routers import lobbies
from lansync.core.config import Settings
from lansync.core.config import load_settings
from lansync.lobbies.registry import LobbyStore
from lansync.lobbies.sweeper import start_sweeper
from lansync.lobbies.sweeper import stop_sweeper

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None, store: LobbyStore | None = None) -> FastAPI:
    """Build the application around one lobby store."""
    settings = settings or load_settings()
    if store is None:
        store = LobbyStore(stale_after_seconds=settings.lansync_stale_player_seconds)

    @asynccontextmanager
    async def lifespan(_: FastAPI):
        logger.info(
            "lobby server starting stale_after=%.1fs sweep_every=%.1fs",
            store.stale_after_seconds,
            settings.lansync_sweep_interval_seconds,
        )
        sweeper = start_sweeper(store, interval_seconds=settings.lansync_sweep_interval_seconds)
        try:
            yield
        finally:
            await stop_sweeper(sweeper)
            logger.info("lobby server stopped")

    app = FastAPI(title="lansync", version=__version__, lifespan=lifespan)
    app.state.settings = settings
    app.state.lobby_store = store

    app.middleware("http")(guard_requests)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.include_router(lobbies.router)
    return app


app = create_app()


__all__ = [
    "Settings",
    "app",
    "create_app",
]
