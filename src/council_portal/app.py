"""FastAPI application factory and entry point."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

import uvicorn
from fastapi import FastAPI

from council_portal.config import load_settings
from council_portal.health import check_emulators
from council_portal.logging import configure_logging
from council_portal.routes import editing, health
from council_portal.routes.errors import register_error_handlers
from council_portal.startup import init_coordinators, init_database, init_sweeper

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Open the database, start the lease sweeper, and tear both down on exit."""
    settings = app.state.settings

    if settings.app.is_development and not await check_emulators(settings):
        raise RuntimeError("Local dependencies are not running")

    cosmos = await init_database(settings)
    coordinators = init_coordinators(settings, cosmos)
    sweeper = init_sweeper(settings, coordinators)

    app.state.cosmos = cosmos
    app.state.coordinators = coordinators
    app.state.sweeper = sweeper

    await sweeper.start()
    logger.info("Council portal API started")
    try:
        yield
    finally:
        logger.info("Council portal API shutting down")
        await sweeper.stop()
        await cosmos.close()


def create_app() -> FastAPI:
    settings = load_settings()
    configure_logging(settings.app.log_level)

    app = FastAPI(title="Council Portal", lifespan=lifespan)
    app.state.settings = settings
    app.include_router(health.router)
    app.include_router(editing.router)
    register_error_handlers(app)
    return app


def main() -> None:
    """Entry point for the API process."""
    uvicorn.run("council_portal.app:create_app", factory=True, host="0.0.0.0", port=8000)  # noqa: S104


if __name__ == "__main__":
    main()
