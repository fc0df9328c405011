"""Component initialization for the web app lifespan."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from azure.core.exceptions import ServiceRequestError
from azure.cosmos.exceptions import CosmosHttpResponseError

from council_portal.coordination.coordinator import EditCoordinator
from council_portal.coordination.sweeper import LeaseSweeper
from council_portal.database.client import CosmosClient
from council_portal.database.repositories import (
    CONTAINER_NAMES,
    UserRepository,
    editable_repository,
)
from council_portal.models.editable import DocumentKind

if TYPE_CHECKING:
    from council_portal.config import Settings

logger = logging.getLogger(__name__)


async def init_database(settings: Settings) -> CosmosClient:
    """Connect to Cosmos DB, creating containers when running against the emulator."""
    cosmos = CosmosClient(settings.cosmos)
    await cosmos.initialize()
    try:
        if settings.app.is_development:
            await cosmos.ensure_containers(CONTAINER_NAMES)
        else:
            await cosmos.database.read()
    except (CosmosHttpResponseError, ServiceRequestError) as exc:
        await cosmos.close()
        msg = f"Cannot reach Cosmos DB at {settings.cosmos.endpoint}: {exc}"
        raise ConnectionError(msg) from exc
    logger.info("Connected to Cosmos DB database %s", settings.cosmos.database)
    return cosmos


def init_coordinators(settings: Settings, cosmos: CosmosClient) -> dict[DocumentKind, EditCoordinator]:
    """Build one edit coordinator per editable document kind."""
    users = UserRepository(cosmos.database)
    return {
        kind: EditCoordinator(
            editable_repository(kind, cosmos.database),
            users,
            ttl=settings.leases.ttl,
        )
        for kind in DocumentKind
    }


def init_sweeper(settings: Settings, coordinators: dict[DocumentKind, EditCoordinator]) -> LeaseSweeper:
    return LeaseSweeper(
        list(coordinators.values()),
        interval_seconds=settings.leases.sweep_interval_seconds,
    )
