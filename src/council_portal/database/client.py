"""Async Cosmos DB client initialization."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from azure.cosmos import PartitionKey
from azure.cosmos.aio import CosmosClient as AzureCosmosClient
from azure.cosmos.aio import DatabaseProxy

from council_portal.config import CosmosConfig

if TYPE_CHECKING:
    from collections.abc import Iterable

logger = logging.getLogger(__name__)


class CosmosClient:
    """Manages the async Cosmos DB client and database reference."""

    def __init__(self, config: CosmosConfig) -> None:
        self._config = config
        self._client: AzureCosmosClient | None = None
        self._database: DatabaseProxy | None = None

    async def initialize(self) -> None:
        """Create the client and obtain a database reference."""
        self._client = AzureCosmosClient(self._config.endpoint, credential=self._config.key)
        self._database = self._client.get_database_client(self._config.database)

    async def ensure_containers(self, container_names: Iterable[str]) -> None:
        """Create the database and any missing containers, partitioned by /id."""
        if self._client is None:
            raise RuntimeError("CosmosClient not initialized: call initialize() first")
        self._database = await self._client.create_database_if_not_exists(id=self._config.database)
        for name in container_names:
            await self._database.create_container_if_not_exists(
                id=name, partition_key=PartitionKey(path="/id")
            )
            logger.debug("Container ready: %s", name)

    async def close(self) -> None:
        """Close the underlying client."""
        if self._client:
            await self._client.close()
            self._client = None
            self._database = None

    @property
    def database(self) -> DatabaseProxy:
        if self._database is None:
            raise RuntimeError("CosmosClient not initialized: call initialize() first")
        return self._database
