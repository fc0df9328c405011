"""Generic repository over a single Cosmos DB container (partitioned by /id)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, ClassVar, Generic, TypeVar, cast

from azure.core import MatchConditions
from azure.cosmos.exceptions import CosmosHttpResponseError, CosmosResourceNotFoundError

from council_portal.models.base import DocumentBase

if TYPE_CHECKING:
    from azure.cosmos.aio import ContainerProxy, DatabaseProxy

T = TypeVar("T", bound=DocumentBase)

_HTTP_PRECONDITION_FAILED = 412


@dataclass
class Snapshot(Generic[T]):
    """A document together with the ETag it was read at."""

    document: T
    etag: str


class BaseRepository(Generic[T]):
    """CRUD plus ETag-conditional replace for one container."""

    container_name: ClassVar[str]
    model_class: type[T]

    def __init__(self, database: DatabaseProxy) -> None:
        self._container: ContainerProxy = database.get_container_client(self.container_name)

    def _to_body(self, item: T) -> dict[str, Any]:
        return item.model_dump(mode="json", exclude_none=True)

    async def create(self, item: T) -> T:
        await self._container.create_item(body=self._to_body(item))
        return item

    async def get(self, item_id: str, partition_key: str) -> T | None:
        """Fetch an active document, or None if missing or soft-deleted."""
        try:
            data = await self._container.read_item(item=item_id, partition_key=partition_key)
        except CosmosResourceNotFoundError:
            return None
        if data.get("deleted_at") is not None:
            return None
        return self.model_class.model_validate(data)

    async def read_snapshot(self, item_id: str) -> Snapshot[T] | None:
        """Fetch an active document together with its ETag."""
        try:
            data = cast(
                "dict[str, Any]",
                await self._container.read_item(item=item_id, partition_key=item_id),
            )
        except CosmosResourceNotFoundError:
            return None
        if data.get("deleted_at") is not None:
            return None
        return Snapshot(document=self.model_class.model_validate(data), etag=data["_etag"])

    async def replace_if_unchanged(self, item: T, etag: str) -> bool:
        """Replace the document only if it still carries ``etag``.

        Returns False when another writer got there first (HTTP 412); any other
        store failure propagates.
        """
        try:
            await self._container.replace_item(
                item=item.id,
                body=self._to_body(item),
                etag=etag,
                match_condition=MatchConditions.IfNotModified,
            )
        except CosmosHttpResponseError as exc:
            if exc.status_code == _HTTP_PRECONDITION_FAILED:
                return False
            raise
        return True

    async def query(self, query: str, parameters: list[dict[str, Any]] | None = None) -> list[T]:
        return [snapshot.document for snapshot in await self.query_snapshots(query, parameters)]

    async def query_snapshots(
        self, query: str, parameters: list[dict[str, Any]] | None = None
    ) -> list[Snapshot[T]]:
        results: list[Snapshot[T]] = []
        async for item in self._container.query_items(query=query, parameters=parameters or []):
            data = cast("dict[str, Any]", item)
            results.append(
                Snapshot(document=self.model_class.model_validate(data), etag=data.get("_etag", ""))
            )
        return results

    async def list_all(self) -> list[T]:
        return await self.query(
            "SELECT * FROM c WHERE NOT IS_DEFINED(c.deleted_at) ORDER BY c.created_at DESC",
        )
