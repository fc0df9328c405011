"""Shared fakes: an ETag-aware in-memory container and a controllable clock."""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from typing import Any

import pytest

from council_portal.coordination.coordinator import EditCoordinator
from council_portal.database.repositories.base import Snapshot
from council_portal.models.editable import EditableDocument
from council_portal.models.handbook import HandbookSection
from council_portal.models.memorandum import Memorandum

START = datetime(2026, 3, 2, 9, 0, tzinfo=UTC)


class FakeClock:
    def __init__(self, start: datetime = START) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


class InMemoryRepository:
    """Stands in for an EditableRepository; stores JSON bodies and bumps an ETag per write."""

    def __init__(
        self,
        model_class: type[EditableDocument] = Memorandum,
        container_name: str = "memorandums",
    ) -> None:
        self.model_class = model_class
        self.container_name = container_name
        self._items: dict[str, tuple[dict[str, Any], int]] = {}
        self.writes = 0
        self.before_replace: Callable[[], None] | None = None

    def put(self, document: EditableDocument) -> None:
        """Write unconditionally, as a competing client would."""
        _, etag = self._items.get(document.id, ({}, 0))
        self._items[document.id] = (document.model_dump(mode="json"), etag + 1)

    def stored(self, document_id: str) -> EditableDocument:
        data, _ = self._items[document_id]
        return self.model_class.model_validate(data)

    async def create(self, item: EditableDocument) -> EditableDocument:
        self.put(item)
        return item

    async def read_snapshot(self, item_id: str) -> Snapshot | None:
        if item_id not in self._items:
            return None
        data, etag = self._items[item_id]
        return Snapshot(document=self.model_class.model_validate(data), etag=str(etag))

    async def replace_if_unchanged(self, item: EditableDocument, etag: str) -> bool:
        if self.before_replace is not None:
            hook, self.before_replace = self.before_replace, None
            hook()
        _, current = self._items[item.id]
        if str(current) != etag:
            return False
        self.put(item)
        self.writes += 1
        return True

    async def list_stale_leases(self, cutoff: datetime) -> list[Snapshot]:
        snapshots = [await self.read_snapshot(item_id) for item_id in self._items]
        return [s for s in snapshots if s is not None and s.document.lease_started_before(cutoff)]

    async def list_all(self) -> list[EditableDocument]:
        return [self.stored(item_id) for item_id in self._items]

    async def list_leased(self) -> list[EditableDocument]:
        return [doc for doc in await self.list_all() if doc.is_leased]


class FakeUsers:
    def __init__(self, names: dict[str, str]) -> None:
        self._names = names

    async def display_name(self, user_id: str) -> str | None:
        return self._names.get(user_id)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def repo() -> InMemoryRepository:
    return InMemoryRepository()


@pytest.fixture
def handbook_repo() -> InMemoryRepository:
    return InMemoryRepository(HandbookSection, "handbook_sections")


@pytest.fixture
def users() -> FakeUsers:
    return FakeUsers({"user-a": "Alice Reyes", "user-b": "Ben Okafor"})


@pytest.fixture
def coordinator(repo: InMemoryRepository, users: FakeUsers, clock: FakeClock) -> EditCoordinator:
    return EditCoordinator(repo, users, clock=clock)  # type: ignore[arg-type]


@pytest.fixture
def memo(repo: InMemoryRepository) -> Memorandum:
    """A version-1 memorandum with no lease, already stored."""
    document = Memorandum(id="M1", title="Budget review", year=2026, created_by="user-a")
    repo.put(document)
    return document
