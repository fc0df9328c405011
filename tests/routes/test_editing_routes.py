"""Tests for the editing routes and their JSON error mapping."""

from __future__ import annotations

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from council_portal.coordination.coordinator import EditCoordinator
from council_portal.models.editable import DocumentKind
from council_portal.routes import editing, health
from council_portal.routes.errors import register_error_handlers

_BASE = "/api/president/memorandums"


@pytest.fixture
def client(coordinator: EditCoordinator, handbook_repo, users, clock) -> TestClient:
    app = FastAPI()
    app.include_router(health.router)
    app.include_router(editing.router)
    register_error_handlers(app)
    app.state.coordinators = {
        DocumentKind.MEMORANDUMS: coordinator,
        DocumentKind.HANDBOOK: EditCoordinator(handbook_repo, users, clock=clock),
    }
    return TestClient(app)


def test_health(client) -> None:
    assert client.get("/api/health").json() == {"status": "ok"}


def test_acquire_priority_granted(client, memo) -> None:
    response = client.post(f"{_BASE}/M1/priority", json={"userId": "user-a"})

    assert response.status_code == 200
    assert response.json() == {"message": "You have edit priority", "hasPriority": True}


def test_acquire_priority_denied_reports_holder(client, memo) -> None:
    client.post(f"{_BASE}/M1/priority", json={"userId": "user-a"})

    response = client.post(f"{_BASE}/M1/priority", json={"userId": "user-b"})

    assert response.status_code == 200
    body = response.json()
    assert body["hasPriority"] is False
    assert body["priorityEditor"] == "Alice Reyes"
    assert body["priorityEditStartedAt"] == "2026-03-02T09:00:00.000000+00:00"


def test_acquire_priority_unknown_document(client) -> None:
    response = client.post(f"{_BASE}/missing/priority", json={"userId": "user-a"})

    assert response.status_code == 404
    assert response.json()["success"] is False


def test_acquire_priority_requires_user(client, memo) -> None:
    response = client.post(f"{_BASE}/M1/priority", json={})

    assert response.status_code == 422


def test_unknown_kind_is_rejected(client) -> None:
    response = client.post("/api/president/minutes/M1/priority", json={"userId": "user-a"})

    assert response.status_code == 422


def test_save_returns_updated_document(client, memo) -> None:
    client.post(f"{_BASE}/M1/priority", json={"userId": "user-a"})

    response = client.put(
        f"{_BASE}/M1",
        json={"userId": "user-a", "version": 1, "fields": {"title": "Budget v2", "fileName": "b.pdf"}},
    )

    assert response.status_code == 200
    document = response.json()["document"]
    assert document["version"] == 2
    assert document["status"] == "draft"
    assert document["title"] == "Budget v2"
    assert document["fileName"] == "b.pdf"
    assert document["priorityEditor"] is None
    assert document["editedBy"] == "user-a"


def test_save_without_priority_is_forbidden(client, memo) -> None:
    client.post(f"{_BASE}/M1/priority", json={"userId": "user-a"})

    response = client.put(f"{_BASE}/M1", json={"userId": "user-b", "version": 1, "fields": {}})

    assert response.status_code == 403
    body = response.json()
    assert body["hasPriority"] is False
    assert body["priorityEditor"] == "Alice Reyes"
    assert body["priorityEditStartedAt"] == "2026-03-02T09:00:00.000000+00:00"


def test_save_with_stale_version_conflicts(client, memo) -> None:
    client.post(f"{_BASE}/M1/priority", json={"userId": "user-a"})

    response = client.put(f"{_BASE}/M1", json={"userId": "user-a", "version": 7, "fields": {}})

    assert response.status_code == 409
    assert response.json()["currentVersion"] == 1
    assert "refresh" in response.json()["message"]


def test_save_with_reserved_field_is_unprocessable(client, memo) -> None:
    client.post(f"{_BASE}/M1/priority", json={"userId": "user-a"})

    response = client.put(
        f"{_BASE}/M1", json={"userId": "user-a", "version": 1, "fields": {"version": 9}}
    )

    assert response.status_code == 422
    assert response.json()["success"] is False


def test_clear_priority(client, repo, memo) -> None:
    client.post(f"{_BASE}/M1/priority", json={"userId": "user-a"})

    response = client.post(f"{_BASE}/M1/clear-priority", json={"userId": "user-a"})

    assert response.status_code == 200
    assert response.json() == {"ok": True, "message": "Priority cleared"}
    assert repo.stored("M1").priority_editor is None


def test_clear_priority_by_other_user_is_noop(client, repo, memo) -> None:
    client.post(f"{_BASE}/M1/priority", json={"userId": "user-a"})

    response = client.post(f"{_BASE}/M1/clear-priority", json={"userId": "user-b"})

    assert response.status_code == 200
    assert repo.stored("M1").priority_editor == "user-a"


def test_create_and_fetch_handbook_section(client) -> None:
    created = client.post(
        "/api/president/handbook",
        json={"userId": "user-a", "fields": {"title": "Code of Conduct", "slug": "code-of-conduct"}},
    )

    assert created.status_code == 201
    document = created.json()["document"]
    assert document["version"] == 1
    assert document["createdBy"] == "user-a"

    fetched = client.get(f"/api/president/handbook/{document['id']}")

    assert fetched.status_code == 200
    assert fetched.json()["document"]["title"] == "Code of Conduct"


def test_list_and_leases(client, memo) -> None:
    assert client.get(f"{_BASE}/leases").json() == {"documents": []}

    client.post(f"{_BASE}/M1/priority", json={"userId": "user-a"})

    listed = client.get(_BASE).json()["documents"]
    leased = client.get(f"{_BASE}/leases").json()["documents"]
    assert [d["id"] for d in listed] == ["M1"]
    assert [d["priorityEditor"] for d in leased] == ["user-a"]


def test_create_rejects_client_chosen_id(client) -> None:
    response = client.post(
        "/api/president/handbook",
        json={"userId": "user-a", "fields": {"id": "leases", "title": "Shadow"}},
    )

    assert response.status_code == 422
    assert client.get("/api/president/handbook/leases").json() == {"documents": []}
