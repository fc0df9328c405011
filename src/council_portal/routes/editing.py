"""Editing routes: create, fetch, acquire/clear priority, and versioned save."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Request, status

from council_portal.coordination.coordinator import EditCoordinator
from council_portal.models.editable import DocumentKind
from council_portal.schemas.editing import (
    ClearPriorityResponse,
    CreateDocumentRequest,
    DocumentListResponse,
    DocumentResponse,
    PriorityResponse,
    SaveRequest,
    UserRequest,
    document_to_wire,
    fields_from_wire,
)

router = APIRouter(prefix="/api/president", tags=["editing"])

logger = logging.getLogger(__name__)


def _coordinator(request: Request, kind: DocumentKind) -> EditCoordinator:
    return request.app.state.coordinators[kind]


@router.get("/{kind}")
async def list_documents(request: Request, kind: DocumentKind) -> DocumentListResponse:
    documents = await _coordinator(request, kind).list_documents()
    return DocumentListResponse(documents=[document_to_wire(d) for d in documents])


@router.get("/{kind}/leases")
async def list_leased_documents(request: Request, kind: DocumentKind) -> DocumentListResponse:
    """List documents someone is currently editing."""
    documents = await _coordinator(request, kind).list_leased()
    return DocumentListResponse(documents=[document_to_wire(d) for d in documents])


@router.post("/{kind}", status_code=status.HTTP_201_CREATED)
async def create_document(
    request: Request, kind: DocumentKind, body: CreateDocumentRequest
) -> DocumentResponse:
    document = await _coordinator(request, kind).create_document(
        body.user_id, fields_from_wire(body.fields)
    )
    return DocumentResponse(message="Document created", document=document_to_wire(document))


@router.get("/{kind}/{document_id}")
async def get_document(request: Request, kind: DocumentKind, document_id: str) -> DocumentResponse:
    document = await _coordinator(request, kind).get_document(document_id)
    return DocumentResponse(document=document_to_wire(document))


@router.post("/{kind}/{document_id}/priority", response_model_exclude_none=True)
async def acquire_priority(
    request: Request, kind: DocumentKind, document_id: str, body: UserRequest
) -> PriorityResponse:
    """Try to take the edit lease; a denial is a 200 with ``hasPriority: false``."""
    result = await _coordinator(request, kind).acquire_lease(document_id, body.user_id)
    if result.granted:
        return PriorityResponse(message="You have edit priority", has_priority=True)
    return PriorityResponse(
        message="Another user has edit priority",
        has_priority=False,
        priority_editor=result.holder_name,
        priority_edit_started_at=result.held_since,
    )


@router.put("/{kind}/{document_id}")
async def save_document(
    request: Request, kind: DocumentKind, document_id: str, body: SaveRequest
) -> DocumentResponse:
    document = await _coordinator(request, kind).save_content(
        document_id, body.user_id, body.version, fields_from_wire(body.fields)
    )
    return DocumentResponse(message="Document updated successfully", document=document_to_wire(document))


@router.post("/{kind}/{document_id}/clear-priority")
async def clear_priority(
    request: Request, kind: DocumentKind, document_id: str, body: UserRequest
) -> ClearPriorityResponse:
    await _coordinator(request, kind).release_lease(document_id, body.user_id)
    return ClearPriorityResponse()
