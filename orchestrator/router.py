"""HTTP routes for document sessions and the document-type catalog."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, File, HTTPException, Request, Response, UploadFile, status
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, Field

from api.rate_limit import BACKEND_RATE_LIMIT, limiter
from document_factory.export import SIMPLIFIED_TITLE, download_filename
from document_factory.registry import (
    COMING_SOON_NOTICE,
    get_document_type,
    get_planned_document_type,
    list_document_types,
)
from orchestrator.exceptions import StateTransitionError
from orchestrator.service import DocumentService
from orchestrator.state import Flow, SessionState

logger = logging.getLogger("justiceally.orchestrator.router")

router = APIRouter()

_service: DocumentService | None = None


def configure_service(service: DocumentService | None) -> None:
    """Install the service instance used by the routes."""
    global _service
    _service = service


def get_service() -> DocumentService:
    if _service is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Document service is not initialized",
        )
    return _service


class DocumentTypeRequest(BaseModel):
    document_type: str = Field(..., min_length=1, max_length=100)


class FieldsRequest(BaseModel):
    values: dict[str, str] = Field(default_factory=dict)


class SimplifyRequest(BaseModel):
    text: str = Field(default="", max_length=200_000)


def _session_payload(session_id: str, state: SessionState) -> dict[str, Any]:
    return {"session_id": session_id, **state.to_dict()}


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------


@router.get("/documents/types")
async def document_types() -> dict[str, Any]:
    """All document types grouped by category, available and planned."""
    return {"categories": list_document_types()}


@router.get("/documents/types/{document_type}")
async def document_type_detail(document_type: str) -> dict[str, Any]:
    record = get_document_type(document_type)
    if record is not None:
        return record.to_dict(include_template=True)

    planned = get_planned_document_type(document_type)
    detail = f"{planned.title}: {COMING_SOON_NOTICE}" if planned else (
        f"Document type '{document_type}' not found"
    )
    raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


# ---------------------------------------------------------------------------
# Sessions
# ---------------------------------------------------------------------------


@router.post("/sessions", status_code=status.HTTP_201_CREATED)
async def create_session(service: DocumentService = Depends(get_service)) -> dict[str, Any]:
    session = service.open_session()
    return _session_payload(session.session_id, session.state)


@router.get("/sessions/{session_id}")
async def read_session(
    session_id: str,
    service: DocumentService = Depends(get_service),
) -> dict[str, Any]:
    session = service.get_session(session_id)
    return _session_payload(session_id, session.state)


@router.delete("/sessions/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_session(
    session_id: str,
    service: DocumentService = Depends(get_service),
) -> Response:
    service.close_session(session_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/sessions/{session_id}/document-type")
async def select_document_type(
    session_id: str,
    body: DocumentTypeRequest,
    service: DocumentService = Depends(get_service),
) -> dict[str, Any]:
    state = service.select_document_type(session_id, body.document_type)
    return _session_payload(session_id, state)


@router.patch("/sessions/{session_id}/fields")
async def edit_fields(
    session_id: str,
    body: FieldsRequest,
    service: DocumentService = Depends(get_service),
) -> dict[str, Any]:
    state = service.edit_fields(session_id, body.values)
    return _session_payload(session_id, state)


@router.get("/sessions/{session_id}/preview")
async def preview(
    session_id: str,
    service: DocumentService = Depends(get_service),
) -> dict[str, Any]:
    text = service.preview(session_id)
    state = service.get_session(session_id).state
    return {"session_id": session_id, "document_type": state.document_type, "text": text}


@router.post("/sessions/{session_id}/generate")
@limiter.limit(BACKEND_RATE_LIMIT)
async def generate(
    request: Request,
    session_id: str,
    service: DocumentService = Depends(get_service),
) -> dict[str, Any]:
    state = await service.generate(session_id)
    return _session_payload(session_id, state)


@router.post("/sessions/{session_id}/simplify")
@limiter.limit(BACKEND_RATE_LIMIT)
async def simplify(
    request: Request,
    session_id: str,
    body: SimplifyRequest,
    service: DocumentService = Depends(get_service),
) -> dict[str, Any]:
    state = await service.simplify_text(session_id, body.text)
    return _session_payload(session_id, state)


@router.post("/sessions/{session_id}/upload")
@limiter.limit(BACKEND_RATE_LIMIT)
async def upload(
    request: Request,
    session_id: str,
    file: UploadFile = File(...),
    service: DocumentService = Depends(get_service),
) -> dict[str, Any]:
    data = await file.read()
    state = await service.simplify_upload(
        session_id,
        filename=file.filename or "upload.pdf",
        content_type=file.content_type,
        data=data,
    )
    return _session_payload(session_id, state)


@router.post("/sessions/{session_id}/cancel")
async def cancel(
    session_id: str,
    service: DocumentService = Depends(get_service),
) -> dict[str, Any]:
    state = service.cancel(session_id)
    return _session_payload(session_id, state)


@router.get("/sessions/{session_id}/download", response_class=PlainTextResponse)
async def download(
    session_id: str,
    service: DocumentService = Depends(get_service),
) -> PlainTextResponse:
    """The current result as a plain-text attachment."""
    state = service.get_session(session_id).state
    if state.result is None:
        raise StateTransitionError(state.phase.value, "download")

    if state.flow is Flow.SIMPLIFICATION:
        title = SIMPLIFIED_TITLE
    else:
        record = get_document_type(state.document_type or "")
        title = record.title if record else "document"

    filename = download_filename(title)
    return PlainTextResponse(
        content=state.result.text,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
