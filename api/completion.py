"""Completion endpoints: the legal assistant chat and one-shot simplification.

These are the JSON endpoints a remote ``HttpCompletionClient`` talks to:

* ``POST /api/chat``              ``{"query": ...}`` -> ``{"response": ...}``
* ``POST /api/simplify-document`` ``{"text": ...}``  -> ``{"simplifiedText": ...}``
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Request
from pydantic import BaseModel, ConfigDict, Field

from api.rate_limit import BACKEND_RATE_LIMIT, limiter
from document_factory.enhancer import EnhancementClient
from orchestrator.exceptions import ValidationError
from orchestrator.validation import validate_document_text
from tools.llm_client import get_llm_client

logger = logging.getLogger("justiceally.api.completion")

router = APIRouter()


class ChatRequest(BaseModel):
    query: str = Field(..., max_length=20_000)


class ChatResponse(BaseModel):
    response: str


class SimplifyDocumentRequest(BaseModel):
    text: str = Field(..., max_length=200_000)


class SimplifyDocumentResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    simplified_text: str = Field(..., alias="simplifiedText")


@router.post("/chat", response_model=ChatResponse)
@limiter.limit(BACKEND_RATE_LIMIT)
async def chat(request: Request, body: ChatRequest) -> ChatResponse:
    """Answer a legal question under the assistant system prompt."""
    if not body.query.strip():
        raise ValidationError("Please enter a question", field="query")

    client = get_llm_client()
    logger.info(f"Chat query received ({len(body.query)} chars)")
    answer = await client.complete(body.query)
    return ChatResponse(response=answer)


@router.post("/simplify-document", response_model=SimplifyDocumentResponse, response_model_by_alias=True)
@limiter.limit(BACKEND_RATE_LIMIT)
async def simplify_document(request: Request, body: SimplifyDocumentRequest) -> SimplifyDocumentResponse:
    text = validate_document_text(body.text)
    enhancer = EnhancementClient(get_llm_client())
    simplified = await enhancer.simplify(text)
    return SimplifyDocumentResponse(simplified_text=simplified)
