"""
Chat Router - POST /chat

This module exposes the gateway's single endpoint.

The transport status is always 200. The logical outcome travels in the
envelope's ``code`` field (200 on success, 500 on failure); clients depend
on this, so errors are never mapped onto HTTP status codes here.

Bodies that fail validation (malformed JSON, missing ``max_tokens`` or
``contents``) are rejected by FastAPI with 422 before this handler runs.
"""

from fastapi import APIRouter, Depends

from src.api.deps import get_chat_service
from src.models.requests import ChatRequest
from src.models.responses import ChatEnvelope
from src.observability.logging import get_logger
from src.services.chat import ChatService


logger = get_logger(__name__)


router = APIRouter(tags=["Chat"])


@router.post("/chat", response_model=ChatEnvelope)
async def chat(
    request: ChatRequest,
    chat_service: ChatService = Depends(get_chat_service),
) -> ChatEnvelope:
    """
    Relay a chat request upstream and return the envelope.

    Args:
        request: Chat request with turns, token limit and optional api_key
        chat_service: Injected chat service dependency

    Returns:
        ChatEnvelope: ``{"message": ..., "code": 200|500}``
    """
    envelope = await chat_service.complete(request)
    logger.info("chat request relayed", code=envelope.code, turns=len(request.contents))
    return envelope
