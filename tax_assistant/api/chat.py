"""Streaming chat endpoint.

Accepts the full conversation on every call and streams the assistant's
reply back as plain text.
"""

import json
import logging

from anthropic import APIError
from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import StreamingResponse

from tax_assistant.agent.chat_agent import ChatService
from tax_assistant.models.schemas import ChatRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["chat"])

# Auxiliary metadata header; no fields are populated yet.
DATA_HEADER = "X-Data"


def get_chat_service(request: Request) -> ChatService:
    """Return the chat service created at application startup."""
    return request.app.state.chat_service


@router.post("/chat")
async def chat(
    payload: ChatRequest,
    service: ChatService = Depends(get_chat_service),
) -> StreamingResponse:
    """Stream the assistant's reply to the last turn of a conversation.

    Args:
        payload: Conversation history, oldest first.
        service: Injected chat service.

    Returns:
        Plain-text stream of the reply, closed when the model finishes.

    Raises:
        422: Empty conversation or malformed content blocks.
        500: The model backend call failed.
    """
    try:
        chunks = await service.stream_response(payload.messages)
    except APIError as e:
        logger.error(f"Model backend request failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Model backend request failed",
        ) from e

    return StreamingResponse(
        chunks,
        media_type="text/plain; charset=utf-8",
        headers={DATA_HEADER: json.dumps({})},
    )
