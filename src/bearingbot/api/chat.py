"""Chat and health endpoints."""

import logging

from fastapi import APIRouter

from .deps import CatalogDep, ChatConfigDep, ConversationManagerDep
from .exceptions import ChatProcessingError, InvalidChatRequest
from .models import ChatRequest, ChatResponse, HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["chat"])
health_router = APIRouter(tags=["health"])


@router.post("/chat", response_model=ChatResponse)
async def chat(
    chat_request: ChatRequest,
    manager: ConversationManagerDep,
    chat_config: ChatConfigDep,
) -> ChatResponse:
    """Handle one conversation turn.

    A blank message is rejected with 400.  Language-model and cache
    failures degrade inside the pipeline and still produce a 200.
    """
    message = chat_request.message.strip()
    if not message:
        raise InvalidChatRequest("Message is required")
    if len(message) > chat_config.max_message_length:
        raise InvalidChatRequest(
            f"Message exceeds {chat_config.max_message_length} characters"
        )

    try:
        turn = await manager.handle_turn(message, chat_request.session_id)
    except Exception as exc:
        logger.exception("Error processing chat turn")
        raise ChatProcessingError() from exc

    return ChatResponse(
        session_id=turn.session_id,
        response=turn.response,
        timestamp=turn.timestamp,
        query_type=turn.query_type,
        source_data=turn.source_data,
    )


@health_router.get("/health", response_model=HealthResponse)
async def health(catalog: CatalogDep) -> HealthResponse:
    return HealthResponse(parts=len(catalog))
