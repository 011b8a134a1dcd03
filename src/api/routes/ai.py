"""AI assistant routes.

This module proxies code-assistance and chat requests to the hosted model and
persists chat transcripts.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError

from api.routes.auth import get_current_user
from core.dependencies import AIProxyDep, ChatManagerDep
from core.exceptions import ValidationError
from schemas.chat import (
    AIStatus,
    ChatMessage,
    ChatRequest,
    ChatResponse,
    ChatTranscript,
    CodeAssistanceRequest,
    CodeAssistanceResponse,
    UpdateAPIKeyRequest,
)
from schemas.user import User

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/ai", tags=["AI"])


@router.post(
    "/code-assistance",
    response_model=CodeAssistanceResponse,
    summary="Ask the assistant about a piece of code",
)
def code_assistance(
    req: CodeAssistanceRequest,
    ai_proxy: AIProxyDep,
    current_user: User = Depends(get_current_user),
) -> CodeAssistanceResponse:
    return ai_proxy.get_code_assistance(req)


@router.post("/chat", response_model=ChatResponse, summary="Chat with the assistant")
def chat(
    req: ChatRequest,
    ai_proxy: AIProxyDep,
    chat_manager: ChatManagerDep,
    current_user: User = Depends(get_current_user),
) -> ChatResponse:
    """Send the conversation to the model and store the extended transcript.

    Args:
        req: ChatRequest with session_id and the message history.
        ai_proxy: Injected AIProxyService instance.
        chat_manager: Injected ChatManager instance.
        current_user: Current authenticated user.

    Returns:
        ChatResponse with the reply, a success flag and the full history.
    """
    reply = ai_proxy.chat(req.messages)
    messages = list(req.messages)
    if reply.success:
        messages.append(ChatMessage(role="assistant", content=reply.content))
        try:
            chat_manager.save_transcript(current_user.user_id, req.session_id, messages)
        except SQLAlchemyError:
            # The reply is still returned; only history is lost
            logger.warning(
                "Failed to store chat %s for %s",
                req.session_id,
                current_user.user_id,
                exc_info=True,
            )
    return ChatResponse(response=reply.content, success=reply.success, messages=messages)


@router.get(
    "/chat/{session_id}", response_model=ChatTranscript, summary="Get a chat transcript"
)
def get_chat(
    session_id: str,
    chat_manager: ChatManagerDep,
    current_user: User = Depends(get_current_user),
) -> ChatTranscript:
    return chat_manager.get_transcript(current_user.user_id, session_id)


@router.get("/status", response_model=AIStatus, summary="AI service status")
def get_status(
    ai_proxy: AIProxyDep,
    current_user: User = Depends(get_current_user),
) -> AIStatus:
    return ai_proxy.status()


@router.post("/update-key", summary="Replace the AI provider API key")
def update_key(
    req: UpdateAPIKeyRequest,
    ai_proxy: AIProxyDep,
    current_user: User = Depends(get_current_user),
) -> dict:
    """Replace the provider API key at runtime.

    Raises:
        HTTPException: 400 if the key is empty.
    """
    try:
        ai_proxy.update_api_key(req.api_key)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    logger.info("User %s updated the AI API key", current_user.user_id)
    return {"success": True, "message": "API key updated successfully", "configured": True}
