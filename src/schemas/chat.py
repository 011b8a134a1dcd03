"""Chat and AI assistant schema definitions."""

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

ChatRole = Literal["user", "assistant", "system"]
AssistanceType = Literal["debug", "optimize", "explain", "generate", "complete"]


class ChatMessage(BaseModel):
    role: ChatRole
    content: str


class ChatRequest(BaseModel):
    session_id: str = Field(min_length=1)
    messages: List[ChatMessage] = Field(min_length=1)


class ChatResponse(BaseModel):
    response: str
    success: bool
    messages: List[ChatMessage]


class ChatTranscript(BaseModel):
    """Persisted chat history for one (user, session) pair."""

    session_id: str
    messages: List[ChatMessage] = Field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class AIReply(BaseModel):
    """Structured result of a completion call. Never raised, always returned."""

    success: bool
    content: str
    error: Optional[str] = None


class CodeAssistanceRequest(BaseModel):
    code: str
    language: str = Field(min_length=1)
    type: AssistanceType
    question: Optional[str] = None


class CodeAssistanceResponse(BaseModel):
    success: bool
    suggestion: str
    explanation: str
    improved_code: Optional[str] = None
    error: Optional[str] = None


class CourseContent(BaseModel):
    description: str
    duration: str


class AIStatus(BaseModel):
    configured: bool
    provider: str
    model: str
    message: str


class UpdateAPIKeyRequest(BaseModel):
    api_key: str
