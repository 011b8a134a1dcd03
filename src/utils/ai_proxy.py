"""AI assistant proxy.

This module translates platform requests (code assistance, chat, course
content) into chat-completion calls and maps every outcome, including a
missing API key or an upstream failure, into a structured response. Nothing
here raises to the route layer.
"""

import logging
import threading
from typing import Any, Callable, Dict, List, Optional

from langchain_core.exceptions import OutputParserException
from langchain_core.output_parsers import JsonOutputParser

from config import (
    AI_MODEL,
    AI_PROVIDER,
    AI_PROVIDERS,
    CHAT_MAX_TOKENS,
    CHAT_TEMPERATURE,
    CODE_ASSISTANCE_MAX_TOKENS,
    CODE_ASSISTANCE_TEMPERATURE,
    COURSE_CONTENT_MAX_TOKENS,
    COURSE_CONTENT_TEMPERATURE,
    get_provider_api_key,
)
from core.exceptions import ConfigurationError, UpstreamError, ValidationError
from schemas.chat import (
    AIReply,
    AIStatus,
    ChatMessage,
    CodeAssistanceRequest,
    CodeAssistanceResponse,
    CourseContent,
)
from utils.ai_backends import CompletionBackend, create_backend

logger = logging.getLogger(__name__)

BackendFactory = Callable[[str, str, Optional[str]], CompletionBackend]

NOT_CONFIGURED_MESSAGE = (
    "AI service is not configured. Please provide an API key to enable AI features."
)

CODE_ASSISTANCE_PROMPTS: Dict[str, str] = {
    "debug": "You are an expert code debugger. Analyze the provided code, identify "
    "bugs, errors or issues, and provide clear solutions with explanations.",
    "optimize": "You are a code optimization expert. Suggest improvements for "
    "performance, readability and maintainability.",
    "explain": "You are a coding tutor. Explain the provided code clearly and "
    "educationally, breaking down complex concepts for learners.",
    "generate": "You are a code generation assistant. Create clean, efficient and "
    "well-documented code based on the requirements provided.",
    "complete": "You are a code completion assistant. Complete the provided code "
    "snippet with proper syntax and logic.",
}

CODE_ASSISTANCE_FORMAT = (
    " Respond only with JSON in this format: "
    '{"suggestion": string, "improvedCode": string, "explanation": string}'
)

DEFAULT_QUESTIONS: Dict[str, str] = {
    "debug": "What issues do you see?",
    "optimize": "How can this be improved?",
    "explain": "What does this code do?",
    "generate": "the given requirements",
    "complete": "Continue from where it left off",
}

CHAT_SYSTEM_PROMPT = """You are an AI coding assistant for a gamified programming platform. You help developers learn, debug, and improve their code.

Key guidelines:
- Be helpful, accurate, and encouraging
- Provide practical code examples when relevant
- Explain complex concepts in simple terms
- Be concise but thorough in your explanations
- When discussing code, always specify the programming language"""

COURSE_CONTENT_SYSTEM_PROMPT = (
    "You are a curriculum designer for a coding platform. Generate engaging course "
    "descriptions and realistic duration estimates. Respond only with JSON in this "
    'format: {"description": string, "duration": string}'
)

FALLBACK_DURATIONS: Dict[str, str] = {
    "beginner": "2h 30m",
    "intermediate": "3h 45m",
    "advanced": "5h 20m",
}

CATEGORY_THUMBNAILS: Dict[str, str] = {
    "frontend": "https://images.unsplash.com/photo-1593720213428-28a5b9e94613?w=400",
    "backend": "https://images.unsplash.com/photo-1558494949-ef010cbdcc31?w=400",
    "fullstack": "https://images.unsplash.com/photo-1461749280684-dccba630e2f6?w=400",
    "ai": "https://images.unsplash.com/photo-1677442136019-21780ecad995?w=400",
    "blockchain": "https://images.unsplash.com/photo-1639762681485-074b7f938ba0?w=400",
}


def build_code_assistance_prompt(request: CodeAssistanceRequest) -> List[ChatMessage]:
    question = request.question or DEFAULT_QUESTIONS[request.type]
    if request.type == "generate":
        user_prompt = (
            f"Generate {request.language} code for: {question}\n\n"
            f"Context code:\n{request.code}"
        )
    else:
        user_prompt = (
            f"{request.type.capitalize()} this {request.language} code:\n\n"
            f"{request.code}\n\n{question}"
        )
    return [
        ChatMessage(
            role="system",
            content=CODE_ASSISTANCE_PROMPTS[request.type] + CODE_ASSISTANCE_FORMAT,
        ),
        ChatMessage(role="user", content=user_prompt),
    ]


def _parse_json_object(text: str) -> Optional[Dict[str, Any]]:
    """Parse a JSON object from model output, tolerating markdown fences."""
    try:
        parsed = JsonOutputParser().parse(text)
    except OutputParserException:
        return None
    return parsed if isinstance(parsed, dict) else None


class AIProxyService:
    """Front door to the hosted completion API.

    The API key is injected at construction and may be replaced at runtime
    through update_api_key; reads and writes of the key and the backend
    built from it are guarded by a lock.
    """

    def __init__(
        self,
        provider: str,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        backend_factory: BackendFactory = create_backend,
    ) -> None:
        if provider not in AI_PROVIDERS:
            raise ConfigurationError(f"Unsupported AI provider: {provider}")
        self.provider = provider
        self.model = model or AI_PROVIDERS[provider]["default_model"]
        self._backend_factory = backend_factory
        self._lock = threading.Lock()
        self._api_key: Optional[str] = api_key or None
        self._backend: Optional[CompletionBackend] = None
        logger.info(
            "AIProxyService initialized (provider=%s, configured=%s)",
            provider,
            self._api_key is not None,
        )

    def is_configured(self) -> bool:
        with self._lock:
            return self._api_key is not None

    def update_api_key(self, api_key: str) -> None:
        """Replace the provider API key used for subsequent requests.

        Raises:
            ValidationError: If the key is empty.
        """
        api_key = (api_key or "").strip()
        if not api_key:
            raise ValidationError("API key is required")
        with self._lock:
            self._api_key = api_key
            self._backend = None
        logger.info("API key updated for provider %s", self.provider)

    def status(self) -> AIStatus:
        configured = self.is_configured()
        return AIStatus(
            configured=configured,
            provider=self.provider,
            model=self.model,
            message="AI service is ready" if configured else NOT_CONFIGURED_MESSAGE,
        )

    def _get_backend(self) -> Optional[CompletionBackend]:
        with self._lock:
            if self._api_key is None:
                return None
            if self._backend is None:
                self._backend = self._backend_factory(
                    self.provider, self._api_key, self.model
                )
            return self._backend

    def _request(
        self, messages: List[ChatMessage], temperature: float, max_tokens: int
    ) -> AIReply:
        try:
            backend = self._get_backend()
            if backend is None:
                return AIReply(
                    success=False,
                    content=NOT_CONFIGURED_MESSAGE,
                    error="No API key provided",
                )
            content = backend.complete(messages, temperature, max_tokens)
        except UpstreamError as e:
            logger.warning("AI provider %s returned no usable content: %s", self.provider, e)
            return AIReply(
                success=False,
                content="Invalid response from AI service",
                error=str(e),
            )
        except Exception as e:
            # Client library raises its own transport, auth and HTTP status errors
            logger.error("AI provider %s request failed: %s", self.provider, e, exc_info=True)
            return AIReply(
                success=False,
                content="Failed to connect to AI service. Please try again.",
                error=str(e),
            )
        return AIReply(success=True, content=content)

    def get_code_assistance(self, request: CodeAssistanceRequest) -> CodeAssistanceResponse:
        """Ask the model to debug, optimize, explain, generate or complete code.

        Args:
            request: Code, language, assistance type and optional question.

        Returns:
            CodeAssistanceResponse; success is False when the provider is
            unconfigured or failed.
        """
        reply = self._request(
            build_code_assistance_prompt(request),
            CODE_ASSISTANCE_TEMPERATURE,
            CODE_ASSISTANCE_MAX_TOKENS,
        )
        if not reply.success:
            return CodeAssistanceResponse(
                success=False,
                suggestion=reply.content,
                explanation="",
                error=reply.error,
            )

        result = _parse_json_object(reply.content)
        if result is None:
            # Free-text answer: still useful, surface it as the suggestion
            return CodeAssistanceResponse(
                success=True,
                suggestion=reply.content,
                explanation="No explanation available",
            )
        improved_code = result.get("improvedCode") or result.get("improved_code")
        return CodeAssistanceResponse(
            success=True,
            suggestion=str(result.get("suggestion") or "No suggestions available"),
            explanation=str(result.get("explanation") or "No explanation available"),
            improved_code=str(improved_code) if improved_code else None,
        )

    def chat(self, messages: List[ChatMessage]) -> AIReply:
        """Continue a conversation with the platform assistant persona."""
        full_messages = [ChatMessage(role="system", content=CHAT_SYSTEM_PROMPT)]
        full_messages.extend(messages)
        return self._request(full_messages, CHAT_TEMPERATURE, CHAT_MAX_TOKENS)

    def generate_course_content(self, title: str, level: str, category: str) -> CourseContent:
        """Draft a description and duration for a new course.

        Falls back to templated content whenever the model cannot help.
        """
        fallback = CourseContent(
            description=(
                f"Learn {title.lower()} with this comprehensive {level}-level course. "
                "Master essential concepts and build practical projects."
            ),
            duration=FALLBACK_DURATIONS.get(level, FALLBACK_DURATIONS["intermediate"]),
        )
        reply = self._request(
            [
                ChatMessage(role="system", content=COURSE_CONTENT_SYSTEM_PROMPT),
                ChatMessage(
                    role="user",
                    content=(
                        f"Create a compelling course description and duration estimate "
                        f'for a {level}-level {category} course titled "{title}". '
                        "The description should be 2-3 sentences. The duration should "
                        'be realistic, e.g. "2h 30m" or "3h 15m".'
                    ),
                ),
            ],
            COURSE_CONTENT_TEMPERATURE,
            COURSE_CONTENT_MAX_TOKENS,
        )
        if not reply.success:
            return fallback

        result = _parse_json_object(reply.content)
        if not result:
            logger.warning("Course content reply was not JSON, using fallback")
            return fallback
        return CourseContent(
            description=str(result.get("description") or fallback.description),
            duration=str(result.get("duration") or fallback.duration),
        )

    def course_thumbnail(self, category: str) -> str:
        """Placeholder artwork for a course category."""
        return CATEGORY_THUMBNAILS.get(category, CATEGORY_THUMBNAILS["frontend"])


_ai_proxy_instance: Optional[AIProxyService] = None


def get_ai_proxy() -> AIProxyService:
    """Return a singleton AIProxyService configured from the environment."""
    global _ai_proxy_instance
    if _ai_proxy_instance is None:
        _ai_proxy_instance = AIProxyService(
            provider=AI_PROVIDER,
            api_key=get_provider_api_key(AI_PROVIDER),
            model=AI_MODEL,
        )
    return _ai_proxy_instance
