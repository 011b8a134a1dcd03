"""Completion backends for the AI assistant.

Every hosted provider is reached through the same CompletionBackend
interface. Registered providers all expose OpenAI-compatible endpoints, so a
single LangChain ChatOpenAI implementation serves them, parameterized by the
AI_PROVIDERS registry.
"""

import logging
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Tuple

from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage
from langchain_openai import ChatOpenAI

from config import AI_MAX_RETRIES, AI_PROVIDERS, AI_REQUEST_TIMEOUT
from core.exceptions import ConfigurationError, UpstreamError
from schemas.chat import ChatMessage

logger = logging.getLogger(__name__)


class CompletionBackend(ABC):
    """A hosted chat-completion API."""

    provider: str
    model: str

    @abstractmethod
    def complete(
        self, messages: List[ChatMessage], temperature: float, max_tokens: int
    ) -> str:
        """Return the assistant reply text for a conversation.

        Raises:
            UpstreamError: If the provider answers with nothing usable.
            Exception: Transport and HTTP errors from the client library
                propagate unchanged; AIProxyService turns them into
                structured failures.
        """


def to_langchain_messages(messages: List[ChatMessage]) -> List[BaseMessage]:
    converted: List[BaseMessage] = []
    for message in messages:
        if message.role == "system":
            converted.append(SystemMessage(content=message.content))
        elif message.role == "assistant":
            converted.append(AIMessage(content=message.content))
        else:
            converted.append(HumanMessage(content=message.content))
    return converted


class ChatOpenAIBackend(CompletionBackend):
    """OpenAI-compatible provider accessed through LangChain."""

    def __init__(
        self,
        provider: str,
        api_key: str,
        model: Optional[str] = None,
        timeout: float = AI_REQUEST_TIMEOUT,
        max_retries: int = AI_MAX_RETRIES,
    ) -> None:
        if provider not in AI_PROVIDERS:
            raise ConfigurationError(f"Unsupported AI provider: {provider}")
        provider_config = AI_PROVIDERS[provider]
        self.provider = provider
        self.model = model or provider_config["default_model"]
        self._api_key = api_key
        self._base_url = provider_config["base_url"]
        self._timeout = timeout
        self._max_retries = max_retries
        # One client per sampling setting
        self._llms: Dict[Tuple[float, int], ChatOpenAI] = {}

    def _get_llm(self, temperature: float, max_tokens: int) -> ChatOpenAI:
        cache_key = (temperature, max_tokens)
        cached = self._llms.get(cache_key)
        if cached:
            return cached

        kwargs = {
            "model": self.model,
            "api_key": self._api_key,
            "temperature": temperature,
            "max_tokens": max_tokens,
            "timeout": self._timeout,
            "max_retries": self._max_retries,
        }
        if self._base_url:
            kwargs["base_url"] = self._base_url

        llm = ChatOpenAI(**kwargs)
        self._llms[cache_key] = llm
        return llm

    def complete(
        self, messages: List[ChatMessage], temperature: float, max_tokens: int
    ) -> str:
        llm = self._get_llm(temperature, max_tokens)
        response = llm.invoke(to_langchain_messages(messages))
        # Extract content from AIMessage (LangChain returns AIMessage object)
        content = response.content if hasattr(response, "content") else str(response)
        if not isinstance(content, str) or not content.strip():
            raise UpstreamError(f"Empty response from {self.provider}")
        return content


def create_backend(
    provider: str, api_key: str, model: Optional[str] = None
) -> CompletionBackend:
    """Build the backend for a registered provider."""
    logger.info("Creating %s completion backend", provider)
    return ChatOpenAIBackend(provider, api_key, model=model)
