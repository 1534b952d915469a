"""Completion provider interface and the shared OpenAI-compatible transport."""

from abc import ABC, abstractmethod
from enum import StrEnum
from typing import Any

import httpx
import openai
import structlog
from langchain_openai import ChatOpenAI
from pydantic import SecretStr

from app.core.exceptions import ProviderError

logger = structlog.get_logger()

Messages = list[dict[str, str]]


class ProviderName(StrEnum):
    """Closed set of completion providers a request may select."""

    GROQ = "groq"
    HUGGINGFACE = "huggingface"
    OPENROUTER = "openrouter"

    @classmethod
    def resolve(cls, value: str | None) -> "ProviderName":
        """Map a request parameter to a provider; unknown or missing means Groq."""
        if value is None:
            return cls.GROQ
        try:
            return cls(value.strip().lower())
        except ValueError:
            return cls.GROQ


def error_payload(exc: BaseException) -> object:
    """Error body exactly as the upstream sent it, if any.

    The SDK unwraps ``{"error": {...}}`` into ``exc.body``, so status errors are
    read from the raw response instead.
    """
    response = getattr(exc, "response", None)
    if isinstance(response, httpx.Response):
        try:
            return response.json()
        except httpx.ResponseNotRead:
            return None
        except ValueError:
            return response.text or None
    return getattr(exc, "body", None)


class CompletionProvider(ABC):
    """Produces one plain-text completion for an already windowed message list."""

    name: ProviderName

    async def complete(self, model: str, messages: Messages) -> str:
        """Return the completion text or raise ProviderError."""
        try:
            text = await self._complete(model, messages)
        except openai.OpenAIError as exc:
            logger.error(
                "Provider request failed",
                provider=self.name.value,
                model=model,
                status_code=getattr(exc, "status_code", None),
                body=error_payload(exc),
            )
            raise ProviderError(self.name.value, str(exc)) from exc
        if not text:
            raise ProviderError(self.name.value, "empty completion")
        return text

    @abstractmethod
    async def _complete(self, model: str, messages: Messages) -> str | None:
        """Provider-specific request; SDK errors propagate to ``complete``."""


class OpenAICompatibleProvider(CompletionProvider):
    """Provider reached through an OpenAI-compatible chat completions endpoint."""

    def __init__(
        self,
        api_key: SecretStr,
        base_url: str,
        timeout: float,
        default_headers: dict[str, str] | None = None,
    ) -> None:
        self._api_key = api_key
        self._base_url = base_url
        self._timeout = timeout
        self._default_headers = default_headers

    def _build_llm(self, model: str, **options: Any) -> ChatOpenAI:
        # SDK retries stay off; retry policy belongs to the provider variant.
        return ChatOpenAI(
            model=model,
            api_key=self._api_key,
            base_url=self._base_url,
            timeout=self._timeout,
            max_retries=0,
            default_headers=self._default_headers,
            **options,
        )

    async def _request(self, model: str, messages: Messages, **options: Any) -> str | None:
        """Send one completion request and return the first choice's text."""
        llm = self._build_llm(model, **options)
        response = await llm.ainvoke(messages)
        if not response.content:
            return None
        return str(response.content)
