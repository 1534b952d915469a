"""Groq provider with retries on transient upstream failures."""

import asyncio
from collections.abc import Mapping

import openai
import structlog
from pydantic import SecretStr

from app.providers.base import (
    Messages,
    OpenAICompatibleProvider,
    ProviderName,
    error_payload,
)

logger = structlog.get_logger()

TRANSIENT_UPSTREAM_MARKER = "no healthy upstream"


def is_transient_upstream_error(payload: object) -> bool:
    """Check whether an error payload's ``message`` marks a transient upstream outage."""
    if not isinstance(payload, Mapping):
        return False
    message = payload.get("message")
    return isinstance(message, str) and TRANSIENT_UPSTREAM_MARKER in message


class GroqProvider(OpenAICompatibleProvider):
    """Groq chat completions, retried with a fixed delay while upstream is unhealthy."""

    name = ProviderName.GROQ

    def __init__(
        self,
        api_key: SecretStr,
        base_url: str,
        timeout: float,
        max_attempts: int = 3,
        retry_delay_seconds: float = 2.0,
    ) -> None:
        super().__init__(api_key=api_key, base_url=base_url, timeout=timeout)
        self._max_attempts = max_attempts
        self._retry_delay_seconds = retry_delay_seconds

    async def _complete(self, model: str, messages: Messages) -> str | None:
        attempt = 1
        while True:
            try:
                return await self._request(model, messages)
            except openai.APIError as exc:
                if attempt >= self._max_attempts or not is_transient_upstream_error(
                    error_payload(exc)
                ):
                    raise
                logger.warning(
                    "Transient upstream error, retrying",
                    provider=self.name.value,
                    model=model,
                    attempt=attempt,
                    max_attempts=self._max_attempts,
                    delay_seconds=self._retry_delay_seconds,
                )
                await asyncio.sleep(self._retry_delay_seconds)
                attempt += 1
