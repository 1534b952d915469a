"""Hugging Face inference router provider."""

from app.providers.base import Messages, OpenAICompatibleProvider, ProviderName

EMPTY_COMPLETION_PLACEHOLDER = "No response generated."

TEMPERATURE = 0.7
MAX_TOKENS = 300


def routing_hint(model: str) -> str:
    """Pick the inference provider that serves ``model``."""
    if model.startswith("google/"):
        return "together"
    return "featherless-ai"


class HuggingFaceProvider(OpenAICompatibleProvider):
    """Single-shot completion with fixed sampling; never retried."""

    name = ProviderName.HUGGINGFACE

    async def _complete(self, model: str, messages: Messages) -> str | None:
        # The router takes the inference provider as a ``model:provider`` suffix.
        text = await self._request(
            f"{model}:{routing_hint(model)}",
            messages,
            temperature=TEMPERATURE,
            max_tokens=MAX_TOKENS,
        )
        return text or EMPTY_COMPLETION_PLACEHOLDER
