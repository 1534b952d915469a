"""Provider lookup by request parameter."""

from collections.abc import Mapping

from app.core.settings import ProviderConfig
from app.providers.base import CompletionProvider, ProviderName
from app.providers.groq import GroqProvider
from app.providers.huggingface import HuggingFaceProvider
from app.providers.openrouter import OpenRouterProvider


class ProviderRegistry:
    """Holds one configured instance per provider variant."""

    def __init__(self, providers: Mapping[ProviderName, CompletionProvider]) -> None:
        self._providers = dict(providers)

    def get(self, name: str | None) -> CompletionProvider:
        """Return the provider selected by ``name`` (Groq when unset or unknown)."""
        return self._providers[ProviderName.resolve(name)]

    @classmethod
    def from_config(cls, config: ProviderConfig) -> "ProviderRegistry":
        """Build every provider variant from configuration."""
        return cls(
            {
                ProviderName.GROQ: GroqProvider(
                    api_key=config.groq_api_key,
                    base_url=config.groq_base_url,
                    timeout=config.timeout_seconds,
                    max_attempts=config.groq_max_attempts,
                    retry_delay_seconds=config.groq_retry_delay_seconds,
                ),
                ProviderName.HUGGINGFACE: HuggingFaceProvider(
                    api_key=config.huggingface_api_key,
                    base_url=config.huggingface_base_url,
                    timeout=config.timeout_seconds,
                ),
                ProviderName.OPENROUTER: OpenRouterProvider(
                    api_key=config.openrouter_api_key,
                    base_url=config.openrouter_base_url,
                    timeout=config.timeout_seconds,
                    referer=config.openrouter_referer,
                    title=config.openrouter_title,
                ),
            }
        )
