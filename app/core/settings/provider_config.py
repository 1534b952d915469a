"""Completion provider configuration."""

from pydantic import BaseModel, SecretStr


class ProviderConfig(BaseModel, frozen=True):
    """Completion provider settings shared by all provider variants."""

    groq_api_key: SecretStr
    groq_base_url: str
    groq_max_attempts: int
    groq_retry_delay_seconds: float
    huggingface_api_key: SecretStr
    huggingface_base_url: str
    openrouter_api_key: SecretStr
    openrouter_base_url: str
    openrouter_referer: str
    openrouter_title: str
    timeout_seconds: float
