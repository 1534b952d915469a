"""Application configuration using Pydantic Settings V2."""

from functools import cached_property
from typing import Literal

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from app.core.settings import (
    AppConfig,
    AuthConfig,
    DatabaseConfig,
    ImageSearchConfig,
    ProviderConfig,
    RateLimitConfig,
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Flat fields are loaded directly from environment variables.
    Domain properties provide grouped access (e.g. settings.providers.groq_base_url).
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Groq
    groq_api_key: SecretStr = Field(
        default=SecretStr(""),
        description="Groq API key",
    )
    groq_base_url: str = Field(
        default="https://api.groq.com/openai/v1",
        description="Groq OpenAI-compatible endpoint",
    )
    groq_max_attempts: int = Field(
        default=3,
        ge=1,
        le=10,
        description="Attempts per Groq completion (transient upstream errors only)",
    )
    groq_retry_delay_seconds: float = Field(
        default=2.0,
        ge=0,
        le=30,
        description="Fixed delay between Groq attempts",
    )

    # Hugging Face
    huggingface_api_key: SecretStr = Field(
        default=SecretStr(""),
        description="Hugging Face access token",
    )
    huggingface_base_url: str = Field(
        default="https://router.huggingface.co/v1",
        description="Hugging Face inference router endpoint",
    )

    # OpenRouter
    openrouter_api_key: SecretStr = Field(
        default=SecretStr(""),
        description="OpenRouter API key",
    )
    openrouter_base_url: str = Field(
        default="https://openrouter.ai/api/v1",
        description="OpenRouter endpoint",
    )
    openrouter_referer: str = Field(
        default="http://localhost:3000",
        description="HTTP-Referer header sent to OpenRouter",
    )
    openrouter_title: str = Field(
        default="AI Query Assistant",
        description="X-Title header sent to OpenRouter",
    )

    provider_timeout_seconds: float = Field(
        default=60.0,
        gt=0,
        le=600,
        description="Deadline for a single provider request",
    )

    # Image search
    google_api_key: SecretStr = Field(
        default=SecretStr(""),
        description="Google Custom Search API key",
    )
    google_cse_id: str = Field(
        default="",
        description="Google Custom Search engine id",
    )
    image_search_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        le=60,
        description="Deadline for a single image lookup",
    )

    # App
    app_name: str = Field(
        default="query-assistant",
        description="Application name",
    )
    app_env: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Application environment",
    )
    debug: bool = Field(
        default=True,
        description="Debug mode",
    )
    cors_origins: str = Field(
        default="",
        description="Comma-separated CORS origins outside development",
    )

    # JWT Auth
    jwt_secret_key: SecretStr = Field(
        description="Secret used to verify identity-provider access tokens",
    )
    jwt_algorithm: str = Field(
        default="HS256",
        description="JWT signing algorithm",
    )
    jwt_leeway_seconds: int = Field(
        default=0,
        ge=0,
        le=300,
        description="Clock skew tolerated when checking token expiry",
    )

    # Database
    database_url: SecretStr = Field(
        description="Async database URL (mysql+aiomysql://...)",
    )
    database_pool_size: int = Field(
        default=10,
        ge=1,
        le=100,
        description="Connection pool size",
    )
    database_max_overflow: int = Field(
        default=20,
        ge=0,
        le=100,
        description="Connections allowed beyond the pool size",
    )

    # Rate limiting
    rate_limit_storage_uri: str = Field(
        default="memory://",
        description="Limit counter storage (memory:// or redis://...)",
    )
    default_rate_limit: str = Field(
        default="120/minute",
        description="Rate limit applied to every endpoint",
    )
    completion_rate_limit: str = Field(
        default="20/minute",
        description="Rate limit for query and regenerate endpoints",
    )

    # --- Domain properties ---

    @cached_property
    def providers(self) -> ProviderConfig:
        """Completion provider configuration."""
        return ProviderConfig(
            groq_api_key=self.groq_api_key,
            groq_base_url=self.groq_base_url,
            groq_max_attempts=self.groq_max_attempts,
            groq_retry_delay_seconds=self.groq_retry_delay_seconds,
            huggingface_api_key=self.huggingface_api_key,
            huggingface_base_url=self.huggingface_base_url,
            openrouter_api_key=self.openrouter_api_key,
            openrouter_base_url=self.openrouter_base_url,
            openrouter_referer=self.openrouter_referer,
            openrouter_title=self.openrouter_title,
            timeout_seconds=self.provider_timeout_seconds,
        )

    @cached_property
    def image_search(self) -> ImageSearchConfig:
        """Image lookup configuration."""
        return ImageSearchConfig(
            api_key=self.google_api_key,
            engine_id=self.google_cse_id,
            timeout_seconds=self.image_search_timeout_seconds,
        )

    @cached_property
    def app(self) -> AppConfig:
        """Application environment configuration."""
        return AppConfig(
            name=self.app_name,
            env=self.app_env,
            debug=self.debug,
            cors_origins=tuple(
                origin.strip() for origin in self.cors_origins.split(",") if origin.strip()
            ),
        )

    @cached_property
    def auth(self) -> AuthConfig:
        """JWT verification configuration."""
        return AuthConfig(
            secret_key=self.jwt_secret_key,
            algorithm=self.jwt_algorithm,
            leeway_seconds=self.jwt_leeway_seconds,
        )

    @cached_property
    def database(self) -> DatabaseConfig:
        """Database connection configuration."""
        return DatabaseConfig(
            url=self.database_url,
            pool_size=self.database_pool_size,
            max_overflow=self.database_max_overflow,
        )

    @cached_property
    def rate_limit(self) -> RateLimitConfig:
        """Rate limiting configuration."""
        return RateLimitConfig(
            storage_uri=self.rate_limit_storage_uri,
            default_limit=self.default_rate_limit,
            completion_limit=self.completion_rate_limit,
        )


# Global settings instance
settings = Settings()
