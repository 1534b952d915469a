"""Domain-specific configuration models."""

from app.core.settings.app_config import AppConfig
from app.core.settings.auth_config import AuthConfig
from app.core.settings.database_config import DatabaseConfig
from app.core.settings.image_search_config import ImageSearchConfig
from app.core.settings.provider_config import ProviderConfig
from app.core.settings.rate_limit_config import RateLimitConfig

__all__ = [
    "AppConfig",
    "AuthConfig",
    "DatabaseConfig",
    "ImageSearchConfig",
    "ProviderConfig",
    "RateLimitConfig",
]
