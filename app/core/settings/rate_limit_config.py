"""Rate limiting configuration."""

from pydantic import BaseModel


class RateLimitConfig(BaseModel, frozen=True):
    """Request rate limit settings."""

    storage_uri: str
    default_limit: str
    completion_limit: str

    @property
    def uses_redis(self) -> bool:
        """Check if limit counters are shared through Redis."""
        return self.storage_uri.startswith(("redis://", "rediss://"))
