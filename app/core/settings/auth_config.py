"""JWT authentication configuration."""

from pydantic import BaseModel, SecretStr


class AuthConfig(BaseModel, frozen=True):
    """Settings for verifying identity-provider access tokens."""

    secret_key: SecretStr
    algorithm: str
    leeway_seconds: int
