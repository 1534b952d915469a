"""Image lookup configuration."""

from pydantic import BaseModel, SecretStr


class ImageSearchConfig(BaseModel, frozen=True):
    """Google Custom Search settings for the image lookup endpoint."""

    api_key: SecretStr
    engine_id: str
    timeout_seconds: float
