"""Image lookup schemas."""

from pydantic import BaseModel, ConfigDict, Field


class ImageLookupRequest(BaseModel):
    """Names to look up images for."""

    names: list[str] = Field(..., min_length=1, max_length=20)


class ImageResult(BaseModel):
    """Lookup outcome for one name; ``fallback`` is None when nothing was found."""

    model_config = ConfigDict(frozen=True)

    name: str
    fallback: str | None = None
