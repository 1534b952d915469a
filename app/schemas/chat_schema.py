"""Chat request and response schemas."""

from pydantic import BaseModel, ConfigDict, Field


class QueryRequest(BaseModel):
    """Ask a new question within a session."""

    session_id: str = Field(..., min_length=1, max_length=36)
    question: str = Field(..., min_length=1, max_length=4000)
    model: str = Field(..., min_length=1, max_length=255)
    provider: str | None = Field(
        default=None,
        description="groq, huggingface or openrouter; anything else falls back to groq",
    )


class RegenerateRequest(BaseModel):
    """Request a new answer for the latest question of a session."""

    session_id: str = Field(..., min_length=1, max_length=36)
    model: str = Field(..., min_length=1, max_length=255)
    provider: str | None = None


class AnswerResponse(BaseModel):
    """Formatted answer returned by query and regenerate."""

    model_config = ConfigDict(frozen=True)

    answer: str
