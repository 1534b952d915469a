"""Chat session API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class StartSessionResponse(BaseModel):
    """Identifier of a freshly created session."""

    model_config = ConfigDict(frozen=True)

    session_id: str


class SessionSummary(BaseModel):
    """Single session entry in the list response."""

    model_config = ConfigDict(frozen=True, from_attributes=True)

    session_id: str
    title: str | None = None
    updated_at: datetime


class RenameSessionRequest(BaseModel):
    """Request to rename a session."""

    title: str = Field(..., min_length=1, max_length=255)


class HistoryEntry(BaseModel):
    """One answered question."""

    model_config = ConfigDict(frozen=True)

    question: str
    answer: str


class HistoryResponse(BaseModel):
    """Answered questions of a session, most recent first."""

    model_config = ConfigDict(frozen=True)

    history: list[HistoryEntry] = Field(default_factory=list)
