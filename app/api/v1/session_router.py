"""Chat session API router."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from app.dependencies import get_chat_service
from app.schemas.response_schema import ApiResponse, ack_response, success_response
from app.schemas.session_schema import (
    HistoryResponse,
    RenameSessionRequest,
    SessionSummary,
    StartSessionResponse,
)
from app.services.chat_service import ChatService

router = APIRouter(prefix="/api/v1/sessions", tags=["sessions"])

ChatServiceDep = Annotated[ChatService, Depends(get_chat_service)]


@router.post(
    "",
    response_model=ApiResponse[StartSessionResponse],
    status_code=status.HTTP_201_CREATED,
)
async def start_session(chat_service: ChatServiceDep) -> dict:
    """Create an empty chat session."""
    result = await chat_service.start_session()
    return success_response(result, status=201)


@router.get("", response_model=ApiResponse[list[SessionSummary]])
async def list_sessions(chat_service: ChatServiceDep) -> dict:
    """List the current user's sessions, most recently updated first."""
    result = await chat_service.list_sessions()
    return success_response(result)


@router.get("/{session_id}/history", response_model=ApiResponse[HistoryResponse])
async def fetch_history(session_id: str, chat_service: ChatServiceDep) -> dict:
    """Answered questions of a session, most recent first."""
    result = await chat_service.fetch_history(session_id)
    return success_response(result)


@router.patch("/{session_id}", response_model=ApiResponse[None])
async def rename_session(
    session_id: str,
    request: RenameSessionRequest,
    chat_service: ChatServiceDep,
) -> dict:
    """Rename a session."""
    await chat_service.rename_session(session_id=session_id, title=request.title)
    return ack_response("Renamed session.")


@router.delete("/{session_id}", response_model=ApiResponse[None])
async def delete_session(session_id: str, chat_service: ChatServiceDep) -> dict:
    """Delete a session."""
    await chat_service.delete_session(session_id)
    return ack_response("Deleted session.")
