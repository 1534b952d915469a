"""Chat API router for questions and regenerated answers."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from app.core.config import settings
from app.core.rate_limit import limiter
from app.dependencies import get_chat_service
from app.schemas.chat_schema import AnswerResponse, QueryRequest, RegenerateRequest
from app.schemas.response_schema import ApiResponse, success_response
from app.services.chat_service import ChatService

router = APIRouter(prefix="/api/v1/chat", tags=["chat"])

ChatServiceDep = Annotated[ChatService, Depends(get_chat_service)]


@router.post("/query", response_model=ApiResponse[AnswerResponse])
@limiter.limit(settings.rate_limit.completion_limit)
async def query(
    request: Request,
    body: QueryRequest,
    chat_service: ChatServiceDep,
) -> dict:
    """Ask a question within a session and return the formatted answer."""
    result = await chat_service.query(body)
    return success_response(result)


@router.post("/regenerate", response_model=ApiResponse[AnswerResponse])
@limiter.limit(settings.rate_limit.completion_limit)
async def regenerate(
    request: Request,
    body: RegenerateRequest,
    chat_service: ChatServiceDep,
) -> dict:
    """Generate an alternative answer to the session's latest question."""
    result = await chat_service.regenerate(body)
    return success_response(result)
