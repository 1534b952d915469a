"""Session orchestration: ownership checks, completion, transcript updates."""

import uuid

import structlog

from app.core.exceptions import AuthorizationError, ProviderError
from app.models.chat_session import ChatSession
from app.providers.base import Messages
from app.providers.registry import ProviderRegistry
from app.repositories.chat_repo import ChatRepository
from app.schemas.chat_schema import AnswerResponse, QueryRequest, RegenerateRequest
from app.schemas.session_schema import (
    HistoryResponse,
    SessionSummary,
    StartSessionResponse,
)
from app.services.answer_formatter import format_answer
from app.services.context_window import build_query_window, build_regenerate_window
from app.services.history import project_history
from app.services.transcript import (
    append_exchange,
    append_regenerated_answer,
    last_user_turn,
)

logger = structlog.get_logger()


class ChatService:
    """Handles every session operation for one authenticated user."""

    def __init__(
        self,
        chat_repo: ChatRepository,
        user_id: str,
        providers: ProviderRegistry,
    ) -> None:
        self._chat_repo = chat_repo
        self._user_id = user_id
        self._providers = providers

    async def start_session(self) -> StartSessionResponse:
        """Create an empty session owned by the current user."""
        session_id = str(uuid.uuid4())
        await self._chat_repo.create_session(session_id=session_id, user_id=self._user_id)
        logger.info("Chat session started", session_id=session_id, user_id=self._user_id)
        return StartSessionResponse(session_id=session_id)

    async def query(self, request: QueryRequest) -> AnswerResponse:
        """Answer a new question and store both turns."""
        session = await self._get_owned_session(request.session_id)
        window = build_query_window(session.messages, request.question)

        answer = await self._generate_answer(
            session, window, request.model, request.provider
        )

        append_exchange(session, request.question, answer)
        await self._chat_repo.save(session)
        return AnswerResponse(answer=answer)

    async def regenerate(self, request: RegenerateRequest) -> AnswerResponse:
        """Produce an alternative answer to the latest question.

        Raises:
            AuthorizationError: The session is missing or not owned by the user.
            NoChatHistoryError: The session holds no user turn to answer.
        """
        session = await self._get_owned_session(request.session_id)
        last_user_turn(session.messages)
        window = build_regenerate_window(session.messages)

        answer = await self._generate_answer(
            session, window, request.model, request.provider
        )

        append_regenerated_answer(session, answer)
        await self._chat_repo.save(session)
        return AnswerResponse(answer=answer)

    async def fetch_history(self, session_id: str) -> HistoryResponse:
        """Answered questions, newest first; empty for unknown sessions."""
        session = await self._chat_repo.find_session(session_id, self._user_id)
        if session is None:
            return HistoryResponse(history=[])
        return HistoryResponse(history=project_history(session.messages))

    async def list_sessions(self) -> list[SessionSummary]:
        """All sessions of the current user, most recently updated first."""
        rows = await self._chat_repo.find_sessions_by_user(self._user_id)
        return [SessionSummary.model_validate(row) for row in rows]

    async def rename_session(self, session_id: str, title: str) -> None:
        """Set an explicit title; unknown sessions are left untouched."""
        updated = await self._chat_repo.update_session_title(
            session_id, self._user_id, title
        )
        logger.info("Chat session renamed", session_id=session_id, matched=updated)

    async def delete_session(self, session_id: str) -> None:
        """Delete a session; deleting an unknown session is a no-op."""
        deleted = await self._chat_repo.delete_session(session_id, self._user_id)
        logger.info("Chat session deleted", session_id=session_id, matched=deleted)

    async def _get_owned_session(self, session_id: str) -> ChatSession:
        session = await self._chat_repo.find_session(session_id, self._user_id)
        if session is None:
            logger.warning(
                "Session not owned by user",
                session_id=session_id,
                user_id=self._user_id,
            )
            raise AuthorizationError()
        return session

    async def _generate_answer(
        self,
        session: ChatSession,
        window: Messages,
        model: str,
        provider_name: str | None,
    ) -> str:
        provider = self._providers.get(provider_name)
        try:
            raw = await provider.complete(model, window)
        except ProviderError:
            logger.exception(
                "Completion failed",
                session_id=session.session_id,
                provider=provider.name.value,
                model=model,
            )
            raise
        logger.info(
            "Answer generated",
            session_id=session.session_id,
            provider=provider.name.value,
            model=model,
            window_size=len(window),
        )
        return format_answer(raw)
