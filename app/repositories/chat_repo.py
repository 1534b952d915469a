"""Chat repository for session document operations."""

import functools
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import ParamSpec, TypeVar

import structlog
from sqlalchemy import and_, delete, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import PersistenceError
from app.models.chat_session import ChatSession

logger = structlog.get_logger()

P = ParamSpec("P")
T = TypeVar("T")


def store_operation(func: Callable[P, Awaitable[T]]) -> Callable[P, Awaitable[T]]:
    """Translate SQLAlchemy failures into PersistenceError."""

    @functools.wraps(func)
    async def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
        try:
            return await func(*args, **kwargs)
        except SQLAlchemyError as exc:
            logger.exception("Session store operation failed", operation=func.__name__)
            raise PersistenceError(func.__name__) from exc

    return wrapper


@dataclass(frozen=True)
class SessionSummary:
    """Immutable result object for session list queries."""

    session_id: str
    title: str | None
    updated_at: datetime


class ChatRepository:
    """Encapsulates chat session queries, always scoped to an owner."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    @store_operation
    async def find_session(self, session_id: str, user_id: str) -> ChatSession | None:
        """Find a session by id; sessions of other users are never returned."""
        result = await self._session.execute(
            select(ChatSession).where(
                and_(
                    ChatSession.session_id == session_id,
                    ChatSession.user_id == user_id,
                )
            )
        )
        return result.scalar_one_or_none()

    @store_operation
    async def create_session(self, session_id: str, user_id: str) -> ChatSession:
        """Create an empty chat session."""
        session = ChatSession(
            session_id=session_id,
            user_id=user_id,
            title=None,
            messages=[],
            updated_at=datetime.now(UTC),
        )
        self._session.add(session)
        await self._session.flush()
        return session

    @store_operation
    async def save(self, session: ChatSession) -> None:
        """Write the whole session row back."""
        self._session.add(session)
        await self._session.flush()

    @store_operation
    async def delete_session(self, session_id: str, user_id: str) -> bool:
        """Delete a session owned by ``user_id``. Returns whether a row matched."""
        result = await self._session.execute(
            delete(ChatSession).where(
                and_(
                    ChatSession.session_id == session_id,
                    ChatSession.user_id == user_id,
                )
            )
        )
        return bool(result.rowcount)

    @store_operation
    async def find_sessions_by_user(self, user_id: str) -> list[SessionSummary]:
        """List a user's sessions, most recently updated first."""
        result = await self._session.execute(
            select(
                ChatSession.session_id,
                ChatSession.title,
                ChatSession.updated_at,
            )
            .where(ChatSession.user_id == user_id)
            .order_by(ChatSession.updated_at.desc(), ChatSession.id.desc())
        )
        return [
            SessionSummary(
                session_id=row.session_id,
                title=row.title,
                updated_at=row.updated_at,
            )
            for row in result
        ]

    @store_operation
    async def update_session_title(
        self, session_id: str, user_id: str, title: str
    ) -> bool:
        """Rename a session owned by ``user_id``. Returns whether a row matched."""
        result = await self._session.execute(
            update(ChatSession)
            .where(
                and_(
                    ChatSession.session_id == session_id,
                    ChatSession.user_id == user_id,
                )
            )
            .values(title=title)
        )
        return bool(result.rowcount)
