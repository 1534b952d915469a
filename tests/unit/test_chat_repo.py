"""Unit tests for ChatRepository."""

from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock

import pytest
from sqlalchemy import select
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import PersistenceError
from app.models.chat_session import ChatSession
from app.repositories.chat_repo import ChatRepository

T0 = datetime(2026, 3, 1, 9, 0, tzinfo=UTC)


@pytest.fixture
def chat_repo(db_session: AsyncSession) -> ChatRepository:
    """Create a ChatRepository backed by the test DB session."""
    return ChatRepository(db_session)


async def _insert_session(
    db_session: AsyncSession,
    session_id: str,
    user_id: str = "user_1",
    title: str | None = None,
    messages: list[dict[str, str]] | None = None,
    updated_at: datetime = T0,
) -> ChatSession:
    """Helper: insert a session row with explicit updated_at."""
    session = ChatSession(
        session_id=session_id,
        user_id=user_id,
        title=title,
        messages=messages or [],
        updated_at=updated_at,
    )
    db_session.add(session)
    await db_session.flush()
    await db_session.refresh(session)
    return session


async def _reload(db_session: AsyncSession, session_id: str) -> ChatSession | None:
    """Helper: read a row back from the database, bypassing the identity map."""
    db_session.expire_all()
    result = await db_session.execute(
        select(ChatSession).where(ChatSession.session_id == session_id)
    )
    return result.scalar_one_or_none()


class TestFindSession:
    """Tests for ChatRepository.find_session."""

    @pytest.mark.asyncio
    async def test_owner_can_read(
        self, chat_repo: ChatRepository, db_session: AsyncSession
    ) -> None:
        await _insert_session(
            db_session, "s-1", messages=[{"role": "user", "content": "Hi"}]
        )

        session = await chat_repo.find_session("s-1", "user_1")

        assert session is not None
        assert session.messages == [{"role": "user", "content": "Hi"}]

    @pytest.mark.asyncio
    async def test_other_user_gets_nothing(
        self, chat_repo: ChatRepository, db_session: AsyncSession
    ) -> None:
        await _insert_session(db_session, "s-1", user_id="user_1")

        assert await chat_repo.find_session("s-1", "user_2") is None

    @pytest.mark.asyncio
    async def test_unknown_id(self, chat_repo: ChatRepository) -> None:
        assert await chat_repo.find_session("missing", "user_1") is None


class TestWrites:
    """Tests for create, save, rename and delete."""

    @pytest.mark.asyncio
    async def test_create_session_is_empty(
        self, chat_repo: ChatRepository, db_session: AsyncSession
    ) -> None:
        created = await chat_repo.create_session("s-new", "user_1")

        stored = await _reload(db_session, "s-new")
        assert created.id is not None
        assert stored is not None
        assert stored.user_id == "user_1"
        assert stored.messages == []
        assert stored.title is None

    @pytest.mark.asyncio
    async def test_save_persists_transcript(
        self, chat_repo: ChatRepository, db_session: AsyncSession
    ) -> None:
        session = await _insert_session(db_session, "s-1")

        session.messages = [
            {"role": "user", "content": "Q1"},
            {"role": "assistant", "content": "A1"},
        ]
        session.title = "Q1"
        await chat_repo.save(session)

        stored = await _reload(db_session, "s-1")
        assert stored is not None
        assert stored.title == "Q1"
        assert stored.messages == [
            {"role": "user", "content": "Q1"},
            {"role": "assistant", "content": "A1"},
        ]

    @pytest.mark.asyncio
    async def test_rename_owned(
        self, chat_repo: ChatRepository, db_session: AsyncSession
    ) -> None:
        await _insert_session(db_session, "s-1", title="Old")

        matched = await chat_repo.update_session_title("s-1", "user_1", "New")

        assert matched is True
        stored = await _reload(db_session, "s-1")
        assert stored is not None and stored.title == "New"

    @pytest.mark.asyncio
    async def test_rename_foreign_is_ignored(
        self, chat_repo: ChatRepository, db_session: AsyncSession
    ) -> None:
        await _insert_session(db_session, "s-1", title="Old")

        matched = await chat_repo.update_session_title("s-1", "user_2", "Hijacked")

        assert matched is False
        stored = await _reload(db_session, "s-1")
        assert stored is not None and stored.title == "Old"

    @pytest.mark.asyncio
    async def test_delete_owned(
        self, chat_repo: ChatRepository, db_session: AsyncSession
    ) -> None:
        await _insert_session(db_session, "s-1")

        assert await chat_repo.delete_session("s-1", "user_1") is True
        assert await _reload(db_session, "s-1") is None

    @pytest.mark.asyncio
    async def test_delete_foreign_keeps_row(
        self, chat_repo: ChatRepository, db_session: AsyncSession
    ) -> None:
        await _insert_session(db_session, "s-1")

        assert await chat_repo.delete_session("s-1", "user_2") is False
        assert await _reload(db_session, "s-1") is not None

    @pytest.mark.asyncio
    async def test_delete_unknown(self, chat_repo: ChatRepository) -> None:
        assert await chat_repo.delete_session("missing", "user_1") is False


class TestListSessions:
    """Tests for ChatRepository.find_sessions_by_user."""

    @pytest.mark.asyncio
    async def test_most_recent_first(
        self, chat_repo: ChatRepository, db_session: AsyncSession
    ) -> None:
        await _insert_session(db_session, "s-old", title="Old", updated_at=T0)
        await _insert_session(
            db_session, "s-new", title="New", updated_at=T0 + timedelta(hours=2)
        )
        await _insert_session(db_session, "s-mid", updated_at=T0 + timedelta(hours=1))

        rows = await chat_repo.find_sessions_by_user("user_1")

        assert [row.session_id for row in rows] == ["s-new", "s-mid", "s-old"]
        assert rows[0].title == "New"
        assert rows[1].title is None

    @pytest.mark.asyncio
    async def test_only_own_sessions(
        self, chat_repo: ChatRepository, db_session: AsyncSession
    ) -> None:
        await _insert_session(db_session, "s-mine")
        await _insert_session(db_session, "s-theirs", user_id="user_2")

        rows = await chat_repo.find_sessions_by_user("user_1")

        assert [row.session_id for row in rows] == ["s-mine"]

    @pytest.mark.asyncio
    async def test_no_sessions(self, chat_repo: ChatRepository) -> None:
        assert await chat_repo.find_sessions_by_user("nobody") == []


class TestStoreFailures:
    """Database errors surface as PersistenceError."""

    @pytest.mark.asyncio
    async def test_query_failure_translated(self) -> None:
        session = AsyncMock(spec=AsyncSession)
        session.execute.side_effect = OperationalError(
            "SELECT 1", {}, Exception("server has gone away")
        )
        chat_repo = ChatRepository(session)

        with pytest.raises(PersistenceError) as exc_info:
            await chat_repo.find_session("s-1", "user_1")

        assert exc_info.value.operation == "find_session"
        assert exc_info.value.status_code == 500
        assert exc_info.value.code == "PERSISTENCE_ERROR"
