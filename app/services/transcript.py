"""Mutations applied to a loaded, ownership-checked chat session."""

from collections.abc import Sequence
from datetime import UTC, datetime
from typing import Any

from app.core.exceptions import NoChatHistoryError
from app.models.chat_session import ChatSession

TITLE_MAX_LENGTH = 40
TITLE_ELLIPSIS = "..."


def derive_title(question: str) -> str:
    """Title from a question, truncated to 40 characters plus an ellipsis."""
    if len(question) > TITLE_MAX_LENGTH:
        return question[:TITLE_MAX_LENGTH] + TITLE_ELLIPSIS
    return question


def last_user_turn(messages: Sequence[dict[str, Any]]) -> dict[str, Any]:
    """Most recent user turn; raises NoChatHistoryError when there is none."""
    if not messages:
        raise NoChatHistoryError()
    for message in reversed(messages):
        if message.get("role") == "user":
            return message
    raise NoChatHistoryError("No last user message.")


def _touch(session: ChatSession, now: datetime | None) -> None:
    now = now or datetime.now(UTC)
    previous = session.updated_at
    if previous is not None:
        # SQLite hands back naive datetimes.
        if previous.tzinfo is None:
            previous = previous.replace(tzinfo=UTC)
        now = max(now, previous)
    session.updated_at = now


def append_exchange(
    session: ChatSession,
    question: str,
    answer: str,
    now: datetime | None = None,
) -> None:
    """Store a question and its answer; the first question names the session."""
    # Reassign rather than mutate so the JSON column is flagged dirty.
    session.messages = [
        *session.messages,
        {"role": "user", "content": question},
        {"role": "assistant", "content": answer},
    ]
    _touch(session, now)
    if not session.title:
        session.title = derive_title(question)


def append_regenerated_answer(
    session: ChatSession,
    answer: str,
    now: datetime | None = None,
) -> None:
    """Store an alternative answer; earlier answers stay in the transcript."""
    session.messages = [*session.messages, {"role": "assistant", "content": answer}]
    _touch(session, now)
