"""Question/answer view over a flat transcript."""

from collections.abc import Mapping, Sequence
from typing import Any

from app.schemas.session_schema import HistoryEntry


def _field(message: Any, key: str) -> Any:
    if isinstance(message, Mapping):
        return message.get(key)
    return None


def project_history(messages: Sequence[Any] | None) -> list[HistoryEntry]:
    """Pair each user turn with the assistant turn right after it, newest first.

    Unanswered questions and malformed entries are skipped.
    """
    if not messages:
        return []
    pairs: list[HistoryEntry] = []
    i = 0
    while i < len(messages) - 1:
        current, following = messages[i], messages[i + 1]
        question = _field(current, "content")
        answer = _field(following, "content")
        if (
            _field(current, "role") == "user"
            and _field(following, "role") == "assistant"
            and isinstance(question, str)
            and isinstance(answer, str)
        ):
            pairs.append(HistoryEntry(question=question, answer=answer))
            i += 2
        else:
            i += 1
    pairs.reverse()
    return pairs
