"""Unit tests for the history projection."""

from app.schemas.session_schema import HistoryEntry
from app.services.history import project_history


def _user(content: str) -> dict[str, str]:
    return {"role": "user", "content": content}


def _assistant(content: str) -> dict[str, str]:
    return {"role": "assistant", "content": content}


class TestProjectHistory:
    """Tests for project_history."""

    def test_empty(self) -> None:
        assert project_history([]) == []
        assert project_history(None) == []

    def test_trailing_unanswered_question_skipped(self) -> None:
        result = project_history([_user("Q1"), _assistant("A1"), _user("Q2")])
        assert result == [HistoryEntry(question="Q1", answer="A1")]

    def test_most_recent_first(self) -> None:
        result = project_history(
            [_user("Q1"), _assistant("A1"), _user("Q2"), _assistant("A2")]
        )
        assert result == [
            HistoryEntry(question="Q2", answer="A2"),
            HistoryEntry(question="Q1", answer="A1"),
        ]

    def test_failed_question_in_the_middle(self) -> None:
        result = project_history(
            [_user("Q1"), _user("Q2"), _assistant("A2")]
        )
        assert result == [HistoryEntry(question="Q2", answer="A2")]

    def test_regenerated_answer_not_paired_twice(self) -> None:
        result = project_history(
            [_user("Q1"), _assistant("A1"), _assistant("A1 again")]
        )
        assert result == [HistoryEntry(question="Q1", answer="A1")]

    def test_malformed_entries_tolerated(self) -> None:
        messages = [
            "garbage",
            {"role": "user"},
            _assistant("orphan"),
            None,
            _user("Q1"),
            _assistant("A1"),
            {"role": "user", "content": 42},
            _assistant("A2"),
        ]
        assert project_history(messages) == [HistoryEntry(question="Q1", answer="A1")]
