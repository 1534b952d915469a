"""Builds the bounded message window sent to a completion provider."""

from collections.abc import Sequence
from typing import Any

SYSTEM_PROMPT = "You are a helpful assistant."
CONTEXT_WINDOW_SIZE = 8


def system_turn() -> dict[str, str]:
    """Persona instruction prepended to every window (never stored)."""
    return {"role": "system", "content": SYSTEM_PROMPT}


def _as_turn(message: dict[str, Any]) -> dict[str, str]:
    return {"role": message["role"], "content": message["content"]}


def trim_window(
    messages: Sequence[dict[str, str]], limit: int = CONTEXT_WINDOW_SIZE
) -> list[dict[str, str]]:
    """Keep the ``limit`` most recent entries in order.

    The system turn gets no special treatment and is dropped first on long
    histories.
    """
    return list(messages[-limit:]) if limit > 0 else []


def build_query_window(
    stored: Sequence[dict[str, Any]],
    question: str,
    limit: int = CONTEXT_WINDOW_SIZE,
) -> list[dict[str, str]]:
    """System turn, stored transcript, then the new question."""
    window = [system_turn()]
    window.extend(_as_turn(message) for message in stored)
    window.append({"role": "user", "content": question})
    return trim_window(window, limit)


def build_regenerate_window(
    stored: Sequence[dict[str, Any]],
    limit: int = CONTEXT_WINDOW_SIZE,
) -> list[dict[str, str]]:
    """System turn plus every stored non-assistant turn; no new question."""
    # Earlier answers are left out, so the model sees prior questions unanswered.
    window = [system_turn()]
    window.extend(
        _as_turn(message) for message in stored if message.get("role") != "assistant"
    )
    return trim_window(window, limit)
