"""Renders provider text into the small HTML subset the client displays.

The stages run in a fixed order: emphasis must see ``**`` already consumed
by the strong stage, and list wrapping works on the ``<li>`` lines produced
by the list item stage.
"""

import re
from collections.abc import Callable

_STRONG = re.compile(r"\*\*(.+?)\*\*")
_EMPHASIS = re.compile(r"\*(?!\s)(.+?)\*")
_LIST_ITEM = re.compile(r"^\*\s(.+)", re.MULTILINE)
_LIST_RUN = re.compile(r"<li>.*</li>(?:\s*<li>.*</li>)*")
_ITEM_GAP = re.compile(r"</li>\s*<li>")
_NEWLINES = re.compile(r"\n+")


def render_strong(text: str) -> str:
    return _STRONG.sub(r"<strong>\1</strong>", text)


def render_emphasis(text: str) -> str:
    return _EMPHASIS.sub(r"<em>\1</em>", text)


def render_list_items(text: str) -> str:
    return _LIST_ITEM.sub(r"<li>\1</li>", text)


def wrap_lists(text: str) -> str:
    """Wrap each run of consecutive list item lines in one ``<ul>``."""
    return _LIST_RUN.sub(lambda match: f"<ul>{match.group(0)}</ul>", text)


def join_list_items(text: str) -> str:
    return _ITEM_GAP.sub("</li><li>", text)


def render_line_breaks(text: str) -> str:
    return _NEWLINES.sub("<br>", text)


FORMAT_STAGES: tuple[Callable[[str], str], ...] = (
    render_strong,
    render_emphasis,
    render_list_items,
    wrap_lists,
    join_list_items,
    render_line_breaks,
)


def format_answer(text: str) -> str:
    """Apply every formatting stage in order."""
    for stage in FORMAT_STAGES:
        text = stage(text)
    return text
