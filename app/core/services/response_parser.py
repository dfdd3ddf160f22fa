"""
Purpose: Split an agent reply into the text to display and the quick-reply
labels requested by a `BUTTONS: a, b, c` directive.

The directive runs from the marker to the end of its line; anything on later
lines stays part of the reply text. Never raises: a missing or empty
directive simply means "no suggestions".
"""

from __future__ import annotations
import re
from typing import Optional

from ..models import ParsedReply

BUTTONS_DIRECTIVE = re.compile(r"BUTTONS:(.*)", re.IGNORECASE)


def split_labels(raw_labels: str) -> tuple[str, ...]:
    """Comma-separated labels, trimmed. Empty pieces are dropped, order and duplicates kept."""
    labels = (piece.strip() for piece in raw_labels.split(","))
    return tuple(label for label in labels if label)


def parse_reply(raw: Optional[str]) -> ParsedReply:
    text = raw or ""
    match = BUTTONS_DIRECTIVE.search(text)
    if not match:
        return ParsedReply(display_text=text, suggestions=())

    suggestions = split_labels(match.group(1))
    display = (text[: match.start()] + text[match.end() :]).strip()
    return ParsedReply(display_text=display, suggestions=suggestions)
