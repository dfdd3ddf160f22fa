"""
Canonical data shapes, shared truth for typing between layers.

Typical contents:
- TranscriptEntry (sender, kind, content): one line of the chat transcript.
- SessionState (transcript, draft, request_in_flight).
- Backend results: BackendReply / BackendError / TransportFailure.
- ParsedReply (display_text, suggestions).

Testing: Trivial; mostly types.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional, Union
from enum import Enum


class Sender(str, Enum):
    USER = "user"
    AGENT = "agent"


class EntryKind(str, Enum):
    PLAIN_TEXT = "plain-text"
    RENDERED_MARKUP = "rendered-markup"
    SUGGESTION_SET = "suggestion-set"


@dataclass(frozen=True)
class TranscriptEntry:
    sender: Sender
    kind: EntryKind
    content: Union[str, tuple[str, ...]]

    @classmethod
    def user_text(cls, text: str) -> "TranscriptEntry":
        return cls(Sender.USER, EntryKind.PLAIN_TEXT, text)

    @classmethod
    def agent_text(cls, text: str) -> "TranscriptEntry":
        return cls(Sender.AGENT, EntryKind.PLAIN_TEXT, text)

    @classmethod
    def agent_markup(cls, markup: str) -> "TranscriptEntry":
        return cls(Sender.AGENT, EntryKind.RENDERED_MARKUP, markup)

    @classmethod
    def agent_suggestions(cls, labels) -> "TranscriptEntry":
        return cls(Sender.AGENT, EntryKind.SUGGESTION_SET, tuple(labels))


@dataclass
class SessionState:
    transcript: list[TranscriptEntry] = field(default_factory=list)
    draft: str = ""
    request_in_flight: bool = False


@dataclass(frozen=True)
class ParsedReply:
    display_text: str
    suggestions: tuple[str, ...] = ()


@dataclass(frozen=True)
class BackendReply:
    """The backend answered; `text` is the raw reply payload."""

    text: str


@dataclass(frozen=True)
class BackendError:
    """The backend answered with a failure status."""

    message: Optional[str] = None


@dataclass(frozen=True)
class TransportFailure:
    """No usable response. `detail` is for logs, never for the user."""

    detail: str = ""


BackendResult = Union[BackendReply, BackendError, TransportFailure]
