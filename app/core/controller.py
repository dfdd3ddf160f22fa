"""
Purpose: The single orchestration point for a chat session. Owns the
transcript, the draft input, and the single in-flight request flag.
Prevents the UI from knowing how the backend, parsing, or rendering work.

Key responsibilities:
- Turn a typed message or a tapped suggestion into one backend request.
- Append the user entry, then the agent entries for that turn.
- Parse successful replies (BUTTONS directive) and render their Markdown.
- Absorb every failure into the transcript as an agent message.
- Keep request_in_flight true only between dispatch and settlement.
- reset() discards the session and starts a fresh one.

Testing: Pure unit tests with a fake ChatBackend; no network.
"""

from __future__ import annotations
import logging
from typing import Optional

from .interfaces import ChatBackend, MarkdownRenderer, TranscriptListener
from .models import (
    BackendError,
    BackendReply,
    BackendResult,
    SessionState,
    TranscriptEntry,
    TransportFailure,
)
from .services.markdown_render import render_markdown
from .services.response_parser import parse_reply

logger = logging.getLogger(__name__)

CONFIG_ERROR_MESSAGE = "Configuration error: Backend URL is not set."
SERVER_ERROR_MESSAGE = "Server responded with an error."
NETWORK_ERROR_MESSAGE = (
    "Network error. Please check your connection or try again later."
)
UNEXPECTED_ERROR_MESSAGE = (
    "Something went wrong while handling the reply. Please try again."
)


class ConversationController:
    def __init__(
        self,
        backend: Optional[ChatBackend],
        *,
        renderer: MarkdownRenderer = render_markdown,
    ):
        self.backend: Optional[ChatBackend] = backend
        self.renderer: MarkdownRenderer = renderer
        self.state = SessionState()
        self._listeners: list[TranscriptListener] = []

    def is_ready(self) -> bool:
        """True if a backend address is configured."""
        return self.backend is not None

    @property
    def request_in_flight(self) -> bool:
        return self.state.request_in_flight

    @property
    def transcript(self) -> tuple[TranscriptEntry, ...]:
        """Read-only snapshot of the transcript."""
        return tuple(self.state.transcript)

    @property
    def draft(self) -> str:
        """
        Unsent input held by the controller. Callers that manage their own
        input widget (st.chat_input keeps its draft client-side) can ignore it;
        submit_typed_message still clears it.
        """
        return self.state.draft

    def set_draft(self, text: str) -> None:
        self.state.draft = text or ""

    def subscribe(self, listener: TranscriptListener) -> None:
        """Call `listener` with every entry appended from now on."""
        self._listeners.append(listener)

    def unsubscribe(self, listener: TranscriptListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def reset(self) -> bool:
        """
        End this session and start an empty one. Listeners are dropped too.
        Refused while a request is in flight, so its reply cannot land in
        the new session without the user entry that asked for it.
        """
        if self.state.request_in_flight:
            logger.warning("Reset rejected: a request is in flight")
            return False
        self.state = SessionState()
        self._listeners = []
        return True

    def submit_typed_message(self, text: str) -> bool:
        """
        Send typed text as a user message and clear the draft.
        Returns False when nothing was sent: blank text, or a request
        already in flight.
        """
        query = (text or "").strip()
        if not query:
            return False
        if not self._accepting(query):
            return False

        self._append(TranscriptEntry.user_text(query))
        self.state.draft = ""
        self._dispatch(query)
        return True

    def select_suggestion(self, label: str) -> bool:
        """Send a suggested reply exactly as if it had been typed. Draft is untouched."""
        query = (label or "").strip()
        if not query:
            return False
        if not self._accepting(query):
            return False

        self._append(TranscriptEntry.user_text(query))
        self._dispatch(query)
        return True

    def _accepting(self, query: str) -> bool:
        if self.state.request_in_flight:
            logger.warning("Rejected %r: a request is already in flight", query)
            return False
        return True

    def _append(self, *entries: TranscriptEntry) -> None:
        self.state.transcript.extend(entries)
        for entry in entries:
            for listener in list(self._listeners):
                listener(entry)

    def _dispatch(self, query: str) -> None:
        """
        One request per user action, no retries. The flag is cleared in
        `finally` so it never outlives this call, whatever happens.
        """
        self.state.request_in_flight = True
        try:
            if self.backend is None:
                logger.error("API_URL is not defined.")
                self._append(TranscriptEntry.agent_text(CONFIG_ERROR_MESSAGE))
                return

            logger.info("Dispatching query (%d chars)", len(query))
            try:
                result = self.backend.ask(query)
                entries = self._entries_for(result)
            except Exception:
                logger.exception("Unexpected error while handling the backend reply")
                entries = [TranscriptEntry.agent_text(UNEXPECTED_ERROR_MESSAGE)]
            self._append(*entries)
        finally:
            self.state.request_in_flight = False

    def _entries_for(self, result: BackendResult) -> list[TranscriptEntry]:
        """Map a backend outcome to the agent entries of one turn."""
        if isinstance(result, BackendReply):
            parsed = parse_reply(result.text)
            entries = [TranscriptEntry.agent_markup(self.renderer(parsed.display_text))]
            if parsed.suggestions:
                entries.append(TranscriptEntry.agent_suggestions(parsed.suggestions))
            return entries

        if isinstance(result, BackendError):
            message = (result.message or "").strip() or SERVER_ERROR_MESSAGE
            return [TranscriptEntry.agent_text(message)]

        if isinstance(result, TransportFailure):
            logger.error("Error contacting backend: %s", result.detail)
            return [TranscriptEntry.agent_text(NETWORK_ERROR_MESSAGE)]

        raise TypeError(f"Unsupported backend result: {type(result)!r}")
