"""
UI layer
Purpose: Streamlit-only glue. Renders the transcript, collects user input and
suggestion taps, and delegates all work to the controller. Keeps UI concerns
(layout/widgets) separate from the conversation logic so the logic can be unit
tested without Streamlit.
"""

from typing import Optional
import streamlit as st

from core.config import load_settings
from core.controller import ConversationController
from core.logging_setup import setup_logging
from core.models import EntryKind, Sender, TranscriptEntry
from core.services.backend_client import build_backend


# ---------------------------
# Page config
# ---------------------------
st.set_page_config(
    page_title="From Behind a Young Man's Chest",
    page_icon="📖",
    layout="centered",
)
# ---------------------------
# UI constants
# ---------------------------
BOOK_TITLE = "From Behind a Young Man's Chest"
INPUT_PLACEHOLDER = "Ask about your poetry book..."
TRANSCRIPT_HEIGHT = 520
SUGGESTION_COLUMNS = 3

settings = load_settings()
setup_logging(settings.log_level)

# ---------------------------
# Session state init
# ---------------------------
st_session = st.session_state
st_session.setdefault("controller", None)
st_session.setdefault("pending_action", None)
st_session.setdefault("busy", False)


# ---------------------------
# Helpers
# ---------------------------
def get_controller() -> ConversationController:
    """Return this browser session's controller, creating it on first use."""
    if st_session.controller is None:
        st_session.controller = ConversationController(build_backend(settings))
    return st_session.controller


def reset_session():
    """Start a new conversation; the old transcript is discarded."""
    controller = st_session.get("controller")
    if controller is not None and not controller.reset():
        st.toast("Please wait for the current reply first.", icon="⏳")


def chat_role(entry: TranscriptEntry) -> str:
    return "user" if entry.sender == Sender.USER else "assistant"


def render_suggestions(labels, *, key_prefix: str, disabled: bool) -> Optional[str]:
    """Row of quick-reply buttons. Returns the tapped label, if any."""
    tapped = None
    cols = st.columns(min(SUGGESTION_COLUMNS, len(labels)))
    for i, label in enumerate(labels):
        with cols[i % len(cols)]:
            if st.button(label, key=f"{key_prefix}-{i}", disabled=disabled):
                tapped = label
    return tapped


def render_entry(entry: TranscriptEntry, key_prefix: str, *, disabled=False):
    """Draw one transcript entry. Returns a tapped suggestion label, if any."""
    with st.chat_message(chat_role(entry)):
        if entry.kind == EntryKind.PLAIN_TEXT:
            st.text(entry.content)
        elif entry.kind == EntryKind.RENDERED_MARKUP:
            st.html(entry.content)
        elif entry.kind == EntryKind.SUGGESTION_SET and entry.content:
            return render_suggestions(
                entry.content, key_prefix=key_prefix, disabled=disabled
            )
    return None


def queue_action(kind: str, text: str):
    """First phase: remember the action and rerun with every input locked."""
    st_session.pending_action = (kind, text)
    st.rerun()


def run_action(controller: ConversationController, box):
    """
    Second phase: dispatch the queued action. This run rendered the input and
    buttons disabled. New entries are drawn as they are appended, with a
    spinner while the backend is working; then the page reruns unlocked.
    """
    kind, text = st_session.pending_action

    def draw_live(entry: TranscriptEntry):
        with box:
            render_entry(
                entry, f"live-{len(controller.transcript)}", disabled=True
            )

    controller.subscribe(draw_live)
    try:
        with box:
            with st.spinner("Thinking…"):
                if kind == "suggestion":
                    controller.select_suggestion(text)
                else:
                    controller.submit_typed_message(text)
    except Exception as e:
        st.toast(f"Chat flow failed: {e}", icon="⚠️")
    finally:
        controller.unsubscribe(draw_live)
        st_session.pending_action = None
        st_session.busy = False
    st.rerun()


# ---------------------------
# SIDEBAR: backend status & session controls
# ---------------------------
controller = get_controller()
st_session.busy = (
    st_session.pending_action is not None or controller.request_in_flight
)

with st.sidebar:
    st.markdown("# Settings")
    if controller.is_ready():
        st.caption(f"Backend: `{settings.api_url}`")
    else:
        st.warning("API_URL is not set. Messages cannot reach the backend.")

    st.markdown("## Session Controls")
    st.write("Clear the conversation and start fresh.")
    st.button(
        "New conversation",
        type="primary",
        on_click=reset_session,
        disabled=st_session.busy,
    )

# ---------------------------
# Header
# ---------------------------
st.title(BOOK_TITLE)
st.caption("Powered by AI")

# ---------------------------
# Transcript
# ---------------------------
action = None
transcript_box = st.container(height=TRANSCRIPT_HEIGHT, border=True)
with transcript_box:
    for idx, entry in enumerate(controller.transcript):
        tapped = render_entry(entry, f"suggestion-{idx}", disabled=st_session.busy)
        if tapped:
            action = ("suggestion", tapped)

raw = st.chat_input(INPUT_PLACEHOLDER, disabled=st_session.busy)
if raw is not None and raw.strip():
    action = ("typed", raw)

if st_session.busy:
    if st_session.pending_action is not None:
        run_action(controller, transcript_box)
elif action:
    queue_action(*action)
