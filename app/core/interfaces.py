"""
Abstractions for pluggable services. Inversion of control: core depends
on interfaces, not concrete services. Enables fakes in tests and future swaps.

Common protocols:
- ChatBackend.ask(query) -> BackendResult
- MarkdownRenderer(text) -> str

Testing: Use simple fake implementations to test the controller without network calls.
"""

from __future__ import annotations
from typing import Callable, Protocol
from .models import BackendResult, TranscriptEntry


class ChatBackend(Protocol):
    def ask(self, query: str) -> BackendResult: ...


class MarkdownRenderer(Protocol):
    def __call__(self, text: str) -> str: ...


TranscriptListener = Callable[[TranscriptEntry], None]
