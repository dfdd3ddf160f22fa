"""
Purpose: Thin HTTP client for the chat backend.
One place for the endpoint path, payload shape, and response normalization.

The backend receives {"query": ...} and answers {"response": ...} on success
or {"error": ...} on failure. Every outcome is mapped to a tagged result so
the controller never inspects raw HTTP.

Testing: Mock the requests session; assert status/body mapping.
"""

from __future__ import annotations
import logging
from typing import Optional

import requests

from ..config import AppSettings
from ..models import BackendError, BackendReply, BackendResult, TransportFailure

logger = logging.getLogger(__name__)

CHAT_PATH = "/api/chat"


class HttpChatBackend:
    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 60.0,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = (base_url or "").strip().rstrip("/")
        if not self.base_url:
            raise RuntimeError("Missing API_URL")
        self.timeout = timeout
        self.session = session or requests.Session()

    @property
    def chat_url(self) -> str:
        return f"{self.base_url}{CHAT_PATH}"

    def ask(self, query: str) -> BackendResult:
        try:
            resp = self.session.post(
                self.chat_url,
                json={"query": query},
                headers={"Content-Type": "application/json"},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.warning("Backend unreachable at %s: %s", self.chat_url, e)
            return TransportFailure(detail=str(e))

        try:
            data = resp.json()
        except ValueError as e:
            logger.warning(
                "Backend returned a non-JSON body (HTTP %s): %s", resp.status_code, e
            )
            return TransportFailure(detail=f"HTTP {resp.status_code}: invalid JSON")

        if not isinstance(data, dict):
            data = {}

        if resp.ok:
            text = data.get("response") or ""
            return BackendReply(text=str(text))

        message = data.get("error")
        logger.info("Backend error HTTP %s: %s", resp.status_code, message)
        return BackendError(message=str(message) if message else None)


def build_backend(settings: AppSettings) -> Optional[HttpChatBackend]:
    """Return a backend client, or None when no backend address is configured."""
    if not settings.has_backend:
        logger.error("API_URL is not defined.")
        return None
    return HttpChatBackend(settings.api_url, timeout=settings.request_timeout)
