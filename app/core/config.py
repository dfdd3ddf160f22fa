"""
Purpose: Read runtime settings from the environment (and a local .env file).
The only setting the chat flow truly depends on is the backend address.
"""

from __future__ import annotations
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

DEFAULT_REQUEST_TIMEOUT = 60.0
DEFAULT_LOG_LEVEL = "INFO"


@dataclass(frozen=True)
class AppSettings:
    api_url: Optional[str] = None
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    log_level: str = DEFAULT_LOG_LEVEL

    @property
    def has_backend(self) -> bool:
        return bool(self.api_url)


def _parse_timeout(raw: Optional[str]) -> float:
    try:
        value = float(raw) if raw else DEFAULT_REQUEST_TIMEOUT
    except ValueError:
        return DEFAULT_REQUEST_TIMEOUT
    return value if value > 0 else DEFAULT_REQUEST_TIMEOUT


def load_settings(*, use_dotenv: bool = True) -> AppSettings:
    """Build AppSettings from API_URL, REQUEST_TIMEOUT and LOG_LEVEL."""
    if use_dotenv:
        load_dotenv()

    api_url = (os.getenv("API_URL") or "").strip().rstrip("/")
    return AppSettings(
        api_url=api_url or None,
        request_timeout=_parse_timeout(os.getenv("REQUEST_TIMEOUT")),
        log_level=(os.getenv("LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper(),
    )
