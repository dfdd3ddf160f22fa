from unittest.mock import MagicMock

import pytest
import requests

from core.config import AppSettings
from core.models import BackendError, BackendReply, TransportFailure
from core.services.backend_client import HttpChatBackend, build_backend


def fake_response(status_code=200, body=None, json_error=None):
    resp = MagicMock()
    resp.status_code = status_code
    resp.ok = status_code < 400
    if json_error is not None:
        resp.json.side_effect = json_error
    else:
        resp.json.return_value = body
    return resp


def make_backend(response=None, error=None):
    session = MagicMock()
    if error is not None:
        session.post.side_effect = error
    else:
        session.post.return_value = response
    return HttpChatBackend("http://backend.local/", timeout=5, session=session), session


def test_posts_query_to_chat_endpoint():
    backend, session = make_backend(fake_response(200, {"response": "Hello"}))

    result = backend.ask("What is this book about?")

    assert result == BackendReply("Hello")
    session.post.assert_called_once()
    args, kwargs = session.post.call_args
    assert args[0] == "http://backend.local/api/chat"
    assert kwargs["json"] == {"query": "What is this book about?"}
    assert kwargs["timeout"] == 5


def test_missing_response_field_is_empty_reply():
    backend, _ = make_backend(fake_response(200, {}))

    assert backend.ask("hi") == BackendReply("")


def test_error_status_carries_message():
    backend, _ = make_backend(fake_response(429, {"error": "rate limited"}))

    assert backend.ask("hi") == BackendError("rate limited")


def test_error_status_without_message():
    backend, _ = make_backend(fake_response(500, {"detail": "oops"}))

    assert backend.ask("hi") == BackendError(None)


def test_connection_error_is_transport_failure():
    backend, _ = make_backend(error=requests.ConnectionError("refused"))

    result = backend.ask("hi")

    assert isinstance(result, TransportFailure)
    assert "refused" in result.detail


def test_timeout_is_transport_failure():
    backend, _ = make_backend(error=requests.Timeout("slow"))

    assert isinstance(backend.ask("hi"), TransportFailure)


def test_unparsable_body_is_transport_failure():
    backend, _ = make_backend(fake_response(502, json_error=ValueError("no json")))

    result = backend.ask("hi")

    assert isinstance(result, TransportFailure)
    assert "502" in result.detail


def test_requires_base_url():
    with pytest.raises(RuntimeError):
        HttpChatBackend("  ")


def test_build_backend_without_address_returns_none():
    assert build_backend(AppSettings(api_url=None)) is None


def test_build_backend_uses_settings():
    backend = build_backend(AppSettings(api_url="https://api.example", request_timeout=12))

    assert backend.chat_url == "https://api.example/api/chat"
    assert backend.timeout == 12
