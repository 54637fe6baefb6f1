from __future__ import annotations

from typing import Any, List

import pytest
from requests import exceptions as req_exc

from tms_console.adapters.api_errors import ApiError, ApiTimeoutError
from tms_console.adapters.http_client import HttpConfig, RetryingSession


class _FlakySession:
    def __init__(self, outcomes: List[Any]) -> None:
        self._outcomes = list(outcomes)
        self.attempts = 0
        self.headers_seen: List[dict] = []

    def request(self, method, url, *, params=None, data=None, headers=None, timeout=None):
        self.attempts += 1
        self.headers_seen.append(dict(headers or {}))
        outcome = self._outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


def test_retries_timeouts_then_returns_response() -> None:
    sentinel = object()
    stub = _FlakySession([req_exc.Timeout("slow"), req_exc.ConnectionError("reset"), sentinel])
    session = RetryingSession(HttpConfig(retries=2), session=stub)

    assert session.request("GET", "http://api/x") is sentinel
    assert stub.attempts == 3


def test_exhausted_retries_raise_timeout_error() -> None:
    stub = _FlakySession([req_exc.Timeout("slow")] * 2)
    session = RetryingSession(HttpConfig(retries=1), session=stub)

    with pytest.raises(ApiTimeoutError) as info:
        session.request("POST", "http://api/x", json_body={"a": 1})

    assert stub.attempts == 2
    assert info.value.context == "POST http://api/x"


def test_other_request_errors_are_not_retried() -> None:
    stub = _FlakySession([req_exc.InvalidURL("bad url"), object()])
    session = RetryingSession(HttpConfig(retries=3), session=stub)

    with pytest.raises(ApiError):
        session.request("GET", "http://api/x")

    assert stub.attempts == 1


def test_token_provider_is_consulted_per_attempt() -> None:
    tokens = iter(["first", "second"])
    stub = _FlakySession([req_exc.Timeout("slow"), object()])
    session = RetryingSession(HttpConfig(retries=1), token_provider=lambda: next(tokens), session=stub)

    session.request("DELETE", "http://api/x")

    assert [h["Authorization"] for h in stub.headers_seen] == ["Bearer first", "Bearer second"]
