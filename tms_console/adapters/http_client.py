"""Shared HTTP transport utilities for the TMS REST adapters.

This module provides a thin wrapper around ``requests.Session`` so every
resource adapter shares timeout policy, retry behavior, and bearer-token
header construction.

Dependencies:
    - ``requests`` for network I/O.
    - ``tms_console.adapters.api_errors.ApiTimeoutError`` for typed transport
      failures.

Call context:
    - Constructed by ``tms_console.app.controller.AppController`` and handed to
      the resource adapters (``tenant_rest``, ``group_rest``...).
    - Used only inside adapter layer methods; stores interact through ports.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

import requests
from requests import exceptions as req_exc

from tms_console.adapters.api_errors import ApiError, ApiTimeoutError

TokenProvider = Callable[[], Optional[str]]


@dataclass
class HttpConfig:
    """Timeout and retry configuration for adapter HTTP calls.

    Attributes:
        request_timeout_s: Default timeout in seconds for JSON API calls.
        retries: Number of retry attempts after the initial request. Only
            timeouts and connection failures are retried.
    """
    request_timeout_s: int = 10
    retries: int = 2


class RetryingSession:
    """Shared requests wrapper with bearer-token headers and retry loops.

    This class is intentionally transport-only. Callers provide endpoint URLs and
    decide how to map non-2xx responses into domain errors.
    """

    def __init__(
        self,
        cfg: HttpConfig,
        *,
        token_provider: Optional[TokenProvider] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        """Create a retry-enabled session.

        Args:
            cfg: Shared timeout and retry settings.
            token_provider: Callable returning the current access token, or
                ``None`` for unauthenticated calls. Called once per attempt so
                refreshed tokens are picked up.
            session: Optional pre-built session (tests pass a stub).
        """
        self.session = session if session is not None else requests.Session()
        self.cfg = cfg
        self.token_provider = token_provider

    def _headers(self, json_body: bool = False) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        token = self.token_provider() if self.token_provider else None
        if token:
            headers["Authorization"] = f"Bearer {token}"
        if json_body:
            headers["Content-Type"] = "application/json"
        return headers

    def request(
        self,
        method: str,
        url: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json_body: Optional[Any] = None,
        timeout: Optional[int] = None,
    ) -> requests.Response:
        """Send a request with retries on timeout/connectivity failures.

        Args:
            method: HTTP verb (``GET``, ``POST``, ``PUT``, ``PATCH``, ``DELETE``).
            url: Absolute endpoint URL.
            params: Optional query parameter mapping.
            json_body: Optional payload serialized to JSON text.
            timeout: Optional timeout override in seconds.

        Returns:
            ``requests.Response`` from the first attempt that reached the server.

        Raises:
            ApiTimeoutError: If all attempts fail with timeout/connection errors.
            ApiError: For any other ``requests`` failure.
        """
        verb = method.upper()
        context = f"{verb} {url}"
        data = None if json_body is None else json.dumps(json_body)
        last_err: ApiTimeoutError | None = None
        attempts = self.cfg.retries + 1
        for _ in range(attempts):
            try:
                return self.session.request(
                    verb,
                    url,
                    params=params,
                    data=data,
                    headers=self._headers(json_body=json_body is not None),
                    timeout=timeout or self.cfg.request_timeout_s,
                )
            except (req_exc.Timeout, req_exc.ConnectionError):
                last_err = ApiTimeoutError(f"Timeout contacting {url}", context=context)
            except req_exc.RequestException as exc:
                raise ApiError(str(exc), context=context) from exc
        raise last_err


__all__ = ["HttpConfig", "RetryingSession", "TokenProvider"]
