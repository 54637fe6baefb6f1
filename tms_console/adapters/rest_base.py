"""Common plumbing for the TMS resource adapters.

The TMS API wraps every successful payload in ``{"data": {...}}``. Adapters
built on :class:`TmsRestAdapter` call :meth:`_call`, which sends the request,
translates failures once (logging them with the operation context) and
returns the unwrapped ``data`` object.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import requests

from .api_errors import ApiError, parse_error_payload, translate_error_response
from .http_client import RetryingSession


class TmsRestAdapter:
    """Base class holding the API base URL and the shared session."""

    def __init__(self, base_url: str, session: RetryingSession) -> None:
        if not base_url:
            raise ValueError(f"{type(self).__name__} requires an API base URL")
        self.base_url = base_url.rstrip("/")
        self.session = session
        self._log = logging.getLogger(type(self).__module__)

    def _make_url(self, path: str) -> str:
        if not path.startswith("/"):
            path = f"/{path}"
        return f"{self.base_url}{path}"

    def _call(
        self,
        method: str,
        path: str,
        ctx: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json_body: Optional[Any] = None,
    ) -> Dict[str, Any]:
        """Send one request and return the unwrapped ``data`` envelope.

        Raises:
            DomainError: For 400 (validation), 409 (duplicate) and 5xx (server).
            ApiError: For other non-2xx responses and transport failures.
        """
        url = self._make_url(path)
        try:
            resp = self.session.request(method, url, params=params, json_body=json_body)
            self._ensure_ok(resp, ctx)
        except Exception as exc:
            self._log.error("%s: %r", ctx, exc)
            raise
        return self._data(resp)

    @staticmethod
    def _ensure_ok(resp: requests.Response, ctx: str) -> None:
        if 200 <= resp.status_code < 300:
            return
        payload = parse_error_payload(resp)
        raise translate_error_response(resp.status_code, payload, ctx)

    @staticmethod
    def _data(resp: requests.Response) -> Dict[str, Any]:
        if resp.status_code == 204:
            return {}
        try:
            body = resp.json()
        except Exception as exc:
            snippet = getattr(resp, "text", "")[:400]
            if not snippet.strip():
                return {}
            raise ApiError(f"Invalid JSON response: {snippet}") from exc
        if not isinstance(body, dict):
            return {}
        data = body.get("data")
        return data if isinstance(data, dict) else {}

    @staticmethod
    def _list(data: Dict[str, Any], key: str) -> List[Dict[str, Any]]:
        value = data.get(key)
        if not isinstance(value, list):
            return []
        return [entry for entry in value if isinstance(entry, dict)]

    @staticmethod
    def _object(data: Dict[str, Any], key: str) -> Dict[str, Any]:
        value = data.get(key)
        return value if isinstance(value, dict) else {}


__all__ = ["TmsRestAdapter"]
