"""Transport-level failures and payload helpers for the TMS REST adapters.

Responses that map onto a known business failure are translated into
``tms_console.domain.errors`` types by ``translate_error_response``; everything
else surfaces as one of the ``ApiError`` classes below and is treated as
unclassified by the stores.
"""

from __future__ import annotations

from typing import Any, List, Optional

from tms_console.domain.errors import DuplicateEntityError, ServerError, ValidationError


class ApiError(RuntimeError):
    """Base class for REST adapter failures."""

    def __init__(
        self,
        message: str,
        *,
        status: Optional[int] = None,
        payload: Any = None,
        context: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.status = status
        self.payload = payload
        self.context = context


class ApiClientError(ApiError):
    """HTTP 4xx that does not correspond to a domain failure (401, 403, 404...)."""

    def __init__(
        self,
        message: str,
        *,
        status: int,
        payload: Any = None,
        context: Optional[str] = None,
    ) -> None:
        super().__init__(message, status=status, payload=payload, context=context)


class ApiTimeoutError(ApiError):
    """Transport level timeout or connectivity failure."""

    def __init__(self, message: str, *, context: Optional[str] = None) -> None:
        super().__init__(message, context=context)


def parse_error_payload(resp: Any) -> Any:
    """Best-effort extraction of error payload without raising."""
    try:
        return resp.json()
    except Exception:
        snippet = getattr(resp, "text", "")
        if not snippet:
            return None
        return snippet[:400]


def build_error_message(ctx: str, status: int, payload: Any) -> str:
    detail = first_string(payload)
    if detail:
        return f"{ctx}: {detail} (HTTP {status})"
    return f"{ctx}: HTTP {status}"


def extract_server_message(payload: Any) -> Optional[str]:
    """Return the API's top-level ``message`` string, if any."""
    if isinstance(payload, dict):
        value = payload.get("message")
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None


def extract_validation_messages(payload: Any) -> List[str]:
    """Collect ``details.body[].message`` entries from a 400 response.

    Falls back to the top-level message when the API did not include
    per-field details.
    """
    messages: List[str] = []
    if isinstance(payload, dict):
        details = payload.get("details")
        if isinstance(details, dict):
            for section in ("body", "params", "query"):
                entries = details.get(section)
                if not isinstance(entries, list):
                    continue
                for entry in entries:
                    if isinstance(entry, dict) and isinstance(entry.get("message"), str):
                        messages.append(entry["message"])
                    elif isinstance(entry, str):
                        messages.append(entry)
    if not messages:
        fallback = extract_server_message(payload)
        if fallback:
            messages.append(fallback)
    return messages


def first_string(payload: Any) -> Optional[str]:
    if isinstance(payload, str):
        text = payload.strip()
        return text or None
    if isinstance(payload, dict):
        for key in ("message", "detail", "error", "title"):
            value = payload.get(key)
            if isinstance(value, str) and value.strip():
                return value.strip()
            if isinstance(value, (list, dict)):
                candidate = first_string(value)
                if candidate:
                    return candidate
    if isinstance(payload, list):
        for item in payload:
            candidate = first_string(item)
            if candidate:
                return candidate
    return None


def translate_error_response(status: int, payload: Any, context: str) -> Exception:
    """Map a non-2xx response onto the exception an adapter should raise."""
    if status == 400 and isinstance(payload, dict):
        return ValidationError(extract_validation_messages(payload))
    if status == 409:
        return DuplicateEntityError(extract_server_message(payload))
    if status >= 500:
        return ServerError(extract_server_message(payload))
    return ApiClientError(
        build_error_message(context, status, payload),
        status=status,
        payload=payload,
        context=context,
    )


__all__ = [
    "ApiClientError",
    "ApiError",
    "ApiTimeoutError",
    "build_error_message",
    "extract_server_message",
    "extract_validation_messages",
    "first_string",
    "parse_error_payload",
    "translate_error_response",
]
