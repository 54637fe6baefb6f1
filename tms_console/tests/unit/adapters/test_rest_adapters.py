from __future__ import annotations

import json
from typing import Any, Dict, List, Optional, Sequence

import pytest

from tms_console.adapters.api_errors import ApiClientError
from tms_console.adapters.directory_rest import SharedServiceRestAdapter, UserRestAdapter
from tms_console.adapters.group_rest import GroupRestAdapter
from tms_console.adapters.http_client import HttpConfig, RetryingSession
from tms_console.adapters.tenant_request_rest import TenantRequestRestAdapter
from tms_console.adapters.tenant_rest import TenantRestAdapter
from tms_console.domain.errors import (
    DuplicateEntityError,
    ErrorKind,
    ServerError,
    ValidationError,
    error_kind,
)


class _ResponseStub:
    def __init__(self, payload: Any, status_code: int = 200) -> None:
        self._payload = payload
        self.status_code = status_code
        self.text = "" if payload is None else json.dumps(payload)

    def json(self) -> Any:
        if self._payload is None:
            raise ValueError("no body")
        return self._payload


class _SessionStub:
    def __init__(self, responses: Sequence[_ResponseStub]) -> None:
        self._responses = list(responses)
        self.calls: List[Dict[str, Any]] = []

    def request(
        self,
        method: str,
        url: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        data: Optional[str] = None,
        headers: Optional[Dict[str, str]] = None,
        timeout: Optional[int] = None,
    ) -> _ResponseStub:
        self.calls.append(
            {
                "method": method,
                "url": url,
                "params": params,
                "body": None if data is None else json.loads(data),
                "headers": dict(headers or {}),
                "timeout": timeout,
            }
        )
        if not self._responses:
            raise RuntimeError("No stub response configured")
        return self._responses.pop(0)


def _session(*responses: _ResponseStub, token: Optional[str] = "tok") -> tuple:
    stub = _SessionStub(responses)
    session = RetryingSession(HttpConfig(request_timeout_s=7, retries=0), token_provider=lambda: token, session=stub)
    return session, stub


def test_get_user_tenants_unwraps_data_envelope() -> None:
    session, stub = _session(_ResponseStub({"data": {"tenants": [{"id": "t1"}, "junk"]}}))
    adapter = TenantRestAdapter("http://api.local/v1/", session)

    tenants = adapter.get_user_tenants("sso-1")

    assert tenants == [{"id": "t1"}]
    call = stub.calls[0]
    assert call["method"] == "GET"
    assert call["url"] == "http://api.local/v1/users/sso-1/tenants"
    assert call["params"] == {"expand": "tenantUserRoles"}
    assert call["headers"]["Authorization"] == "Bearer tok"
    assert call["timeout"] == 7


def test_create_tenant_posts_json_body() -> None:
    session, stub = _session(_ResponseStub({"data": {"tenant": {"id": "t9", "name": "Payments"}}}, 201))
    adapter = TenantRestAdapter("http://api.local", session)

    created = adapter.create_tenant("Payments", "Finance", {"ssoUserId": "sso-1"})

    assert created == {"id": "t9", "name": "Payments"}
    assert stub.calls[0]["body"] == {"name": "Payments", "ministryName": "Finance", "user": {"ssoUserId": "sso-1"}}
    assert stub.calls[0]["headers"]["Content-Type"] == "application/json"


def test_409_becomes_duplicate_entity_error() -> None:
    session, _ = _session(_ResponseStub({"message": "Tenant already exists"}, 409))
    adapter = TenantRestAdapter("http://api.local", session)

    with pytest.raises(DuplicateEntityError) as info:
        adapter.create_tenant("Payments", "Finance", {})

    assert info.value.user_message == "Tenant already exists"


def test_400_collects_validation_details() -> None:
    payload = {
        "message": "Validation failed",
        "details": {"body": [{"message": "name is required"}, {"message": "ministryName is required"}]},
    }
    session, _ = _session(_ResponseStub(payload, 400))
    adapter = GroupRestAdapter("http://api.local", session)

    with pytest.raises(ValidationError) as info:
        adapter.create_group("t1", "", "")

    assert info.value.user_message == "Unexpected server response: name is required; ministryName is required"


def test_400_without_details_falls_back_to_message() -> None:
    session, _ = _session(_ResponseStub({"message": "Bad status"}, 400))
    adapter = TenantRequestRestAdapter("http://api.local", session)

    with pytest.raises(ValidationError) as info:
        adapter.update_tenant_request_status("q1", "NOPE")

    assert info.value.validation_messages == ["Bad status"]


def test_5xx_becomes_server_error() -> None:
    session, _ = _session(_ResponseStub({"message": "Try again later"}, 503))
    adapter = SharedServiceRestAdapter("http://api.local", session)

    with pytest.raises(ServerError) as info:
        adapter.get_shared_services()

    assert info.value.user_message == "Try again later"


def test_404_stays_unclassified_api_error() -> None:
    session, _ = _session(_ResponseStub({"message": "not found"}, 404))
    adapter = TenantRestAdapter("http://api.local", session)

    with pytest.raises(ApiClientError) as info:
        adapter.get_tenant("missing")

    assert info.value.status == 404
    assert error_kind(info.value) is ErrorKind.UNCLASSIFIED
    assert "not found" in str(info.value)


def test_204_and_empty_bodies_return_empty_data() -> None:
    session, stub = _session(_ResponseStub(None, 204))
    adapter = GroupRestAdapter("http://api.local", session)

    adapter.remove_user_from_group("t1", "g1", "gu1")

    assert stub.calls[0]["method"] == "DELETE"
    assert stub.calls[0]["url"] == "http://api.local/tenants/t1/groups/g1/users/gu1"


def test_tenant_request_status_patch_includes_reason_only_when_given() -> None:
    session, stub = _session(_ResponseStub({"data": {}}), _ResponseStub({"data": {}}))
    adapter = TenantRequestRestAdapter("http://api.local", session)

    adapter.update_tenant_request_status("q1", "APPROVED")
    adapter.update_tenant_request_status("q2", "REJECTED", "duplicate")

    assert stub.calls[0]["method"] == "PATCH"
    assert stub.calls[0]["url"] == "http://api.local/tenant-requests/q1/status"
    assert stub.calls[0]["body"] == {"status": "APPROVED"}
    assert stub.calls[1]["body"] == {"status": "REJECTED", "rejectionReason": "duplicate"}


def test_idir_search_passes_search_type_as_query_param() -> None:
    session, stub = _session(_ResponseStub({"data": {"users": [{"email": "a@b"}]}}))
    adapter = UserRestAdapter("http://api.local", session)

    users = adapter.search_idir_users("lastName", "Doe")

    assert users == [{"email": "a@b"}]
    assert stub.calls[0]["url"] == "http://api.local/users/bcgovssousers/idir/search"
    assert stub.calls[0]["params"] == {"lastName": "Doe"}


def test_missing_token_sends_no_authorization_header() -> None:
    session, stub = _session(_ResponseStub({"data": {"roles": []}}), token=None)
    adapter = TenantRestAdapter("http://api.local", session)

    adapter.get_tenant_roles("t1")

    assert "Authorization" not in stub.calls[0]["headers"]


def test_adapter_requires_base_url() -> None:
    session, _ = _session()

    with pytest.raises(ValueError):
        TenantRestAdapter("", session)
