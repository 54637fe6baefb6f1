from __future__ import annotations

import pytest

from tms_console.adapters.api_errors import ApiClientError
from tms_console.adapters.tms_mock import TmsBackendMock
from tms_console.domain.constants import TENANT_REQUEST_STATUS, TMS_ROLES
from tms_console.domain.errors import DuplicateEntityError, ValidationError

OWNER = {"ssoUserId": "sso-1", "userName": "owner", "displayName": "Owner"}


def test_create_tenant_makes_creator_owner_and_lists_it() -> None:
    backend = TmsBackendMock()

    tenant = backend.create_tenant("Payments", "Finance", OWNER)

    assert [r["name"] for r in tenant["users"][0]["roles"]] == [TMS_ROLES.TENANT_OWNER]
    assert [t["id"] for t in backend.get_user_tenants("sso-1")] == [tenant["id"]]
    assert backend.get_user_tenants("someone-else") == []


def test_duplicate_and_blank_tenants_fail_like_the_api() -> None:
    backend = TmsBackendMock()
    backend.create_tenant("Payments", "Finance", OWNER)

    with pytest.raises(DuplicateEntityError):
        backend.create_tenant("Payments", "Finance", OWNER)
    with pytest.raises(ValidationError):
        backend.create_tenant("  ", "Finance", OWNER)
    backend.create_tenant("Payments", "Health", OWNER)


def test_unknown_ids_raise_404() -> None:
    backend = TmsBackendMock()

    with pytest.raises(ApiClientError) as info:
        backend.get_tenant("nope")

    assert info.value.status == 404


def test_group_membership_rejects_duplicates() -> None:
    backend = TmsBackendMock()
    tenant_id = backend.create_tenant("Payments", "Finance", OWNER)["id"]
    group_id = backend.create_group(tenant_id, "Editors", "")["id"]

    backend.add_user_to_group(tenant_id, group_id, {"ssoUserId": "sso-2"})
    with pytest.raises(DuplicateEntityError):
        backend.add_user_to_group(tenant_id, group_id, {"ssoUserId": "sso-2"})


def test_tenant_request_lifecycle() -> None:
    backend = TmsBackendMock()
    request = backend.create_tenant_request("Docs", "Health", "", OWNER)

    with pytest.raises(DuplicateEntityError):
        backend.create_tenant_request("Docs", "Health", "", OWNER)

    backend.update_tenant_request_status(request["id"], TENANT_REQUEST_STATUS.REJECTED, "not needed")
    stored = backend.get_tenant_requests()[0]
    assert stored["status"] == TENANT_REQUEST_STATUS.REJECTED
    assert stored["rejectionReason"] == "not needed"

    backend.create_tenant_request("Docs", "Health", "", OWNER)


def test_idir_search_filters_directory() -> None:
    backend = TmsBackendMock(directory=[{"email": "jo@example.gov"}, {"email": "sam@example.gov"}])

    assert backend.search_idir_users("email", "JO@") == [{"email": "jo@example.gov"}]
    with pytest.raises(ValidationError):
        backend.search_idir_users("email", "")
