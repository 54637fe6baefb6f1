from __future__ import annotations

from typing import Any, Dict, List, Optional

import pytest

from tms_console.adapters.timer_virtual import VirtualTimer
from tms_console.domain.errors import ServerError
from tms_console.domain.models import SharedService
from tms_console.viewmodels.directory_stores import RoleStore, SharedServiceStore, UserStore
from tms_console.viewmodels.notification_queue import NotificationQueue


class _DirectoryStub:
    def __init__(self) -> None:
        self.fail_with: Optional[Exception] = None
        self.payloads: List[Dict[str, Any]] = []
        self.searches: List[tuple] = []

    def _check(self) -> None:
        if self.fail_with is not None:
            raise self.fail_with

    def get_roles(self) -> List[Dict[str, Any]]:
        self._check()
        return [{"id": "r1", "name": "TMS.SERVICE_USER"}]

    def get_shared_services(self) -> List[Dict[str, Any]]:
        self._check()
        return [{"id": "s1", "name": "Email"}, {"id": "s2", "name": "Docs"}]

    def get_tenant_services(self, tenant_id: str) -> List[Dict[str, Any]]:
        self._check()
        return [{"id": "s1", "name": "Email"}]

    def add_service_to_tenant(self, tenant_id: str, service_id: str) -> Dict[str, Any]:
        self._check()
        return {}

    def get_group_services(self, tenant_id: str, group_id: str) -> List[Dict[str, Any]]:
        self._check()
        return [{"id": "s1", "name": "Email", "sharedServiceRoles": [{"id": "sr1", "name": "Sender", "enabled": True}]}]

    def update_group_services(self, tenant_id: str, group_id: str, payload: Dict) -> Dict[str, Any]:
        self._check()
        self.payloads.append(payload)
        return {}

    def search_idir_users(self, search_type: str, value: str) -> List[Dict[str, Any]]:
        self._check()
        self.searches.append((search_type, value))
        return [{"email": "jo@example.gov", "firstName": "Jo", "lastName": "Doe", "attributes": {"idir_user_guid": ["G1"]}}]


def test_role_store_fetch_and_swallow() -> None:
    queue = NotificationQueue(VirtualTimer())
    port = _DirectoryStub()
    store = RoleStore(port, queue)

    assert [r.id for r in store.fetch_roles()] == ["r1"]

    port.fail_with = ServerError("down")
    assert store.fetch_roles() is None
    assert [r.id for r in store.roles] == ["r1"]
    assert queue.items[-1].message == "down"


def test_add_service_to_tenant_links_catalog_entry_once() -> None:
    store = SharedServiceStore(_DirectoryStub(), NotificationQueue(VirtualTimer()))
    store.fetch_shared_services()
    store.fetch_tenant_services("t1")

    store.add_service_to_tenant("t1", "s2")
    store.add_service_to_tenant("t1", "s2")

    assert [s.id for s in store.tenant_services["t1"]] == ["s1", "s2"]


def test_update_group_services_sends_wrapped_payload() -> None:
    port = _DirectoryStub()
    store = SharedServiceStore(port, NotificationQueue(VirtualTimer()))
    services = store.fetch_group_services("t1", "g1")
    services[0].roles[0].enabled = False

    store.update_group_services("t1", "g1", services)

    assert port.payloads == [
        {"sharedServices": [{"id": "s1", "name": "Email", "sharedServiceRoles": [{"id": "sr1", "name": "Sender", "enabled": False}]}]}
    ]
    assert store.group_services["g1"] == services


def test_update_group_services_failure_raises() -> None:
    port = _DirectoryStub()
    queue = NotificationQueue(VirtualTimer())
    store = SharedServiceStore(port, queue)
    port.fail_with = ServerError("Try again later")

    with pytest.raises(ServerError):
        store.update_group_services("t1", "g1", [SharedService(id="s1", name="Email")])

    assert "g1" not in store.group_services
    assert [n.message for n in queue.items] == ["Try again later"]


def test_user_search_maps_directory_hits() -> None:
    port = _DirectoryStub()
    store = UserStore(port, NotificationQueue(VirtualTimer()))

    users = store.search_idir_users("email", "jo@")

    assert port.searches == [("email", "jo@")]
    assert users[0].sso_user_id == "G1"
    assert store.search_results == users


def test_user_search_rejects_unknown_search_type() -> None:
    store = UserStore(_DirectoryStub(), NotificationQueue(VirtualTimer()))

    with pytest.raises(ValueError):
        store.search_idir_users("phone", "555")
