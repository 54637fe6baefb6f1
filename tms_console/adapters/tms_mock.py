from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from uuid import uuid4

from tms_console.domain.constants import TENANT_REQUEST_STATUS, TMS_ROLES
from tms_console.domain.errors import DuplicateEntityError, ValidationError
from tms_console.domain.ports import (
    GroupPort,
    RolePort,
    SharedServicePort,
    TenantPort,
    TenantRequestPort,
    UserPort,
)

from .api_errors import ApiClientError


def _now_iso() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def _require(field_name: str, value: Any) -> None:
    if not str(value or "").strip():
        raise ValidationError([f"{field_name} is required"])


@dataclass
class TmsBackendMock(TenantPort, GroupPort, RolePort, SharedServicePort, TenantRequestPort, UserPort):
    """Offline substitute for the TMS REST adapters with the same failure modes.

    Blank names raise ``ValidationError`` and name collisions raise
    ``DuplicateEntityError``, so the console's notification paths can be
    exercised without a server.
    """

    created_by: str = "demo.admin"
    directory: List[Dict[str, Any]] = field(default_factory=list)

    def __post_init__(self) -> None:
        self._roles: List[Dict[str, Any]] = [
            {"id": f"role-{idx}", "name": name, "description": title}
            for idx, (name, title) in enumerate(TMS_ROLES.TITLES.items(), start=1)
        ]
        self._services: List[Dict[str, Any]] = [
            {
                "id": "svc-1",
                "name": "Common Hosted Email Service",
                "createdDateTime": _now_iso(),
                "sharedServiceRoles": [
                    {"id": "svc-1-r1", "name": "Sender", "enabled": False},
                ],
            },
            {
                "id": "svc-2",
                "name": "Document Generation",
                "createdDateTime": _now_iso(),
                "sharedServiceRoles": [
                    {"id": "svc-2-r1", "name": "Author", "enabled": False},
                    {"id": "svc-2-r2", "name": "Reviewer", "enabled": False},
                ],
            },
        ]
        self._tenants: Dict[str, Dict[str, Any]] = {}
        self._tenant_users: Dict[str, List[Dict[str, Any]]] = {}
        self._tenant_services: Dict[str, List[str]] = {}
        self._groups: Dict[str, Dict[str, Dict[str, Any]]] = {}
        self._group_services: Dict[tuple, Dict[str, Any]] = {}
        self._requests: Dict[str, Dict[str, Any]] = {}

    # ---------- helpers ----------

    def _tenant(self, tenant_id: str) -> Dict[str, Any]:
        tenant = self._tenants.get(tenant_id)
        if tenant is None:
            raise ApiClientError(f"Tenant {tenant_id} not found", status=404)
        return tenant

    def _role(self, role_id: str) -> Dict[str, Any]:
        for role in self._roles:
            if role["id"] == role_id or role["name"] == role_id:
                return dict(role)
        raise ApiClientError(f"Role {role_id} not found", status=404)

    def _member(self, user_payload: Dict, roles: List[Dict]) -> Dict[str, Any]:
        return {
            "id": str(uuid4()),
            "ssoUser": dict(user_payload),
            "roles": roles,
        }

    # ---------- TenantPort ----------

    def create_tenant(self, name: str, ministry_name: str, user_payload: Dict) -> Dict[str, Any]:
        _require("name", name)
        _require("ministryName", ministry_name)
        for tenant in self._tenants.values():
            if tenant["name"] == name and tenant["ministryName"] == ministry_name:
                raise DuplicateEntityError(
                    f"A tenant named '{name}' already exists in {ministry_name}"
                )
        tenant_id = str(uuid4())
        owner = self._member(user_payload, [self._role(TMS_ROLES.TENANT_OWNER)])
        tenant = {
            "id": tenant_id,
            "name": name,
            "ministryName": ministry_name,
            "description": "",
            "createdBy": self.created_by,
            "createdDateTime": _now_iso(),
        }
        self._tenants[tenant_id] = tenant
        self._tenant_users[tenant_id] = [owner]
        self._groups[tenant_id] = {}
        return {**tenant, "users": [owner]}

    def update_tenant(
        self, tenant_id: str, name: str, ministry_name: str, description: str
    ) -> Dict[str, Any]:
        _require("name", name)
        tenant = self._tenant(tenant_id)
        for other_id, other in self._tenants.items():
            if other_id != tenant_id and other["name"] == name and other["ministryName"] == ministry_name:
                raise DuplicateEntityError(
                    f"A tenant named '{name}' already exists in {ministry_name}"
                )
        tenant.update(name=name, ministryName=ministry_name, description=description)
        return {**tenant, "users": list(self._tenant_users.get(tenant_id, []))}

    def get_tenant(self, tenant_id: str) -> Dict[str, Any]:
        tenant = self._tenant(tenant_id)
        return {**tenant, "users": list(self._tenant_users.get(tenant_id, []))}

    def get_user_tenants(self, sso_user_id: str) -> List[Dict[str, Any]]:
        result = []
        for tenant_id, members in self._tenant_users.items():
            if any(m["ssoUser"].get("ssoUserId") == sso_user_id for m in members):
                result.append(dict(self._tenants[tenant_id]))
        return result

    def get_tenant_users(self, tenant_id: str) -> List[Dict[str, Any]]:
        self._tenant(tenant_id)
        return [dict(member) for member in self._tenant_users.get(tenant_id, [])]

    def get_tenant_roles(self, tenant_id: str) -> List[Dict[str, Any]]:
        self._tenant(tenant_id)
        return [dict(role) for role in self._roles]

    def get_user_roles(self, tenant_id: str, user_id: str) -> List[Dict[str, Any]]:
        for member in self._tenant_users.get(tenant_id, []):
            if member["id"] == user_id:
                return list(member["roles"])
        raise ApiClientError(f"User {user_id} not found in tenant", status=404)

    def add_tenant_user(self, tenant_id: str, user_payload: Dict, role_ids: List[str]) -> Dict[str, Any]:
        self._tenant(tenant_id)
        sso_id = user_payload.get("ssoUserId")
        members = self._tenant_users.setdefault(tenant_id, [])
        if any(m["ssoUser"].get("ssoUserId") == sso_id for m in members):
            raise DuplicateEntityError("User is already a member of this tenant")
        member = self._member(user_payload, [self._role(rid) for rid in role_ids])
        members.append(member)
        return dict(member)

    def assign_user_role(self, tenant_id: str, user_id: str, role_id: str) -> None:
        role = self._role(role_id)
        for member in self._tenant_users.get(tenant_id, []):
            if member["id"] == user_id:
                if all(r["id"] != role["id"] for r in member["roles"]):
                    member["roles"].append(role)
                return
        raise ApiClientError(f"User {user_id} not found in tenant", status=404)

    # ---------- GroupPort ----------

    def create_group(self, tenant_id: str, name: str, description: str) -> Dict[str, Any]:
        self._tenant(tenant_id)
        _require("name", name)
        groups = self._groups.setdefault(tenant_id, {})
        if any(g["name"] == name for g in groups.values()):
            raise DuplicateEntityError(f"A group named '{name}' already exists")
        group = {
            "id": str(uuid4()),
            "name": name,
            "description": description,
            "createdBy": self.created_by,
            "createdDateTime": _now_iso(),
            "users": [],
        }
        groups[group["id"]] = group
        return dict(group)

    def update_group(self, tenant_id: str, group_id: str, name: str, description: str) -> Dict[str, Any]:
        _require("name", name)
        group = self._group(tenant_id, group_id)
        others = self._groups.get(tenant_id, {}).values()
        if any(g["name"] == name and g["id"] != group_id for g in others):
            raise DuplicateEntityError(f"A group named '{name}' already exists")
        group.update(name=name, description=description)
        return dict(group)

    def _group(self, tenant_id: str, group_id: str) -> Dict[str, Any]:
        group = self._groups.get(tenant_id, {}).get(group_id)
        if group is None:
            raise ApiClientError(f"Group {group_id} not found", status=404)
        return group

    def get_group(self, tenant_id: str, group_id: str) -> Dict[str, Any]:
        return dict(self._group(tenant_id, group_id))

    def get_tenant_groups(self, tenant_id: str) -> List[Dict[str, Any]]:
        self._tenant(tenant_id)
        return [dict(group) for group in self._groups.get(tenant_id, {}).values()]

    def add_user_to_group(self, tenant_id: str, group_id: str, user_payload: Dict) -> Dict[str, Any]:
        group = self._group(tenant_id, group_id)
        sso_id = user_payload.get("ssoUserId")
        if any(gu["user"]["ssoUser"].get("ssoUserId") == sso_id for gu in group["users"]):
            raise DuplicateEntityError("User is already a member of this group")
        group_user = {
            "id": str(uuid4()),
            "user": {"id": str(uuid4()), "ssoUser": dict(user_payload)},
            "isDeleted": False,
        }
        group["users"].append(group_user)
        return dict(group_user)

    def remove_user_from_group(self, tenant_id: str, group_id: str, group_user_id: str) -> None:
        group = self._group(tenant_id, group_id)
        group["users"] = [gu for gu in group["users"] if gu["id"] != group_user_id]

    # ---------- RolePort ----------

    def get_roles(self) -> List[Dict[str, Any]]:
        return [dict(role) for role in self._roles]

    # ---------- SharedServicePort ----------

    def get_shared_services(self) -> List[Dict[str, Any]]:
        return [dict(service) for service in self._services]

    def get_tenant_services(self, tenant_id: str) -> List[Dict[str, Any]]:
        self._tenant(tenant_id)
        wanted = self._tenant_services.get(tenant_id, [])
        return [dict(s) for s in self._services if s["id"] in wanted]

    def add_service_to_tenant(self, tenant_id: str, service_id: str) -> Dict[str, Any]:
        self._tenant(tenant_id)
        if all(s["id"] != service_id for s in self._services):
            raise ApiClientError(f"Shared service {service_id} not found", status=404)
        linked = self._tenant_services.setdefault(tenant_id, [])
        if service_id in linked:
            raise DuplicateEntityError("Shared service is already associated with this tenant")
        linked.append(service_id)
        return {"tenantId": tenant_id, "sharedServiceId": service_id}

    def get_group_services(self, tenant_id: str, group_id: str) -> List[Dict[str, Any]]:
        self._group(tenant_id, group_id)
        stored = self._group_services.get((tenant_id, group_id))
        if stored is not None:
            return list(stored.get("sharedServices", []))
        return self.get_tenant_services(tenant_id)

    def update_group_services(self, tenant_id: str, group_id: str, payload: Dict) -> Dict[str, Any]:
        self._group(tenant_id, group_id)
        self._group_services[(tenant_id, group_id)] = dict(payload)
        return dict(payload)

    # ---------- TenantRequestPort ----------

    def create_tenant_request(
        self, name: str, ministry_name: str, description: str, user_payload: Dict
    ) -> Optional[Dict[str, Any]]:
        _require("name", name)
        _require("ministryName", ministry_name)
        for existing in self._requests.values():
            if (
                existing["name"] == name
                and existing["ministryName"] == ministry_name
                and existing["status"] == TENANT_REQUEST_STATUS.NEW
            ):
                raise DuplicateEntityError(f"A request for '{name}' is already pending")
        request = {
            "id": str(uuid4()),
            "name": name,
            "ministryName": ministry_name,
            "description": description,
            "status": TENANT_REQUEST_STATUS.NEW,
            "createdBy": user_payload.get("userName") or self.created_by,
            "createdDateTime": _now_iso(),
            "rejectionReason": "",
        }
        self._requests[request["id"]] = request
        return dict(request)

    def get_tenant_requests(self) -> List[Dict[str, Any]]:
        return [dict(request) for request in self._requests.values()]

    def update_tenant_request_status(
        self, request_id: str, status: str, rejection_reason: Optional[str] = None
    ) -> None:
        if status not in TENANT_REQUEST_STATUS.ALL:
            raise ValidationError([f"status must be one of {', '.join(TENANT_REQUEST_STATUS.ALL)}"])
        request = self._requests.get(request_id)
        if request is None:
            raise ApiClientError(f"Tenant request {request_id} not found", status=404)
        request["status"] = status
        if rejection_reason:
            request["rejectionReason"] = rejection_reason

    # ---------- UserPort ----------

    def search_idir_users(self, search_type: str, value: str) -> List[Dict[str, Any]]:
        needle = str(value or "").strip().lower()
        if not needle:
            raise ValidationError([f"{search_type} is required"])
        return [
            dict(entry)
            for entry in self.directory
            if needle in str(entry.get(search_type, "")).lower()
        ]
