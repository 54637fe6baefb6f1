from __future__ import annotations

from typing import Any, Dict, List

from tms_console.domain.ports import TenantId, TenantPort, UserId

from .rest_base import TmsRestAdapter


class TenantRestAdapter(TmsRestAdapter, TenantPort):
    """REST adapter for tenants, tenant members and their roles."""

    def create_tenant(self, name: str, ministry_name: str, user_payload: Dict) -> Dict[str, Any]:
        body = {"name": name, "ministryName": ministry_name, "user": dict(user_payload)}
        data = self._call("POST", "/tenants", "Error creating tenant", json_body=body)
        return self._object(data, "tenant")

    def update_tenant(
        self, tenant_id: TenantId, name: str, ministry_name: str, description: str
    ) -> Dict[str, Any]:
        body = {"name": name, "ministryName": ministry_name, "description": description}
        data = self._call(
            "PUT", f"/tenants/{tenant_id}", "Error updating tenant", json_body=body
        )
        return self._object(data, "tenant")

    def get_tenant(self, tenant_id: TenantId) -> Dict[str, Any]:
        data = self._call(
            "GET",
            f"/tenants/{tenant_id}",
            "Error getting tenant",
            params={"expand": "tenantUserRoles"},
        )
        return self._object(data, "tenant")

    def get_user_tenants(self, sso_user_id: UserId) -> List[Dict[str, Any]]:
        data = self._call(
            "GET",
            f"/users/{sso_user_id}/tenants",
            "Error getting user tenants",
            params={"expand": "tenantUserRoles"},
        )
        return self._list(data, "tenants")

    def get_tenant_users(self, tenant_id: TenantId) -> List[Dict[str, Any]]:
        data = self._call("GET", f"/tenants/{tenant_id}/users", "Error getting tenant users")
        return self._list(data, "users")

    def get_tenant_roles(self, tenant_id: TenantId) -> List[Dict[str, Any]]:
        data = self._call("GET", f"/tenants/{tenant_id}/roles", "Error getting tenant roles")
        return self._list(data, "roles")

    def get_user_roles(self, tenant_id: TenantId, user_id: UserId) -> List[Dict[str, Any]]:
        data = self._call(
            "GET",
            f"/tenants/{tenant_id}/users/{user_id}/roles",
            "Error getting tenant user roles",
        )
        return self._list(data, "roles")

    def add_tenant_user(
        self, tenant_id: TenantId, user_payload: Dict, role_ids: List[str]
    ) -> Dict[str, Any]:
        body = {"user": dict(user_payload), "roles": list(role_ids)}
        data = self._call(
            "POST", f"/tenants/{tenant_id}/users", "Error adding user to tenant", json_body=body
        )
        user = self._object(data, "user")
        return user or data

    def assign_user_role(self, tenant_id: TenantId, user_id: UserId, role_id: str) -> None:
        self._call(
            "PUT",
            f"/tenants/{tenant_id}/users/{user_id}/roles/{role_id}",
            "Error assigning tenant user role",
        )
