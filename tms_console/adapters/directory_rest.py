"""REST adapters for the read-mostly directories: roles, shared services, users."""

from __future__ import annotations

from typing import Any, Dict, List

from tms_console.domain.ports import (
    GroupId,
    RolePort,
    SharedServicePort,
    TenantId,
    UserPort,
)

from .rest_base import TmsRestAdapter


class RoleRestAdapter(TmsRestAdapter, RolePort):
    def get_roles(self) -> List[Dict[str, Any]]:
        data = self._call("GET", "/roles", "Error getting roles")
        return self._list(data, "roles")


class SharedServiceRestAdapter(TmsRestAdapter, SharedServicePort):
    def get_shared_services(self) -> List[Dict[str, Any]]:
        data = self._call("GET", "/shared-services", "Error getting shared services")
        return self._list(data, "sharedServices")

    def get_tenant_services(self, tenant_id: TenantId) -> List[Dict[str, Any]]:
        data = self._call(
            "GET",
            f"/tenants/{tenant_id}/shared-services",
            "Error getting tenant shared services",
        )
        return self._list(data, "sharedServices")

    def add_service_to_tenant(self, tenant_id: TenantId, service_id: str) -> Dict[str, Any]:
        return self._call(
            "POST",
            f"/tenants/{tenant_id}/shared-services",
            "Error adding shared service to tenant",
            json_body={"sharedServiceId": service_id},
        )

    def get_group_services(self, tenant_id: TenantId, group_id: GroupId) -> List[Dict[str, Any]]:
        data = self._call(
            "GET",
            f"/tenants/{tenant_id}/groups/{group_id}/shared-services/shared-service-roles",
            "Error getting group shared services",
        )
        return self._list(data, "sharedServices")

    def update_group_services(
        self, tenant_id: TenantId, group_id: GroupId, payload: Dict
    ) -> Dict[str, Any]:
        return self._call(
            "PUT",
            f"/tenants/{tenant_id}/groups/{group_id}/shared-services/shared-service-roles",
            "Error updating group shared services",
            json_body=payload,
        )


class UserRestAdapter(TmsRestAdapter, UserPort):
    def search_idir_users(self, search_type: str, value: str) -> List[Dict[str, Any]]:
        data = self._call(
            "GET",
            "/users/bcgovssousers/idir/search",
            "Error searching IDIR users",
            params={search_type: value},
        )
        return self._list(data, "users")
