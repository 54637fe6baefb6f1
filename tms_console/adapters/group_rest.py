from __future__ import annotations

from typing import Any, Dict, List

from tms_console.domain.ports import GroupId, GroupPort, TenantId

from .rest_base import TmsRestAdapter


class GroupRestAdapter(TmsRestAdapter, GroupPort):
    """REST adapter for tenant groups and group membership."""

    def create_group(self, tenant_id: TenantId, name: str, description: str) -> Dict[str, Any]:
        data = self._call(
            "POST",
            f"/tenants/{tenant_id}/groups",
            "Error creating group",
            json_body={"name": name, "description": description},
        )
        return self._object(data, "group")

    def update_group(
        self, tenant_id: TenantId, group_id: GroupId, name: str, description: str
    ) -> Dict[str, Any]:
        data = self._call(
            "PUT",
            f"/tenants/{tenant_id}/groups/{group_id}",
            "Error updating group",
            json_body={"name": name, "description": description},
        )
        return self._object(data, "group")

    def get_group(self, tenant_id: TenantId, group_id: GroupId) -> Dict[str, Any]:
        data = self._call(
            "GET",
            f"/tenants/{tenant_id}/groups/{group_id}",
            "Error getting group",
            params={"expand": "groupUsers"},
        )
        return self._object(data, "group")

    def get_tenant_groups(self, tenant_id: TenantId) -> List[Dict[str, Any]]:
        data = self._call("GET", f"/tenants/{tenant_id}/groups", "Error getting tenant groups")
        return self._list(data, "groups")

    def add_user_to_group(
        self, tenant_id: TenantId, group_id: GroupId, user_payload: Dict
    ) -> Dict[str, Any]:
        data = self._call(
            "POST",
            f"/tenants/{tenant_id}/groups/{group_id}/users",
            "Error adding user to group",
            json_body={"user": dict(user_payload)},
        )
        return self._object(data, "groupUser")

    def remove_user_from_group(
        self, tenant_id: TenantId, group_id: GroupId, group_user_id: str
    ) -> None:
        self._call(
            "DELETE",
            f"/tenants/{tenant_id}/groups/{group_id}/users/{group_user_id}",
            "Error removing user from group",
        )
