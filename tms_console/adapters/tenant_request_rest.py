from __future__ import annotations

from typing import Any, Dict, List, Optional

from tms_console.domain.ports import TenantRequestPort

from .rest_base import TmsRestAdapter


class TenantRequestRestAdapter(TmsRestAdapter, TenantRequestPort):
    """REST adapter for tenant requests and their approval workflow."""

    def create_tenant_request(
        self, name: str, ministry_name: str, description: str, user_payload: Dict
    ) -> Optional[Dict[str, Any]]:
        body = {
            "name": name,
            "ministryName": ministry_name,
            "description": description,
            "user": dict(user_payload),
        }
        data = self._call(
            "POST", "/tenant-requests", "Error creating tenant request", json_body=body
        )
        return self._object(data, "tenantRequest") or None

    def get_tenant_requests(self) -> List[Dict[str, Any]]:
        data = self._call("GET", "/tenant-requests", "Error getting tenant requests")
        return self._list(data, "tenantRequests")

    def update_tenant_request_status(
        self, request_id: str, status: str, rejection_reason: Optional[str] = None
    ) -> None:
        body: Dict[str, Any] = {"status": status}
        if rejection_reason:
            body["rejectionReason"] = rejection_reason
        self._call(
            "PATCH",
            f"/tenant-requests/{request_id}/status",
            "Error updating tenant request status",
            json_body=body,
        )
