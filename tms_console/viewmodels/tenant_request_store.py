from __future__ import annotations

from typing import Dict, List, Optional

from ..domain.constants import TENANT_REQUEST_STATUS
from ..domain.models import TenantRequest, User
from ..domain.ports import TenantRequestPort
from .notification_queue import NotificationQueue
from .store_base import ErrorPolicy, ServiceStore


class TenantRequestStore(ServiceStore):
    """Tenant requests awaiting (or past) operations-admin review.

    ``fetch_tenant_requests`` swallows failures; ``create_tenant_request`` and
    ``update_tenant_request_status`` re-raise after notifying.
    """

    def __init__(self, request_port: TenantRequestPort, notifications: NotificationQueue, **kwargs) -> None:
        super().__init__(notifications, **kwargs)
        self.request_port = request_port
        self.tenant_requests: List[TenantRequest] = []

    def fetch_tenant_requests(self) -> Optional[List[TenantRequest]]:
        def apply(raw_requests: List[Dict]) -> List[TenantRequest]:
            self.tenant_requests = [TenantRequest.from_api_data(raw) for raw in raw_requests]
            return self.tenant_requests

        return self._run(
            "Fetch tenant requests",
            self.request_port.get_tenant_requests,
            policy=ErrorPolicy.SWALLOW,
            apply=apply,
        )

    def create_tenant_request(
        self, name: str, ministry_name: str, description: str, user: User
    ) -> Optional[TenantRequest]:
        def apply(raw: Optional[Dict]) -> Optional[TenantRequest]:
            if not raw:
                return None
            request = TenantRequest.from_api_data(raw)
            self.tenant_requests.append(request)
            return request

        return self._run(
            "Create tenant request",
            lambda: self.request_port.create_tenant_request(
                name, ministry_name, description, user.to_sso_payload()
            ),
            policy=ErrorPolicy.RAISE,
            apply=apply,
            success_message=f"Tenant request for '{name}' submitted.",
        )

    def update_tenant_request_status(
        self, request_id: str, status: str, rejection_reason: Optional[str] = None
    ) -> None:
        def call() -> None:
            if status not in TENANT_REQUEST_STATUS.ALL:
                raise ValueError(f"Unknown tenant request status: {status!r}")
            return self.request_port.update_tenant_request_status(request_id, status, rejection_reason)

        def apply(_: None) -> None:
            for request in self.tenant_requests:
                if request.id == request_id:
                    request.status = status
                    if rejection_reason:
                        request.rejection_reason = rejection_reason
                    return

        self._run(
            "Update tenant request",
            call,
            policy=ErrorPolicy.RAISE,
            apply=apply,
            success_message=f"Tenant request {status.lower()}.",
        )


__all__ = ["TenantRequestStore"]
