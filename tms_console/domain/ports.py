from __future__ import annotations
from typing import Any, Callable, Dict, List, Optional, Protocol

TenantId = str
GroupId = str
UserId = str
TimerToken = Any


# ---- Ports (Hexagonal boundaries) ----
class TimerPort(Protocol):
    """Schedules one-shot callbacks on the UI execution context.

    Delays are in seconds. Implementations must run callbacks on the same
    context that calls ``schedule_after`` so no locking is needed.
    """

    def schedule_after(self, delay_s: float, callback: Callable[[], None]) -> TimerToken: ...
    def cancel(self, token: TimerToken) -> None: ...


class TenantPort(Protocol):
    """Tenant CRUD and tenant membership against the TMS REST API.

    Methods return raw API resources (camelCase dicts). Known failures raise
    ``tms_console.domain.errors.DomainError`` subtypes.
    """

    def create_tenant(self, name: str, ministry_name: str, user_payload: Dict) -> Dict: ...
    def update_tenant(
        self, tenant_id: TenantId, name: str, ministry_name: str, description: str
    ) -> Dict: ...
    def get_tenant(self, tenant_id: TenantId) -> Dict: ...
    def get_user_tenants(self, sso_user_id: UserId) -> List[Dict]: ...
    def get_tenant_users(self, tenant_id: TenantId) -> List[Dict]: ...
    def get_tenant_roles(self, tenant_id: TenantId) -> List[Dict]: ...
    def get_user_roles(self, tenant_id: TenantId, user_id: UserId) -> List[Dict]: ...
    def add_tenant_user(self, tenant_id: TenantId, user_payload: Dict, role_ids: List[str]) -> Dict: ...
    def assign_user_role(self, tenant_id: TenantId, user_id: UserId, role_id: str) -> None: ...


class GroupPort(Protocol):
    def create_group(self, tenant_id: TenantId, name: str, description: str) -> Dict: ...
    def update_group(
        self, tenant_id: TenantId, group_id: GroupId, name: str, description: str
    ) -> Dict: ...
    def get_group(self, tenant_id: TenantId, group_id: GroupId) -> Dict: ...
    def get_tenant_groups(self, tenant_id: TenantId) -> List[Dict]: ...
    def add_user_to_group(self, tenant_id: TenantId, group_id: GroupId, user_payload: Dict) -> Dict: ...
    def remove_user_from_group(
        self, tenant_id: TenantId, group_id: GroupId, group_user_id: str
    ) -> None: ...


class RolePort(Protocol):
    def get_roles(self) -> List[Dict]: ...


class SharedServicePort(Protocol):
    def get_shared_services(self) -> List[Dict]: ...
    def get_tenant_services(self, tenant_id: TenantId) -> List[Dict]: ...
    def add_service_to_tenant(self, tenant_id: TenantId, service_id: str) -> Dict: ...
    def get_group_services(self, tenant_id: TenantId, group_id: GroupId) -> List[Dict]: ...
    def update_group_services(self, tenant_id: TenantId, group_id: GroupId, payload: Dict) -> Dict: ...


class TenantRequestPort(Protocol):
    def create_tenant_request(
        self, name: str, ministry_name: str, description: str, user_payload: Dict
    ) -> Optional[Dict]: ...
    def get_tenant_requests(self) -> List[Dict]: ...
    def update_tenant_request_status(
        self, request_id: str, status: str, rejection_reason: Optional[str] = None
    ) -> None: ...


class UserPort(Protocol):
    def search_idir_users(self, search_type: str, value: str) -> List[Dict]: ...


class StoragePort(Protocol):
    """Persistence for console preferences."""

    def save_user_settings(self, payload: Dict) -> None: ...
    def load_user_settings(self) -> Optional[Dict]: ...
