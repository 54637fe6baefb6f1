"""Stores for roles, shared services and the IDIR user directory.

All read operations here swallow failures (after one ERROR notification) and
leave the previous state in place; ``add_service_to_tenant`` and
``update_group_services`` re-raise.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence

from ..domain.constants import IDIR_SEARCH_TYPES
from ..domain.models import Role, SharedService, User, services_payload
from ..domain.ports import RolePort, SharedServicePort, UserPort
from .notification_queue import NotificationQueue
from .store_base import ErrorPolicy, ServiceStore


class RoleStore(ServiceStore):
    def __init__(self, role_port: RolePort, notifications: NotificationQueue, **kwargs) -> None:
        super().__init__(notifications, **kwargs)
        self.role_port = role_port
        self.roles: List[Role] = []

    def fetch_roles(self) -> Optional[List[Role]]:
        def apply(raw_roles: List[Dict]) -> List[Role]:
            self.roles = [Role.from_api_data(raw) for raw in raw_roles]
            return self.roles

        return self._run(
            "Fetch roles", self.role_port.get_roles, policy=ErrorPolicy.SWALLOW, apply=apply
        )


class SharedServiceStore(ServiceStore):
    """Catalog of shared services plus per-tenant and per-group associations."""

    def __init__(self, service_port: SharedServicePort, notifications: NotificationQueue, **kwargs) -> None:
        super().__init__(notifications, **kwargs)
        self.service_port = service_port
        self.services: List[SharedService] = []
        self.tenant_services: Dict[str, List[SharedService]] = {}
        self.group_services: Dict[str, List[SharedService]] = {}

    def fetch_shared_services(self) -> Optional[List[SharedService]]:
        def apply(raw_services: List[Dict]) -> List[SharedService]:
            self.services = [SharedService.from_api_data(raw) for raw in raw_services]
            return self.services

        return self._run(
            "Fetch shared services",
            self.service_port.get_shared_services,
            policy=ErrorPolicy.SWALLOW,
            apply=apply,
        )

    def fetch_tenant_services(self, tenant_id: str) -> Optional[List[SharedService]]:
        def apply(raw_services: List[Dict]) -> List[SharedService]:
            services = [SharedService.from_api_data(raw) for raw in raw_services]
            self.tenant_services[tenant_id] = services
            return services

        return self._run(
            "Fetch tenant shared services",
            lambda: self.service_port.get_tenant_services(tenant_id),
            policy=ErrorPolicy.SWALLOW,
            apply=apply,
        )

    def add_service_to_tenant(self, tenant_id: str, service_id: str) -> None:
        def apply(_: Dict) -> None:
            service = next((s for s in self.services if s.id == service_id), None)
            linked = self.tenant_services.setdefault(tenant_id, [])
            if service is not None and all(s.id != service_id for s in linked):
                linked.append(service)

        self._run(
            "Add shared service",
            lambda: self.service_port.add_service_to_tenant(tenant_id, service_id),
            policy=ErrorPolicy.RAISE,
            apply=apply,
            success_message="Shared service added to tenant.",
        )

    def fetch_group_services(self, tenant_id: str, group_id: str) -> Optional[List[SharedService]]:
        def apply(raw_services: List[Dict]) -> List[SharedService]:
            services = [SharedService.from_api_data(raw) for raw in raw_services]
            self.group_services[group_id] = services
            return services

        return self._run(
            "Fetch group shared services",
            lambda: self.service_port.get_group_services(tenant_id, group_id),
            policy=ErrorPolicy.SWALLOW,
            apply=apply,
        )

    def update_group_services(
        self, tenant_id: str, group_id: str, services: Sequence[SharedService]
    ) -> None:
        def apply(_: Dict) -> None:
            self.group_services[group_id] = list(services)

        self._run(
            "Update group shared services",
            lambda: self.service_port.update_group_services(
                tenant_id, group_id, services_payload(services)
            ),
            policy=ErrorPolicy.RAISE,
            apply=apply,
            success_message="Group shared services updated.",
        )


class UserStore(ServiceStore):
    """IDIR directory search results for the add-user dialogs."""

    def __init__(self, user_port: UserPort, notifications: NotificationQueue, **kwargs) -> None:
        super().__init__(notifications, **kwargs)
        self.user_port = user_port
        self.search_results: List[User] = []

    def search_idir_users(self, search_type: str, value: str) -> Optional[List[User]]:
        if search_type not in IDIR_SEARCH_TYPES:
            raise ValueError(
                f"search_type must be one of {', '.join(sorted(IDIR_SEARCH_TYPES))}"
            )

        def apply(raw_users: List[Dict]) -> List[User]:
            self.search_results = [User.from_search_data(raw) for raw in raw_users]
            return self.search_results

        return self._run(
            "Search users",
            lambda: self.user_port.search_idir_users(search_type, value),
            policy=ErrorPolicy.SWALLOW,
            apply=apply,
        )


__all__ = ["RoleStore", "SharedServiceStore", "UserStore"]
