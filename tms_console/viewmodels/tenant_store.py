from __future__ import annotations

from typing import Dict, List, Optional

from ..domain.models import Role, Tenant, User
from ..domain.ports import TenantPort
from .notification_queue import NotificationQueue
from .store_base import ErrorPolicy, ServiceStore


class TenantStore(ServiceStore):
    """Tenants visible to the signed-in user, their members and roles.

    Failure policy per operation:
        - ``fetch_*``: SWALLOW, previous state kept, returns ``None``.
        - ``add_tenant``, ``update_tenant``, ``add_tenant_user``,
          ``assign_user_role``: RAISE after notifying.
    """

    def __init__(self, tenant_port: TenantPort, notifications: NotificationQueue, **kwargs) -> None:
        super().__init__(notifications, **kwargs)
        self.tenant_port = tenant_port
        self.tenants: List[Tenant] = []
        self.tenant_users: Dict[str, List[User]] = {}
        self.tenant_roles: Dict[str, List[Role]] = {}

    def get_tenant(self, tenant_id: str) -> Optional[Tenant]:
        return next((t for t in self.tenants if t.id == tenant_id), None)

    # ------------------------------------------------------------------
    def fetch_tenants(self, sso_user_id: str) -> Optional[List[Tenant]]:
        """Load the user's tenants, each with members and their roles."""

        def load() -> List[Tenant]:
            tenants = [Tenant.from_api_data(raw) for raw in self.tenant_port.get_user_tenants(sso_user_id)]
            for tenant in tenants:
                members = [User.from_api_data(raw) for raw in self.tenant_port.get_tenant_users(tenant.id)]
                for member in members:
                    member.roles = [
                        Role.from_api_data(raw)
                        for raw in self.tenant_port.get_user_roles(tenant.id, member.id)
                    ]
                tenant.users = members
            return tenants

        return self._run("Fetch tenants", load, policy=ErrorPolicy.SWALLOW, apply=self._set_tenants)

    def fetch_tenant(self, tenant_id: str) -> Optional[Tenant]:
        return self._run(
            "Fetch tenant",
            lambda: self.tenant_port.get_tenant(tenant_id),
            policy=ErrorPolicy.SWALLOW,
            apply=lambda raw: self._upsert(Tenant.from_api_data(raw)),
        )

    def fetch_tenant_users(self, tenant_id: str) -> Optional[List[User]]:
        def apply(raw_users: List[Dict]) -> List[User]:
            users = [User.from_api_data(raw) for raw in raw_users]
            self.tenant_users[tenant_id] = users
            return users

        return self._run(
            "Fetch tenant users",
            lambda: self.tenant_port.get_tenant_users(tenant_id),
            policy=ErrorPolicy.SWALLOW,
            apply=apply,
        )

    def fetch_tenant_roles(self, tenant_id: str) -> Optional[List[Role]]:
        def apply(raw_roles: List[Dict]) -> List[Role]:
            roles = [Role.from_api_data(raw) for raw in raw_roles]
            self.tenant_roles[tenant_id] = roles
            return roles

        return self._run(
            "Fetch tenant roles",
            lambda: self.tenant_port.get_tenant_roles(tenant_id),
            policy=ErrorPolicy.SWALLOW,
            apply=apply,
        )

    def add_tenant(self, name: str, ministry_name: str, user: User) -> Tenant:
        return self._run(
            "Add tenant",
            lambda: self.tenant_port.create_tenant(name, ministry_name, user.to_sso_payload()),
            policy=ErrorPolicy.RAISE,
            apply=lambda raw: self._upsert(Tenant.from_api_data(raw)),
            success_message=f"Tenant '{name}' created.",
        )

    def update_tenant(self, tenant_id: str, name: str, ministry_name: str, description: str) -> Tenant:
        def apply(raw: Dict) -> Tenant:
            updated = Tenant.from_api_data(raw)
            existing = self.get_tenant(tenant_id)
            if existing is not None and not updated.users:
                updated.users = existing.users
            return self._upsert(updated)

        return self._run(
            "Update tenant",
            lambda: self.tenant_port.update_tenant(tenant_id, name, ministry_name, description),
            policy=ErrorPolicy.RAISE,
            apply=apply,
            success_message=f"Tenant '{name}' updated.",
        )

    def add_tenant_user(self, tenant_id: str, user: User, role: Role) -> User:
        def apply(raw: Dict) -> User:
            member = User.from_api_data(raw)
            if not member.roles:
                member.roles = [role]
            self.tenant_users.setdefault(tenant_id, []).append(member)
            tenant = self.get_tenant(tenant_id)
            if tenant is not None:
                tenant.users.append(member)
            return member

        return self._run(
            "Add user to tenant",
            lambda: self.tenant_port.add_tenant_user(tenant_id, user.to_sso_payload(), [role.id]),
            policy=ErrorPolicy.RAISE,
            apply=apply,
            success_message=f"{user.display_name or user.user_name or 'User'} added to tenant.",
        )

    def assign_user_role(self, tenant_id: str, user_id: str, role: Role) -> None:
        def apply(_: None) -> None:
            for member in self._members(tenant_id):
                if member.id == user_id and not member.has_role(role.name):
                    member.roles.append(role)

        self._run(
            "Assign user role",
            lambda: self.tenant_port.assign_user_role(tenant_id, user_id, role.id),
            policy=ErrorPolicy.RAISE,
            apply=apply,
        )

    # ------------------------------------------------------------------
    def _set_tenants(self, tenants: List[Tenant]) -> List[Tenant]:
        self.tenants = tenants
        return tenants

    def _upsert(self, tenant: Tenant) -> Tenant:
        for index, existing in enumerate(self.tenants):
            if existing.id == tenant.id:
                self.tenants[index] = tenant
                return tenant
        self.tenants.append(tenant)
        return tenant

    def _members(self, tenant_id: str) -> List[User]:
        members = list(self.tenant_users.get(tenant_id, []))
        tenant = self.get_tenant(tenant_id)
        if tenant is not None:
            members.extend(m for m in tenant.users if all(m is not other for other in members))
        return members


__all__ = ["TenantStore"]
