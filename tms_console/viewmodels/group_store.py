from __future__ import annotations

from typing import Dict, List, Optional

from ..domain.models import Group, GroupUser, User
from ..domain.ports import GroupPort
from .notification_queue import NotificationQueue
from .store_base import ErrorPolicy, ServiceStore


class GroupStore(ServiceStore):
    """Groups of the currently selected tenant.

    ``fetch_*`` swallow failures; every write re-raises after notifying.
    Groups are upserted by id so a fetched or edited group replaces the
    cached copy in place.
    """

    def __init__(self, group_port: GroupPort, notifications: NotificationQueue, **kwargs) -> None:
        super().__init__(notifications, **kwargs)
        self.group_port = group_port
        self.groups: List[Group] = []

    def get_group(self, group_id: str) -> Optional[Group]:
        return next((g for g in self.groups if g.id == group_id), None)

    def fetch_groups(self, tenant_id: str) -> Optional[List[Group]]:
        def apply(raw_groups: List[Dict]) -> List[Group]:
            self.groups = [Group.from_api_data(raw) for raw in raw_groups]
            return self.groups

        return self._run(
            "Fetch groups",
            lambda: self.group_port.get_tenant_groups(tenant_id),
            policy=ErrorPolicy.SWALLOW,
            apply=apply,
        )

    def fetch_group(self, tenant_id: str, group_id: str) -> Optional[Group]:
        return self._run(
            "Fetch group",
            lambda: self.group_port.get_group(tenant_id, group_id),
            policy=ErrorPolicy.SWALLOW,
            apply=lambda raw: self._upsert(Group.from_api_data(raw)),
        )

    def add_group(self, tenant_id: str, name: str, description: str) -> Group:
        return self._run(
            "Add group",
            lambda: self.group_port.create_group(tenant_id, name, description),
            policy=ErrorPolicy.RAISE,
            apply=lambda raw: self._upsert(Group.from_api_data(raw)),
            success_message=f"Group '{name}' created.",
        )

    def update_group(self, tenant_id: str, group_id: str, name: str, description: str) -> Group:
        def apply(raw: Dict) -> Group:
            updated = Group.from_api_data(raw)
            existing = self.get_group(group_id)
            if existing is not None and not updated.group_users:
                updated.group_users = existing.group_users
            return self._upsert(updated)

        return self._run(
            "Update group",
            lambda: self.group_port.update_group(tenant_id, group_id, name, description),
            policy=ErrorPolicy.RAISE,
            apply=apply,
            success_message=f"Group '{name}' updated.",
        )

    def add_user_to_group(self, tenant_id: str, group_id: str, user: User) -> GroupUser:
        def apply(raw: Dict) -> GroupUser:
            group_user = GroupUser.from_api_data(raw)
            group = self.get_group(group_id)
            if group is not None:
                group.group_users.append(group_user)
            return group_user

        return self._run(
            "Add user to group",
            lambda: self.group_port.add_user_to_group(tenant_id, group_id, user.to_sso_payload()),
            policy=ErrorPolicy.RAISE,
            apply=apply,
            success_message="User added to group.",
        )

    def remove_user_from_group(self, tenant_id: str, group_id: str, group_user_id: str) -> None:
        def apply(_: None) -> None:
            group = self.get_group(group_id)
            if group is not None:
                group.group_users = [gu for gu in group.group_users if gu.id != group_user_id]

        self._run(
            "Remove user from group",
            lambda: self.group_port.remove_user_from_group(tenant_id, group_id, group_user_id),
            policy=ErrorPolicy.RAISE,
            apply=apply,
            success_message="User removed from group.",
        )

    def _upsert(self, group: Group) -> Group:
        for index, existing in enumerate(self.groups):
            if existing.id == group.id:
                self.groups[index] = group
                return group
        self.groups.append(group)
        return group


__all__ = ["GroupStore"]
