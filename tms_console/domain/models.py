"""Domain entities for tenants, users, roles, groups and shared services.

Every entity offers ``from_api_data`` to build itself from the camelCase
payloads returned by the tenant management API.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence

from .constants import TMS_ROLES


def _text(payload: Mapping[str, Any], key: str, default: str = "") -> str:
    value = payload.get(key)
    if value is None:
        return default
    return str(value)


def _optional_text(payload: Mapping[str, Any], key: str) -> Optional[str]:
    value = payload.get(key)
    if value is None:
        return None
    text = str(value)
    return text or None


def _items(payload: Mapping[str, Any], key: str) -> List[Mapping[str, Any]]:
    value = payload.get(key)
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, Mapping)]


@dataclass
class Role:
    """A tenant management role such as ``TMS.TENANT_OWNER``."""

    id: str
    name: str
    description: str = ""

    @classmethod
    def from_api_data(cls, data: Mapping[str, Any]) -> "Role":
        return cls(
            id=_text(data, "id"),
            name=_text(data, "name"),
            description=_text(data, "description"),
        )


@dataclass
class User:
    """A console user, either a tenant member or an IDIR search result.

    ``id`` holds the tenant-user id for members and the SSO user guid for
    search results; ``sso_user_id`` always holds the SSO guid when known.
    """

    id: str
    user_name: Optional[str]
    first_name: str
    last_name: str
    display_name: str
    email: Optional[str] = None
    roles: List[Role] = field(default_factory=list)
    sso_user_id: Optional[str] = None

    @classmethod
    def from_api_data(cls, data: Mapping[str, Any]) -> "User":
        sso = data.get("ssoUser")
        sso_user: Mapping[str, Any] = sso if isinstance(sso, Mapping) else {}
        return cls(
            id=_text(data, "id"),
            user_name=_optional_text(sso_user, "userName"),
            first_name=_text(sso_user, "firstName"),
            last_name=_text(sso_user, "lastName"),
            display_name=_text(sso_user, "displayName"),
            email=_optional_text(sso_user, "email"),
            roles=[Role.from_api_data(item) for item in _items(data, "roles")],
            sso_user_id=_optional_text(sso_user, "ssoUserId"),
        )

    @classmethod
    def from_search_data(cls, data: Mapping[str, Any]) -> "User":
        """Build a user from an IDIR directory search hit.

        The directory does not always return every attribute, so missing
        values fall back to empty strings.
        """
        raw_attrs = data.get("attributes")
        attrs: Mapping[str, Any] = raw_attrs if isinstance(raw_attrs, Mapping) else {}

        def first(*keys: str) -> Optional[str]:
            for key in keys:
                values = attrs.get(key)
                if isinstance(values, list) and values:
                    return str(values[0])
            return None

        guid = first("idir_user_guid", "idir_userid") or ""
        return cls(
            id=guid,
            user_name=first("idir_username"),
            first_name=_text(data, "firstName"),
            last_name=_text(data, "lastName"),
            display_name=first("display_name", "displayName") or "",
            email=_optional_text(data, "email"),
            roles=[],
            sso_user_id=guid or None,
        )

    def has_role(self, role_name: str) -> bool:
        return any(role.name == role_name for role in self.roles)

    def to_sso_payload(self) -> Dict[str, Any]:
        """Serialize the SSO identity block expected by create endpoints."""
        return {
            "displayName": self.display_name,
            "email": self.email,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "ssoUserId": self.sso_user_id or self.id,
            "userName": self.user_name,
        }


@dataclass
class Tenant:
    id: str
    name: str
    ministry_name: str
    description: str = ""
    users: List[User] = field(default_factory=list)
    created_by: str = ""
    created_date: str = ""

    @classmethod
    def from_api_data(cls, data: Mapping[str, Any]) -> "Tenant":
        return cls(
            id=_text(data, "id"),
            name=_text(data, "name"),
            ministry_name=_text(data, "ministryName"),
            description=_text(data, "description"),
            users=[User.from_api_data(item) for item in _items(data, "users")],
            created_by=_text(data, "createdBy"),
            created_date=_text(data, "createdDateTime"),
        )

    def admin_users(self) -> List[User]:
        """Return members holding the tenant-owner role."""
        return [user for user in self.users if user.has_role(TMS_ROLES.TENANT_OWNER)]

    def user_has_role(self, user: User, role_name: str) -> bool:
        """Return True if ``user`` is a member of this tenant with ``role_name``.

        Matching is by SSO user id first, then by member id.
        """
        for member in self.users:
            same_sso = bool(user.sso_user_id) and member.sso_user_id == user.sso_user_id
            if same_sso or member.id == user.id:
                return member.has_role(role_name)
        return False


@dataclass
class GroupUser:
    id: str
    user: User
    is_deleted: bool = False

    @classmethod
    def from_api_data(cls, data: Mapping[str, Any]) -> "GroupUser":
        raw_user = data.get("user")
        user_payload: Mapping[str, Any] = raw_user if isinstance(raw_user, Mapping) else {}
        return cls(
            id=_text(data, "id"),
            user=User.from_api_data(user_payload),
            is_deleted=bool(data.get("isDeleted", False)),
        )


@dataclass
class Group:
    id: str
    name: str
    description: str = ""
    created_by: str = ""
    created_date: str = ""
    group_users: List[GroupUser] = field(default_factory=list)

    @classmethod
    def from_api_data(cls, data: Mapping[str, Any]) -> "Group":
        # The API names the member list ``users`` and the timestamp
        # ``createdDateTime``.
        return cls(
            id=_text(data, "id"),
            name=_text(data, "name"),
            description=_text(data, "description"),
            created_by=_text(data, "createdBy"),
            created_date=_text(data, "createdDateTime"),
            group_users=[GroupUser.from_api_data(item) for item in _items(data, "users")],
        )


@dataclass
class ServiceRole:
    id: str
    name: str
    description: str = ""
    allowed_identity_providers: List[str] = field(default_factory=list)
    enabled: bool = False
    is_deleted: bool = False

    @classmethod
    def from_api_data(cls, data: Mapping[str, Any]) -> "ServiceRole":
        providers = data.get("allowedIdentityProviders")
        return cls(
            id=_text(data, "id"),
            name=_text(data, "name"),
            description=_text(data, "description"),
            allowed_identity_providers=[str(p) for p in providers] if isinstance(providers, list) else [],
            enabled=bool(data.get("enabled", False)),
            is_deleted=bool(data.get("isDeleted", False)),
        )

    def to_api_data(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name, "enabled": self.enabled}


@dataclass
class SharedService:
    """A shared service that tenants can request access to."""

    id: str
    name: str
    created_date: str = ""
    roles: List[ServiceRole] = field(default_factory=list)

    @classmethod
    def from_api_data(cls, data: Mapping[str, Any]) -> "SharedService":
        return cls(
            id=_text(data, "id"),
            name=_text(data, "name"),
            created_date=_text(data, "createdDateTime"),
            roles=[ServiceRole.from_api_data(item) for item in _items(data, "sharedServiceRoles")],
        )

    def to_api_data(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "sharedServiceRoles": [role.to_api_data() for role in self.roles],
        }


@dataclass
class TenantRequest:
    id: str
    name: str
    ministry_name: str
    status: str
    description: str = ""
    created_by: str = ""
    created_date: str = ""
    rejection_reason: str = ""

    @classmethod
    def from_api_data(cls, data: Mapping[str, Any]) -> "TenantRequest":
        return cls(
            id=_text(data, "id"),
            name=_text(data, "name"),
            ministry_name=_text(data, "ministryName"),
            status=_text(data, "status"),
            description=_text(data, "description"),
            created_by=_text(data, "createdBy"),
            created_date=_text(data, "createdDateTime"),
            rejection_reason=_text(data, "rejectionReason"),
        )


def services_payload(services: Sequence[SharedService]) -> Dict[str, Any]:
    """Build the group shared-service-roles request body."""
    return {"sharedServices": [service.to_api_data() for service in services]}


__all__ = [
    "Group",
    "GroupUser",
    "Role",
    "ServiceRole",
    "SharedService",
    "Tenant",
    "TenantRequest",
    "User",
    "services_payload",
]
