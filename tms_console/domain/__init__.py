"""Domain package exports for errors, notifications and entities."""

from .errors import (
    DomainError,
    DuplicateEntityError,
    ErrorKind,
    ServerError,
    ValidationError,
    error_kind,
    is_domain_error,
)
from .models import Group, GroupUser, Role, ServiceRole, SharedService, Tenant, TenantRequest, User
from .notifications import Notification, NotificationType

__all__ = [
    "DomainError",
    "DuplicateEntityError",
    "ErrorKind",
    "Group",
    "GroupUser",
    "Notification",
    "NotificationType",
    "Role",
    "ServerError",
    "ServiceRole",
    "SharedService",
    "Tenant",
    "TenantRequest",
    "User",
    "ValidationError",
    "error_kind",
    "is_domain_error",
]
