"""Fixed vocabularies used by the tenant management API and the console."""

from __future__ import annotations

from typing import Dict, Tuple


class TMS_ROLES:
    """Role names granted inside a tenant."""

    SERVICE_USER = "TMS.SERVICE_USER"
    TENANT_OWNER = "TMS.TENANT_OWNER"
    USER_ADMIN = "TMS.USER_ADMIN"

    TITLES: Dict[str, str] = {
        SERVICE_USER: "Service User",
        TENANT_OWNER: "Tenant Owner",
        USER_ADMIN: "User Admin",
    }


class TENANT_REQUEST_STATUS:
    NEW = "NEW"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"

    ALL: Tuple[str, ...] = (NEW, APPROVED, REJECTED)


# Search field -> label for the IDIR directory search.
IDIR_SEARCH_TYPES: Dict[str, str] = {
    "email": "Email",
    "firstName": "First Name",
    "lastName": "Last Name",
}

MINISTRIES: Tuple[str, ...] = (
    "Agriculture and Food",
    "Attorney General",
    "BC Elections",
    "BC Public Service Agency",
    "Children and Family Development",
    "Citizens' Services",
    "Education and Child Care",
    "Emergency Management and Climate Readiness",
    "Energy and Climate Solutions",
    "Environment and Parks",
    "Finance",
    "Forests",
    "Health",
    "Housing and Municipal Affairs",
    "Indigenous Relations and Reconciliation",
    "Infrastructure",
    "Jobs, Economic Development and Innovation",
    "Labour",
    "Mining and Critical Materials",
    "Office of the Chief Information Officer",
    "Office of the Premier",
    "Post-Secondary Education and Future Skills",
    "Public Safety and Solicitor General",
    "Social Development and Poverty Reduction",
    "Tourism, Arts, Culture and Sport",
    "Transportation and Transit",
    "Water, Land and Resource Stewardship",
)


__all__ = ["IDIR_SEARCH_TYPES", "MINISTRIES", "TENANT_REQUEST_STATUS", "TMS_ROLES"]
