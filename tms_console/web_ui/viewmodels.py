"""Thin web-facing viewmodels for NiceGUI bindings.

These viewmodels hold browser form state and translate to/from the core
viewmodels without adding I/O or orchestration logic.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import json
from typing import Any, Dict, Mapping, Optional

from tms_console.domain.constants import MINISTRIES
from tms_console.viewmodels.notification_queue import DEFAULT_EXPIRY_S
from tms_console.viewmodels.settings_vm import SettingsVM


BROWSER_SETTINGS_KEY = "tms.web.settings.v1"


def _as_int(value: Any, default: int) -> int:
    """Convert mixed values to int with deterministic fallback."""
    try:
        return int(value)
    except (TypeError, ValueError):
        return int(default)


def _as_float(value: Any, default: float) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return float(default)


@dataclass
class WebSettingsVM:
    """Browser-editable settings projection for NiceGUI forms."""

    api_base_url: str = ""
    request_timeout_s: int = 10
    retries: int = 2
    notification_timeout_s: float = DEFAULT_EXPIRY_S
    access_token: str = ""
    sso_user_id: str = ""
    user_name: str = ""
    display_name: str = ""
    email: str = ""
    debug_logging: bool = False

    @classmethod
    def from_settings_vm(cls, settings_vm: SettingsVM) -> "WebSettingsVM":
        """Build browser form state from the core ``SettingsVM`` snapshot."""
        return cls.from_payload(settings_vm.to_dict())

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "WebSettingsVM":
        """Build browser form state from a settings payload mapping.

        The payload shape matches ``SettingsVM.to_dict``; missing keys fall
        back to defaults.
        """
        if not isinstance(payload, Mapping):
            raise ValueError("Settings payload must be a mapping.")
        return cls(
            api_base_url=str(payload.get("api_base_url") or ""),
            request_timeout_s=_as_int(payload.get("request_timeout_s"), 10),
            retries=_as_int(payload.get("retries"), 2),
            notification_timeout_s=_as_float(payload.get("notification_timeout_s"), DEFAULT_EXPIRY_S),
            access_token=str(payload.get("access_token") or ""),
            sso_user_id=str(payload.get("sso_user_id") or ""),
            user_name=str(payload.get("user_name") or ""),
            display_name=str(payload.get("display_name") or ""),
            email=str(payload.get("email") or ""),
            debug_logging=bool(payload.get("debug_logging")),
        )

    def to_payload(self) -> Dict[str, Any]:
        """Serialize browser form state using ``SettingsVM`` payload shape."""
        return {
            "api_base_url": str(self.api_base_url or ""),
            "request_timeout_s": _as_int(self.request_timeout_s, 10),
            "retries": _as_int(self.retries, 2),
            "notification_timeout_s": _as_float(self.notification_timeout_s, DEFAULT_EXPIRY_S),
            "access_token": str(self.access_token or ""),
            "sso_user_id": str(self.sso_user_id or ""),
            "user_name": str(self.user_name or ""),
            "display_name": str(self.display_name or ""),
            "email": str(self.email or ""),
            "debug_logging": bool(self.debug_logging),
        }

    def apply_to_settings_vm(self, settings_vm: SettingsVM) -> None:
        """Push browser form values into the core settings viewmodel."""
        settings_vm.apply_dict(self.to_payload())


def parse_settings_json(text: str) -> Dict[str, Any]:
    """Parse imported settings JSON into a mapping payload."""
    raw = json.loads(text)
    if not isinstance(raw, dict):
        raise ValueError("Imported settings must be a JSON object.")
    return dict(raw)


@dataclass
class WebTenantFormVM:
    """Form state shared by the add-tenant and tenant-request dialogs."""

    name: str = ""
    ministry_name: str = ""
    description: str = ""
    ministries: tuple = field(default_factory=lambda: MINISTRIES)

    def validation_error(self) -> Optional[str]:
        """Return a user-facing message for incomplete input, else ``None``."""
        if not self.name.strip():
            return "Tenant name is required."
        if not self.ministry_name.strip():
            return "Ministry is required."
        return None

    def reset(self) -> None:
        self.name = ""
        self.ministry_name = ""
        self.description = ""
