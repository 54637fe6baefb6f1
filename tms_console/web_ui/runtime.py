"""NiceGUI runtime orchestration for the tenant management console.

This module composes the notification queue, the settings state, the adapter
controller and every store for one console session. Nothing here is a
module-level singleton; ``main`` builds one :class:`ConsoleRuntime` per page.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Callable, Dict, List, Mapping, Optional

from tms_console.adapters.storage_local import StorageLocal
from tms_console.app.controller import AppController
from tms_console.domain.models import Tenant, TenantRequest, User
from tms_console.domain.ports import StoragePort, TimerPort
from tms_console.utils.logging import apply_gui_preferences
from tms_console.viewmodels.directory_stores import RoleStore, SharedServiceStore, UserStore
from tms_console.viewmodels.group_store import GroupStore
from tms_console.viewmodels.notification_queue import NotificationQueue
from tms_console.viewmodels.settings_vm import SettingsVM
from tms_console.viewmodels.store_base import ServiceStore
from tms_console.viewmodels.tenant_request_store import TenantRequestStore
from tms_console.viewmodels.tenant_store import TenantStore


LOGGER = logging.getLogger(__name__)

DEMO_IDENTITY: Dict[str, str] = {
    "sso_user_id": "demo-admin-guid",
    "user_name": "demo.admin",
    "display_name": "Demo Admin",
    "email": "demo.admin@example.gov",
}

MISSING_BACKEND_MESSAGE = "Configure the API base URL in Settings first."


class ConsoleRuntime:
    """Orchestration state used by NiceGUI views."""

    def __init__(
        self,
        timer: TimerPort,
        *,
        storage: Optional[StoragePort] = None,
        demo: bool = False,
        on_change: Optional[Callable[[], None]] = None,
    ) -> None:
        self.status_message = "Ready."
        self.on_change = on_change
        self.storage = storage or StorageLocal(root_dir=os.environ.get("TMS_STORAGE_ROOT") or ".")

        self.settings_vm = SettingsVM()
        self._load_settings_defaults()
        if demo and not self.settings_vm.sso_user_id:
            self.settings_vm.apply_dict(DEMO_IDENTITY)
        apply_gui_preferences(self.settings_vm.debug_logging)

        self.notifications = NotificationQueue(
            timer,
            expiry_s=self.settings_vm.notification_timeout_s,
            on_change=lambda _items: self._changed(),
        )
        self.controller = AppController(self.settings_vm, demo=demo)

        store_kwargs = {"on_change": lambda _store: self._changed()}
        self.tenant_store = TenantStore(None, self.notifications, **store_kwargs)
        self.group_store = GroupStore(None, self.notifications, **store_kwargs)
        self.role_store = RoleStore(None, self.notifications, **store_kwargs)
        self.service_store = SharedServiceStore(None, self.notifications, **store_kwargs)
        self.request_store = TenantRequestStore(None, self.notifications, **store_kwargs)
        self.user_store = UserStore(None, self.notifications, **store_kwargs)
        self.selected_tenant_id: Optional[str] = None

    # ------------------------------------------------------------------
    # Basic projections
    # ------------------------------------------------------------------
    @property
    def stores(self) -> List[ServiceStore]:
        return [
            self.tenant_store,
            self.group_store,
            self.role_store,
            self.service_store,
            self.request_store,
            self.user_store,
        ]

    @property
    def loading(self) -> bool:
        return any(store.loading for store in self.stores)

    @property
    def demo(self) -> bool:
        return self.controller.demo

    def current_user(self) -> User:
        """The signed-in user as configured in settings."""
        vm = self.settings_vm
        return User(
            id=vm.sso_user_id,
            user_name=vm.user_name or None,
            first_name="",
            last_name="",
            display_name=vm.display_name or vm.user_name,
            email=vm.email or None,
            sso_user_id=vm.sso_user_id or None,
        )

    def selected_tenant(self) -> Optional[Tenant]:
        if not self.selected_tenant_id:
            return None
        return self.tenant_store.get_tenant(self.selected_tenant_id)

    def settings_payload(self) -> Dict[str, Any]:
        return self.settings_vm.to_dict()

    # ------------------------------------------------------------------
    # Settings workflows
    # ------------------------------------------------------------------
    def apply_settings_payload(self, payload: Mapping[str, Any]) -> None:
        """Apply settings, rewire adapters and refresh logging preferences.

        Raises:
            ValueError: When the payload holds unknown keys or bad values.
        """
        self.settings_vm.apply_dict(payload)
        self.notifications.expiry_s = self.settings_vm.notification_timeout_s
        apply_gui_preferences(self.settings_vm.debug_logging)
        self.controller.reset()
        self.status_message = "Settings applied."
        self.notifications.info("Settings applied.")

    def save_settings(self) -> None:
        self.settings_vm.on_save = self.storage.save_user_settings
        self.settings_vm.cmd_save()
        self.notifications.success("Settings saved.")

    def ensure_backend(self) -> bool:
        """Wire the stores to the current ports; warn when unconfigured."""
        if not self.controller.ensure_ready():
            self.status_message = MISSING_BACKEND_MESSAGE
            self.notifications.warning(MISSING_BACKEND_MESSAGE)
            return False
        self.tenant_store.tenant_port = self.controller.tenant_port
        self.group_store.group_port = self.controller.group_port
        self.role_store.role_port = self.controller.role_port
        self.service_store.service_port = self.controller.service_port
        self.request_store.request_port = self.controller.request_port
        self.user_store.user_port = self.controller.user_port
        return True

    # ------------------------------------------------------------------
    # Console workflows
    # ------------------------------------------------------------------
    def refresh(self) -> None:
        """Reload tenants, roles, shared services and tenant requests."""
        if not self.ensure_backend():
            return
        user = self.current_user()
        if user.sso_user_id:
            self.tenant_store.fetch_tenants(user.sso_user_id)
        self.role_store.fetch_roles()
        self.service_store.fetch_shared_services()
        self.request_store.fetch_tenant_requests()
        self.status_message = f"Loaded {len(self.tenant_store.tenants)} tenant(s)."

    def select_tenant(self, tenant_id: Optional[str]) -> None:
        self.selected_tenant_id = tenant_id
        if not tenant_id or not self.ensure_backend():
            return
        self.tenant_store.fetch_tenant_users(tenant_id)
        self.group_store.fetch_groups(tenant_id)
        self.service_store.fetch_tenant_services(tenant_id)
        self._changed()

    def add_tenant(self, name: str, ministry_name: str) -> Optional[Tenant]:
        """Create a tenant owned by the current user.

        Returns ``None`` when the backend is not configured or the call
        failed; the failure is already visible in the notification queue.
        """
        if not self.ensure_backend():
            return None
        try:
            return self.tenant_store.add_tenant(name, ministry_name, self.current_user())
        except Exception as exc:
            LOGGER.debug("Add tenant rejected: %r", exc)
            return None

    def submit_tenant_request(
        self, name: str, ministry_name: str, description: str
    ) -> Optional[TenantRequest]:
        if not self.ensure_backend():
            return None
        try:
            return self.request_store.create_tenant_request(
                name, ministry_name, description, self.current_user()
            )
        except Exception as exc:
            LOGGER.debug("Tenant request rejected: %r", exc)
            return None

    def review_tenant_request(
        self, request_id: str, status: str, rejection_reason: Optional[str] = None
    ) -> bool:
        if not self.ensure_backend():
            return False
        try:
            self.request_store.update_tenant_request_status(request_id, status, rejection_reason)
        except Exception as exc:
            LOGGER.debug("Tenant request review rejected: %r", exc)
            return False
        return True

    def add_group(self, name: str, description: str) -> bool:
        tenant_id = self.selected_tenant_id
        if not tenant_id or not self.ensure_backend():
            return False
        try:
            self.group_store.add_group(tenant_id, name, description)
        except Exception as exc:
            LOGGER.debug("Add group rejected: %r", exc)
            return False
        return True

    def dismiss(self, notification_id: str) -> None:
        self.notifications.remove(notification_id)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _load_settings_defaults(self) -> None:
        try:
            payload = self.storage.load_user_settings()
        except Exception as exc:
            LOGGER.warning("Could not load local settings defaults: %s", exc)
            return
        if payload is None:
            return
        try:
            self.settings_vm.apply_dict(payload)
        except ValueError as exc:
            LOGGER.warning("Could not apply local settings defaults: %s", exc)

    def _changed(self) -> None:
        if self.on_change:
            self.on_change()
