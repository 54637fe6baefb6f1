"""Adapter wiring for the console runtime.

This module owns lazy construction of the TMS REST adapters that depend on
values in :class:`tms_console.viewmodels.settings_vm.SettingsVM`. It is
invoked by ``tms_console.web_ui.runtime.ConsoleRuntime`` before store
operations that reach the backend.
"""

from __future__ import annotations

import logging
from typing import Optional

from ..adapters.directory_rest import RoleRestAdapter, SharedServiceRestAdapter, UserRestAdapter
from ..adapters.group_rest import GroupRestAdapter
from ..adapters.http_client import HttpConfig, RetryingSession
from ..adapters.tenant_request_rest import TenantRequestRestAdapter
from ..adapters.tenant_rest import TenantRestAdapter
from ..adapters.tms_mock import TmsBackendMock
from ..domain.ports import (
    GroupPort,
    RolePort,
    SharedServicePort,
    TenantPort,
    TenantRequestPort,
    UserPort,
)
from ..viewmodels.settings_vm import SettingsVM

LOGGER = logging.getLogger(__name__)


class AppController:
    """Create and cache backend ports from settings state.

    Call chain:
        ``ConsoleRuntime`` creates one instance and hands the resolved ports
        to the stores. ``reset`` is called after settings change so the next
        ``ensure_ready`` rebuilds adapters from the new values.
    """

    def __init__(self, settings_vm: SettingsVM, *, demo: bool = False) -> None:
        """Initialize controller with settings-backed lazy dependencies.

        Args:
            settings_vm: Settings state providing base URL, token, timeout
                and retry values for the HTTP session.
            demo: Serve every port from the in-memory :class:`TmsBackendMock`
                instead of the REST API.
        """
        self.settings_vm = settings_vm
        self.demo = demo
        self._mock: Optional[TmsBackendMock] = None
        self._session: Optional[RetryingSession] = None
        self.tenant_port: Optional[TenantPort] = None
        self.group_port: Optional[GroupPort] = None
        self.role_port: Optional[RolePort] = None
        self.service_port: Optional[SharedServicePort] = None
        self.request_port: Optional[TenantRequestPort] = None
        self.user_port: Optional[UserPort] = None

    @property
    def session(self) -> Optional[RetryingSession]:
        """Return the shared HTTP session, ``None`` in demo mode or before wiring."""
        return self._session

    def reset(self) -> None:
        """Drop cached adapters so the next ``ensure_ready`` rebuilds them.

        The demo backend survives a reset so its in-memory data is kept.
        """
        self._session = None
        self.tenant_port = None
        self.group_port = None
        self.role_port = None
        self.service_port = None
        self.request_port = None
        self.user_port = None

    def ensure_ready(self) -> bool:
        """Ensure every port is available.

        Returns:
            ``True`` when ports are wired, ``False`` when no API base URL is
            configured and demo mode is off.
        """
        if self.tenant_port is not None:
            return True

        if self.demo:
            if self._mock is None:
                self._mock = TmsBackendMock()
            self._bind(self._mock, self._mock, self._mock, self._mock, self._mock, self._mock)
            return True

        base_url = self.settings_vm.api_base_url
        if not base_url:
            return False

        self._session = RetryingSession(
            HttpConfig(
                request_timeout_s=self.settings_vm.request_timeout_s,
                retries=self.settings_vm.retries,
            ),
            token_provider=lambda: self.settings_vm.access_token or None,
        )
        LOGGER.debug("Wiring REST adapters for %s", base_url)
        self._bind(
            TenantRestAdapter(base_url, self._session),
            GroupRestAdapter(base_url, self._session),
            RoleRestAdapter(base_url, self._session),
            SharedServiceRestAdapter(base_url, self._session),
            TenantRequestRestAdapter(base_url, self._session),
            UserRestAdapter(base_url, self._session),
        )
        return True

    def _bind(
        self,
        tenant_port: TenantPort,
        group_port: GroupPort,
        role_port: RolePort,
        service_port: SharedServicePort,
        request_port: TenantRequestPort,
        user_port: UserPort,
    ) -> None:
        self.tenant_port = tenant_port
        self.group_port = group_port
        self.role_port = role_port
        self.service_port = service_port
        self.request_port = request_port
        self.user_port = user_port
