from __future__ import annotations

from tms_console.adapters.tenant_rest import TenantRestAdapter
from tms_console.adapters.tms_mock import TmsBackendMock
from tms_console.app.controller import AppController
from tms_console.viewmodels.settings_vm import SettingsVM


def test_controller_requires_base_url() -> None:
    controller = AppController(SettingsVM())

    assert controller.ensure_ready() is False
    assert controller.tenant_port is None


def test_controller_wires_rest_adapters_from_settings() -> None:
    settings = SettingsVM()
    settings.apply_dict({"api_base_url": "http://api.local", "request_timeout_s": 4, "retries": 1, "access_token": "tok"})
    controller = AppController(settings)

    assert controller.ensure_ready() is True
    assert isinstance(controller.tenant_port, TenantRestAdapter)
    assert controller.tenant_port.base_url == "http://api.local"
    assert controller.session.cfg.request_timeout_s == 4
    assert controller.session.cfg.retries == 1
    assert controller.session.token_provider() == "tok"
    assert controller.user_port is not None


def test_reset_rebuilds_with_new_settings() -> None:
    settings = SettingsVM()
    settings.api_base_url = "http://old"
    controller = AppController(settings)
    controller.ensure_ready()

    settings.api_base_url = "http://new"
    controller.reset()
    controller.ensure_ready()

    assert controller.tenant_port.base_url == "http://new"


def test_demo_mode_keeps_one_mock_across_resets() -> None:
    controller = AppController(SettingsVM(), demo=True)

    assert controller.ensure_ready() is True
    first = controller.tenant_port
    assert isinstance(first, TmsBackendMock)
    assert controller.group_port is first

    controller.reset()
    controller.ensure_ready()
    assert controller.tenant_port is first
    assert controller.session is None
