from __future__ import annotations

import pytest

from tms_console.viewmodels.settings_vm import SettingsVM, default_settings_payload


def test_defaults_snapshot() -> None:
    payload = default_settings_payload()

    assert payload["api_base_url"] == ""
    assert payload["request_timeout_s"] == 10
    assert payload["retries"] == 2
    assert payload["notification_timeout_s"] == 10.0
    assert payload["access_token"] == ""
    assert payload["sso_user_id"] == ""


def test_apply_dict_coerces_values() -> None:
    vm = SettingsVM()

    vm.apply_dict(
        {
            "api_base_url": " https://tms.example.gov/api/v1/ ",
            "request_timeout_s": "15",
            "retries": 0,
            "notification_timeout_s": "4.5",
            "debug_logging": "yes",
            "sso_user_id": " abc ",
        }
    )

    assert vm.api_base_url == "https://tms.example.gov/api/v1"
    assert vm.request_timeout_s == 15
    assert vm.retries == 0
    assert vm.notification_timeout_s == 4.5
    assert vm.debug_logging is True
    assert vm.sso_user_id == "abc"


def test_unknown_keys_are_rejected() -> None:
    vm = SettingsVM()

    with pytest.raises(ValueError, match="Unsupported settings keys: box_urls"):
        vm.apply_dict({"box_urls": {}})


@pytest.mark.parametrize(
    "payload",
    [
        {"request_timeout_s": 0},
        {"request_timeout_s": True},
        {"retries": -1},
        {"retries": "many"},
        {"notification_timeout_s": 0},
        {"api_base_url": 42},
    ],
)
def test_invalid_values_raise(payload) -> None:
    with pytest.raises(ValueError):
        SettingsVM().apply_dict(payload)


def test_cmd_save_validates_url_scheme() -> None:
    saved = []
    vm = SettingsVM(on_save=saved.append)
    vm.api_base_url = "ftp://example"

    with pytest.raises(ValueError):
        vm.cmd_save()

    vm.api_base_url = "http://localhost:4144/v1"
    vm.cmd_save()
    assert saved[-1]["api_base_url"] == "http://localhost:4144/v1"


def test_round_trip_through_to_dict() -> None:
    vm = SettingsVM()
    vm.apply_dict({"api_base_url": "http://a", "access_token": "t", "email": "x@y"})

    clone = SettingsVM()
    clone.apply_dict(vm.to_dict())

    assert clone.to_dict() == vm.to_dict()
