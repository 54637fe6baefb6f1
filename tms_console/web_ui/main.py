"""NiceGUI entrypoint for the tenant management console."""

from __future__ import annotations

import argparse
import json
import os
from typing import Any, Callable, Dict

from nicegui import ui

from tms_console.adapters.storage_local import StorageLocal
from tms_console.adapters.timer_nicegui import NiceGuiTimer
from tms_console.domain.constants import TENANT_REQUEST_STATUS, TMS_ROLES
from tms_console.domain.notifications import NotificationType
from tms_console.utils.logging import configure_root
from tms_console.web_ui.runtime import ConsoleRuntime
from tms_console.web_ui.viewmodels import (
    BROWSER_SETTINGS_KEY,
    WebSettingsVM,
    WebTenantFormVM,
    parse_settings_json,
)

NOTIFICATION_COLORS: Dict[NotificationType, str] = {
    NotificationType.SUCCESS: "positive",
    NotificationType.ERROR: "negative",
    NotificationType.WARNING: "warning",
    NotificationType.INFO: "info",
}


def _install_theme() -> None:
    """Install global CSS tokens for the console."""
    ui.add_head_html(
        """
<style>
:root {
  --tms-card: rgba(255, 255, 255, 0.92);
  --tms-border: #d0d7e2;
  --tms-muted: #4b5563;
}
body { background: #f3f5f9; }
.tms-page { max-width: 1280px; margin: 0 auto; padding: 14px; }
.tms-card { background: var(--tms-card); border: 1px solid var(--tms-border); border-radius: 12px; }
.tms-toasts { position: fixed; top: 12px; right: 12px; z-index: 1000; width: 360px; }
.tms-muted { color: var(--tms-muted); }
</style>
        """
    )


def _build_ui(args: argparse.Namespace) -> None:
    """Register the NiceGUI pages."""

    @ui.page("/")
    async def index() -> None:
        # Timers live in their own container so page refreshes never delete them.
        timer_host = ui.element("div").classes("hidden")
        runtime = ConsoleRuntime(
            NiceGuiTimer(container=timer_host),
            storage=StorageLocal(root_dir=args.settings),
            demo=args.demo,
        )
        settings_vm = WebSettingsVM.from_settings_vm(runtime.settings_vm)
        tenant_form = WebTenantFormVM()
        request_form = WebTenantFormVM()
        group_form: Dict[str, str] = {"name": "", "description": ""}
        settings_inputs: Dict[str, Any] = {}

        @ui.refreshable
        def render_notifications() -> None:
            with ui.column().classes("tms-toasts q-gutter-xs"):
                for item in runtime.notifications.items:
                    color = NOTIFICATION_COLORS[item.type]
                    with ui.card().classes(f"w-full bg-{color} text-white q-pa-sm"):
                        with ui.row().classes("w-full items-start justify-between no-wrap"):
                            with ui.column().classes("q-gutter-none"):
                                ui.label(item.title).classes("text-weight-bold")
                                ui.label(item.message).classes("text-body2")
                            ui.button(
                                icon="close",
                                on_click=lambda _, nid=item.id: runtime.dismiss(nid),
                            ).props("flat round dense color=white")

        @ui.refreshable
        def render_status() -> None:
            with ui.row().classes("w-full justify-between items-center tms-card p-3 q-mb-sm"):
                ui.label("Tenant Management Console").classes("text-h5")
                with ui.row().classes("items-center q-gutter-sm"):
                    if runtime.loading:
                        ui.spinner(size="sm")
                    ui.label(runtime.status_message).classes("tms-muted text-caption")
                    ui.button("Refresh", on_click=refresh_all).props("outline dense")

        @ui.refreshable
        def render_tenants() -> None:
            tenants = runtime.tenant_store.tenants
            if not tenants:
                ui.label("No tenants yet.").classes("tms-muted")
                return
            columns = [
                {"name": "name", "label": "Tenant", "field": "name", "align": "left"},
                {"name": "ministry", "label": "Ministry", "field": "ministry", "align": "left"},
                {"name": "owners", "label": "Owners", "field": "owners", "align": "left"},
                {"name": "members", "label": "Members", "field": "members"},
            ]
            rows = [
                {
                    "id": tenant.id,
                    "name": tenant.name,
                    "ministry": tenant.ministry_name,
                    "owners": ", ".join(u.display_name for u in tenant.admin_users()),
                    "members": len(tenant.users),
                }
                for tenant in tenants
            ]
            table = ui.table(columns=columns, rows=rows, row_key="id", selection="single")
            table.on("selection", lambda e: select_tenant(e.args))

        @ui.refreshable
        def render_tenant_detail() -> None:
            tenant = runtime.selected_tenant()
            if tenant is None:
                ui.label("Select a tenant to see its members and groups.").classes("tms-muted")
                return
            ui.label(f"{tenant.name} ({tenant.ministry_name})").classes("text-subtitle1")
            with ui.row().classes("w-full q-gutter-md items-start"):
                with ui.column():
                    ui.label("Members").classes("text-weight-medium")
                    for member in runtime.tenant_store.tenant_users.get(tenant.id, tenant.users):
                        roles = ", ".join(TMS_ROLES.TITLES.get(r.name, r.name) for r in member.roles)
                        ui.label(f"{member.display_name or member.user_name} - {roles}")
                with ui.column():
                    ui.label("Groups").classes("text-weight-medium")
                    for group in runtime.group_store.groups:
                        ui.label(f"{group.name} ({len(group.group_users)} users)")
                    ui.input("Group name").bind_value(group_form, "name")
                    ui.input("Description").bind_value(group_form, "description")
                    ui.button("Add group", on_click=add_group).props("dense")
                with ui.column():
                    ui.label("Shared services").classes("text-weight-medium")
                    for service in runtime.service_store.tenant_services.get(tenant.id, []):
                        ui.label(service.name)

        @ui.refreshable
        def render_requests() -> None:
            requests_ = runtime.request_store.tenant_requests
            if not requests_:
                ui.label("No tenant requests.").classes("tms-muted")
                return
            for request in requests_:
                with ui.row().classes("w-full items-center q-gutter-sm"):
                    ui.label(f"{request.name} ({request.ministry_name})")
                    ui.badge(request.status)
                    if request.status == TENANT_REQUEST_STATUS.NEW:
                        ui.button(
                            "Approve",
                            on_click=lambda _, rid=request.id: review(rid, TENANT_REQUEST_STATUS.APPROVED),
                        ).props("dense flat color=positive")
                        ui.button(
                            "Reject",
                            on_click=lambda _, rid=request.id: review(rid, TENANT_REQUEST_STATUS.REJECTED),
                        ).props("dense flat color=negative")

        def refresh_views() -> None:
            render_notifications.refresh()
            render_status.refresh()
            render_tenants.refresh()
            render_tenant_detail.refresh()
            render_requests.refresh()

        def on_runtime_change() -> None:
            render_notifications.refresh()
            render_status.refresh()

        runtime.on_change = on_runtime_change

        def _invoke(action: Callable[[], Any]) -> None:
            try:
                action()
            except Exception as exc:
                runtime.notifications.error(str(exc))
            refresh_views()

        def refresh_all() -> None:
            _invoke(runtime.refresh)

        def select_tenant(args: Any) -> None:
            rows = args.get("rows") if isinstance(args, dict) else None
            added = bool(args.get("added")) if isinstance(args, dict) else False
            tenant_id = rows[0]["id"] if rows and added else None
            _invoke(lambda: runtime.select_tenant(tenant_id))

        def add_tenant() -> None:
            problem = tenant_form.validation_error()
            if problem:
                runtime.notifications.warning(problem)
                return

            def action() -> None:
                if runtime.add_tenant(tenant_form.name.strip(), tenant_form.ministry_name):
                    tenant_form.reset()
                    sync_form_inputs()

            _invoke(action)

        def submit_request() -> None:
            problem = request_form.validation_error()
            if problem:
                runtime.notifications.warning(problem)
                return

            def action() -> None:
                created = runtime.submit_tenant_request(
                    request_form.name.strip(), request_form.ministry_name, request_form.description
                )
                if created is not None:
                    request_form.reset()
                    sync_form_inputs()

            _invoke(action)

        def review(request_id: str, status: str) -> None:
            _invoke(lambda: runtime.review_tenant_request(request_id, status))

        def add_group() -> None:
            def action() -> None:
                if runtime.add_group(group_form["name"].strip(), group_form["description"]):
                    group_form.update(name="", description="")

            _invoke(action)

        form_inputs: Dict[str, Any] = {}

        def sync_form_inputs() -> None:
            form_inputs["tenant_name"].value = tenant_form.name
            form_inputs["tenant_ministry"].value = tenant_form.ministry_name or None
            form_inputs["request_name"].value = request_form.name
            form_inputs["request_ministry"].value = request_form.ministry_name or None
            form_inputs["request_description"].value = request_form.description

        def sync_settings_inputs() -> None:
            for key, widget in settings_inputs.items():
                widget.value = getattr(settings_vm, key)

        def reload_settings_vm() -> None:
            fresh = WebSettingsVM.from_settings_vm(runtime.settings_vm)
            for key, value in fresh.to_payload().items():
                setattr(settings_vm, key, value)
            sync_settings_inputs()

        def apply_settings() -> None:
            _invoke(lambda: runtime.apply_settings_payload(settings_vm.to_payload()))
            reload_settings_vm()

        def save_settings() -> None:
            def action() -> None:
                runtime.apply_settings_payload(settings_vm.to_payload())
                runtime.save_settings()

            _invoke(action)
            reload_settings_vm()

        async def save_settings_to_browser() -> None:
            try:
                payload = settings_vm.to_payload()
                runtime.apply_settings_payload(payload)
                dumped = json.dumps(payload, ensure_ascii=False)
                await ui.run_javascript(
                    f"localStorage.setItem({json.dumps(BROWSER_SETTINGS_KEY)}, {json.dumps(dumped)});"
                )
            except Exception as exc:
                runtime.notifications.error(str(exc))
            refresh_views()

        async def load_settings_from_browser() -> None:
            try:
                raw = await ui.run_javascript(
                    f"return localStorage.getItem({json.dumps(BROWSER_SETTINGS_KEY)}) || '';"
                )
                text = str(raw or "").strip()
                if not text:
                    return
                runtime.apply_settings_payload(parse_settings_json(text))
                reload_settings_vm()
            except Exception as exc:
                runtime.notifications.error(str(exc))
            refresh_views()

        def export_settings_json() -> None:
            ui.download(
                json.dumps(settings_vm.to_payload(), ensure_ascii=False, indent=2).encode("utf-8"),
                filename="tms_settings.json",
            )

        def on_import_settings(event) -> None:
            try:
                text = event.content.read().decode("utf-8-sig")
                runtime.apply_settings_payload(parse_settings_json(text))
                reload_settings_vm()
            except Exception as exc:
                runtime.notifications.error(str(exc))
            refresh_views()

        # ------------------------------------------------------------------
        _install_theme()
        render_notifications()
        with ui.column().classes("tms-page w-full"):
            render_status()
            with ui.tabs() as tabs:
                tab_tenants = ui.tab("Tenants")
                tab_requests = ui.tab("Tenant requests")
                tab_settings = ui.tab("Settings")
            with ui.tab_panels(tabs, value=tab_tenants).classes("w-full"):
                with ui.tab_panel(tab_tenants):
                    with ui.card().classes("tms-card w-full"):
                        render_tenants()
                    with ui.card().classes("tms-card w-full"):
                        ui.label("Create tenant").classes("text-subtitle1")
                        with ui.row().classes("items-end q-gutter-sm"):
                            form_inputs["tenant_name"] = ui.input("Tenant name").bind_value(tenant_form, "name")
                            form_inputs["tenant_ministry"] = ui.select(
                                list(tenant_form.ministries), label="Ministry", with_input=True
                            ).bind_value(tenant_form, "ministry_name").classes("w-72")
                            ui.button("Create", on_click=add_tenant)
                    with ui.card().classes("tms-card w-full"):
                        render_tenant_detail()
                with ui.tab_panel(tab_requests):
                    with ui.card().classes("tms-card w-full"):
                        ui.label("Request a tenant").classes("text-subtitle1")
                        with ui.row().classes("items-end q-gutter-sm"):
                            form_inputs["request_name"] = ui.input("Tenant name").bind_value(request_form, "name")
                            form_inputs["request_ministry"] = ui.select(
                                list(request_form.ministries), label="Ministry", with_input=True
                            ).bind_value(request_form, "ministry_name").classes("w-72")
                            form_inputs["request_description"] = ui.input("Description").bind_value(
                                request_form, "description"
                            )
                            ui.button("Submit", on_click=submit_request)
                    with ui.card().classes("tms-card w-full"):
                        render_requests()
                with ui.tab_panel(tab_settings):
                    with ui.card().classes("tms-card w-full q-gutter-sm"):
                        settings_inputs["api_base_url"] = ui.input("API base URL").bind_value(settings_vm, "api_base_url")
                        settings_inputs["access_token"] = ui.input(
                            "Access token", password=True, password_toggle_button=True
                        ).bind_value(settings_vm, "access_token")
                        settings_inputs["request_timeout_s"] = ui.number(
                            "Request timeout (s)", min=1, on_change=lambda e: setattr(settings_vm, "request_timeout_s", e.value)
                        )
                        settings_inputs["retries"] = ui.number(
                            "Retries", min=0, on_change=lambda e: setattr(settings_vm, "retries", e.value)
                        )
                        settings_inputs["notification_timeout_s"] = ui.number(
                            "Notification timeout (s)",
                            min=1,
                            on_change=lambda e: setattr(settings_vm, "notification_timeout_s", e.value),
                        )
                        settings_inputs["sso_user_id"] = ui.input("SSO user id").bind_value(settings_vm, "sso_user_id")
                        settings_inputs["user_name"] = ui.input("User name").bind_value(settings_vm, "user_name")
                        settings_inputs["display_name"] = ui.input("Display name").bind_value(settings_vm, "display_name")
                        settings_inputs["email"] = ui.input("Email").bind_value(settings_vm, "email")
                        settings_inputs["debug_logging"] = ui.switch("Debug logging").bind_value(
                            settings_vm, "debug_logging"
                        )
                        with ui.row().classes("q-gutter-sm"):
                            ui.button("Apply", on_click=apply_settings)
                            ui.button("Save to disk", on_click=save_settings)
                            ui.button("Save to browser", on_click=save_settings_to_browser)
                            ui.button("Export JSON", on_click=export_settings_json)
                        ui.upload(on_upload=on_import_settings, auto_upload=True, label="Import settings JSON")

        sync_settings_inputs()
        await ui.context.client.connected()
        await load_settings_from_browser()
        refresh_all()


def _parse_args() -> argparse.Namespace:
    """Parse CLI args for web runtime startup."""
    parser = argparse.ArgumentParser(description="Run the tenant management console.")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8080)
    parser.add_argument(
        "--settings",
        default=os.environ.get("TMS_STORAGE_ROOT") or ".",
        help="Directory holding user_settings.json",
    )
    parser.add_argument("--demo", action="store_true", help="Serve data from the in-memory demo backend")
    parser.add_argument("--reload", action="store_true")
    return parser.parse_args()


def main() -> None:
    """CLI entrypoint for the NiceGUI runtime."""
    args = _parse_args()
    configure_root()
    _build_ui(args)
    ui.run(
        host=args.host,
        port=args.port,
        title="Tenant Management Console",
        reload=args.reload,
        show=False,
        storage_secret=os.environ.get("TMS_WEB_STORAGE_SECRET", "tms-console-secret"),
    )


if __name__ == "__main__":
    main()
