"""ViewModel package: notification queue, settings state and service stores.

Call context:
    ``tms_console.web_ui.runtime.ConsoleRuntime`` constructs one instance of
    each store and the notification queue and hands them to the NiceGUI page.

Dependencies:
    Modules here depend on domain types, domain ports and the failure mapping
    in ``tms_console.usecases.error_mapping``. HTTP and timer implementations
    stay in ``tms_console.adapters``.

Responsibilities:
    - Own per-feature UI state (tenants, groups, requests, settings).
    - Apply the store failure policy: classify once, notify once, then
      re-raise or swallow.
    - Keep transient user feedback in the time-bounded notification queue.
"""
