"""Adapter package for external I/O implementations.

Purpose:
    Collect concrete implementations for domain ports: the TMS REST
    resources, local settings storage, timers, and the in-memory backend
    used for demos and tests.

Dependencies:
    REST modules depend on ``requests``; ``timer_nicegui`` depends on
    ``nicegui``. Everything else is standard library plus domain types.

Call context:
    Imported by ``tms_console.app.controller`` (runtime wiring) and by tests
    (stubs and transport-level behavior verification).
"""
