"""Timer adapter that schedules callbacks on the NiceGUI event loop.

The web runtime passes an instance of :class:`NiceGuiTimer` into the
notification queue so expiry callbacks run on the same loop as UI handlers.
"""

from __future__ import annotations

from typing import Callable, Optional

from nicegui import ui
from nicegui.element import Element

from tms_console.domain.ports import TimerPort


class NiceGuiTimer(TimerPort):
    """One-shot ``ui.timer`` per scheduled callback.

    Must be used inside a NiceGUI page context (the timer is bound to the
    client that created it). When ``container`` is given, timers are created
    inside it so refreshing other parts of the page cannot delete them.
    """

    def __init__(self, container: Optional[Element] = None) -> None:
        self.container = container

    def schedule_after(self, delay_s: float, callback: Callable[[], None]) -> ui.timer:
        delay = max(0.01, float(delay_s))
        if self.container is None:
            return ui.timer(delay, callback, once=True)
        with self.container:
            return ui.timer(delay, callback, once=True)

    def cancel(self, token: ui.timer) -> None:
        token.cancel()


__all__ = ["NiceGuiTimer"]
