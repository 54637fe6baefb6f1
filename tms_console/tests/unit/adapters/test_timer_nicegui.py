from __future__ import annotations

from typing import Callable, List

import pytest

from tms_console.adapters import timer_nicegui
from tms_console.adapters.timer_nicegui import NiceGuiTimer
from tms_console.viewmodels.notification_queue import NotificationQueue


class _TimerElementStub:
    created: List["_TimerElementStub"] = []

    def __init__(self, interval: float, callback: Callable[[], None], *, once: bool = False) -> None:
        self.interval = interval
        self.callback = callback
        self.once = once
        self.cancelled = False
        _TimerElementStub.created.append(self)

    def cancel(self) -> None:
        self.cancelled = True


@pytest.fixture
def timers(monkeypatch) -> List[_TimerElementStub]:
    _TimerElementStub.created = []
    monkeypatch.setattr(timer_nicegui.ui, "timer", _TimerElementStub)
    return _TimerElementStub.created


def test_schedule_creates_one_shot_timer(timers) -> None:
    token = NiceGuiTimer().schedule_after(0, lambda: None)

    assert token is timers[0]
    assert token.once is True
    assert token.interval == 0.01


def test_queue_remove_cancels_the_ui_timer(timers) -> None:
    queue = NotificationQueue(NiceGuiTimer(), expiry_s=4)
    first = queue.info("one")
    queue.info("two")

    queue.remove(first)

    assert [t.interval for t in timers] == [4.0, 4.0]
    assert [t.cancelled for t in timers] == [True, False]
    assert [n.message for n in queue.items] == ["two"]


def test_fired_timer_expires_its_notification(timers) -> None:
    queue = NotificationQueue(NiceGuiTimer())
    queue.error("boom")

    timers[0].callback()

    assert queue.items == ()
