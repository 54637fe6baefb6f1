from __future__ import annotations

from typing import List

import pytest

from tms_console.adapters.timer_virtual import VirtualTimer


def test_callbacks_run_in_due_order_with_clock_set_to_due_time() -> None:
    timer = VirtualTimer()
    fired: List[tuple] = []
    timer.schedule_after(5, lambda: fired.append(("b", timer.now)))
    timer.schedule_after(2, lambda: fired.append(("a", timer.now)))

    count = timer.advance(10)

    assert count == 2
    assert fired == [("a", 2.0), ("b", 5.0)]
    assert timer.now == 10.0


def test_same_due_time_keeps_schedule_order() -> None:
    timer = VirtualTimer()
    fired: List[str] = []
    timer.schedule_after(1, lambda: fired.append("first"))
    timer.schedule_after(1, lambda: fired.append("second"))

    timer.advance_to(1)

    assert fired == ["first", "second"]


def test_cancelled_callback_never_runs() -> None:
    timer = VirtualTimer()
    fired: List[str] = []
    token = timer.schedule_after(1, lambda: fired.append("x"))

    timer.cancel(token)
    timer.cancel(token)

    assert timer.advance(5) == 0
    assert fired == []
    assert timer.pending == 0


def test_callback_scheduled_during_advance_runs_when_due() -> None:
    timer = VirtualTimer()
    fired: List[float] = []

    def chain() -> None:
        fired.append(timer.now)
        timer.schedule_after(1, lambda: fired.append(timer.now))

    timer.schedule_after(1, chain)
    timer.advance(3)

    assert fired == [1.0, 2.0]


def test_moving_backwards_is_rejected() -> None:
    timer = VirtualTimer(start=5)

    with pytest.raises(ValueError):
        timer.advance(-1)
    with pytest.raises(ValueError):
        timer.advance_to(4)


def test_due_times_lists_live_entries() -> None:
    timer = VirtualTimer()
    keep = timer.schedule_after(4, lambda: None)
    drop = timer.schedule_after(2, lambda: None)
    timer.cancel(drop)

    assert timer.due_times() == [(4.0, keep)]
