"""Deterministic in-process timer with a manually advanced clock.

Used by tests and by headless runs of the console. Nothing fires until the
owner calls :meth:`VirtualTimer.advance` or :meth:`VirtualTimer.advance_to`,
so expiry behavior can be checked at exact instants without sleeping.
"""

from __future__ import annotations

import heapq
import itertools
import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Tuple

from tms_console.domain.ports import TimerPort


@dataclass(order=True)
class _Entry:
    due: float
    seq: int
    callback: Callable[[], None] = field(compare=False)


class VirtualTimer(TimerPort):
    """Manual clock implementing ``TimerPort``.

    Callbacks due at the same instant run in the order they were scheduled.
    A callback scheduled while advancing runs in the same ``advance`` call if
    it falls due before the target time.
    """

    def __init__(self, start: float = 0.0) -> None:
        self._now = float(start)
        self._seq = itertools.count(1)
        self._heap: List[_Entry] = []
        self._live: Dict[int, _Entry] = {}
        self._log = logging.getLogger(__name__)

    @property
    def now(self) -> float:
        return self._now

    @property
    def pending(self) -> int:
        """Number of scheduled callbacks that have neither fired nor been cancelled."""
        return len(self._live)

    def schedule_after(self, delay_s: float, callback: Callable[[], None]) -> int:
        delay = max(0.0, float(delay_s))
        entry = _Entry(due=self._now + delay, seq=next(self._seq), callback=callback)
        heapq.heappush(self._heap, entry)
        self._live[entry.seq] = entry
        return entry.seq

    def cancel(self, token: int) -> None:
        # Cancelled entries stay in the heap and are skipped when popped.
        self._live.pop(token, None)

    def advance(self, delta_s: float) -> int:
        """Move the clock forward by ``delta_s`` seconds; return callbacks run."""
        if delta_s < 0:
            raise ValueError("VirtualTimer cannot move backwards.")
        return self.advance_to(self._now + delta_s)

    def advance_to(self, target: float) -> int:
        """Run every callback due at or before ``target`` and set ``now`` to it."""
        if target < self._now:
            raise ValueError("VirtualTimer cannot move backwards.")
        fired = 0
        while self._heap and self._heap[0].due <= target:
            entry = heapq.heappop(self._heap)
            if self._live.pop(entry.seq, None) is None:
                continue
            self._now = entry.due
            entry.callback()
            fired += 1
        self._now = target
        self._log.debug("VirtualTimer advanced to %.3f (%d callbacks)", target, fired)
        return fired

    def due_times(self) -> List[Tuple[float, int]]:
        """Return ``(due, token)`` pairs of live callbacks, soonest first."""
        return sorted((entry.due, entry.seq) for entry in self._live.values())


__all__ = ["VirtualTimer"]
