"""
scheduler.py: Cancellable interval / timeout timers driven by the game clock.

The clock only moves when the owner calls advance(), so every timer fires
on the game thread, in a reproducible order.
"""

import itertools
import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, Optional

logger = logging.getLogger(__name__)

# Frame times like 1000/60 do not sum exactly to whole milliseconds.
_EPSILON_MS = 1e-6


@dataclass
class TimerHandle:
    id: int
    due: float
    callback: Callable[[], None] = field(repr=False)
    period: Optional[float] = None   # None for one-shot timeouts
    cancelled: bool = False


class Scheduler:
    """Single-threaded timer wheel on a manually advanced millisecond clock."""

    def __init__(self):
        self.now = 0.0
        self._timers: Dict[int, TimerHandle] = {}
        self._ids = itertools.count(1)

    @property
    def active(self) -> int:
        return len(self._timers)

    def set_timeout(self, delay_ms: float, callback: Callable[[], None]) -> TimerHandle:
        if delay_ms < 0:
            raise ValueError(f"timeout delay must be >= 0, got {delay_ms}")
        return self._add(TimerHandle(next(self._ids), self.now + delay_ms, callback))

    def set_interval(self, period_ms: float, callback: Callable[[], None]) -> TimerHandle:
        if period_ms <= 0:
            raise ValueError(f"interval period must be > 0, got {period_ms}")
        return self._add(TimerHandle(next(self._ids), self.now + period_ms, callback, period_ms))

    def _add(self, handle: TimerHandle) -> TimerHandle:
        self._timers[handle.id] = handle
        return handle

    def cancel(self, handle: Optional[TimerHandle]):
        """Cancels a timer. Unknown, fired or already cancelled handles are ignored."""
        if handle is None:
            return
        handle.cancelled = True
        self._timers.pop(handle.id, None)

    def cancel_all(self):
        if self._timers:
            logger.debug("Cancelling %d timer(s)", len(self._timers))
        for handle in self._timers.values():
            handle.cancelled = True
        self._timers.clear()

    def advance(self, dt_ms: float):
        """
        Moves the clock forward and fires every timer that became due, in due
        order (creation order on ties). An interval that fell behind fires once
        per missed period. While a callback runs, now is its due time, so
        timers it schedules count from there and may fire in this same call.
        """
        target = self.now + dt_ms

        while True:
            handle = self._next_due(target)
            if handle is None:
                break

            self.now = max(self.now, handle.due)

            if handle.period is None:
                del self._timers[handle.id]
            else:
                handle.due += handle.period

            handle.callback()

        self.now = target

    def _next_due(self, target: float) -> Optional[TimerHandle]:
        due = [h for h in self._timers.values() if h.due <= target + _EPSILON_MS]
        if not due:
            return None
        return min(due, key=lambda h: (h.due, h.id))

    def reset(self):
        """Cancels everything and rewinds the clock."""
        self.cancel_all()
        self.now = 0.0
