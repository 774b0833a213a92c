"""
Deferred callbacks for cosmetic UI timing.

The controller uses a scheduler to clear its busy flag a moment after a
calculation so the "calculating" indicator does not flicker. The calculation
itself never goes through here.

Three implementations:
- ThreadTimerScheduler: real time, one daemon `threading.Timer` per call
- ManualScheduler: queued calls fired by `run_due()`; drives Streamlit reruns and tests
- ImmediateScheduler: runs the callback at once (CLI)
"""

from typing import Callable, List, Optional
import heapq
import itertools
import logging
import threading
import time

logger = logging.getLogger(__name__)


class ScheduledCall:
    """Handle for one deferred callback."""

    def __init__(self, callback: Callable[[], None], due: float):
        self.callback = callback
        self.due = due
        self._cancelled = False
        self._fired = False
        self._lock = threading.Lock()

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def fired(self) -> bool:
        return self._fired

    def cancel(self) -> bool:
        """Cancel the call. Returns False if it already fired."""
        with self._lock:
            if self._fired:
                return False
            self._cancelled = True
            return True

    def fire(self) -> bool:
        """Run the callback once unless cancelled. Returns True if it ran."""
        with self._lock:
            if self._cancelled or self._fired:
                return False
            self._fired = True
        self.callback()
        return True


class Scheduler:
    """Base class: schedule `callback` to run `delay` seconds from now."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledCall:
        raise NotImplementedError("Subclasses must implement call_later()")


class ImmediateScheduler(Scheduler):
    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledCall:
        call = ScheduledCall(callback, due=0.0)
        call.fire()
        return call


class ThreadTimerScheduler(Scheduler):
    """Fires callbacks on background timer threads."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledCall:
        call = _TimerCall(callback, due=time.monotonic() + max(0.0, delay))
        timer = threading.Timer(max(0.0, delay), call.fire)
        timer.daemon = True
        call.timer = timer
        timer.start()
        return call


class _TimerCall(ScheduledCall):
    timer: Optional[threading.Timer] = None

    def cancel(self) -> bool:
        ok = super().cancel()
        if ok and self.timer is not None:
            self.timer.cancel()
        return ok


class ManualScheduler(Scheduler):
    """Queue of deferred calls fired explicitly.

    `clock` defaults to `time.monotonic`. `advance()` adds an offset on top
    of it so tests can move time forward without sleeping.
    """

    def __init__(self, clock: Optional[Callable[[], float]] = None):
        self._virtual_now = 0.0
        self._clock = clock or time.monotonic
        self._queue: List[tuple] = []
        self._counter = itertools.count()

    def now(self) -> float:
        return self._clock() + self._virtual_now

    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledCall:
        call = ScheduledCall(callback, due=self.now() + max(0.0, delay))
        heapq.heappush(self._queue, (call.due, next(self._counter), call))
        return call

    def pending(self) -> List[ScheduledCall]:
        """Outstanding calls in due order, excluding cancelled ones."""
        return [c for _, _, c in sorted(self._queue) if not c.cancelled and not c.fired]

    def time_until_next(self) -> Optional[float]:
        """Seconds until the next outstanding call is due (0 if overdue), None if idle."""
        calls = self.pending()
        if not calls:
            return None
        return max(0.0, calls[0].due - self.now())

    def run_due(self) -> int:
        """Fire every call whose due time has passed. Returns how many ran."""
        now = self.now()
        ran = 0
        while self._queue and self._queue[0][0] <= now:
            _, _, call = heapq.heappop(self._queue)
            if call.fire():
                ran += 1
        return ran

    def run_all(self) -> int:
        """Fire every outstanding call regardless of due time."""
        ran = 0
        while self._queue:
            _, _, call = heapq.heappop(self._queue)
            if call.fire():
                ran += 1
        return ran

    def advance(self, seconds: float) -> int:
        """Move the clock forward by `seconds`, then run what became due."""
        self._virtual_now += seconds
        return self.run_due()


__all__ = [
    "ScheduledCall",
    "Scheduler",
    "ImmediateScheduler",
    "ThreadTimerScheduler",
    "ManualScheduler",
]
