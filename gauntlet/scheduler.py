"""Host schedulers -- clocks and cancellable timers the engine registers with.

The engine never runs a loop of its own. It asks a ``Scheduler`` for the
current time and for one-shot or periodic callbacks, and keeps the
returned handles so it can cancel them on teardown.

All times are in milliseconds.
"""

import abc
import asyncio
import heapq
import itertools
from typing import Callable, List, Optional, Tuple

Callback = Callable[[], None]


class TimerHandle(abc.ABC):
    """A scheduled callback that can be cancelled before it fires."""

    @abc.abstractmethod
    def cancel(self) -> None:
        """Prevent any further firing. Safe to call more than once."""

    @property
    @abc.abstractmethod
    def cancelled(self) -> bool:
        """True once ``cancel()`` has been called."""


class Scheduler(abc.ABC):
    """Abstract base class for timer hosts."""

    @abc.abstractmethod
    def now(self) -> float:
        """Current time in milliseconds."""

    @abc.abstractmethod
    def call_later(self, delay_ms: float, callback: Callback) -> TimerHandle:
        """Run ``callback`` once, ``delay_ms`` from now."""

    @abc.abstractmethod
    def call_every(self, interval_ms: float, callback: Callback) -> TimerHandle:
        """Run ``callback`` every ``interval_ms`` until cancelled."""


# --- Manual (fake clock) scheduler ---


class _ManualTimer(TimerHandle):
    def __init__(self, due: float, callback: Callback, interval: Optional[float]):
        self.due = due
        self.callback = callback
        self.interval = interval
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled


class ManualScheduler(Scheduler):
    """Scheduler driven by explicit ``advance()`` calls.

    Used by tests, demos, and game loops that own their frame clock.
    Timers fire in due-time order (ties in registration order) and the
    clock reads each timer's due time while its callback runs.
    """

    def __init__(self, start_ms: float = 0.0):
        self._now = float(start_ms)
        self._queue: List[Tuple[float, int, _ManualTimer]] = []
        self._seq = itertools.count()

    def now(self) -> float:
        return self._now

    def call_later(self, delay_ms: float, callback: Callback) -> TimerHandle:
        timer = _ManualTimer(self._now + delay_ms, callback, None)
        self._push(timer)
        return timer

    def call_every(self, interval_ms: float, callback: Callback) -> TimerHandle:
        if interval_ms <= 0:
            raise ValueError("interval_ms must be positive")
        timer = _ManualTimer(self._now + interval_ms, callback, interval_ms)
        self._push(timer)
        return timer

    def advance(self, ms: float) -> int:
        """Move the clock forward by ``ms``, firing due timers.

        Returns the number of callbacks that ran.
        """
        target = self._now + ms
        fired = 0
        while self._queue and self._queue[0][0] <= target:
            due, _, timer = heapq.heappop(self._queue)
            if timer.cancelled:
                continue
            self._now = due
            if timer.interval is not None:
                timer.due = due + timer.interval
                self._push(timer)
            timer.callback()
            fired += 1
        self._now = target
        return fired

    def pending(self) -> int:
        """Number of timers that are still live."""
        return sum(1 for _, _, timer in self._queue if not timer.cancelled)

    def _push(self, timer: _ManualTimer) -> None:
        heapq.heappush(self._queue, (timer.due, next(self._seq), timer))


# --- asyncio scheduler ---


class _AsyncioTimer(TimerHandle):
    def __init__(self):
        self._handle: Optional[asyncio.TimerHandle] = None
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True
        if self._handle is not None:
            self._handle.cancel()

    @property
    def cancelled(self) -> bool:
        return self._cancelled


class AsyncioScheduler(Scheduler):
    """Real-time scheduler backed by an asyncio event loop.

    Must be created from inside the loop it schedules on (or be handed
    that loop explicitly).
    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop or asyncio.get_running_loop()

    def now(self) -> float:
        return self._loop.time() * 1000

    def call_later(self, delay_ms: float, callback: Callback) -> TimerHandle:
        timer = _AsyncioTimer()

        def _fire():
            if not timer.cancelled:
                callback()

        timer._handle = self._loop.call_later(delay_ms / 1000, _fire)
        return timer

    def call_every(self, interval_ms: float, callback: Callback) -> TimerHandle:
        if interval_ms <= 0:
            raise ValueError("interval_ms must be positive")
        timer = _AsyncioTimer()
        start = self._loop.time()
        ticks = itertools.count(1)

        def _fire():
            if timer.cancelled:
                return
            # Anchor to the start time so ticks don't drift
            timer._handle = self._loop.call_at(
                start + next(ticks) * interval_ms / 1000, _fire
            )
            callback()

        timer._handle = self._loop.call_at(
            start + next(ticks) * interval_ms / 1000, _fire
        )
        return timer
