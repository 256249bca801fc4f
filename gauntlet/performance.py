"""Performance tracking -- rolling player metrics fed by game signals.

Life losses are counted in an approximate 60 second window: every loss
increments a counter and arms its own one-shot decay timer that takes the
increment back when it fires. Score velocity is measured over a pruned
history of (timestamp, absolute score) samples.
"""

from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Set

from gauntlet.scheduler import Scheduler, TimerHandle

DEFAULT_WINDOW_MS = 60000


@dataclass
class ScoreSample:
    """Absolute score observed at ``time`` (ms)."""

    time: float
    score: float


@dataclass
class PerformanceMetrics:
    """Per-session performance counters."""

    lives_lost_in_window: int = 0
    score_gain_rate: float = 0.0  # points per second
    streak_frequency: int = 0  # cumulative, never decays
    last_death_time: float = 0.0
    score_history: Deque[ScoreSample] = field(default_factory=deque)


class PerformanceTracker:
    """Maintain ``PerformanceMetrics`` and the decay timers behind them."""

    def __init__(self, scheduler: Scheduler, window_ms: float = DEFAULT_WINDOW_MS):
        self._scheduler = scheduler
        self.window_ms = window_ms
        self.metrics = PerformanceMetrics()
        self._decays: Set[TimerHandle] = set()

    def on_life_lost(self) -> None:
        """Count a life loss and arm a timer that uncounts it later."""
        self.metrics.lives_lost_in_window += 1
        self.metrics.last_death_time = self._scheduler.now()

        handle = None

        def _decay():
            # Applies to the live counter, even one zeroed by reset()
            self._decays.discard(handle)
            self.metrics.lives_lost_in_window -= 1

        handle = self._scheduler.call_later(self.window_ms, _decay)
        self._decays.add(handle)

    def on_streak_achieved(self) -> None:
        self.metrics.streak_frequency += 1

    def on_score_changed(self, score: float) -> None:
        """Record an absolute score, prune old samples, refresh the rate."""
        now = self._scheduler.now()
        history = self.metrics.score_history
        history.append(ScoreSample(time=now, score=score))
        cutoff = now - self.window_ms
        while history and history[0].time < cutoff:
            history.popleft()
        self.recompute_score_gain_rate()

    def recompute_score_gain_rate(self) -> float:
        """Points per second across the retained history.

        Needs two samples; with fewer the previous rate is kept. Samples
        sharing one timestamp give a rate of 0.
        """
        history = self.metrics.score_history
        if len(history) >= 2:
            first, last = history[0], history[-1]
            span_s = (last.time - first.time) / 1000
            if span_s <= 0:
                self.metrics.score_gain_rate = 0.0
            else:
                self.metrics.score_gain_rate = (last.score - first.score) / span_s
        return self.metrics.score_gain_rate

    def pending_decays(self) -> int:
        return len(self._decays)

    def cancel_pending(self) -> None:
        """Cancel every outstanding decay timer."""
        for handle in self._decays:
            handle.cancel()
        self._decays.clear()

    def reset(self) -> None:
        """Zero all metrics. Outstanding decay timers are left armed."""
        self.metrics = PerformanceMetrics()
