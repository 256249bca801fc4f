"""Difficulty engine -- level state machine driven by time, score and performance.

Wires the threshold evaluator, performance tracker and adaptive
recommender together behind one object. A host supplies a ``Scheduler``
for the periodic checks and decay timers, feeds game signals in (either by
calling ``on_score_changed`` / ``on_life_lost`` / ``on_streak_achieved``
or by handing over its own ``EventBus``), and listens on ``engine.events``
for ``difficulty_changed`` and ``adaptive_difficulty``.

Automatic transitions only ever move the level up. ``force_difficulty``
and ``reset`` are the only ways down.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Mapping, Optional, Union

from gauntlet.adaptive import compute_recommendation
from gauntlet.config import EngineConfig
from gauntlet.difficulty import DIFFICULTY_CONFIGS, DifficultyConfig, DifficultyLevel
from gauntlet.events import (
    ADAPTIVE_DIFFICULTY,
    DIFFICULTY_CHANGED,
    LIFE_LOST,
    SCORE_CHANGED,
    STREAK_ACHIEVED,
    AdaptiveDifficulty,
    DifficultyChanged,
    EventBus,
    Trigger,
)
from gauntlet.feedback import DifficultyFeedback, NullFeedback
from gauntlet.performance import PerformanceMetrics, PerformanceTracker
from gauntlet.scheduler import Scheduler, TimerHandle
from gauntlet.thresholds import next_level_for_score, next_level_for_time

logger = logging.getLogger("gauntlet.engine")


@dataclass
class DifficultyState:
    """Current position of the level state machine. Times are in ms."""

    current_level: DifficultyLevel
    previous_level: Optional[DifficultyLevel]
    highest_level_reached: DifficultyLevel
    difficulty_change_count: int
    difficulty_start_time: float
    session_start_time: float


@dataclass
class DifficultyStats:
    """Snapshot returned by ``DifficultyEngine.get_difficulty_stats``."""

    current_level: DifficultyLevel
    time_in_difficulty: float  # seconds
    highest_level_reached: DifficultyLevel
    difficulty_changes: int
    current_multipliers: Dict[str, float] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "current_level": self.current_level.name.lower(),
            "time_in_difficulty": self.time_in_difficulty,
            "highest_level_reached": self.highest_level_reached.name.lower(),
            "difficulty_changes": self.difficulty_changes,
            "current_multipliers": dict(self.current_multipliers),
        }


class DifficultyEngine:
    """Adaptive difficulty for one play session."""

    def __init__(
        self,
        scheduler: Scheduler,
        config: Optional[EngineConfig] = None,
        feedback: Optional[DifficultyFeedback] = None,
        signals: Optional[EventBus] = None,
        configs: Mapping[DifficultyLevel, DifficultyConfig] = DIFFICULTY_CONFIGS,
    ):
        self.scheduler = scheduler
        self.config = config or EngineConfig()
        self.feedback = feedback or NullFeedback()
        self.events = EventBus()
        self._configs = configs
        self._tracker = PerformanceTracker(scheduler, self.config.performance_window_ms)
        self._ticks: List[TimerHandle] = []
        self._detach: List[Callable[[], None]] = []
        self._destroyed = False

        self.state = self._initial_state()
        self._start_ticks()
        if signals is not None:
            self._attach_signals(signals)

    # --- Lifecycle ---

    def _initial_state(self) -> DifficultyState:
        now = self.scheduler.now()
        return DifficultyState(
            current_level=DifficultyLevel.EASY,
            previous_level=None,
            highest_level_reached=DifficultyLevel.EASY,
            difficulty_change_count=0,
            difficulty_start_time=now,
            session_start_time=now,
        )

    def _start_ticks(self) -> None:
        self._ticks = [
            self.scheduler.call_every(
                self.config.time_check_interval_ms, self.check_time_difficulty
            ),
            self.scheduler.call_every(
                self.config.adaptive_check_interval_ms, self.evaluate_player_performance
            ),
        ]

    def _stop_ticks(self) -> None:
        for handle in self._ticks:
            handle.cancel()
        self._ticks = []

    def _attach_signals(self, signals: EventBus) -> None:
        self._detach = [
            signals.subscribe(SCORE_CHANGED, self.on_score_changed),
            signals.subscribe(LIFE_LOST, self.on_life_lost),
            signals.subscribe(STREAK_ACHIEVED, self.on_streak_achieved),
        ]

    @property
    def destroyed(self) -> bool:
        return self._destroyed

    def reset(self) -> None:
        """Return to the state of a freshly constructed engine.

        Periodic checks are re-armed from the new session start. Decay
        timers armed before the reset keep running unless the config asks
        for them to be cancelled.
        """
        if self._destroyed:
            logger.debug("reset() ignored on destroyed engine")
            return
        self._stop_ticks()
        if self.config.cancel_decays_on_reset:
            self._tracker.cancel_pending()
        self._tracker.reset()
        self.state = self._initial_state()
        self._start_ticks()
        self.feedback.on_reset(self.get_difficulty_config())
        logger.debug("Difficulty engine reset")

    def destroy(self) -> None:
        """Cancel every timer and drop every subscription, inbound and outbound."""
        if self._destroyed:
            return
        self._destroyed = True
        self._stop_ticks()
        self._tracker.cancel_pending()
        for detach in self._detach:
            detach()
        self._detach = []
        self.events.clear()
        logger.debug("Difficulty engine destroyed")

    # --- State machine ---

    def set_difficulty(
        self, level: DifficultyLevel, trigger: Union[Trigger, str]
    ) -> bool:
        """Move to ``level``. Returns False when already there (no event)."""
        if self._destroyed:
            logger.debug("set_difficulty() ignored on destroyed engine")
            return False
        if level == self.state.current_level:
            return False

        trigger = Trigger(trigger)
        previous = self.state.current_level
        self.state.previous_level = previous
        self.state.current_level = level
        self.state.difficulty_start_time = self.scheduler.now()
        self.state.difficulty_change_count += 1
        if level > self.state.highest_level_reached:
            self.state.highest_level_reached = level

        config = self._configs[level]
        self.feedback.on_visual(level, config)
        self.feedback.on_audio(level > previous)

        self.events.publish(
            DIFFICULTY_CHANGED,
            DifficultyChanged(
                level=level, config=config, trigger=trigger, previous_level=previous
            ),
        )
        logger.info(
            "Difficulty changed to %s (%s) via %s",
            config.display_name,
            level.name,
            trigger.value,
        )
        return True

    def force_difficulty(self, level: DifficultyLevel) -> bool:
        """Jump to any level, up or down, as an adaptive transition."""
        return self.set_difficulty(level, Trigger.ADAPTIVE)

    # --- Inbound signals and ticks ---

    def check_time_difficulty(self) -> None:
        """Periodic time check: promote when a time threshold is crossed."""
        if self._destroyed:
            return
        elapsed_s = (self.scheduler.now() - self.state.session_start_time) / 1000
        level = next_level_for_time(elapsed_s, self.state.current_level)
        if level is not None:
            self.set_difficulty(level, Trigger.TIME)

    def on_score_changed(self, score: float) -> None:
        """Absolute score update: track velocity, promote on score thresholds."""
        if self._destroyed:
            return
        self._tracker.on_score_changed(score)
        level = next_level_for_score(score, self.state.current_level)
        if level is not None:
            self.set_difficulty(level, Trigger.SCORE)

    def on_life_lost(self) -> None:
        if self._destroyed:
            return
        self._tracker.on_life_lost()

    def on_streak_achieved(self) -> None:
        if self._destroyed:
            return
        self._tracker.on_streak_achieved()

    def evaluate_player_performance(self) -> Optional[AdaptiveDifficulty]:
        """Periodic adaptive check. Skipped entirely while on EASY.

        The recommendation is reported, not stored; spawn-rate queries
        compute their own.
        """
        if self._destroyed or self.state.current_level == DifficultyLevel.EASY:
            return None
        self._tracker.recompute_score_gain_rate()
        metrics = self._tracker.metrics
        report = AdaptiveDifficulty(
            lives_lost_rate=metrics.lives_lost_in_window,
            score_gain_rate=metrics.score_gain_rate,
            streak_frequency=metrics.streak_frequency,
            recommendation=self.compute_recommendation(),
        )
        self.events.publish(ADAPTIVE_DIFFICULTY, report)
        return report

    # --- Queries ---

    @property
    def metrics(self) -> PerformanceMetrics:
        return self._tracker.metrics

    @property
    def tracker(self) -> PerformanceTracker:
        return self._tracker

    def compute_recommendation(self) -> float:
        return compute_recommendation(self._tracker.metrics)

    def get_current_difficulty(self) -> DifficultyLevel:
        return self.state.current_level

    def get_difficulty_config(self) -> DifficultyConfig:
        return self._configs[self.state.current_level]

    def get_spawn_rate_multiplier(self) -> float:
        # Applies on EASY too, even though the periodic check skips EASY
        return self.get_difficulty_config().spawn_rate_multiplier * self.compute_recommendation()

    def get_speed_multiplier(self) -> float:
        return self.get_difficulty_config().speed_multiplier

    def get_hazard_variety(self) -> int:
        return self.get_difficulty_config().hazard_variety

    def get_assassin_aggressiveness(self) -> float:
        return self.get_difficulty_config().assassin_aggressiveness

    def get_difficulty_stats(self) -> DifficultyStats:
        return DifficultyStats(
            current_level=self.state.current_level,
            time_in_difficulty=(self.scheduler.now() - self.state.difficulty_start_time) / 1000,
            highest_level_reached=self.state.highest_level_reached,
            difficulty_changes=self.state.difficulty_change_count,
            current_multipliers={
                "spawn_rate": self.get_spawn_rate_multiplier(),
                "speed": self.get_speed_multiplier(),
            },
        )
