"""Event channel -- engine-owned publish/subscribe with typed payloads.

Outbound:
    difficulty_changed   -> DifficultyChanged
    adaptive_difficulty  -> AdaptiveDifficulty

Inbound (when a host publishes game signals on its own bus):
    score_changed        -> absolute score (int or float)
    life_lost            -> no payload
    streak_achieved      -> no payload
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from gauntlet.difficulty import DifficultyConfig, DifficultyLevel

logger = logging.getLogger("gauntlet.events")

DIFFICULTY_CHANGED = "difficulty_changed"
ADAPTIVE_DIFFICULTY = "adaptive_difficulty"

SCORE_CHANGED = "score_changed"
LIFE_LOST = "life_lost"
STREAK_ACHIEVED = "streak_achieved"

Handler = Callable[..., None]


class Trigger(str, Enum):
    """Why a level transition happened."""

    TIME = "time"
    SCORE = "score"
    ADAPTIVE = "adaptive"


@dataclass(frozen=True)
class DifficultyChanged:
    """Published exactly once per accepted level transition."""

    level: DifficultyLevel
    config: DifficultyConfig
    trigger: Trigger
    previous_level: DifficultyLevel

    def to_dict(self) -> dict:
        return {
            "level": self.level.name.lower(),
            "level_value": int(self.level),
            "config": self.config.to_dict(),
            "trigger": self.trigger.value,
            "previous_level": self.previous_level.name.lower(),
        }


@dataclass(frozen=True)
class AdaptiveDifficulty:
    """Informational performance report from the periodic adaptive check."""

    lives_lost_rate: int
    score_gain_rate: float
    streak_frequency: int
    recommendation: float

    def to_dict(self) -> dict:
        return {
            "lives_lost_rate": self.lives_lost_rate,
            "score_gain_rate": self.score_gain_rate,
            "streak_frequency": self.streak_frequency,
            "recommendation": self.recommendation,
        }


class EventBus:
    """Named channels of synchronous handlers.

    Handlers run in subscription order on the publisher's call stack.
    """

    def __init__(self):
        self._handlers: Dict[str, List[Handler]] = {}

    def subscribe(self, event: str, handler: Handler) -> Callable[[], None]:
        """Register ``handler`` for ``event``. Returns an unsubscribe callable."""
        self._handlers.setdefault(event, []).append(handler)

        def _unsubscribe() -> None:
            self.unsubscribe(event, handler)

        return _unsubscribe

    def unsubscribe(self, event: str, handler: Handler) -> bool:
        """Remove one registration of ``handler``. Returns False if absent."""
        handlers = self._handlers.get(event)
        if not handlers or handler not in handlers:
            return False
        handlers.remove(handler)
        if not handlers:
            del self._handlers[event]
        return True

    def publish(self, event: str, *payload: Any) -> int:
        """Call every handler for ``event``. Returns how many ran."""
        handlers = list(self._handlers.get(event, ()))
        for handler in handlers:
            try:
                handler(*payload)
            except Exception:
                logger.exception("Handler %r failed for event %s", handler, event)
                raise
        return len(handlers)

    def listener_count(self, event: Optional[str] = None) -> int:
        if event is not None:
            return len(self._handlers.get(event, ()))
        return sum(len(h) for h in self._handlers.values())

    def clear(self) -> None:
        """Drop every subscription."""
        self._handlers.clear()
