"""Threshold evaluation -- decides which level elapsed time or score unlocks.

Both tables are ordered highest level first. The first threshold that is
met *and* whose level is above the current one wins, so a single check
after a long pause jumps straight to the highest qualifying level instead
of stepping through the ones in between.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from gauntlet.difficulty import DifficultyLevel


@dataclass(frozen=True)
class Threshold:
    """A value at or above which ``level`` becomes eligible."""

    name: str
    value: float
    level: DifficultyLevel


# Seconds since session start
TIME_THRESHOLDS: Tuple[Threshold, ...] = (
    Threshold("nightmare", 120, DifficultyLevel.NIGHTMARE),
    Threshold("hard", 60, DifficultyLevel.HARD),
    Threshold("medium", 30, DifficultyLevel.MEDIUM),
)

# Absolute score in points
SCORE_THRESHOLDS: Tuple[Threshold, ...] = (
    Threshold("ultra_nightmare", 100, DifficultyLevel.NIGHTMARE),
    Threshold("nightmare", 50, DifficultyLevel.NIGHTMARE),
    Threshold("hard", 25, DifficultyLevel.HARD),
    Threshold("medium", 10, DifficultyLevel.MEDIUM),
)


def _first_qualifying(
    value: float,
    current: DifficultyLevel,
    table: Tuple[Threshold, ...],
) -> Optional[DifficultyLevel]:
    for threshold in table:
        if value >= threshold.value and threshold.level > current:
            return threshold.level
    return None


def next_level_for_time(
    elapsed_seconds: float, current: DifficultyLevel
) -> Optional[DifficultyLevel]:
    """Level that ``elapsed_seconds`` unlocks above ``current``, or None."""
    return _first_qualifying(elapsed_seconds, current, TIME_THRESHOLDS)


def next_level_for_score(
    score: float, current: DifficultyLevel
) -> Optional[DifficultyLevel]:
    """Level that ``score`` unlocks above ``current``, or None.

    The ultra threshold maps to NIGHTMARE just like the regular NIGHTMARE
    threshold; both are checked.
    """
    return _first_qualifying(score, current, SCORE_THRESHOLDS)
