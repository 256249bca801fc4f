"""Tests for gauntlet.thresholds."""

from gauntlet.difficulty import DifficultyLevel
from gauntlet.thresholds import (
    SCORE_THRESHOLDS,
    TIME_THRESHOLDS,
    next_level_for_score,
    next_level_for_time,
)

EASY = DifficultyLevel.EASY
MEDIUM = DifficultyLevel.MEDIUM
HARD = DifficultyLevel.HARD
NIGHTMARE = DifficultyLevel.NIGHTMARE


def test_tables_are_highest_first():
    for table in (TIME_THRESHOLDS, SCORE_THRESHOLDS):
        values = [t.value for t in table]
        assert values == sorted(values, reverse=True)


def test_time_below_first_threshold():
    assert next_level_for_time(29.9, EASY) is None


def test_time_threshold_is_inclusive():
    assert next_level_for_time(30, EASY) is MEDIUM
    assert next_level_for_time(60, EASY) is HARD
    assert next_level_for_time(120, EASY) is NIGHTMARE


def test_time_jumps_to_highest_qualifying():
    # After a long pause every threshold is met at once
    assert next_level_for_time(500, EASY) is NIGHTMARE


def test_time_never_returns_current_or_lower():
    assert next_level_for_time(45, MEDIUM) is None
    assert next_level_for_time(90, HARD) is None
    assert next_level_for_time(45, HARD) is None
    assert next_level_for_time(1000, NIGHTMARE) is None


def test_time_from_medium_to_hard():
    assert next_level_for_time(61, MEDIUM) is HARD


def test_score_thresholds():
    assert next_level_for_score(9, EASY) is None
    assert next_level_for_score(10, EASY) is MEDIUM
    assert next_level_for_score(25, EASY) is HARD
    assert next_level_for_score(50, EASY) is NIGHTMARE


def test_ultra_score_maps_to_nightmare():
    assert next_level_for_score(100, EASY) is NIGHTMARE
    assert next_level_for_score(100, HARD) is NIGHTMARE
    assert next_level_for_score(100, NIGHTMARE) is None


def test_score_monotonic_guard():
    assert next_level_for_score(30, HARD) is None
    assert next_level_for_score(12, MEDIUM) is None
