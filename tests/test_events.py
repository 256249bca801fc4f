"""Tests for gauntlet.events."""

import pytest

from gauntlet.difficulty import HARD, DifficultyLevel
from gauntlet.events import (
    AdaptiveDifficulty,
    DifficultyChanged,
    EventBus,
    Trigger,
)


def test_publish_reaches_subscribers_in_order():
    bus = EventBus()
    seen = []
    bus.subscribe("ping", lambda x: seen.append(("a", x)))
    bus.subscribe("ping", lambda x: seen.append(("b", x)))
    assert bus.publish("ping", 7) == 2
    assert seen == [("a", 7), ("b", 7)]


def test_publish_without_payload():
    bus = EventBus()
    seen = []
    bus.subscribe("life_lost", lambda: seen.append(True))
    bus.publish("life_lost")
    assert seen == [True]


def test_publish_unknown_event_is_noop():
    assert EventBus().publish("nothing") == 0


def test_unsubscribe_callable():
    bus = EventBus()
    seen = []
    unsubscribe = bus.subscribe("ping", seen.append)
    unsubscribe()
    bus.publish("ping", 1)
    assert seen == []
    assert bus.listener_count("ping") == 0


def test_unsubscribe_missing_handler():
    assert EventBus().unsubscribe("ping", print) is False


def test_listener_count_and_clear():
    bus = EventBus()
    bus.subscribe("a", print)
    bus.subscribe("a", repr)
    bus.subscribe("b", print)
    assert bus.listener_count("a") == 2
    assert bus.listener_count() == 3
    bus.clear()
    assert bus.listener_count() == 0


def test_handler_errors_propagate():
    bus = EventBus()

    def boom(_):
        raise RuntimeError("boom")

    bus.subscribe("ping", boom)
    with pytest.raises(RuntimeError):
        bus.publish("ping", 1)


def test_trigger_values():
    assert Trigger("time") is Trigger.TIME
    assert Trigger.SCORE == "score"
    with pytest.raises(ValueError):
        Trigger("manual")


def test_difficulty_changed_to_dict():
    event = DifficultyChanged(
        level=DifficultyLevel.HARD,
        config=HARD,
        trigger=Trigger.SCORE,
        previous_level=DifficultyLevel.MEDIUM,
    )
    data = event.to_dict()
    assert data["level"] == "hard"
    assert data["level_value"] == 2
    assert data["trigger"] == "score"
    assert data["previous_level"] == "medium"
    assert data["config"]["display_name"] == "Frantic Rush"


def test_adaptive_difficulty_to_dict():
    report = AdaptiveDifficulty(
        lives_lost_rate=2, score_gain_rate=1.5, streak_frequency=3, recommendation=0.96
    )
    assert report.to_dict() == {
        "lives_lost_rate": 2,
        "score_gain_rate": 1.5,
        "streak_frequency": 3,
        "recommendation": 0.96,
    }
