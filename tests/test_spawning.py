"""Tests for gauntlet.spawning."""

import pytest

from gauntlet.difficulty import DifficultyLevel
from gauntlet.spawning import VIP_SPEED_FACTOR, SpawnScaler


def test_no_source_means_unscaled():
    scaler = SpawnScaler()
    assert scaler.spawn_delay(3000) == 3000
    assert scaler.entity_speed(120) == 120
    assert scaler.assassin_delay(2500) == 2500
    assert scaler.assassin_speed(150) == 150
    assert scaler.hazard_variety() == 1


def test_easy_engine_is_unscaled(engine):
    scaler = SpawnScaler(engine)
    assert scaler.spawn_delay(3000) == pytest.approx(3000)
    assert scaler.entity_speed(100) == pytest.approx(100)


def test_hard_shortens_delays_and_speeds_up(engine):
    scaler = SpawnScaler(engine)
    engine.force_difficulty(DifficultyLevel.HARD)
    assert scaler.spawn_delay(4000) == pytest.approx(2000)
    assert scaler.entity_speed(100) == pytest.approx(150)
    assert scaler.hazard_variety() == 3


def test_vip_moves_slower_than_other_entities(engine):
    scaler = SpawnScaler(engine)
    engine.force_difficulty(DifficultyLevel.MEDIUM)
    assert scaler.vip_speed(70) == pytest.approx(70 * 1.2 * VIP_SPEED_FACTOR)


def test_assassins_scale_with_aggressiveness(engine):
    scaler = SpawnScaler(engine)
    engine.force_difficulty(DifficultyLevel.NIGHTMARE)
    assert scaler.assassin_delay(3000) == pytest.approx(1500)
    assert scaler.assassin_speed(150) == pytest.approx(150 * 2.0 * 2.0)


def test_spawn_delay_includes_adaptive_recommendation(engine):
    scaler = SpawnScaler()
    scaler.attach(engine)
    engine.force_difficulty(DifficultyLevel.MEDIUM)
    for _ in range(5):
        engine.on_life_lost()
    # 1.5 spawn rate * 0.9 recommendation
    assert scaler.spawn_delay(2700) == pytest.approx(2000)
