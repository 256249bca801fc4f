"""Tests for gauntlet.config."""

from gauntlet.config import EngineConfig


def test_default_config():
    cfg = EngineConfig()
    assert cfg.time_check_interval_ms == 1000
    assert cfg.adaptive_check_interval_ms == 5000
    assert cfg.performance_window_ms == 60000
    assert cfg.cancel_decays_on_reset is False


def test_custom_config():
    cfg = EngineConfig(performance_window_ms=30000, cancel_decays_on_reset=True)
    assert cfg.performance_window_ms == 30000
    assert cfg.cancel_decays_on_reset


def test_window_feeds_tracker(scheduler):
    from gauntlet.engine import DifficultyEngine

    eng = DifficultyEngine(scheduler, config=EngineConfig(performance_window_ms=10000))
    eng.on_life_lost()
    scheduler.advance(10000)
    assert eng.metrics.lives_lost_in_window == 0
    eng.destroy()
