"""Tests for gauntlet.difficulty."""

import dataclasses

import pytest

from gauntlet.difficulty import (
    DIFFICULTY_CONFIGS,
    EASY,
    HARD,
    MEDIUM,
    NIGHTMARE,
    DifficultyLevel,
    get_difficulty,
    get_difficulty_config,
    list_difficulties,
)


def test_config_count():
    assert len(DIFFICULTY_CONFIGS) == 4


def test_levels_are_ordered():
    assert DifficultyLevel.EASY < DifficultyLevel.MEDIUM < DifficultyLevel.HARD < DifficultyLevel.NIGHTMARE
    assert int(DifficultyLevel.NIGHTMARE) == 3


def test_config_lookup_by_level():
    assert get_difficulty_config(DifficultyLevel.EASY) is EASY
    assert get_difficulty_config(DifficultyLevel.NIGHTMARE) is NIGHTMARE


def test_easy_values():
    assert EASY.spawn_rate_multiplier == 1.0
    assert EASY.speed_multiplier == 1.0
    assert EASY.hazard_variety == 1
    assert EASY.display_name == "Leisurely Stroll"


def test_nightmare_values():
    assert NIGHTMARE.spawn_rate_multiplier == 3.0
    assert NIGHTMARE.speed_multiplier == 2.0
    assert NIGHTMARE.assassin_aggressiveness == 2.0
    assert NIGHTMARE.display_name == "Nightmare Descent"


def test_multipliers_increase():
    configs = list_difficulties()
    for lower, higher in zip(configs, configs[1:]):
        assert lower.spawn_rate_multiplier < higher.spawn_rate_multiplier
        assert lower.speed_multiplier < higher.speed_multiplier
        assert lower.hazard_variety < higher.hazard_variety
        assert lower.assassin_aggressiveness < higher.assassin_aggressiveness


def test_configs_are_immutable():
    with pytest.raises(dataclasses.FrozenInstanceError):
        MEDIUM.spawn_rate_multiplier = 9.0


def test_table_is_read_only():
    with pytest.raises(TypeError):
        DIFFICULTY_CONFIGS[DifficultyLevel.EASY] = HARD


def test_get_difficulty_case_insensitive():
    assert get_difficulty("Hard") == get_difficulty("HARD") == get_difficulty("hard")
    assert get_difficulty("nightmare") is DifficultyLevel.NIGHTMARE


def test_get_difficulty_unknown():
    with pytest.raises(KeyError):
        get_difficulty("impossible")


def test_list_difficulties_order():
    diffs = list_difficulties()
    assert len(diffs) == 4
    assert diffs[0].display_name == "Leisurely Stroll"
    assert diffs[-1].display_name == "Nightmare Descent"


def test_to_dict():
    data = HARD.to_dict()
    assert data["display_name"] == "Frantic Rush"
    assert data["background_color"] == "#4d3a2a"
    assert data["background_tint"] == 0x4D3A2A
