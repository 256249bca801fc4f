"""Difficulty levels -- ordered tiers and the static tuning table behind them."""

from dataclasses import asdict, dataclass
from enum import IntEnum
from types import MappingProxyType
from typing import List, Mapping


class DifficultyLevel(IntEnum):
    """Ordered difficulty tiers. Comparisons use the integer ordering."""

    EASY = 0
    MEDIUM = 1
    HARD = 2
    NIGHTMARE = 3


@dataclass(frozen=True)
class DifficultyConfig:
    """Gameplay parameters that vary by difficulty level.

    Attributes:
        display_name: Name shown by the difficulty indicator.
        spawn_rate_multiplier: Divides entity spawn delays.
        speed_multiplier: Scales entity movement speed.
        hazard_variety: Number of hazard kinds in play.
        assassin_aggressiveness: Scales assassin delay and speed.
        background_color: Hex colour string for the playfield backdrop.
        background_tint: Same colour as an integer tint.
        text_color: Indicator text colour.
    """

    display_name: str
    spawn_rate_multiplier: float
    speed_multiplier: float
    hazard_variety: int
    assassin_aggressiveness: float
    background_color: str
    background_tint: int
    text_color: str

    def to_dict(self) -> dict:
        return asdict(self)


# Predefined tiers
EASY = DifficultyConfig(
    display_name="Leisurely Stroll",
    spawn_rate_multiplier=1.0,
    speed_multiplier=1.0,
    hazard_variety=1,
    assassin_aggressiveness=1.0,
    background_color="#2a4d3a",
    background_tint=0x2A4D3A,
    text_color="#4CAF50",
)

MEDIUM = DifficultyConfig(
    display_name="Moderate Pace",
    spawn_rate_multiplier=1.5,
    speed_multiplier=1.2,
    hazard_variety=2,
    assassin_aggressiveness=1.2,
    background_color="#4d4a2a",
    background_tint=0x4D4A2A,
    text_color="#FFC107",
)

HARD = DifficultyConfig(
    display_name="Frantic Rush",
    spawn_rate_multiplier=2.0,
    speed_multiplier=1.5,
    hazard_variety=3,
    assassin_aggressiveness=1.5,
    background_color="#4d3a2a",
    background_tint=0x4D3A2A,
    text_color="#FF9800",
)

NIGHTMARE = DifficultyConfig(
    display_name="Nightmare Descent",
    spawn_rate_multiplier=3.0,
    speed_multiplier=2.0,
    hazard_variety=4,
    assassin_aggressiveness=2.0,
    background_color="#4d2a2a",
    background_tint=0x4D2A2A,
    text_color="#F44336",
)

DIFFICULTY_CONFIGS: Mapping[DifficultyLevel, DifficultyConfig] = MappingProxyType({
    DifficultyLevel.EASY: EASY,
    DifficultyLevel.MEDIUM: MEDIUM,
    DifficultyLevel.HARD: HARD,
    DifficultyLevel.NIGHTMARE: NIGHTMARE,
})


def get_difficulty_config(level: DifficultyLevel) -> DifficultyConfig:
    """Return the tuning record for ``level``."""
    return DIFFICULTY_CONFIGS[level]


def get_difficulty(name: str) -> DifficultyLevel:
    """Look up a difficulty level by name (case-insensitive).

    Raises:
        KeyError: If the difficulty name is not recognized.
    """
    key = name.strip().upper()
    if key not in DifficultyLevel.__members__:
        valid = ", ".join(level.name.lower() for level in DifficultyLevel)
        raise KeyError(f"Unknown difficulty {name!r}. Valid: {valid}")
    return DifficultyLevel[key]


def list_difficulties() -> List[DifficultyConfig]:
    """Return all difficulty configs in order of increasing challenge."""
    return [DIFFICULTY_CONFIGS[level] for level in DifficultyLevel]
