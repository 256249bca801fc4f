"""Spawn scaling -- applies the engine's multipliers to entity timing and speed.

This is how the spawner consumes difficulty: delays shrink as the spawn
rate multiplier grows, speeds grow with the speed multiplier, and
assassins additionally scale with aggressiveness. With no engine attached
every multiplier reads as 1.
"""

from typing import Optional

from gauntlet.engine import DifficultyEngine

# VIPs move at 80% of normal entity speed
VIP_SPEED_FACTOR = 0.8


class SpawnScaler:
    """Scale base spawn parameters by the current difficulty."""

    def __init__(self, source: Optional[DifficultyEngine] = None):
        self.source = source

    def attach(self, source: DifficultyEngine) -> None:
        self.source = source

    def spawn_rate_multiplier(self) -> float:
        if self.source is None:
            return 1.0
        return self.source.get_spawn_rate_multiplier() or 1.0

    def speed_multiplier(self) -> float:
        if self.source is None:
            return 1.0
        return self.source.get_speed_multiplier() or 1.0

    def aggressiveness(self) -> float:
        if self.source is None:
            return 1.0
        return self.source.get_assassin_aggressiveness() or 1.0

    def hazard_variety(self) -> int:
        if self.source is None:
            return 1
        return self.source.get_hazard_variety() or 1

    def spawn_delay(self, base_ms: float) -> float:
        """Delay until the next spawn of an entity whose base delay is ``base_ms``."""
        return base_ms / self.spawn_rate_multiplier()

    def entity_speed(self, base_speed: float) -> float:
        return base_speed * self.speed_multiplier()

    def vip_speed(self, base_speed: float) -> float:
        return self.entity_speed(base_speed) * VIP_SPEED_FACTOR

    def assassin_delay(self, base_ms: float) -> float:
        """Delay between a VIP appearing and its assassin being sent."""
        return base_ms / self.aggressiveness()

    def assassin_speed(self, base_speed: float) -> float:
        return base_speed * self.speed_multiplier() * self.aggressiveness()
