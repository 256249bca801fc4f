"""Central configuration for engine timing and the performance window."""

from dataclasses import dataclass


@dataclass
class EngineConfig:
    """Top-level configuration for a DifficultyEngine instance."""

    time_check_interval_ms: float = 1000
    adaptive_check_interval_ms: float = 5000
    performance_window_ms: float = 60000
    # Off by default: decay timers armed before reset() still fire afterwards
    cancel_decays_on_reset: bool = False
