"""Presentation hooks -- where visual and audio feedback leave the engine."""

import abc
from typing import List, Tuple

from gauntlet.difficulty import DifficultyConfig, DifficultyLevel


class DifficultyFeedback(abc.ABC):
    """Abstract base class for presentation backends."""

    @abc.abstractmethod
    def on_visual(self, level: DifficultyLevel, config: DifficultyConfig) -> None:
        """A transition to ``level`` was accepted."""

    @abc.abstractmethod
    def on_audio(self, is_increase: bool) -> None:
        """Cue the transition sound for a level going up or down."""

    def on_reset(self, config: DifficultyConfig) -> None:
        """The engine returned to its initial level. Default is a no-op."""


class NullFeedback(DifficultyFeedback):
    """Discards every cue. Used when no presentation layer is attached."""

    def on_visual(self, level: DifficultyLevel, config: DifficultyConfig) -> None:
        pass

    def on_audio(self, is_increase: bool) -> None:
        pass


class RecordingFeedback(DifficultyFeedback):
    """Keeps every cue in order, for tests and headless hosts."""

    def __init__(self):
        self.calls: List[Tuple[str, object]] = []

    def on_visual(self, level: DifficultyLevel, config: DifficultyConfig) -> None:
        self.calls.append(("visual", level))

    def on_audio(self, is_increase: bool) -> None:
        self.calls.append(("audio", is_increase))

    def on_reset(self, config: DifficultyConfig) -> None:
        self.calls.append(("reset", config.background_tint))

    def clear(self) -> None:
        self.calls.clear()
