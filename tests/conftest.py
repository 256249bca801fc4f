"""Shared test fixtures and helpers for Gauntlet test suite."""

import pytest

from gauntlet.engine import DifficultyEngine
from gauntlet.events import ADAPTIVE_DIFFICULTY, DIFFICULTY_CHANGED
from gauntlet.feedback import RecordingFeedback
from gauntlet.scheduler import ManualScheduler


# --- Helpers ---


class EventRecorder:
    """Collects payloads published on an engine's event bus."""

    def __init__(self, engine):
        self.changes = []
        self.reports = []
        engine.events.subscribe(DIFFICULTY_CHANGED, self.changes.append)
        engine.events.subscribe(ADAPTIVE_DIFFICULTY, self.reports.append)


# --- Fixtures ---


@pytest.fixture
def scheduler():
    """A fake clock starting at t=0."""
    return ManualScheduler()


@pytest.fixture
def feedback():
    return RecordingFeedback()


@pytest.fixture
def engine(scheduler, feedback):
    """An engine on the fake clock, destroyed after the test."""
    eng = DifficultyEngine(scheduler, feedback=feedback)
    yield eng
    eng.destroy()


@pytest.fixture
def recorder(engine):
    return EventRecorder(engine)


@pytest.fixture
def make_recorder():
    """Factory for recorders on engines a test builds itself."""
    return EventRecorder
