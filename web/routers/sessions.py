"""Sessions router -- REST access to hosted difficulty engines."""

import logging
import math
import os
import uuid
from collections import deque
from typing import Deque, Dict, List, Optional, Tuple, Union

from fastapi import APIRouter

from gauntlet.difficulty import DifficultyLevel, get_difficulty, list_difficulties
from gauntlet.engine import DifficultyEngine
from gauntlet.events import ADAPTIVE_DIFFICULTY, DIFFICULTY_CHANGED
from gauntlet.scheduler import AsyncioScheduler

logger = logging.getLogger("gauntlet.web")

router = APIRouter()

_MAX_SESSIONS = int(os.environ.get("GAUNTLET_MAX_SESSIONS", "100"))
_EVENT_LOG_SIZE = 256


# --- Hosted session ---

class EngineSession:
    """One difficulty engine running on the server's event loop."""

    def __init__(self):
        self.session_id = str(uuid.uuid4())[:8]
        self.scheduler = AsyncioScheduler()
        self.engine = DifficultyEngine(self.scheduler)
        self._events: Deque[dict] = deque(maxlen=_EVENT_LOG_SIZE)
        self.engine.events.subscribe(DIFFICULTY_CHANGED, self._record(DIFFICULTY_CHANGED))
        self.engine.events.subscribe(ADAPTIVE_DIFFICULTY, self._record(ADAPTIVE_DIFFICULTY))

    def _record(self, name: str):
        def _handler(payload):
            entry = payload.to_dict()
            entry["type"] = name
            self._events.append(entry)
        return _handler

    def drain_events(self) -> List[dict]:
        """Return and forget every event recorded since the last drain."""
        events = list(self._events)
        self._events.clear()
        return events

    def state(self) -> dict:
        metrics = self.engine.metrics
        return {
            "session_id": self.session_id,
            "stats": self.engine.get_difficulty_stats().to_dict(),
            "config": self.engine.get_difficulty_config().to_dict(),
            "metrics": {
                "lives_lost_in_window": metrics.lives_lost_in_window,
                "score_gain_rate": metrics.score_gain_rate,
                "streak_frequency": metrics.streak_frequency,
            },
        }

    def close(self) -> None:
        self.engine.destroy()


_sessions: Dict[str, EngineSession] = {}


def create_session() -> Tuple[Optional[EngineSession], Optional[dict]]:
    """Create and register a session. Returns (session, error_response)."""
    if len(_sessions) >= _MAX_SESSIONS:
        return None, {"error": "Too many active sessions"}
    session = EngineSession()
    _sessions[session.session_id] = session
    logger.info("Session %s started", session.session_id)
    return session, None


def close_session(session_id: str) -> bool:
    session = _sessions.pop(session_id, None)
    if session is None:
        return False
    session.close()
    logger.info("Session %s closed", session_id)
    return True


def close_all_sessions() -> int:
    count = len(_sessions)
    for session_id in list(_sessions):
        close_session(session_id)
    return count


def parse_level(value: Union[int, str, None]) -> Tuple[Optional[DifficultyLevel], Optional[dict]]:
    """Accept a level name or integer. Returns (level, error_response)."""
    if isinstance(value, bool) or value is None:
        return None, {"error": "Level required"}
    if isinstance(value, int):
        try:
            return DifficultyLevel(value), None
        except ValueError:
            return None, {"error": f"Unknown difficulty level {value}"}
    try:
        return get_difficulty(str(value)), None
    except KeyError as exc:
        return None, {"error": exc.args[0]}


def parse_score(value) -> Tuple[Optional[float], Optional[dict]]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None, {"error": "Numeric score required"}
    # json accepts Infinity and NaN
    if not math.isfinite(value):
        return None, {"error": "Numeric score required"}
    return value, None


# --- Difficulty table ---

@router.get("/api/difficulties")
async def get_difficulties():
    """List every difficulty level with its tuning parameters."""
    return [
        {"level": level.name.lower(), "value": int(level), **config.to_dict()}
        for level, config in zip(DifficultyLevel, list_difficulties())
    ]


# --- Session lifecycle ---

@router.post("/api/sessions")
async def start_session():
    """Start a new engine session."""
    session, err = create_session()
    if err:
        return err
    return session.state()


@router.get("/api/sessions/{session_id}")
async def get_session(session_id: str):
    session = _sessions.get(session_id)
    if session is None:
        return {"error": "Session not found"}
    return session.state()


@router.delete("/api/sessions/{session_id}")
async def delete_session(session_id: str):
    if not close_session(session_id):
        return {"error": "Session not found"}
    return {"closed": session_id}


@router.post("/api/sessions/{session_id}/reset")
async def reset_session(session_id: str):
    session = _sessions.get(session_id)
    if session is None:
        return {"error": "Session not found"}
    session.engine.reset()
    return session.state()


# --- Game signals ---

@router.post("/api/sessions/{session_id}/score")
async def post_score(session_id: str, data: dict):
    """Report the absolute score."""
    session = _sessions.get(session_id)
    if session is None:
        return {"error": "Session not found"}
    score, err = parse_score(data.get("score"))
    if err:
        return err
    session.engine.on_score_changed(score)
    return session.state()


@router.post("/api/sessions/{session_id}/life-lost")
async def post_life_lost(session_id: str):
    session = _sessions.get(session_id)
    if session is None:
        return {"error": "Session not found"}
    session.engine.on_life_lost()
    return session.state()


@router.post("/api/sessions/{session_id}/streak")
async def post_streak(session_id: str):
    session = _sessions.get(session_id)
    if session is None:
        return {"error": "Session not found"}
    session.engine.on_streak_achieved()
    return session.state()


@router.post("/api/sessions/{session_id}/force")
async def force_level(session_id: str, data: dict):
    """Override the level in either direction."""
    session = _sessions.get(session_id)
    if session is None:
        return {"error": "Session not found"}
    level, err = parse_level(data.get("level"))
    if err:
        return err
    session.engine.force_difficulty(level)
    return session.state()


@router.get("/api/sessions/{session_id}/events")
async def get_events(session_id: str):
    """Outbound engine events recorded since the previous call."""
    session = _sessions.get(session_id)
    if session is None:
        return {"error": "Session not found"}
    return {"session_id": session_id, "events": session.drain_events()}
