"""Gauntlet web server -- FastAPI host for difficulty engine sessions.

Run with:
    uvicorn web.server:app --reload
    # or
    python -m web.server
"""

import json
import logging
import os
import time
from contextlib import asynccontextmanager
from typing import Dict, List, Optional

from fastapi import FastAPI, Request, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from web.routers import sessions
from web.routers.sessions import (
    EngineSession,
    _sessions,
    close_all_sessions,
    close_session,
    create_session,
    parse_level,
    parse_score,
)

logger = logging.getLogger("gauntlet.web")


# --- Lifecycle (graceful shutdown) ---

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown."""
    logger.info("Gauntlet web server starting up")
    yield
    # Cleanup on shutdown
    logger.info(
        "Gauntlet web server shutting down -- destroying %d sessions",
        close_all_sessions(),
    )


app = FastAPI(
    title="Gauntlet",
    description="Adaptive difficulty engine - session host",
    lifespan=lifespan,
)


# --- CORS Configuration ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=os.environ.get(
        "GAUNTLET_CORS_ORIGINS", "http://localhost:3000,http://localhost:8000"
    ).split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# --- Rate Limiting (simple in-memory, per-IP) ---
_rate_limit_log: Dict[str, List[float]] = {}
_RATE_LIMIT_RPM = int(os.environ.get("GAUNTLET_RATE_LIMIT_RPM", "600"))
_WS_MAX_MESSAGE_SIZE = int(os.environ.get("GAUNTLET_WS_MAX_MSG_SIZE", "4096"))


@app.middleware("http")
async def rate_limit_middleware(request: Request, call_next):
    """Simple per-IP rate limiting for HTTP endpoints."""
    client_ip = request.client.host if request.client else "unknown"
    now = time.time()
    window_start = now - 60

    log = _rate_limit_log.get(client_ip, [])
    log = [t for t in log if t > window_start]

    if len(log) >= _RATE_LIMIT_RPM:
        return JSONResponse(
            status_code=429,
            content={"error": "Rate limit exceeded. Try again later."},
        )

    log.append(now)
    _rate_limit_log[client_ip] = log
    return await call_next(request)


@app.middleware("http")
async def request_logging_middleware(request: Request, call_next):
    """Log every HTTP request with method, path, status, and duration."""
    start = time.time()
    response = await call_next(request)
    duration_ms = (time.time() - start) * 1000
    logger.info(
        "%s %s -> %d (%.1fms)",
        request.method,
        request.url.path,
        response.status_code,
        duration_ms,
    )
    return response


# --- Mount routers ---
app.include_router(sessions.router)


# --- Health Check ---

@app.get("/health")
async def health_check():
    """Health check endpoint for monitoring."""
    return {
        "status": "ok",
        "service": "gauntlet",
        "active_sessions": len(_sessions),
    }


# --- WebSocket helpers ---

def _validate_ws_message(raw: str):
    """Validate a WebSocket message. Returns (msg_dict, error_response)."""
    if len(raw) > _WS_MAX_MESSAGE_SIZE:
        return None, {"type": "error", "message": "Message too large"}
    try:
        msg = json.loads(raw)
    except json.JSONDecodeError:
        return None, {"type": "error", "message": "Invalid JSON"}
    if not isinstance(msg, dict):
        return None, {"type": "error", "message": "Expected JSON object"}
    return msg, None


def _state_frame(session: EngineSession) -> dict:
    frame = session.state()
    frame["type"] = "state"
    frame["events"] = session.drain_events()
    return frame


# --- WebSocket session ---

@app.websocket("/ws/difficulty")
async def websocket_difficulty(websocket: WebSocket):
    """WebSocket endpoint driving one engine session.

    Protocol:
        Client sends JSON messages:
            {"type": "start"}
            {"type": "score", "score": 42}
            {"type": "life_lost"}
            {"type": "streak"}
            {"type": "force", "level": "hard"}
            {"type": "reset"}
            {"type": "stats"} / {"type": "poll"}
            {"type": "stop"}

        Server responds after each message with
            {"type": "state", ...stats..., "events": [...]}
        where events are the difficulty_changed / adaptive_difficulty
        notifications published since the previous reply.
    """
    await websocket.accept()
    session: Optional[EngineSession] = None

    try:
        while True:
            raw = await websocket.receive_text()
            msg, err = _validate_ws_message(raw)
            if err:
                await websocket.send_json(err)
                continue
            msg_type = msg.get("type", "")

            if msg_type == "start":
                if session is not None:
                    close_session(session.session_id)
                session, err = create_session()
                if err:
                    await websocket.send_json({"type": "error", "message": err["error"]})
                    continue
                frame = _state_frame(session)
                frame["type"] = "started"
                await websocket.send_json(frame)
                continue

            if session is None:
                await websocket.send_json({"type": "error", "message": "No active session"})
                continue

            if msg_type == "score":
                score, err = parse_score(msg.get("score"))
                if err:
                    await websocket.send_json({"type": "error", "message": err["error"]})
                    continue
                session.engine.on_score_changed(score)

            elif msg_type == "life_lost":
                session.engine.on_life_lost()

            elif msg_type == "streak":
                session.engine.on_streak_achieved()

            elif msg_type == "force":
                level, err = parse_level(msg.get("level"))
                if err:
                    await websocket.send_json({"type": "error", "message": err["error"]})
                    continue
                session.engine.force_difficulty(level)

            elif msg_type == "reset":
                session.engine.reset()

            elif msg_type == "stop":
                frame = _state_frame(session)
                frame["type"] = "result"
                await websocket.send_json(frame)
                close_session(session.session_id)
                session = None
                continue

            elif msg_type not in ("stats", "poll"):
                await websocket.send_json(
                    {"type": "error", "message": f"Unknown message type {msg_type!r}"}
                )
                continue

            await websocket.send_json(_state_frame(session))

    except WebSocketDisconnect:
        if session:
            close_session(session.session_id)
    except Exception:
        logger.exception("WebSocket session failed")
        if session:
            close_session(session.session_id)
        raise


# --- Run directly ---

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("web.server:app", host="0.0.0.0", port=8000, reload=True)
