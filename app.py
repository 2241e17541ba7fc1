from __future__ import annotations

import os
import sys
import threading
import uuid
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from flask import Flask, jsonify, request, send_from_directory
from loguru import logger

from game import (
    BoardConfigurationError,
    Direction,
    GameConfig,
    GameController,
)

MAX_TICK_FRAMES = 600
MAX_BOARD_SIDE = 50
MAX_SESSIONS = 256

# Serve static assets from ./static (explicit absolute path)
STATIC_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), "static"))
app = Flask(__name__, static_url_path="/static", static_folder=STATIC_DIR)


@dataclass
class Session:
    """A host-owned game plus the events it fired since the last response."""
    game: GameController
    events: List[Dict[str, Any]] = field(default_factory=list)
    lock: threading.Lock = field(default_factory=threading.Lock)

    def drain(self) -> List[Dict[str, Any]]:
        out, self.events = self.events, []
        return out


_sessions: "OrderedDict[str, Session]" = OrderedDict()
_sessions_lock = threading.Lock()


def _new_session(config: GameConfig) -> Tuple[str, Session]:
    game = GameController(config)
    session = Session(game=game)
    game.set_collected_numbers_changed_handler(
        lambda count: session.events.append({"type": "collectedNumbersChanged", "count": count})
    )
    game.set_game_completed_handler(
        lambda: session.events.append({"type": "gameCompleted", "totalMoves": game.total_moves})
    )
    game.init()
    game.start()
    session_id = uuid.uuid4().hex
    with _sessions_lock:
        _sessions[session_id] = session
        while len(_sessions) > MAX_SESSIONS:
            evicted, _ = _sessions.popitem(last=False)
            logger.debug(f"session {evicted} evicted")
    logger.info(f"session {session_id} created ({config.width}x{config.height})")
    return session_id, session


def _get_session(body: Dict[str, Any]) -> Optional[Session]:
    with _sessions_lock:
        return _sessions.get(str(body.get("sessionId", "")))


def _reply(session_id: str, session: Session, **extra: Any) -> Any:
    payload: Dict[str, Any] = {
        "ok": True,
        "sessionId": session_id,
        "state": session.game.snapshot().to_json(),
        "events": session.drain(),
    }
    payload.update(extra)
    return jsonify(payload)


def _missing_session() -> Any:
    return jsonify({"ok": False, "error": "unknown session"}), 404


def _json_body() -> Optional[Dict[str, Any]]:
    """Returns the request's JSON object, {} when absent, None when it is not an object."""
    body = request.get_json(force=True, silent=True)
    if body is None:
        return {}
    return body if isinstance(body, dict) else None


def _bad_body() -> Any:
    return jsonify({"ok": False, "error": "request body must be a JSON object"}), 400


def _config_from_body(body: Dict[str, Any]) -> GameConfig:
    defaults = GameConfig.from_env()
    seed = body.get("seed", defaults.seed)
    width = int(body.get("width", defaults.width))
    height = int(body.get("height", defaults.height))
    if width > MAX_BOARD_SIDE or height > MAX_BOARD_SIDE:
        raise ValueError(f"board sides are limited to {MAX_BOARD_SIDE} cells")
    return GameConfig(
        width=width,
        height=height,
        roll_frames=defaults.roll_frames,
        seed=int(seed) if seed is not None else None,
    )


# ---------- Static routes ----------

@app.get("/")
def index() -> Any:
    return send_from_directory(app.static_folder, "index.html")


@app.get("/main.js")
def main_js() -> Any:
    resp = send_from_directory(app.static_folder, "main.js")
    resp.headers["Content-Type"] = "application/javascript; charset=utf-8"
    return resp


@app.get("/styles.css")
def styles_css() -> Any:
    resp = send_from_directory(app.static_folder, "styles.css")
    resp.headers["Content-Type"] = "text/css; charset=utf-8"
    return resp


# ---------- Game API (required by main.js) ----------

@app.post("/api/new")
def api_new() -> Any:
    body = _json_body()
    if body is None:
        return _bad_body()
    try:
        config = _config_from_body(body)
        session_id, session = _new_session(config)
    except BoardConfigurationError as e:
        logger.warning(f"rejected board configuration: {e}")
        return jsonify({"ok": False, "error": str(e)}), 400
    except (TypeError, ValueError) as e:
        return jsonify({"ok": False, "error": f"bad config: {e}"}), 400
    with session.lock:
        return _reply(session_id, session)


@app.post("/api/reset")
def api_reset() -> Any:
    body = _json_body()
    if body is None:
        return _bad_body()
    session = _get_session(body)
    if session is None:
        return _missing_session()
    with session.lock:
        session.game.reset()
        session.drain()
        return _reply(str(body["sessionId"]), session)


@app.post("/api/state")
def api_state() -> Any:
    body = _json_body()
    if body is None:
        return _bad_body()
    session = _get_session(body)
    if session is None:
        return _missing_session()
    with session.lock:
        return _reply(str(body["sessionId"]), session)


@app.post("/api/move")
def api_move() -> Any:
    body = _json_body()
    if body is None:
        return _bad_body()
    session = _get_session(body)
    if session is None:
        return _missing_session()
    try:
        direction = Direction.parse(body.get("direction"))
    except ValueError as e:
        return jsonify({"ok": False, "error": str(e)}), 400
    with session.lock:
        moved = session.game.move_cube(direction)
        if moved and body.get("settle"):
            session.game.settle()
        return _reply(str(body["sessionId"]), session, moved=moved)


@app.post("/api/tick")
def api_tick() -> Any:
    body = _json_body()
    if body is None:
        return _bad_body()
    session = _get_session(body)
    if session is None:
        return _missing_session()
    try:
        frames = int(body.get("frames", 1))
    except (TypeError, ValueError):
        return jsonify({"ok": False, "error": "frames must be an integer"}), 400
    frames = max(0, min(frames, MAX_TICK_FRAMES))
    with session.lock:
        landed = False
        for _ in range(frames):
            landed = session.game.tick() or landed
        return _reply(str(body["sessionId"]), session, landed=landed)


@app.post("/api/camera")
def api_camera() -> Any:
    body = _json_body()
    if body is None:
        return _bad_body()
    session = _get_session(body)
    if session is None:
        return _missing_session()
    rotate = str(body.get("rotate", "")).lower()
    if rotate not in ("left", "right"):
        return jsonify({"ok": False, "error": "rotate must be 'left' or 'right'"}), 400
    with session.lock:
        if rotate == "left":
            session.game.rotate_camera_left()
        else:
            session.game.rotate_camera_right()
        return _reply(str(body["sessionId"]), session)


@app.post("/api/hint")
def api_hint() -> Any:
    body = _json_body()
    if body is None:
        return _bad_body()
    session = _get_session(body)
    if session is None:
        return _missing_session()
    with session.lock:
        path = session.game.hint()
        hint = [d.value for d in path] if path is not None else None
        return _reply(str(body["sessionId"]), session, hint=hint)


# Entrypoint for "python app.py"
if __name__ == "__main__":
    debug = os.getenv("FLASK_DEBUG", os.getenv("DEBUG", "0")).lower() in ("1", "true", "yes", "on")
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if debug else "INFO")
    app.run(host="0.0.0.0", port=int(os.getenv("PORT", "5000")), debug=debug)
