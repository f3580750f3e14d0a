"""Game sessions: metadata file plus a directory of child resources.

Layout:
  sessions/<id>.json   {id, chat_id, day, pet, active, finished, available_interactions, created_at}
  sessions/<id>/       structures.json, travelers.json, inventory.json,
                       reputation.json, events.json
"""

import json
import logging
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from .core import session_dir, sessions_dir

logger = logging.getLogger(__name__)


def _session_path(session_id: str) -> Path:
    return sessions_dir() / f"{session_id}.json"


def get_session(session_id: str) -> dict[str, Any] | None:
    path = _session_path(session_id)
    if not path.is_file():
        return None
    return json.loads(path.read_text())


def list_sessions(chat_id: str) -> list[dict[str, Any]]:
    results = []
    for path in sorted(sessions_dir().glob("*.json")):
        session = json.loads(path.read_text())
        if session["chat_id"] == chat_id:
            results.append(session)
    return results


def get_active_session(chat_id: str) -> dict[str, Any] | None:
    for session in list_sessions(chat_id):
        if session.get("active"):
            return session
    return None


def create_session(
    chat_id: str,
    pet: dict[str, Any],
    available_interactions: list[str],
    session_id: str | None = None,
) -> dict[str, Any]:
    """Start a new session on day 1. Every earlier session of the player is deactivated."""
    for old in list_sessions(chat_id):
        if old.get("active"):
            old["active"] = False
            _session_path(old["id"]).write_text(json.dumps(old, indent=2))
            logger.debug("deactivated session %s for chat_id=%s", old["id"], chat_id)

    session = {
        "id": session_id or uuid.uuid4().hex,
        "chat_id": chat_id,
        "day": 1,
        "pet": pet,
        "active": True,
        "finished": False,
        "available_interactions": list(available_interactions),
        "created_at": datetime.now(timezone.utc).isoformat(),
    }
    _session_path(session["id"]).write_text(json.dumps(session, indent=2))
    session_dir(session["id"]).mkdir(exist_ok=True)
    return session


def update_session(session_id: str, fields: dict[str, Any]) -> dict[str, Any] | None:
    """Update mutable session fields (day, available_interactions, finished). Returns updated session."""
    session = get_session(session_id)
    if session is None:
        return None
    allowed = {"day", "available_interactions", "finished"}
    for key, value in fields.items():
        if key in allowed:
            session[key] = value
    _session_path(session_id).write_text(json.dumps(session, indent=2))
    return session
