"""Lookups shared by every session-scoped endpoint."""

from typing import Any

from fastapi import HTTPException

from gatekeeper import storage


def require_session(chat_id: str) -> dict[str, Any]:
    """Return the player's active session or raise 404."""
    if storage.get_player(chat_id) is None:
        raise HTTPException(404, "Player not found")
    session = storage.get_active_session(chat_id)
    if session is None:
        raise HTTPException(404, "No active session")
    return session
