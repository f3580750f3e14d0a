"""Player records, one JSON file per chat id."""

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from .core import players_dir, safe_key


def _player_path(chat_id: str) -> Path:
    return players_dir() / f"{safe_key(chat_id)}.json"


def get_player(chat_id: str) -> dict[str, Any] | None:
    path = _player_path(chat_id)
    if not path.is_file():
        return None
    return json.loads(path.read_text())


def create_player(
    chat_id: str,
    player_name: str = "Player",
    player_language: str = "EN",
    tz: str = "UTC",
) -> dict[str, Any]:
    """Register a new player. Overwrites nothing if the player already exists."""
    existing = get_player(chat_id)
    if existing is not None:
        return existing
    player = {
        "chat_id": chat_id,
        "player_name": player_name,
        "player_language": player_language,
        "timezone": tz,
        "created_at": datetime.now(timezone.utc).isoformat(),
    }
    _player_path(chat_id).write_text(json.dumps(player, indent=2))
    return player


def update_player_timezone(chat_id: str, tz: str) -> dict[str, Any] | None:
    """Timezone is the only player field that changes after registration."""
    player = get_player(chat_id)
    if player is None:
        return None
    if player.get("timezone") != tz:
        player["timezone"] = tz
        _player_path(chat_id).write_text(json.dumps(player, indent=2))
    return player
