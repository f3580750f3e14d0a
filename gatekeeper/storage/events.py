"""Session event log (append-only)."""

import json
from datetime import datetime, timezone
from typing import Any

from .core import session_dir


def get_events(session_id: str, limit: int | None = None) -> list[dict[str, Any]]:
    """Load events oldest first. With limit, only the most recent ones."""
    path = session_dir(session_id) / "events.json"
    if not path.is_file():
        return []
    events = json.loads(path.read_text())
    if limit is not None:
        events = events[-limit:] if limit > 0 else []
    return events


def append_events(session_id: str, texts: list[str], day: int) -> list[dict[str, Any]]:
    """Append free-text events. Returns the new entries."""
    path = session_dir(session_id) / "events.json"
    existing = get_events(session_id)
    now = datetime.now(timezone.utc).isoformat()
    entries = [{"event": text, "day": day, "ts": now} for text in texts]
    existing.extend(entries)
    path.write_text(json.dumps(existing, indent=2))
    return entries


def append_event(session_id: str, text: str, day: int) -> dict[str, Any]:
    return append_events(session_id, [text], day)[0]
