"""Traveler rows for a session's whole run.

Rows are written once at session creation and afterwards only ever
marked complete.
"""

import json
from pathlib import Path
from typing import Any

from .core import session_dir


def _travelers_path(session_id: str) -> Path:
    return session_dir(session_id) / "travelers.json"


def get_travelers(session_id: str, day: int | None = None) -> list[dict[str, Any]]:
    """Load traveler rows, optionally only those of one day, ordered by position."""
    path = _travelers_path(session_id)
    if not path.is_file():
        return []
    rows = json.loads(path.read_text())
    if day is not None:
        rows = [r for r in rows if r["day"] == day]
    return sorted(rows, key=lambda r: (r["day"], r["position"]))


def save_travelers(session_id: str, rows: list[dict[str, Any]]) -> None:
    _travelers_path(session_id).write_text(json.dumps(rows, indent=2))


def get_traveler(session_id: str, traveler_id: str) -> dict[str, Any] | None:
    for row in get_travelers(session_id):
        if row["id"] == traveler_id:
            return row
    return None


def complete_traveler(session_id: str, traveler_id: str, decision: str) -> dict[str, Any] | None:
    """Mark a traveler complete with its decision. Returns the updated row."""
    rows = get_travelers(session_id)
    for row in rows:
        if row["id"] == traveler_id:
            row["complete"] = True
            row["decision"] = decision
            save_travelers(session_id, rows)
            return row
    return None
