"""Per-session structures and their population status."""

import json
from pathlib import Path
from typing import Any

from .core import session_dir


def _structures_path(session_id: str) -> Path:
    return session_dir(session_id) / "structures.json"


def get_structures(session_id: str) -> list[dict[str, Any]]:
    """Load structures for a session. Returns [] if none exist."""
    path = _structures_path(session_id)
    if not path.is_file():
        return []
    return json.loads(path.read_text())


def save_structures(session_id: str, structures: list[dict[str, Any]]) -> None:
    _structures_path(session_id).write_text(json.dumps(structures, indent=2))


def get_structure(session_id: str, template_id: str) -> dict[str, Any] | None:
    for structure in get_structures(session_id):
        if structure["template_id"] == template_id:
            return structure
    return None


def set_structure_active(session_id: str, template_id: str, active: bool = True) -> bool:
    """Flip a structure's active flag. Returns False if the session has no such structure."""
    structures = get_structures(session_id)
    for structure in structures:
        if structure["template_id"] == template_id:
            structure["active"] = active
            save_structures(session_id, structures)
            return True
    return False
