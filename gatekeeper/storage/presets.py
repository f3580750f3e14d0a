"""Read-only preset data: structure templates, traveler roster, pets.

Presets live in {presets}/ as plain JSON and are cached after the first read.
init_storage() clears the cache so tests can point at their own presets.
"""

import json
from typing import Any

from .core import presets_dir

_cache: dict[str, Any] = {}


def _load(name: str, default: Any) -> Any:
    if name not in _cache:
        path = presets_dir() / name
        _cache[name] = json.loads(path.read_text()) if path.is_file() else default
    return _cache[name]


def get_structure_templates() -> list[dict[str, Any]]:
    """Structure templates copied into every new session."""
    return json.loads(json.dumps(_load("structures.json", [])))


def get_traveler_roster() -> dict[str, list[dict[str, Any]]]:
    """Roster used by the preset generator: {"fixed": [...], "pool": [...]}."""
    roster = _load("travelers.json", {})
    return {
        "fixed": json.loads(json.dumps(roster.get("fixed", []))),
        "pool": json.loads(json.dumps(roster.get("pool", []))),
    }


def list_pets() -> list[dict[str, Any]]:
    return list(_load("pets.json", []))


def get_pet(pet_type: str) -> dict[str, Any] | None:
    for pet in list_pets():
        if pet["type"] == pet_type:
            return dict(pet)
    return None
