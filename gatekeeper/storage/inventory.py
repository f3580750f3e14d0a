"""Per-session consumable inventory and hidden reputation counters."""

import json
from pathlib import Path
from typing import Any

from .core import session_dir

ITEMS = ("holy water", "lantern fuel", "medicinal herbs")

REPUTATION_KEYS = ("cult", "inquisition", "undead")


def _inventory_path(session_id: str) -> Path:
    return session_dir(session_id) / "inventory.json"


def _reputation_path(session_id: str) -> Path:
    return session_dir(session_id) / "reputation.json"


def get_inventory(session_id: str) -> dict[str, int] | None:
    path = _inventory_path(session_id)
    if not path.is_file():
        return None
    return json.loads(path.read_text())


def save_inventory(session_id: str, inventory: dict[str, int]) -> None:
    _inventory_path(session_id).write_text(json.dumps(inventory, indent=2))


def update_item(session_id: str, item: str, amount: int) -> dict[str, int] | None:
    """Add a signed amount to one item, flooring at 0.

    Returns the updated inventory, or None if the session has no inventory
    or the item is unknown.
    """
    inventory = get_inventory(session_id)
    if inventory is None or item not in ITEMS:
        return None
    inventory[item] = max(0, inventory.get(item, 0) + amount)
    save_inventory(session_id, inventory)
    return inventory


def give_items(session_id: str, items: dict[str, int]) -> dict[str, int] | None:
    """Grant several items at once. Nothing is written if any item is unknown."""
    inventory = get_inventory(session_id)
    if inventory is None or any(name not in ITEMS for name in items):
        return None
    for name, count in items.items():
        inventory[name] = max(0, inventory.get(name, 0) + count)
    save_inventory(session_id, inventory)
    return inventory


def get_hidden_reputation(session_id: str) -> dict[str, int]:
    stored: dict[str, Any] = {}
    path = _reputation_path(session_id)
    if path.is_file():
        stored = json.loads(path.read_text())
    return {key: stored.get(key, 0) for key in REPUTATION_KEYS}


def save_hidden_reputation(session_id: str, reputation: dict[str, int]) -> None:
    _reputation_path(session_id).write_text(json.dumps(reputation, indent=2))
