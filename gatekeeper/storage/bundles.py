"""Single-call bundle of session side effects.

A bundle grants items, activates a structure, unlocks an interaction and
appends an event. It can also complete the traveler that fired it. Every
target is looked up before the first write, so a missing record leaves the
session untouched. The traveler is marked complete first: a later failed
write is never retried into a second grant.
"""

from typing import Any

from gatekeeper.errors import DecisionConflict, NotFoundError

from .events import append_events
from .inventory import ITEMS, get_inventory, save_inventory
from .sessions import get_session, update_session
from .structures import get_structures, save_structures
from .travelers import complete_traveler, get_traveler


def apply_bundle(
    session_id: str,
    *,
    items: dict[str, int] | None = None,
    structure: str | None = None,
    interaction: str | None = None,
    events: list[str] | None = None,
    traveler_id: str | None = None,
    decision: str | None = None,
) -> dict[str, Any]:
    """Apply a bundle. Raises NotFoundError before writing if any target is missing.

    With traveler_id, the traveler is completed with `decision` as part of
    the bundle; DecisionConflict if it already is.

    Returns {"session", "inventory", "structures", "events", "traveler"}.
    """
    session = get_session(session_id)
    if session is None:
        raise NotFoundError(f"Session {session_id} not found")

    if traveler_id is not None:
        row = get_traveler(session_id, traveler_id)
        if row is None:
            raise NotFoundError("Traveler not found")
        if row["complete"]:
            raise DecisionConflict(f"Traveler already completed with '{row['decision']}'")

    inventory = get_inventory(session_id)
    if items:
        if inventory is None:
            raise NotFoundError(f"Session {session_id} has no inventory")
        unknown = [name for name in items if name not in ITEMS]
        if unknown:
            raise NotFoundError(f"Unknown item {unknown[0]!r}")

    structures = get_structures(session_id)
    target = None
    if structure is not None:
        target = next((s for s in structures if s["template_id"] == structure), None)
        if target is None:
            raise NotFoundError(f"Structure {structure!r} not found")

    # All targets exist; write.
    completed = None
    if traveler_id is not None:
        completed = complete_traveler(session_id, traveler_id, decision or "complete_fixed")
    if items:
        for name, count in items.items():
            inventory[name] = max(0, inventory.get(name, 0) + count)
        save_inventory(session_id, inventory)
    if target is not None and not target["active"]:
        target["active"] = True
        save_structures(session_id, structures)
    if interaction is not None and interaction not in session["available_interactions"]:
        session = update_session(
            session_id,
            {"available_interactions": session["available_interactions"] + [interaction]},
        )
    new_events = append_events(session_id, events, session["day"]) if events else []

    return {
        "session": session,
        "inventory": inventory,
        "structures": structures,
        "events": new_events,
        "traveler": completed,
    }
