"""Day and session progression.

A day holds exactly six travelers. The day only advances once all six are
complete; the next day's travelers already exist because the whole run is
generated when the session starts.

Interactions are the buttons the gatekeeper has at the gate. Row 1 consumes
an inventory item and only shows while the item is in stock; row 2 are the
decisions. A session starts with check-papers, let-in and push-out and
unlocks the rest through triggers.
"""

from __future__ import annotations

import logging
import random
import uuid
from dataclasses import dataclass
from typing import Any

from gatekeeper import storage
from gatekeeper.errors import DayNotComplete, InvalidAction, NotFoundError, RunComplete
from gatekeeper.generator import TRAVELERS_PER_DAY, TravelerGenerator, get_generator
from gatekeeper.population import aggregate, new_status

logger = logging.getLogger(__name__)

DAY_PHASES = ["Dawn", "Morning", "Noon", "Afternoon", "Dusk", "Night"]


@dataclass(frozen=True)
class Interaction:
    id: str
    label: str
    row: int
    item: str | None = None  # row 1: consumed per use
    decision: str | None = None  # row 2: decision submitted


INTERACTIONS: dict[str, Interaction] = {
    i.id: i
    for i in (
        Interaction("check-papers", "Check Papers", 1, item="lantern fuel"),
        Interaction("holy-water", "Holy Water", 1, item="holy water"),
        Interaction("medicinal-herbs", "Medicinal Herbs", 1, item="medicinal herbs"),
        Interaction("let-in", "Let In", 2, decision="allow"),
        Interaction("push-out", "Push Out", 2, decision="deny"),
        Interaction("execute", "Execute", 2, decision="execute"),
    )
}

DEFAULT_INTERACTIONS = ["check-papers", "let-in", "push-out"]


# ---------------------------------------------------------------------------
# Pure helpers
# ---------------------------------------------------------------------------

def completed_count(travelers: list[dict[str, Any]], day: int | None = None) -> int:
    return sum(
        1 for t in travelers
        if t.get("complete") and (day is None or t.get("day") == day)
    )


def can_advance(travelers: list[dict[str, Any]], day: int) -> bool:
    return completed_count(travelers, day) >= TRAVELERS_PER_DAY


def day_phase(travelers: list[dict[str, Any]]) -> str:
    """Time of day shown next to the day counter, one step per completed traveler."""
    return DAY_PHASES[min(completed_count(travelers), len(DAY_PHASES) - 1)]


def usable_interactions(available: list[str], inventory: dict[str, int] | None) -> list[str]:
    """Available interactions minus item actions that are out of stock, in display order."""
    inventory = inventory or {}
    usable = []
    for interaction_id in available:
        interaction = INTERACTIONS.get(interaction_id)
        if interaction is None:
            continue
        if interaction.item is not None and inventory.get(interaction.item, 0) <= 0:
            continue
        usable.append(interaction_id)
    return usable


def item_reaction(interaction: Interaction, traveler: dict[str, Any]) -> str:
    """What the gatekeeper sees when using an item on a traveler."""
    dialog = traveler.get("dialog") or {}
    faction = traveler.get("faction")
    if interaction.id == "check-papers":
        return dialog.get("papers") or "The papers seem to be in order."
    if interaction.id == "holy-water":
        if dialog.get("holy_water"):
            return dialog["holy_water"]
        if faction == "possessed":
            return "The traveler shrieks in pain!"
        return "The traveler reacts normally to the holy water."
    if interaction.id == "medicinal-herbs":
        if dialog.get("medicinal_herbs"):
            return dialog["medicinal_herbs"]
        if faction == "infected":
            return "The traveler coughs violently!"
        return "The traveler shows no unusual reaction."
    raise ValueError(f"{interaction.id} is not an item interaction")


# ---------------------------------------------------------------------------
# Session lifecycle
# ---------------------------------------------------------------------------

async def start_session(
    chat_id: str,
    pet_type: str,
    pet_name: str | None = None,
    generator: TravelerGenerator | None = None,
) -> dict[str, Any]:
    """Create a session for a player: structures, starting kit, and the whole run of travelers."""
    pet = storage.get_pet(pet_type)
    if pet is None:
        raise NotFoundError(f"Unknown pet '{pet_type}'")
    if not pet.get("available", True):
        raise InvalidAction(f"The {pet_type} is not available yet")
    name = (pet_name or "").strip() or random.choice(pet.get("names") or ["Shadow"])

    config = storage.get_config()
    session_id = uuid.uuid4().hex
    generator = generator or get_generator(config)
    # Generate before writing anything so a generator failure leaves no half-made session.
    rows = await generator(session_id, config["run_length_days"])

    interactions = [i for i in config["default_interactions"] if i in INTERACTIONS]
    session = storage.create_session(
        chat_id, {"type": pet_type, "name": name}, interactions, session_id=session_id
    )
    structures = []
    for template in storage.get_structure_templates():
        status = new_status()
        status.update(template.get("status") or {})
        structures.append({
            "template_id": template["id"],
            "name": template["name"],
            "active": bool(template.get("active", False)),
            "status": status,
        })
    storage.save_structures(session_id, structures)
    storage.save_inventory(session_id, dict(config["starting_inventory"]))
    storage.save_hidden_reputation(session_id, {key: 0 for key in storage.REPUTATION_KEYS})
    storage.save_travelers(session_id, rows)
    storage.append_event(
        session_id, f"Your watch at the gate begins. {name} keeps you company.", 1
    )
    logger.info("Started session %s for chat_id=%s (%d travelers)", session_id, chat_id, len(rows))
    return session


def session_state(session: dict[str, Any]) -> dict[str, Any]:
    """Everything the client needs to render a session."""
    session_id = session["id"]
    config = storage.get_config()
    return {
        "session": session,
        "population": aggregate(storage.get_structures(session_id)),
        "hidden_reputation": storage.get_hidden_reputation(session_id),
        "inventory": storage.get_inventory(session_id) or {},
        "available_interactions": session.get("available_interactions") or list(DEFAULT_INTERACTIONS),
        "events": storage.get_events(session_id, limit=config["events_display_limit"]),
        "travelers": storage.get_travelers(session_id, day=session["day"]),
        "pet": session.get("pet"),
    }


def advance_day(session: dict[str, Any]) -> dict[str, Any]:
    """Move the session to the next day. Raises DayNotComplete with no state change otherwise.

    Completing the last generated day finishes the run instead: the day stays,
    the session is marked finished, and any later advance raises RunComplete.
    """
    session_id = session["id"]
    day = session["day"]
    if session.get("finished"):
        raise RunComplete(day)
    completed = completed_count(storage.get_travelers(session_id, day=day), day)
    if completed < TRAVELERS_PER_DAY:
        raise DayNotComplete(completed, TRAVELERS_PER_DAY)

    config = storage.get_config()
    if not storage.get_travelers(session_id, day=day + 1):
        updated = storage.update_session(session_id, {"finished": True})
        storage.append_event(session_id, f"Your watch at the gate is over after {day} days.", day)
        logger.info("Session %s finished its run on day %d", session_id, day)
        return {
            "success": True,
            "finished": True,
            "session": updated,
            "travelers": [],
            "events": storage.get_events(session_id, limit=config["events_display_limit"]),
        }

    updated = storage.update_session(session_id, {"day": day + 1})
    storage.append_event(session_id, f"Day {day + 1} begins.", day + 1)
    logger.info("Session %s advanced to day %d", session_id, day + 1)

    return {
        "success": True,
        "finished": False,
        "session": updated,
        "travelers": storage.get_travelers(session_id, day=day + 1),
        "events": storage.get_events(session_id, limit=config["events_display_limit"]),
    }


def add_interaction(session: dict[str, Any], interaction_id: str) -> list[str]:
    """Unlock an interaction for the session. Already-unlocked ids are left as they are."""
    if interaction_id not in INTERACTIONS:
        raise InvalidAction(f"Unknown interaction '{interaction_id}'")
    available = list(session.get("available_interactions") or [])
    if interaction_id in available:
        return available
    available.append(interaction_id)
    storage.update_session(session["id"], {"available_interactions": available})
    return available


def use_item(session: dict[str, Any], traveler_id: str, action: str) -> dict[str, Any]:
    """Use a row-1 interaction on a traveler, consuming one unit of its item."""
    interaction = INTERACTIONS.get(action.replace("_", "-"))
    if interaction is None or interaction.item is None:
        raise InvalidAction(f"Unknown action '{action}'")
    if interaction.id not in (session.get("available_interactions") or []):
        raise InvalidAction(f"{interaction.label} is not available yet")

    session_id = session["id"]
    row = storage.get_traveler(session_id, traveler_id)
    if row is None:
        raise NotFoundError("Traveler not found")
    if row["complete"]:
        raise InvalidAction("Traveler has already left the gate")
    if row["day"] != session["day"]:
        raise InvalidAction(f"Traveler {traveler_id} is not at the gate on day {session['day']}")

    inventory = storage.get_inventory(session_id)
    if inventory is None:
        raise NotFoundError("Inventory not found")
    if inventory.get(interaction.item, 0) <= 0:
        raise InvalidAction(f"Not enough {interaction.item}.")

    inventory = storage.update_item(session_id, interaction.item, -1)
    return {
        "success": True,
        "response": item_reaction(interaction, row["traveler"]),
        "inventory": inventory,
    }
