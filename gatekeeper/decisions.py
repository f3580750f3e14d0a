"""Traveler decisions: what happens when the gatekeeper lets someone in, turns
them away, or executes them.

  allow           effect_in → target structure's population
                  effect_in_hidden → hidden reputation
  deny            effect_out → hidden reputation
  execute         effect_ex → hidden reputation
  complete_fixed  no numeric effect; fires the fixed traveler's trigger

resolve() is pure and works on copies. decide() loads, validates, resolves
and persists one decision for a session.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any

from gatekeeper import storage, triggers
from gatekeeper.effects import REPUTATION_MAX, apply_population_effect, apply_reputation_effect
from gatekeeper.errors import DecisionConflict, InvalidAction, NotFoundError
from gatekeeper.population import aggregate

logger = logging.getLogger(__name__)


class Decision(str, Enum):
    ALLOW = "allow"
    DENY = "deny"
    EXECUTE = "execute"
    COMPLETE_FIXED = "complete_fixed"


@dataclass
class Resolution:
    decision: Decision
    status: dict[str, int] | None  # new status of the target structure, allow only
    reputation: dict[str, int]
    event: str | None


def resolve(
    traveler: dict[str, Any],
    decision: Decision,
    status: dict[str, int] | None,
    reputation: dict[str, int],
    *,
    population_max: int | None = None,
    reputation_max: int = REPUTATION_MAX,
) -> Resolution:
    """Compute the state after a decision. Inputs are not mutated."""
    reputation = dict(reputation)
    label = f"{traveler.get('name', 'A traveler')} ({traveler.get('faction', 'unknown')})"

    if decision is Decision.ALLOW:
        new_status = dict(status) if status is not None else None
        if new_status is not None:
            apply_population_effect(traveler.get("effect_in"), new_status, population_max)
        apply_reputation_effect(traveler.get("effect_in_hidden"), reputation, reputation_max)
        return Resolution(decision, new_status, reputation, f"{label} was allowed.")

    if decision is Decision.DENY:
        apply_reputation_effect(traveler.get("effect_out"), reputation, reputation_max)
        return Resolution(decision, None, reputation, f"{label} was denied.")

    if decision is Decision.EXECUTE:
        apply_reputation_effect(traveler.get("effect_ex"), reputation, reputation_max)
        return Resolution(decision, None, reputation, f"{label} was executed.")

    if decision is Decision.COMPLETE_FIXED:
        return Resolution(decision, None, reputation, None)

    raise ValueError(f"Unhandled decision {decision!r}")


def parse_decision(value: str) -> Decision:
    try:
        return Decision(value)
    except ValueError:
        allowed = ", ".join(d.value for d in Decision)
        raise InvalidAction(f"Unknown decision '{value}' (expected one of: {allowed})")


def target_structure(
    structures: list[dict[str, Any]], template_id: str | None
) -> dict[str, Any] | None:
    """The structure an allowed traveler joins: its named one, else the first active one."""
    for structure in structures:
        if structure["template_id"] == template_id:
            return structure
    for structure in structures:
        if structure.get("active"):
            return structure
    return None


def decide(session: dict[str, Any], traveler_id: str, decision: str) -> dict[str, Any]:
    """Resolve and persist one decision. Returns the client-facing result."""
    kind = parse_decision(decision)
    session_id = session["id"]

    row = storage.get_traveler(session_id, traveler_id)
    if row is None:
        raise NotFoundError("Traveler not found")
    if row["complete"]:
        raise DecisionConflict(f"Traveler already completed with '{row['decision']}'")
    if row["day"] != session["day"]:
        raise InvalidAction(f"Traveler {traveler_id} is not at the gate on day {session['day']}")

    traveler = row["traveler"]
    is_fixed = bool(traveler.get("is_fixed"))
    if is_fixed and kind is not Decision.COMPLETE_FIXED:
        raise InvalidAction("Fixed travelers can only be completed")
    if not is_fixed and kind is Decision.COMPLETE_FIXED:
        raise InvalidAction("Only fixed travelers can be completed without a decision")

    config = storage.get_config()
    structures = storage.get_structures(session_id)
    target = target_structure(structures, traveler.get("structure"))
    if kind is Decision.ALLOW and target is None:
        logger.warning("Session %s has no structure for traveler %s", session_id, traveler_id)

    resolution = resolve(
        traveler,
        kind,
        target["status"] if target is not None else None,
        storage.get_hidden_reputation(session_id),
        population_max=config["population_max"],
        reputation_max=config["reputation_max"],
    )

    events: list[dict[str, Any]] = []
    if kind is Decision.COMPLETE_FIXED:
        # The bundle completes the traveler itself; a missing target leaves it untouched.
        trigger = (traveler.get("dialog") or {}).get("trigger")
        events.extend(triggers.dispatch(trigger, traveler, session, traveler_id=traveler_id))

    if resolution.status is not None and target is not None:
        target["status"] = resolution.status
        storage.save_structures(session_id, structures)
    storage.save_hidden_reputation(session_id, resolution.reputation)
    completed = storage.get_traveler(session_id, traveler_id)
    if not completed["complete"]:
        completed = storage.complete_traveler(session_id, traveler_id, kind.value)
    if resolution.event:
        events.append(storage.append_event(session_id, resolution.event, session["day"]))

    logger.debug("session=%s traveler=%s decision=%s", session_id, traveler_id, kind.value)
    return {
        "success": True,
        "traveler": completed,
        "population": aggregate(storage.get_structures(session_id)),
        "hidden_reputation": resolution.reputation,
        "events": events,
    }
