"""Fixed-traveler triggers, one-off story beats layered on the decision flow.

When a fixed traveler is completed, the trigger named in its dialog fires.
Each trigger maps to a bundle of side effects applied in one store call:

  Explanation_H   +2 holy water, chapel opens, holy-water unlocked
  Explanation_M   +2 medicinal herbs, infirmary opens, medicinal-herbs unlocked
  Inquisition     gallows raised, execute unlocked
  Revelation      story event only
  undead          story event only
  cult            story event only

Unknown or missing trigger names are logged and ignored.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from gatekeeper import storage
from gatekeeper.progression import INTERACTIONS

logger = logging.getLogger(__name__)


class Trigger(str, Enum):
    REVELATION = "Revelation"
    EXPLANATION_H = "Explanation_H"
    INQUISITION = "Inquisition"
    EXPLANATION_M = "Explanation_M"
    UNDEAD = "undead"
    CULT = "cult"


@dataclass
class TriggerBundle:
    items: dict[str, int] = field(default_factory=dict)
    structure: str | None = None
    interaction: str | None = None
    event: str | None = None


def bundle_for(trigger: Trigger, traveler: dict[str, Any]) -> TriggerBundle:
    name = traveler.get("name", "The stranger")

    if trigger is Trigger.EXPLANATION_H:
        return TriggerBundle(
            items={"holy water": 2},
            structure="chapel",
            interaction="holy-water",
            event=f"{name} left two vials of holy water. The possessed cannot bear its touch.",
        )
    if trigger is Trigger.EXPLANATION_M:
        return TriggerBundle(
            items={"medicinal herbs": 2},
            structure="infirmary",
            interaction="medicinal-herbs",
            event=f"{name} showed you how burning herbs makes the infected cough.",
        )
    if trigger is Trigger.INQUISITION:
        return TriggerBundle(
            structure="gallows",
            interaction="execute",
            event=f"{name} raised a gallows by the gate. Executions are now yours to order.",
        )
    if trigger is Trigger.REVELATION:
        return TriggerBundle(event=f"{name} spoke of a darkness gathering beyond the walls.")
    if trigger is Trigger.UNDEAD:
        return TriggerBundle(event="Something stirs in the graveyard tonight.")
    if trigger is Trigger.CULT:
        return TriggerBundle(event="Hooded figures were seen whispering near the well.")

    raise ValueError(f"Unhandled trigger {trigger!r}")


def parse_trigger(name: str | None) -> Trigger | None:
    if not name:
        return None
    try:
        return Trigger(name)
    except ValueError:
        return None


def dispatch(
    trigger_name: str | None,
    traveler: dict[str, Any],
    session: dict[str, Any],
    traveler_id: str | None = None,
) -> list[dict[str, Any]]:
    """Fire a trigger for a session. Returns the events it appended.

    With traveler_id, the fixed traveler is completed in the same store call
    as the bundle. Unknown triggers complete nothing.

    Raises NotFoundError (from the store) if the bundle names a structure the
    session does not have; nothing is written in that case.
    """
    if not trigger_name:
        logger.warning("No trigger provided for traveler %r", traveler.get("name"))
        return []
    trigger = parse_trigger(trigger_name)
    if trigger is None:
        logger.warning("No handler found for trigger %r", trigger_name)
        return []

    bundle = bundle_for(trigger, traveler)
    if bundle.interaction is not None and bundle.interaction not in INTERACTIONS:
        raise ValueError(f"Trigger {trigger.value} unlocks unknown interaction {bundle.interaction!r}")

    logger.info("Trigger %s fired by %r in session %s", trigger.value, traveler.get("name"), session["id"])
    result = storage.apply_bundle(
        session["id"],
        items=bundle.items or None,
        structure=bundle.structure,
        interaction=bundle.interaction,
        events=[bundle.event] if bundle.event else None,
        traveler_id=traveler_id,
        decision="complete_fixed" if traveler_id is not None else None,
    )
    return result["events"]
