"""Traveler records.

Travelers cross a data boundary when the generator produces them (from the
preset roster or from a remote generator service), so they are validated
here before being stored as plain dicts.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

Faction = Literal["human", "infected", "possessed"]


class TravelerDialog(BaseModel):
    """Lines a traveler speaks. Missing lines fall back to generic text."""

    greeting: str | None = None
    papers: str | None = None
    holy_water: str | None = None
    medicinal_herbs: str | None = None
    in_: str | None = Field(default=None, alias="in")
    out: str | None = None
    execution: str | None = None
    trigger: str | None = None  # fixed travelers only

    model_config = {"populate_by_name": True}


class Traveler(BaseModel):
    """Narrative content and effects of one encounter."""

    name: str
    faction: Faction
    is_fixed: bool = False
    art: str = "traveler"
    description: str = ""
    structure: str = "town"  # template id of the structure an allowed traveler joins
    dialog: TravelerDialog = Field(default_factory=TravelerDialog)
    effect_in: str | None = None
    effect_out: str | None = None
    effect_ex: str | None = None
    effect_in_hidden: str | None = None


class TravelerRow(BaseModel):
    """A traveler placed on a day, as stored per session."""

    id: str
    day: int = Field(ge=1)
    position: int = Field(ge=1)
    complete: bool = False
    decision: str | None = None
    traveler: Traveler

    def to_record(self) -> dict:
        return self.model_dump(by_alias=True)
