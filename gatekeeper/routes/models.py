"""Pydantic request models for API endpoints.

The front-end sends camelCase keys (chatId, travelerId); fields are declared
in snake_case and aliased.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CamelBody(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AuthCheckBody(CamelBody):
    chat_id: str
    player_name: str = "Player"
    player_language: str = "EN"
    timezone: str = "UTC"


class SelectPetBody(CamelBody):
    chat_id: str
    pet: str
    pet_name: str | None = None


class PetDescriptionBody(CamelBody):
    pet: str


class ChatBody(CamelBody):
    chat_id: str


class GetDayBody(CamelBody):
    chat_id: str
    day: int | None = None


class DecisionBody(CamelBody):
    chat_id: str
    traveler_id: str
    decision: str


class ActionBody(CamelBody):
    chat_id: str
    traveler_id: str
    action: str


class UpdateInventoryBody(CamelBody):
    chat_id: str
    item: str
    amount: int


class GiveItemsBody(CamelBody):
    chat_id: str
    items: dict[str, int]


class SetActiveStructureBody(CamelBody):
    chat_id: str
    structure_template_id: str


class AddInteractionBody(CamelBody):
    chat_id: str
    interaction: str


class SettingsPatch(BaseModel):
    """Partial game settings. Omitted keys keep their value; unknown keys are dropped.

    population_max may be null (no ceiling); every other setting must hold a
    value of its type.
    """

    run_length_days: int | None = Field(default=None, ge=1)
    population_max: int | None = Field(default=None, ge=0)
    reputation_max: int | None = Field(default=None, ge=0)
    events_display_limit: int | None = Field(default=None, ge=0)
    starting_inventory: dict[str, int] | None = None
    default_interactions: list[str] | None = None
    generator_url: str | None = None
    generator_timeout: float | None = Field(default=None, gt=0)

    @field_validator(
        "run_length_days",
        "reputation_max",
        "events_display_limit",
        "starting_inventory",
        "default_interactions",
        "generator_url",
        "generator_timeout",
    )
    @classmethod
    def not_null(cls, value):
        if value is None:
            raise ValueError("must not be null")
        return value
