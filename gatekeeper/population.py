"""Population totals across a session's structures."""

from typing import Any

from gatekeeper.effects import POPULATION_KEYS


def new_status(human: int = 0, infected: int = 0, possessed: int = 0) -> dict[str, int]:
    return {"human": human, "infected": infected, "possessed": possessed}


def aggregate(structures: list[dict[str, Any]]) -> dict[str, int]:
    """Sum human/infected/possessed over every structure; missing keys count as 0."""
    totals = new_status()
    for structure in structures:
        status = structure.get("status") or {}
        for key in POPULATION_KEYS:
            totals[key] += status.get(key, 0) or 0
    return totals


def total(population: dict[str, int]) -> int:
    """Headcount shown to the player. Everything is lost if it reaches 0."""
    return sum(population.get(key, 0) or 0 for key in POPULATION_KEYS)
