"""Traveler generator. Produces every traveler of a run when a session starts.

Generation happens once per session, never per day. Any implementation must
match the protocol:

    async def __call__(self, session_id: str, days: int) -> list[dict]: ...

and return rows shaped like gatekeeper.models.TravelerRow, exactly
TRAVELERS_PER_DAY of them for each day 1..days.

Two implementations are provided:

    PresetGenerator  draws from presets/travelers.json. Fixed travelers are
                     placed at their (day, position); every other slot is
                     filled from the pool with an rng seeded by the session id.
    HttpGenerator    asks a remote generator service over HTTP.

get_generator(config) picks HttpGenerator when generator_url is set.
"""

from __future__ import annotations

import logging
import random
from collections import Counter
from typing import Any, Protocol

import httpx
from pydantic import ValidationError

from gatekeeper import storage
from gatekeeper.errors import GeneratorError
from gatekeeper.models import TravelerRow

logger = logging.getLogger(__name__)

TRAVELERS_PER_DAY = 6


class TravelerGenerator(Protocol):
    async def __call__(self, session_id: str, days: int) -> list[dict[str, Any]]: ...


# ---------------------------------------------------------------------------
# PresetGenerator: local roster, deterministic per session
# ---------------------------------------------------------------------------

class PresetGenerator:
    """Fills a run from the preset roster.

    Args:
        roster: {"fixed": [...], "pool": [...]}. Defaults to the stored preset.
        seed:   Overrides the per-session seed (tests).
    """

    def __init__(self, roster: dict[str, list[dict]] | None = None, seed: Any = None) -> None:
        self._roster = roster
        self._seed = seed

    async def __call__(self, session_id: str, days: int) -> list[dict[str, Any]]:
        roster = self._roster if self._roster is not None else storage.get_traveler_roster()
        pool = roster.get("pool", [])
        fixed = {
            (entry["day"], entry["position"]): entry["traveler"]
            for entry in roster.get("fixed", [])
            if entry["day"] <= days
        }
        if not pool and len(fixed) < days * TRAVELERS_PER_DAY:
            raise GeneratorError("Traveler roster has an empty pool")

        rng = random.Random(self._seed if self._seed is not None else session_id)
        rows = []
        for day in range(1, days + 1):
            for position in range(1, TRAVELERS_PER_DAY + 1):
                template = fixed.get((day, position)) or rng.choice(pool)
                rows.append({
                    "id": f"{day}-{position}",
                    "day": day,
                    "position": position,
                    "complete": False,
                    "decision": None,
                    "traveler": dict(template),
                })
        logger.debug("preset generator session=%s days=%d rows=%d", session_id, days, len(rows))
        return validate_run(rows, days)


# ---------------------------------------------------------------------------
# HttpGenerator: remote generator service
# ---------------------------------------------------------------------------

class HttpGenerator:
    """Async HTTP client for a traveler generator service.

    POST {url}  {"session_id": ..., "days": ..., "travelers_per_day": 6}
    Response:   {"travelers": [<TravelerRow>, ...]}

    Args:
        url:     Endpoint of the generator service.
        timeout: HTTP timeout in seconds. Defaults to 30.
    """

    def __init__(self, url: str, timeout: float = 30.0) -> None:
        self._url = url
        self._timeout = timeout

    async def __call__(self, session_id: str, days: int) -> list[dict[str, Any]]:
        body = {"session_id": session_id, "days": days, "travelers_per_day": TRAVELERS_PER_DAY}
        logger.debug("generator call url=%s session=%s days=%d", self._url, session_id, days)

        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                resp = await client.post(self._url, json=body)
                resp.raise_for_status()
        except httpx.ConnectError as e:
            raise GeneratorError(f"Cannot connect to traveler generator at {self._url}") from e
        except httpx.HTTPStatusError as e:
            raise GeneratorError(
                f"Traveler generator returned HTTP {e.response.status_code}"
            ) from e
        except httpx.TimeoutException as e:
            raise GeneratorError(f"Traveler generator timed out after {self._timeout}s") from e

        data = resp.json()
        travelers = data.get("travelers") if isinstance(data, dict) else None
        if not isinstance(travelers, list):
            raise GeneratorError("Unexpected response format from traveler generator")
        return validate_run(travelers, days)


# ---------------------------------------------------------------------------
# Validation and selection
# ---------------------------------------------------------------------------

def validate_run(rows: list[Any], days: int) -> list[dict[str, Any]]:
    """Validate rows and check every day 1..days has exactly TRAVELERS_PER_DAY travelers."""
    try:
        parsed = [TravelerRow.model_validate(row) for row in rows]
    except ValidationError as e:
        raise GeneratorError(f"Invalid traveler record: {e.errors()[0]['msg']}") from e

    ids = Counter(row.id for row in parsed)
    duplicate = next((tid for tid, n in ids.items() if n > 1), None)
    if duplicate is not None:
        raise GeneratorError(f"Duplicate traveler id {duplicate!r}")

    per_day = Counter(row.day for row in parsed)
    for day in range(1, days + 1):
        if per_day.get(day, 0) != TRAVELERS_PER_DAY:
            raise GeneratorError(
                f"Day {day} has {per_day.get(day, 0)} travelers, expected {TRAVELERS_PER_DAY}"
            )
    return [row.to_record() for row in parsed]


def get_generator(config: dict[str, Any]) -> TravelerGenerator:
    url = config.get("generator_url") or ""
    if url:
        return HttpGenerator(url, timeout=float(config.get("generator_timeout", 30)))
    return PresetGenerator()
