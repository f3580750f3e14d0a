"""Game client: the player's side of the API with its state in one object.

GameClient wraps an httpx.AsyncClient pointed at the server and keeps the
last known game state in a GameState. State changes only through the
client's own methods, each of which maps to one endpoint:

    login()        POST /api/auth/check
    select_pet()   POST /api/pet/select
    load_day()     POST /api/travelers/get-day
    decide()       POST /api/travelers/decision
    use_item()     POST /api/travelers/action
    advance_day()  POST /api/day/advance
    refresh()      login() again with the stored player details

Non-2xx responses raise ClientError and leave the state untouched.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

import httpx

from gatekeeper.generator import TRAVELERS_PER_DAY
from gatekeeper.population import total
from gatekeeper.progression import DEFAULT_INTERACTIONS, day_phase, usable_interactions

logger = logging.getLogger(__name__)


class ClientError(RuntimeError):
    """Raised when the server answers with an error status."""

    def __init__(self, status: int, error: str, body: dict | None = None) -> None:
        super().__init__(f"HTTP {status}: {error}")
        self.status = status
        self.error = error
        self.body = body or {}


@dataclass
class GameState:
    player: dict[str, Any] | None = None
    session: dict[str, Any] | None = None
    population: dict[str, int] = field(default_factory=dict)
    hidden_reputation: dict[str, int] = field(default_factory=dict)
    inventory: dict[str, int] = field(default_factory=dict)
    available_interactions: list[str] = field(default_factory=lambda: list(DEFAULT_INTERACTIONS))
    events: list[dict[str, Any]] = field(default_factory=list)
    travelers: list[dict[str, Any]] = field(default_factory=list)
    pet: dict[str, Any] | None = None
    needs_pet_selection: bool = False


class GameClient:
    """Async client for one player.

    Args:
        http:     An httpx.AsyncClient whose base_url points at the server.
        chat_id:  The player's chat id.
    """

    def __init__(self, http: httpx.AsyncClient, chat_id: str) -> None:
        self._http = http
        self.chat_id = chat_id
        self.state = GameState()

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    async def _post(self, path: str, body: dict[str, Any]) -> dict[str, Any]:
        resp = await self._http.post(path, json=body)
        try:
            data = resp.json()
        except ValueError:
            data = {}
        if resp.status_code >= 400:
            error = data.get("error", resp.reason_phrase) if isinstance(data, dict) else resp.reason_phrase
            logger.debug("POST %s failed status=%d error=%s", path, resp.status_code, error)
            raise ClientError(resp.status_code, error, data if isinstance(data, dict) else None)
        return data

    def _apply_session_data(self, data: dict[str, Any]) -> None:
        self.state.session = data["session"]
        self.state.population = data.get("population") or {}
        self.state.hidden_reputation = data.get("hidden_reputation") or {}
        self.state.inventory = data.get("inventory") or {}
        self.state.available_interactions = (
            data.get("available_interactions") or list(DEFAULT_INTERACTIONS)
        )
        self.state.events = data.get("events") or []
        self.state.travelers = data.get("travelers") or []
        self.state.pet = data.get("pet")
        self.state.needs_pet_selection = False

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    async def login(
        self, player_name: str = "Player", player_language: str = "EN", timezone: str = "UTC"
    ) -> GameState:
        data = await self._post("/api/auth/check", {
            "chatId": self.chat_id,
            "playerName": player_name,
            "playerLanguage": player_language,
            "timezone": timezone,
        })
        self.state.player = data.get("player")
        if data.get("needsPetSelection"):
            self.state.needs_pet_selection = True
        else:
            self._apply_session_data(data)
        return self.state

    async def refresh(self) -> GameState:
        player = self.state.player or {}
        return await self.login(
            player.get("player_name", "Player"),
            player.get("player_language", "EN"),
            player.get("timezone", "UTC"),
        )

    async def pet_description(self, pet: str) -> str:
        data = await self._post("/api/pets/description", {"pet": pet})
        return data["description"]

    async def select_pet(self, pet: str, name: str | None = None) -> GameState:
        body: dict[str, Any] = {"chatId": self.chat_id, "pet": pet}
        if name:
            body["petName"] = name
        self._apply_session_data(await self._post("/api/pet/select", body))
        return self.state

    async def load_day(self) -> list[dict[str, Any]]:
        """Reload today's travelers. Returns the ones still waiting at the gate."""
        data = await self._post("/api/travelers/get-day", {
            "chatId": self.chat_id, "day": self.day,
        })
        self.state.travelers = data["travelers"]
        if data.get("available_interactions"):
            self.state.available_interactions = data["available_interactions"]
        return self.pending_travelers

    async def decide(self, traveler_id: str, decision: str) -> dict[str, Any]:
        data = await self._post("/api/travelers/decision", {
            "chatId": self.chat_id, "travelerId": traveler_id, "decision": decision,
        })
        if data.get("population"):
            self.state.population = data["population"]
        if data.get("hidden_reputation"):
            self.state.hidden_reputation = data["hidden_reputation"]
        # Triggers may have granted items or unlocked interactions.
        await self.refresh()
        return data

    async def use_item(self, traveler_id: str, action: str) -> str:
        """Use an item interaction on a traveler. Returns the traveler's reaction."""
        data = await self._post("/api/travelers/action", {
            "chatId": self.chat_id, "travelerId": traveler_id, "action": action,
        })
        self.state.inventory = data["inventory"]
        return data["response"]

    async def advance_day(self) -> GameState:
        data = await self._post("/api/day/advance", {"chatId": self.chat_id})
        self.state.session = data["session"]
        self.state.travelers = data.get("travelers") or []
        self.state.events = data.get("events") or []
        return self.state

    # ------------------------------------------------------------------
    # Derived state
    # ------------------------------------------------------------------

    @property
    def day(self) -> int:
        return (self.state.session or {}).get("day", 1)

    @property
    def finished(self) -> bool:
        return bool((self.state.session or {}).get("finished"))

    @property
    def phase(self) -> str:
        return day_phase(self.state.travelers)

    @property
    def pending_travelers(self) -> list[dict[str, Any]]:
        return [t for t in self.state.travelers if not t.get("complete")]

    @property
    def can_end_day(self) -> bool:
        if self.finished:
            return False
        completed = [t for t in self.state.travelers if t.get("complete")]
        return not self.pending_travelers and len(completed) == TRAVELERS_PER_DAY

    @property
    def usable_interactions(self) -> list[str]:
        return usable_interactions(self.state.available_interactions, self.state.inventory)

    @property
    def population_total(self) -> int:
        return total(self.state.population)
