"""Tests for gatekeeper.client: GameClient driven against the app in-process."""

import httpx
import pytest

from gatekeeper import storage
from gatekeeper.app import app
from gatekeeper.client import ClientError, GameClient

from tests.factories import CHAT_ID


@pytest.fixture
async def game():
    storage.update_config({"run_length_days": 2})
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as http:
        yield GameClient(http, CHAT_ID)


async def _play_day(game: GameClient) -> None:
    for traveler in list(game.pending_travelers):
        decision = "complete_fixed" if traveler["traveler"]["is_fixed"] else "deny"
        await game.decide(traveler["id"], decision)


class TestLogin:
    async def test_new_player_needs_pet(self, game: GameClient) -> None:
        state = await game.login("Aldric")
        assert state.needs_pet_selection is True
        assert state.player["player_name"] == "Aldric"
        assert state.session is None

    async def test_select_pet(self, game: GameClient) -> None:
        await game.login()
        state = await game.select_pet("cat", "Ash")
        assert state.needs_pet_selection is False
        assert state.pet == {"type": "cat", "name": "Ash"}
        assert game.day == 1
        assert game.phase == "Dawn"
        assert len(game.pending_travelers) == 6
        assert game.usable_interactions == ["check-papers", "let-in", "push-out"]

    async def test_pet_description(self, game: GameClient) -> None:
        assert "owl" in await game.pet_description("owl")

    async def test_relogin_resumes_session(self, game: GameClient) -> None:
        await game.login()
        await game.select_pet("owl")
        session_id = game.state.session["id"]

        other = GameClient(game._http, CHAT_ID)
        state = await other.login()
        assert state.needs_pet_selection is False
        assert state.session["id"] == session_id


class TestDay:
    async def test_full_day_and_advance(self, game: GameClient) -> None:
        await game.login()
        await game.select_pet("cat", "Ash")
        assert game.can_end_day is False

        await _play_day(game)
        assert game.pending_travelers == []
        assert game.can_end_day is True
        assert game.phase == "Night"

        # Mithrail's trigger on day 1
        assert game.state.inventory["holy water"] == 2
        assert "holy-water" in game.state.available_interactions
        assert "holy-water" in game.usable_interactions

        state = await game.advance_day()
        assert state.session["day"] == 2
        assert len(game.pending_travelers) == 6
        assert game.phase == "Dawn"

    async def test_advance_too_early(self, game: GameClient) -> None:
        await game.login()
        await game.select_pet("cat", "Ash")
        first = game.pending_travelers[0]
        await game.decide(first["id"], "deny")

        with pytest.raises(ClientError) as exc_info:
            await game.advance_day()
        assert exc_info.value.status == 400
        assert exc_info.value.body["completedCount"] == 1
        assert exc_info.value.body["requiredCount"] == 6
        assert game.day == 1

    async def test_use_item(self, game: GameClient) -> None:
        await game.login()
        await game.select_pet("cat", "Ash")
        traveler = game.pending_travelers[0]
        reaction = await game.use_item(traveler["id"], "check-papers")
        assert isinstance(reaction, str) and reaction
        assert game.state.inventory["lantern fuel"] == 2

    async def test_load_day(self, game: GameClient) -> None:
        await game.login()
        await game.select_pet("cat", "Ash")
        pending = await game.load_day()
        assert [t["position"] for t in pending] == [1, 2, 3, 4, 5, 6]

    async def test_decision_conflict(self, game: GameClient) -> None:
        await game.login()
        await game.select_pet("cat", "Ash")
        traveler = game.pending_travelers[0]
        decision = "complete_fixed" if traveler["traveler"]["is_fixed"] else "allow"
        await game.decide(traveler["id"], decision)
        with pytest.raises(ClientError) as exc_info:
            await game.decide(traveler["id"], decision)
        assert exc_info.value.status == 409

    async def test_run_finishes_after_last_day(self, game: GameClient) -> None:
        await game.login()
        await game.select_pet("cat", "Ash")
        await _play_day(game)
        await game.advance_day()
        await _play_day(game)
        assert game.can_end_day is True

        state = await game.advance_day()
        assert state.session["day"] == 2
        assert game.finished is True
        assert game.can_end_day is False
        with pytest.raises(ClientError) as exc_info:
            await game.advance_day()
        assert exc_info.value.status == 409
