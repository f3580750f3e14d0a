"""Traveler endpoints: the day's queue, decisions, and item actions."""

from fastapi import APIRouter, HTTPException

from gatekeeper import storage
from gatekeeper.decisions import decide
from gatekeeper.errors import DecisionConflict, InvalidAction, NotFoundError
from gatekeeper.progression import use_item

from .common import require_session
from .models import ActionBody, DecisionBody, GetDayBody

router = APIRouter()


@router.post("/travelers/get-day")
async def get_day(body: GetDayBody):
    """List a day's travelers (defaults to the current day)."""
    session = require_session(body.chat_id)
    day = body.day if body.day is not None else session["day"]
    if day < 1 or day > session["day"]:
        raise HTTPException(400, f"Day {day} has not begun")
    return {
        "travelers": storage.get_travelers(session["id"], day=day),
        "available_interactions": session["available_interactions"],
    }


@router.post("/travelers/decision")
async def traveler_decision(body: DecisionBody):
    """Allow, deny, or execute a traveler, or complete a fixed one."""
    session = require_session(body.chat_id)
    try:
        return decide(session, body.traveler_id, body.decision)
    except NotFoundError as e:
        raise HTTPException(404, str(e))
    except DecisionConflict as e:
        raise HTTPException(409, str(e))
    except InvalidAction as e:
        raise HTTPException(400, str(e))


@router.post("/travelers/action")
async def traveler_action(body: ActionBody):
    """Use an item on a traveler (check papers, holy water, medicinal herbs)."""
    session = require_session(body.chat_id)
    try:
        return use_item(session, body.traveler_id, body.action)
    except NotFoundError as e:
        raise HTTPException(404, str(e))
    except InvalidAction as e:
        raise HTTPException(400, str(e))
