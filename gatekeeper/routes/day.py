"""Day advance endpoint."""

from fastapi import APIRouter, HTTPException
from fastapi.responses import JSONResponse

from gatekeeper.errors import DayNotComplete, RunComplete
from gatekeeper.progression import advance_day

from .common import require_session
from .models import ChatBody

router = APIRouter()


@router.post("/day/advance")
async def day_advance(body: ChatBody):
    """End the day once all six travelers are complete."""
    session = require_session(body.chat_id)
    try:
        return advance_day(session)
    except RunComplete as e:
        raise HTTPException(409, str(e))
    except DayNotComplete as e:
        return JSONResponse(
            status_code=400,
            content={
                "error": str(e),
                "completedCount": e.completed,
                "requiredCount": e.required,
            },
        )
