"""Player registration / login and pet selection endpoints."""

from fastapi import APIRouter, HTTPException

from gatekeeper import storage
from gatekeeper.errors import GeneratorError, InvalidAction, NotFoundError
from gatekeeper.progression import session_state, start_session

from .models import AuthCheckBody, PetDescriptionBody, SelectPetBody

router = APIRouter()


@router.post("/auth/check")
async def auth_check(body: AuthCheckBody):
    """Register on first contact, then return the active session (or ask for a pet)."""
    player = storage.get_player(body.chat_id)
    if player is None:
        player = storage.create_player(
            body.chat_id, body.player_name, body.player_language, body.timezone
        )
    else:
        player = storage.update_player_timezone(body.chat_id, body.timezone)

    session = storage.get_active_session(body.chat_id)
    if session is None:
        return {"player": player, "needsPetSelection": True}
    return {"player": player, **session_state(session)}


@router.post("/pet/select")
async def select_pet(body: SelectPetBody):
    """Pick a companion and start a new session with a freshly generated run."""
    if storage.get_player(body.chat_id) is None:
        raise HTTPException(404, "Player not found")
    try:
        session = await start_session(body.chat_id, body.pet, body.pet_name)
    except NotFoundError as e:
        raise HTTPException(404, str(e))
    except InvalidAction as e:
        raise HTTPException(400, str(e))
    except GeneratorError as e:
        raise HTTPException(502, str(e))
    return session_state(session)


@router.post("/pets/description")
async def pet_description(body: PetDescriptionBody):
    """Flavour text for the pet selection screen."""
    pet = storage.get_pet(body.pet)
    if pet is None:
        raise HTTPException(404, "Pet not found")
    return {"description": pet["description"]}
