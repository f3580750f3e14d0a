"""Inventory, structure, and interaction endpoints."""

from fastapi import APIRouter, HTTPException

from gatekeeper import storage
from gatekeeper.errors import InvalidAction
from gatekeeper.progression import add_interaction

from .common import require_session
from .models import (
    AddInteractionBody,
    GiveItemsBody,
    SetActiveStructureBody,
    UpdateInventoryBody,
)

router = APIRouter()


@router.post("/inventory/update")
async def update_inventory(body: UpdateInventoryBody):
    """Add a signed amount to one item (never below 0)."""
    session = require_session(body.chat_id)
    items = storage.update_item(session["id"], body.item, body.amount)
    if items is None:
        raise HTTPException(404, f"Inventory item '{body.item}' not found")
    return {"success": True, "items": items}


@router.post("/inventory/give")
async def give_inventory(body: GiveItemsBody):
    """Grant several items at once."""
    session = require_session(body.chat_id)
    inventory = storage.give_items(session["id"], body.items)
    if inventory is None:
        raise HTTPException(404, "Inventory item not found")
    return {"success": True, "inventory": inventory}


@router.post("/structures/set-active")
async def set_active_structure(body: SetActiveStructureBody):
    """Open a structure for the session."""
    session = require_session(body.chat_id)
    if not storage.set_structure_active(session["id"], body.structure_template_id):
        raise HTTPException(404, "Structure not found")
    return {"success": True}


@router.post("/interactions/add")
async def unlock_interaction(body: AddInteractionBody):
    """Unlock a gate interaction for the session."""
    session = require_session(body.chat_id)
    try:
        available = add_interaction(session, body.interaction)
    except InvalidAction as e:
        raise HTTPException(400, str(e))
    return {"success": True, "available_interactions": available}
