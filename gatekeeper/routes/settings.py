"""Health check and game settings endpoints."""

from fastapi import APIRouter

from gatekeeper import storage

from .models import SettingsPatch

router = APIRouter()


@router.get("/health")
async def health():
    """Health check."""
    return {"status": "ok"}


@router.get("/settings")
async def get_settings():
    """Get game settings (run length, clamps, starting kit, generator)."""
    return storage.get_config()


@router.patch("/settings")
async def update_settings(body: SettingsPatch):
    """Update game settings (partial merge)."""
    return storage.update_config(body.model_dump(exclude_unset=True))
