"""FastAPI API endpoints under /api.

Endpoint groups: health/settings, auth + pet selection, travelers (day
queue, decisions, item actions), day advance, inventory/structures/
interactions. Every session-scoped endpoint takes the player's chatId and
works on that player's active session.
"""

from fastapi import APIRouter

from .auth import router as auth_router
from .day import router as day_router
from .inventory import router as inventory_router
from .settings import router as settings_router
from .travelers import router as travelers_router

router = APIRouter()
router.include_router(settings_router)
router.include_router(auth_router)
router.include_router(travelers_router)
router.include_router(day_router)
router.include_router(inventory_router)
