from fastapi import APIRouter

from app.api.v1.endpoints.health import router as health_router
from app.api.v1.endpoints.agents import router as agents_router
from app.api.v1.endpoints.lists import router as lists_router
from app.core.config import settings


router = APIRouter(prefix=settings.api_prefix)
router.include_router(health_router, tags=["health"])
router.include_router(agents_router, tags=["agents"])
router.include_router(lists_router, tags=["lists"])
