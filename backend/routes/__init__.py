"""FastAPI API endpoints under /api.

Endpoint groups: health, one-shot generation. Saving, listing and editing
one-shots live in a separate service; only generation is served here.
"""

from fastapi import APIRouter

from .health import router as health_router
from .oneshots import router as oneshots_router

router = APIRouter()
router.include_router(health_router)
router.include_router(oneshots_router)
