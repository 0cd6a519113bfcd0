"""One-shot generation endpoint."""

from typing import Any

from fastapi import APIRouter, Body, Depends

from oneshot_forge.config import Settings
from oneshot_forge.endpoint import generate_oneshot
from oneshot_forge.engine import Bestiary, LootSource
from oneshot_forge.models import OneShot

from .deps import get_bestiary, get_loot, get_settings

router = APIRouter()


@router.post("/oneshots/generate", response_model=OneShot)
async def generate(
    body: Any = Body(None),
    bestiary: Bestiary = Depends(get_bestiary),
    loot: LootSource = Depends(get_loot),
    settings: Settings = Depends(get_settings),
):
    """Generate a one-shot from {partySize, averageLevel, environment}.

    400 {"error"} when a field is missing or falsy, 500 {"error"} when
    generation fails. No auth required: anyone can generate.
    """
    return await generate_oneshot(
        body, bestiary=bestiary, loot=loot, sample_size=settings.sample_size,
    )
