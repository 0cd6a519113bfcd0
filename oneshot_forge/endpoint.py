"""Generation endpoint — the boundary the HTTP layer calls into.

Checks the decoded request body, runs the engine, and collapses every engine
failure into GenerationFailed. The real cause is logged, never returned.
"""

from __future__ import annotations

import logging
import random
from typing import Any

from pydantic import ValidationError

from oneshot_forge.engine import Bestiary, LootSource, generate
from oneshot_forge.errors import GenerationFailed, InvalidRequest
from oneshot_forge.models import GenerateRequest, OneShot
from oneshot_forge.sampler import SAMPLE_SIZE

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("partySize", "averageLevel", "environment")
MISSING_FIELDS_MESSAGE = "partySize, averageLevel, and environment are required"
BAD_VALUES_MESSAGE = (
    "partySize and averageLevel must be positive integers and environment a string"
)
GENERATION_FAILED_MESSAGE = "Failed to generate one-shot"


def parse_request(payload: Any) -> GenerateRequest:
    """Validate a raw request body. Raises InvalidRequest."""
    if not isinstance(payload, dict) or not all(payload.get(f) for f in REQUIRED_FIELDS):
        raise InvalidRequest(MISSING_FIELDS_MESSAGE)
    try:
        return GenerateRequest.model_validate(
            {f: payload[f] for f in REQUIRED_FIELDS}
        )
    except ValidationError as e:
        raise InvalidRequest(BAD_VALUES_MESSAGE) from e


async def generate_oneshot(
    payload: Any,
    *,
    bestiary: Bestiary,
    loot: LootSource,
    rng: random.Random | None = None,
    sample_size: int = SAMPLE_SIZE,
) -> OneShot:
    request = parse_request(payload)
    try:
        return await generate(
            request.party_size,
            request.average_level,
            request.environment,
            bestiary=bestiary,
            loot=loot,
            rng=rng,
            sample_size=sample_size,
        )
    except Exception as e:
        logger.exception("one-shot generation failed")
        raise GenerationFailed(GENERATION_FAILED_MESSAGE) from e
