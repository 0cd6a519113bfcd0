"""Difficulty sampler — pick monsters whose CR suits the party.

Three CR targets are derived from the party's average level. For each target a
small random sample of the monster index is probed in order; the first
candidate whose CR is within CR_TOLERANCE of the target wins. A target whose
sample holds no match contributes nothing.

This never scans the whole index: detail calls per target are capped at the
sample size, and the closest monster overall may well be missed. Randomness
comes from the injected rng so tests can script the probe order.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Awaitable, Callable, Sequence

from oneshot_forge.models import MonsterRef, MonsterStatBlock

logger = logging.getLogger(__name__)

SAMPLE_SIZE = 15
CR_TOLERANCE = 1
MIN_CR_TARGET = 0.125

FetchDetail = Callable[[str], Awaitable[MonsterStatBlock | None]]


def pick_cr_targets(average_level: int) -> list[float]:
    """[level - 1, level, level + 1], with the lowest clamped to 0.125."""
    return [max(MIN_CR_TARGET, average_level - 1), average_level, average_level + 1]


def sample_candidates(
    index: Sequence[MonsterRef], rng: random.Random, size: int = SAMPLE_SIZE
) -> list[MonsterRef]:
    return rng.sample(list(index), min(size, len(index)))


def cr_matches(cr: float, target: float, tolerance: float = CR_TOLERANCE) -> bool:
    # Inclusive on both ends: target 0.125 accepts anything up to CR 1.125.
    return abs(cr - target) <= tolerance


async def find_monster(
    target: float,
    index: Sequence[MonsterRef],
    fetch_detail: FetchDetail,
    rng: random.Random,
    sample_size: int = SAMPLE_SIZE,
    exclude: set[str] | frozenset[str] = frozenset(),
) -> MonsterStatBlock | None:
    """First monster in a fresh random sample whose CR is near `target`.

    Candidates that fail to resolve, or whose name is in `exclude`, are
    skipped. Returns None once the sample is exhausted.
    """
    candidates = sample_candidates(index, rng, sample_size)
    for ref in candidates:
        block = await fetch_detail(ref.index)
        if block is None or block.name in exclude:
            continue
        if cr_matches(block.cr, target):
            logger.debug("target cr=%s matched %s (cr=%s)", target, block.name, block.cr)
            return block
    logger.debug("target cr=%s: no match in %d candidates", target, len(candidates))
    return None


async def sample_monsters(
    average_level: int,
    index: Sequence[MonsterRef],
    fetch_detail: FetchDetail,
    rng: random.Random,
    sample_size: int = SAMPLE_SIZE,
) -> list[MonsterStatBlock]:
    """Zero to three monsters, one per CR target, in target order."""
    chosen: list[MonsterStatBlock] = []
    for target in pick_cr_targets(average_level):
        found = await find_monster(
            target, index, fetch_detail, rng,
            sample_size=sample_size,
            exclude={m.name for m in chosen},
        )
        if found is not None:
            chosen.append(found)
    return chosen
