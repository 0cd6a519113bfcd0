"""Assembly engine — builds one OneShot from the two content services.

Flow:
  1. Fetch the monster index (UpstreamUnavailable propagates).
  2. Sample up to three monsters around the party's level.
  3. No monsters at all → use FALLBACK_MONSTER, so the list is never empty.
  4. Sample LOOT_COUNT magic items (may come back empty).
  5. Fill in the title and hook templates.

The engine holds no state; clients and rng are passed in on every call.
"""

from __future__ import annotations

import logging
import random
from typing import Protocol

from oneshot_forge.models import (
    AbilityScores,
    ItemSummary,
    MonsterAction,
    MonsterRef,
    MonsterStatBlock,
    OneShot,
)
from oneshot_forge.sampler import SAMPLE_SIZE, sample_monsters

logger = logging.getLogger(__name__)

LOOT_COUNT = 3


class Bestiary(Protocol):
    async def list_index(self) -> list[MonsterRef]: ...

    async def fetch_detail(self, index: str) -> MonsterStatBlock | None: ...


class LootSource(Protocol):
    async def sample_items(
        self, count: int, rng: random.Random | None = None
    ) -> list[ItemSummary]: ...


FALLBACK_MONSTER = MonsterStatBlock(
    name="Goblin",
    size="Small",
    type="humanoid",
    alignment="neutral evil",
    cr=0.25,
    hp=7,
    ac=15,
    hit_dice="2d6",
    speed="walk 30 ft.",
    stats=AbilityScores(str=8, dex=14, con=10, int=10, wis=8, cha=8),
    senses="darkvision 60 ft., passive Perception 9",
    languages="Common, Goblin",
    actions=[
        MonsterAction(
            name="Scimitar",
            desc="Melee Weapon Attack: +4 to hit, reach 5 ft., one target. "
            "Hit: 5 (1d6 + 2) slashing damage.",
        ),
    ],
)


def compose_title(environment: str) -> str:
    return f"Adventure in the {environment}"


def compose_hook(party_size: int, average_level: int, environment: str) -> str:
    return (
        f"A group of {party_size} adventurers, around level {average_level}, "
        f"is hired to investigate strange events in the {environment}."
    )


async def generate(
    party_size: int,
    average_level: int,
    environment: str,
    *,
    bestiary: Bestiary,
    loot: LootSource,
    rng: random.Random | None = None,
    sample_size: int = SAMPLE_SIZE,
) -> OneShot:
    """Assemble a complete one-shot for the given party."""
    rng = rng or random.Random()

    index = await bestiary.list_index()
    monsters = await sample_monsters(
        average_level, index, bestiary.fetch_detail, rng, sample_size=sample_size,
    )
    if not monsters:
        logger.info("no monster matched level %d; using fallback %s",
                    average_level, FALLBACK_MONSTER.name)
        monsters = [FALLBACK_MONSTER]

    items = await loot.sample_items(LOOT_COUNT, rng)

    return OneShot(
        title=compose_title(environment),
        hook=compose_hook(party_size, average_level, environment),
        environment=environment,
        party_size=party_size,
        average_level=average_level,
        monsters=monsters,
        loot=items,
    )
