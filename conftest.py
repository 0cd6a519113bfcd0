import random

import pytest

from oneshot_forge.models import ItemSummary, MonsterRef, MonsterStatBlock


class StubBestiary:
    """In-memory bestiary. Values of None behave like unresolvable records."""

    def __init__(self, records: dict[str, MonsterStatBlock | None]) -> None:
        self.records = records
        self.index_calls = 0
        self.detail_calls: list[str] = []

    async def list_index(self) -> list[MonsterRef]:
        self.index_calls += 1
        return [
            MonsterRef(index=key, name=rec.name if rec else key, url=f"/api/monsters/{key}")
            for key, rec in self.records.items()
        ]

    async def fetch_detail(self, index: str) -> MonsterStatBlock | None:
        self.detail_calls.append(index)
        return self.records.get(index)


class StubLoot:
    def __init__(self, items: list[ItemSummary]) -> None:
        self.items = items
        self.calls: list[int] = []

    async def sample_items(self, count: int, rng: random.Random | None = None) -> list[ItemSummary]:
        self.calls.append(count)
        return self.items[:count]


class OrderedRandom(random.Random):
    """sample() keeps the population order; shuffle() leaves lists untouched."""

    def sample(self, population, k, **kwargs):
        return list(population)[:k]

    def shuffle(self, x, *args, **kwargs):
        pass


def monster(name: str, cr: float, **fields) -> MonsterStatBlock:
    return MonsterStatBlock(name=name, cr=cr, **fields)


@pytest.fixture
def ordered_rng() -> OrderedRandom:
    return OrderedRandom()


@pytest.fixture
def make_bestiary():
    return StubBestiary


@pytest.fixture
def make_loot():
    return StubLoot


@pytest.fixture
def make_monster():
    return monster


@pytest.fixture
def sample_items() -> list[ItemSummary]:
    return [
        ItemSummary(name="Bag of Holding", type="Wondrous item", rarity="uncommon"),
        ItemSummary(name="Cloak of Elvenkind", type="Wondrous item", rarity="uncommon"),
        ItemSummary(name="Wand of Web", type="Wand", rarity="uncommon"),
        ItemSummary(name="Flame Tongue", type="Weapon (any sword)", rarity="rare"),
    ]
