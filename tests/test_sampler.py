"""Tests for oneshot_forge.sampler — CR targets and first-match sampling."""

import random

import pytest

from oneshot_forge.models import MonsterRef
from oneshot_forge.sampler import (
    SAMPLE_SIZE,
    cr_matches,
    find_monster,
    pick_cr_targets,
    sample_candidates,
    sample_monsters,
)


class TestPickCrTargets:
    def test_level_three(self) -> None:
        assert pick_cr_targets(3) == [2, 3, 4]

    def test_level_one_clamps_low_target(self) -> None:
        assert pick_cr_targets(1) == [0.125, 1, 2]

    def test_level_two_low_target_is_one(self) -> None:
        assert pick_cr_targets(2) == [1, 2, 3]

    def test_level_twenty(self) -> None:
        assert pick_cr_targets(20) == [19, 20, 21]


class TestCrMatches:
    def test_exact(self) -> None:
        assert cr_matches(3, 3)

    def test_upper_boundary_inclusive(self) -> None:
        assert cr_matches(4, 3)

    def test_lower_boundary_inclusive(self) -> None:
        assert cr_matches(2, 3)

    def test_outside_window(self) -> None:
        assert not cr_matches(5, 3)

    def test_wide_window_at_lowest_target(self) -> None:
        # Target 0.125 accepts CR 0 through 1.125.
        assert cr_matches(0, 0.125)
        assert cr_matches(1, 0.125)
        assert cr_matches(1.125, 0.125)
        assert not cr_matches(2, 0.125)


class TestSampleCandidates:
    def test_bounded_by_sample_size(self) -> None:
        index = [MonsterRef(index=f"m{i}", name=f"M{i}") for i in range(100)]
        picked = sample_candidates(index, random.Random(1))
        assert len(picked) == SAMPLE_SIZE
        assert len({r.index for r in picked}) == SAMPLE_SIZE

    def test_small_index_returns_all(self) -> None:
        index = [MonsterRef(index="a", name="A"), MonsterRef(index="b", name="B")]
        picked = sample_candidates(index, random.Random(1))
        assert sorted(r.index for r in picked) == ["a", "b"]

    def test_empty_index(self) -> None:
        assert sample_candidates([], random.Random(1)) == []


class TestFindMonster:
    async def test_first_match_wins_and_stops(self, make_bestiary, make_monster, ordered_rng) -> None:
        bestiary = make_bestiary({
            "dragon": make_monster("Dragon", 17),
            "wolf": make_monster("Wolf", 0.25),
            "ogre": make_monster("Ogre", 2),
            "bugbear": make_monster("Bugbear", 1),
        })
        index = await bestiary.list_index()
        found = await find_monster(0.125, index, bestiary.fetch_detail, ordered_rng)
        assert found is not None and found.name == "Wolf"
        assert bestiary.detail_calls == ["dragon", "wolf"]

    async def test_unresolvable_candidates_skipped(self, make_bestiary, make_monster, ordered_rng) -> None:
        bestiary = make_bestiary({
            "broken": None,
            "ogre": make_monster("Ogre", 2),
        })
        index = await bestiary.list_index()
        found = await find_monster(2, index, bestiary.fetch_detail, ordered_rng)
        assert found is not None and found.name == "Ogre"

    async def test_no_match_returns_none(self, make_bestiary, make_monster, ordered_rng) -> None:
        bestiary = make_bestiary({
            "dragon": make_monster("Dragon", 17),
            "lich": make_monster("Lich", 21),
        })
        index = await bestiary.list_index()
        assert await find_monster(3, index, bestiary.fetch_detail, ordered_rng) is None
        assert bestiary.detail_calls == ["dragon", "lich"]

    async def test_only_sample_is_probed(self, make_bestiary, make_monster, ordered_rng) -> None:
        records = {f"m{i}": make_monster(f"M{i}", 30) for i in range(40)}
        records["match"] = make_monster("Match", 3)
        bestiary = make_bestiary(records)
        index = await bestiary.list_index()
        found = await find_monster(3, index, bestiary.fetch_detail, ordered_rng, sample_size=15)
        assert found is None
        assert len(bestiary.detail_calls) == 15

    async def test_excluded_names_skipped(self, make_bestiary, make_monster, ordered_rng) -> None:
        bestiary = make_bestiary({
            "ogre": make_monster("Ogre", 2),
            "orc": make_monster("Orc", 0.5),
        })
        index = await bestiary.list_index()
        found = await find_monster(1, index, bestiary.fetch_detail, ordered_rng, exclude={"Ogre"})
        assert found is not None and found.name == "Orc"


class TestSampleMonsters:
    async def test_one_per_target_in_order(self, make_bestiary, make_monster, ordered_rng) -> None:
        bestiary = make_bestiary({
            "ogre": make_monster("Ogre", 2),
            "troll": make_monster("Troll", 5),
            "gnoll": make_monster("Gnoll", 0.5),
        })
        index = await bestiary.list_index()
        chosen = await sample_monsters(3, index, bestiary.fetch_detail, ordered_rng)
        # targets 2, 3, 4: Ogre fits 2 and 3 but is taken once; Troll fits 4
        assert [m.name for m in chosen] == ["Ogre", "Troll"]

    async def test_names_unique(self, make_bestiary, make_monster, ordered_rng) -> None:
        bestiary = make_bestiary({"ogre": make_monster("Ogre", 3)})
        index = await bestiary.list_index()
        chosen = await sample_monsters(3, index, bestiary.fetch_detail, ordered_rng)
        assert [m.name for m in chosen] == ["Ogre"]

    async def test_nothing_matches(self, make_bestiary, make_monster, ordered_rng) -> None:
        bestiary = make_bestiary({"tarrasque": make_monster("Tarrasque", 30)})
        index = await bestiary.list_index()
        assert await sample_monsters(3, index, bestiary.fetch_detail, ordered_rng) == []

    async def test_empty_index(self, ordered_rng) -> None:
        async def fetch(index: str):
            pytest.fail("no detail calls expected")

        assert await sample_monsters(3, [], fetch, ordered_rng) == []

    async def test_seeded_rng_is_repeatable(self, make_bestiary, make_monster) -> None:
        records = {f"m{i}": make_monster(f"M{i}", i % 6) for i in range(60)}
        first = make_bestiary(records)
        second = make_bestiary(records)
        a = await sample_monsters(3, await first.list_index(), first.fetch_detail, random.Random(42))
        b = await sample_monsters(3, await second.list_index(), second.fetch_detail, random.Random(42))
        assert [m.name for m in a] == [m.name for m in b]
        assert first.detail_calls == second.detail_calls
