"""Bestiary client — monster index and stat blocks from the D&D 5e API.

    GET {base}/api/monsters           {"results": [{"index", "name", "url"}]}
    GET {base}/api/monsters/{index}   one raw monster record

Detail records are normalized into MonsterStatBlock. The raw shapes vary:
armor_class is a number or a list of {"value", ...} entries, speed and senses
are mode → distance mappings (speed is sometimes already a string), and any
field may be missing. Each field falls back to its own default.

A failed index call raises UpstreamUnavailable. A failed detail call returns
None so the sampler can move on to the next candidate.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from oneshot_forge.errors import CandidateUnresolvable, UpstreamUnavailable
from oneshot_forge.models import AbilityScores, MonsterAction, MonsterRef, MonsterStatBlock

logger = logging.getLogger(__name__)

DEFAULT_AC = 10
DEFAULT_ABILITY = 10

_ABILITIES = {
    "strength": "str",
    "dexterity": "dex",
    "constitution": "con",
    "intelligence": "int",
    "wisdom": "wis",
    "charisma": "cha",
}


# ---------------------------------------------------------------------------
# Normalization helpers
# ---------------------------------------------------------------------------

def armor_class_value(raw: Any) -> int:
    """First entry's value when a list, else the scalar; 10 when absent."""
    if isinstance(raw, list):
        first = raw[0] if raw else None
        value = first.get("value") if isinstance(first, dict) else None
        return value or DEFAULT_AC
    return raw or DEFAULT_AC


def format_mapping(raw: dict[str, Any], replace_underscores: bool = False) -> str:
    """{"walk": "30 ft.", "fly": "60 ft."} → "walk 30 ft., fly 60 ft."."""
    parts = []
    for key, value in raw.items():
        if replace_underscores:
            key = key.replace("_", " ")
        parts.append(f"{key} {value}")
    return ", ".join(parts)


def format_speed(raw: Any) -> str | None:
    if isinstance(raw, dict):
        return format_mapping(raw)
    if isinstance(raw, str):
        return raw
    return None


def format_senses(raw: Any) -> str | None:
    if isinstance(raw, dict):
        return format_mapping(raw, replace_underscores=True)
    return None


def normalize_actions(raw: Any) -> list[MonsterAction]:
    if not isinstance(raw, list):
        return []
    return [
        MonsterAction(name=a.get("name") or "", desc=a.get("desc") or "")
        for a in raw
        if isinstance(a, dict)
    ]


def _or_default(value: Any, default: Any) -> Any:
    return default if value is None else value


def normalize_monster(data: dict[str, Any]) -> MonsterStatBlock:
    """Turn a raw bestiary record into a MonsterStatBlock."""
    stats = AbilityScores(**{
        short: _or_default(data.get(long), DEFAULT_ABILITY)
        for long, short in _ABILITIES.items()
    })
    return MonsterStatBlock(
        name=data["name"],
        size=data.get("size"),
        type=data.get("type"),
        alignment=data.get("alignment"),
        cr=_or_default(data.get("challenge_rating"), 0),
        hp=_or_default(data.get("hit_points"), 0),
        ac=armor_class_value(data.get("armor_class")),
        hit_dice=data.get("hit_dice"),
        speed=format_speed(data.get("speed")),
        stats=stats,
        senses=format_senses(data.get("senses")),
        languages=data.get("languages"),
        actions=normalize_actions(data.get("actions")),
        image=data.get("image"),
    )


# ---------------------------------------------------------------------------
# BestiaryClient
# ---------------------------------------------------------------------------

class BestiaryClient:
    """Async HTTP client for the monster service.

    Args:
        base_url: Root of the API, e.g. "https://www.dnd5eapi.co".
        timeout:  Per-call timeout in seconds.
    """

    def __init__(self, base_url: str, timeout: float = 10.0) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout

    async def _get(self, url: str) -> httpx.Response:
        async with httpx.AsyncClient(timeout=self._timeout) as client:
            resp = await client.get(url)
            resp.raise_for_status()
        return resp

    async def list_index(self) -> list[MonsterRef]:
        """Every monster the service knows about, in upstream order."""
        url = f"{self._base_url}/api/monsters"
        try:
            resp = await self._get(url)
        except httpx.HTTPStatusError as e:
            raise UpstreamUnavailable(
                f"Bestiary index returned HTTP {e.response.status_code}"
            ) from e
        except httpx.TimeoutException as e:
            raise UpstreamUnavailable(f"Bestiary index timed out after {self._timeout}s") from e
        except httpx.HTTPError as e:
            raise UpstreamUnavailable(f"Cannot connect to bestiary at {self._base_url}") from e

        try:
            results = resp.json()["results"]
        except (ValueError, KeyError, TypeError) as e:
            raise UpstreamUnavailable("Unexpected response format from bestiary index") from e
        if not isinstance(results, list):
            raise UpstreamUnavailable("Unexpected response format from bestiary index")

        refs = [
            MonsterRef(index=r["index"], name=r.get("name") or r["index"], url=r.get("url"))
            for r in results
            if isinstance(r, dict) and r.get("index")
        ]
        logger.debug("bestiary index size=%d", len(refs))
        return refs

    async def _fetch_raw(self, index: str) -> dict[str, Any]:
        url = f"{self._base_url}/api/monsters/{index}"
        try:
            resp = await self._get(url)
        except httpx.HTTPStatusError as e:
            raise CandidateUnresolvable(
                f"{index}: HTTP {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            raise CandidateUnresolvable(f"{index}: {type(e).__name__}") from e

        try:
            data = resp.json()
        except ValueError as e:
            raise CandidateUnresolvable(f"{index}: invalid JSON") from e
        if not isinstance(data, dict) or not data.get("name"):
            raise CandidateUnresolvable(f"{index}: not a monster record")
        return data

    async def fetch_detail(self, index: str) -> MonsterStatBlock | None:
        """Normalized stat block for one monster, or None if it can't be had."""
        try:
            return normalize_monster(await self._fetch_raw(index))
        except CandidateUnresolvable as e:
            logger.debug("skipping candidate %s", e)
            return None
        except (ValueError, TypeError) as e:
            logger.debug("skipping candidate %s: cannot normalize (%s)", index, e)
            return None
