"""Loot client — random magic items from the Open5e catalog.

    GET {base}/magicitems/?page_size={page_size}
    Response: {"results": [{"name", "type", "rarity", "desc", ...}], "next": ...}

Only the first page is read; it is treated as the whole catalog. Loot is
flavor, so every failure is absorbed and yields no items.
"""

from __future__ import annotations

import logging
import random
from typing import Any

import httpx

from oneshot_forge.models import ItemSummary

logger = logging.getLogger(__name__)


def summarize_item(raw: dict[str, Any]) -> ItemSummary:
    # Upstream descriptions are long markdown blobs; drop them.
    return ItemSummary(
        name=raw["name"],
        type=raw.get("type"),
        rarity=raw.get("rarity"),
        desc=None,
    )


class LootClient:
    """Async HTTP client for the magic-item service.

    Args:
        base_url:  Root of the API, e.g. "https://api.open5e.com".
        page_size: Items requested in the single catalog page.
        timeout:   Per-call timeout in seconds.
    """

    def __init__(self, base_url: str, page_size: int = 100, timeout: float = 10.0) -> None:
        self._base_url = base_url.rstrip("/")
        self._page_size = page_size
        self._timeout = timeout

    async def _fetch_page(self) -> list[dict[str, Any]]:
        url = f"{self._base_url}/magicitems/"
        async with httpx.AsyncClient(timeout=self._timeout) as client:
            resp = await client.get(url, params={"page_size": self._page_size})
            resp.raise_for_status()
        results = resp.json().get("results")
        if not isinstance(results, list):
            raise ValueError("magic item catalog has no results list")
        return [r for r in results if isinstance(r, dict) and r.get("name")]

    async def sample_items(self, count: int, rng: random.Random | None = None) -> list[ItemSummary]:
        """Up to `count` items, shuffled out of one catalog page. Never raises."""
        rng = rng or random.Random()
        try:
            page = await self._fetch_page()
            shuffled = list(page)
            rng.shuffle(shuffled)
            items = [summarize_item(raw) for raw in shuffled[:count]]
        except (httpx.HTTPError, ValueError, AttributeError) as e:
            logger.warning("Failed to fetch magic items from %s: %s", self._base_url, e)
            return []

        logger.debug("loot page=%d picked=%d", len(page), len(items))
        return items
