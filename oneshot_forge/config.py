"""Runtime settings, read from the environment (and .env at the repo root).

    BESTIARY_API_BASE    base URL of the D&D 5e API (monsters)
    LOOT_API_BASE        base URL of the Open5e API (magic items)
    HTTP_TIMEOUT         per-call timeout in seconds
    MONSTER_SAMPLE_SIZE  candidates probed per CR target
    LOOT_PAGE_SIZE       magic items fetched in the single catalog page

Blank values fall back to the defaults below.
"""

import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field

load_dotenv(Path(__file__).parent.parent / ".env")

_ENV_VARS = {
    "bestiary_url": "BESTIARY_API_BASE",
    "loot_url": "LOOT_API_BASE",
    "http_timeout": "HTTP_TIMEOUT",
    "sample_size": "MONSTER_SAMPLE_SIZE",
    "loot_page_size": "LOOT_PAGE_SIZE",
}


class Settings(BaseModel):
    bestiary_url: str = "https://www.dnd5eapi.co"
    loot_url: str = "https://api.open5e.com"
    http_timeout: float = Field(default=10.0, gt=0)
    sample_size: int = Field(default=15, gt=0)
    loot_page_size: int = Field(default=100, gt=0)


def load_settings() -> Settings:
    """Build Settings from environment variables, skipping unset or blank ones."""
    fields: dict[str, str] = {}
    for field, var in _ENV_VARS.items():
        value = os.getenv(var, "").strip()
        if value:
            fields[field] = value
    return Settings(**fields)
