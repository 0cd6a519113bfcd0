"""Request dependencies: the upstream clients built by create_app().

Tests swap these out through app.dependency_overrides.
"""

from fastapi import Request

from oneshot_forge.bestiary import BestiaryClient
from oneshot_forge.config import Settings
from oneshot_forge.loot import LootClient


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_bestiary(request: Request) -> BestiaryClient:
    return request.app.state.bestiary


def get_loot(request: Request) -> LootClient:
    return request.app.state.loot
