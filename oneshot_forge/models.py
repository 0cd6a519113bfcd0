"""Core domain models.

Every stage of generation produces and consumes these types. Pydantic handles
validation and serialisation at each boundary; field names go out on the wire
in camelCase (hitDice, partySize, averageLevel) and are accepted either way.
All models are frozen: an artifact never changes after it is built.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, StrictInt
from pydantic.alias_generators import to_camel


class _Model(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class MonsterRef(_Model):
    """One entry of the bestiary index."""

    index: str
    name: str
    url: str | None = None


class MonsterAction(_Model):
    name: str
    desc: str = ""


class AbilityScores(_Model):
    """The six ability scores; serialised as str/dex/con/int/wis/cha."""

    strength: int = Field(default=10, alias="str")
    dexterity: int = Field(default=10, alias="dex")
    constitution: int = Field(default=10, alias="con")
    intelligence: int = Field(default=10, alias="int")
    wisdom: int = Field(default=10, alias="wis")
    charisma: int = Field(default=10, alias="cha")


class MonsterStatBlock(_Model):
    """Canonical stat block, normalized from whatever the bestiary returned."""

    name: str
    size: str | None = None
    type: str | None = None
    alignment: str | None = None
    cr: float = Field(default=0, ge=0)
    hp: int = Field(default=0, ge=0)
    ac: int = Field(default=10, ge=0)
    hit_dice: str | None = None
    speed: str | None = None
    stats: AbilityScores = Field(default_factory=AbilityScores)
    senses: str | None = None
    languages: str | None = None
    actions: list[MonsterAction] = Field(default_factory=list)
    image: str | None = None  # upstream path, e.g. /api/images/monsters/goblin.png


class ItemSummary(_Model):
    name: str
    type: str | None = None
    rarity: str | None = None
    desc: str | None = None  # always None; players look items up themselves


class OneShot(_Model):
    """The generated adventure package returned to the caller."""

    title: str
    hook: str
    environment: str
    party_size: int
    average_level: int
    monsters: list[MonsterStatBlock] = Field(min_length=1)
    loot: list[ItemSummary] = Field(default_factory=list)


class GenerateRequest(_Model):
    party_size: StrictInt = Field(gt=0)
    average_level: StrictInt = Field(gt=0)
    environment: str = Field(min_length=1)
