# /// script
# requires-python = ">=3.12"
# dependencies = ["pydantic>=2.0"]
# ///
"""Identifier and reference models shared by the stats engine.

These are the small "named" references the MLB Stats API embeds in every
split (``{"id": 147, "name": "New York Yankees", "link": ...}``).  They are
frozen so they can be used as dictionary keys by the keyed reduction
strategies in ``stats.aggregates``.
"""

from __future__ import annotations

import datetime
from enum import Enum, IntEnum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


def current_season() -> int:
    """Return the season year used for fallback splits."""
    return datetime.date.today().year


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class StatGroup(str, Enum):
    """Stat group half of a (type, group) statistic key."""
    HITTING = "hitting"
    PITCHING = "pitching"
    FIELDING = "fielding"
    CATCHING = "catching"
    RUNNING = "running"
    GAME = "game"
    TEAM = "team"
    STREAK = "streak"

    @classmethod
    def _missing_(cls, value: object) -> StatGroup | None:
        # The API is inconsistent about casing ("hitting" vs "Hitting").
        if isinstance(value, str):
            lowered = value.strip().lower()
            for member in cls:
                if member.value == lowered:
                    return member
        return None


class GameType(str, Enum):
    REGULAR_SEASON = "R"
    SPRING_TRAINING = "S"
    EXHIBITION = "E"
    ALL_STAR = "A"
    WILD_CARD = "F"
    DIVISION_SERIES = "D"
    LEAGUE_CHAMPIONSHIP_SERIES = "L"
    WORLD_SERIES = "W"
    CHAMPIONSHIP = "C"
    NINETEENTH_CENTURY_SERIES = "N"
    PLAYOFFS = "P"


class Weekday(IntEnum):
    """Day of week as sent in ``dayOfWeek`` (1 = Monday)."""
    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6
    SUNDAY = 7


# ---------------------------------------------------------------------------
# Named references
# ---------------------------------------------------------------------------

class Reference(BaseModel):
    """Base for hashable references parsed out of API payloads."""
    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        alias_generator=to_camel,
        populate_by_name=True,
    )


class NamedTeam(Reference):
    id: int
    name: str = ""

    @classmethod
    def unknown(cls) -> NamedTeam:
        return cls(id=0, name="")


class NamedPerson(Reference):
    id: int
    full_name: str = ""

    @classmethod
    def unknown(cls) -> NamedPerson:
        return cls(id=0, full_name="")


class NamedLeague(Reference):
    id: int
    name: str = ""

    @classmethod
    def unknown(cls) -> NamedLeague:
        return cls(id=0, name="")


class NamedPosition(Reference):
    code: str
    name: str = ""
    abbreviation: str = ""

    @classmethod
    def unknown(cls) -> NamedPosition:
        return cls(code="X", name="Unknown", abbreviation="X")


class GameRef(Reference):
    """The ``game`` object on game log splits; keyed by ``gamePk``."""
    game_pk: int = Field(alias="gamePk")

    @classmethod
    def unknown(cls) -> GameRef:
        return cls(game_pk=0)


class SportRef(Reference):
    id: int
    abbreviation: str = ""


class PitchType(Reference):
    """Pitch type from the pitch codes metadata (``{"code": "FF", ...}``)."""
    code: str
    description: str = ""
