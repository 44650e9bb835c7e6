"""Split wrapper models.

A split is one element of a ``splits`` array: a raw ``stat`` record plus
whatever identifies it (season, month, opponent, ...).  Wrappers are generic
over the record type, so ``WithSeason[HittingStats]`` validates a season
split of hitting stats.

Every wrapper has ``fallback()``, the value an aggregate uses when the API
returned nothing for a statistic: unknown references, the current season
and an all-omitted record.
"""

from __future__ import annotations

import datetime
from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from models import (
    GameRef,
    GameType,
    NamedLeague,
    NamedPerson,
    NamedPosition,
    NamedTeam,
    SportRef,
    Weekday,
    current_season,
)
from stats.records import RawStats

StatsT = TypeVar("StatsT", bound=RawStats)


class SplitModel(BaseModel, Generic[StatsT]):
    """Base for split wrappers; ``stats`` is read from the wire key ``stat``."""
    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        alias_generator=to_camel,
        populate_by_name=True,
    )

    stats: StatsT = Field(alias="stat")

    @classmethod
    def stats_model(cls) -> type[RawStats]:
        """The concrete record type this wrapper was parametrized with."""
        annotation = cls.model_fields["stats"].annotation
        if not (isinstance(annotation, type) and issubclass(annotation, RawStats)):
            raise TypeError(
                f"{cls.__name__} must be parametrized with a stat record, "
                f"e.g. {cls.__name__}[HittingStats]"
            )
        return annotation

    @classmethod
    def _fallback_fields(cls) -> dict[str, Any]:
        return {}

    @classmethod
    def fallback(cls) -> Any:
        return cls.model_construct(stats=cls.stats_model().fallback(), **cls._fallback_fields())


class WithNone(SplitModel[StatsT], Generic[StatsT]):
    """A bare ``stat`` with nothing identifying it (lastXGames, byDateRange)."""


class WithSeason(SplitModel[StatsT], Generic[StatsT]):
    season: int

    @classmethod
    def _fallback_fields(cls) -> dict[str, Any]:
        return {"season": current_season()}


class Career(SplitModel[StatsT], Generic[StatsT]):
    player: Optional[NamedPerson] = None
    team: Optional[NamedTeam] = None
    league: Optional[NamedLeague] = None
    sport: Optional[SportRef] = None
    game_type: GameType = GameType.REGULAR_SEASON

    @classmethod
    def _fallback_fields(cls) -> dict[str, Any]:
        return {
            "player": NamedPerson.unknown(),
            "team": None,
            "league": None,
            "sport": None,
            "game_type": GameType.REGULAR_SEASON,
        }


class WithMonth(SplitModel[StatsT], Generic[StatsT]):
    month: int = Field(ge=1, le=12)
    season: int

    @classmethod
    def _fallback_fields(cls) -> dict[str, Any]:
        return {"month": 1, "season": current_season()}


class WithWeekday(SplitModel[StatsT], Generic[StatsT]):
    weekday: Weekday = Field(alias="dayOfWeek")
    season: int

    @classmethod
    def _fallback_fields(cls) -> dict[str, Any]:
        return {"weekday": Weekday.MONDAY, "season": current_season()}


class WithGame(SplitModel[StatsT], Generic[StatsT]):
    """One game-log line."""
    opposing_team: NamedTeam = Field(alias="opponent")
    date: datetime.date
    is_home: bool
    game: GameRef
    season: int

    @classmethod
    def _fallback_fields(cls) -> dict[str, Any]:
        return {
            "opposing_team": NamedTeam.unknown(),
            "date": datetime.date.today(),
            "is_home": True,
            "game": GameRef.unknown(),
            "season": current_season(),
        }


class WithPlayer(SplitModel[StatsT], Generic[StatsT]):
    player: NamedPerson
    game_type: GameType = GameType.REGULAR_SEASON
    season: int

    @classmethod
    def _fallback_fields(cls) -> dict[str, Any]:
        return {
            "player": NamedPerson.unknown(),
            "game_type": GameType.REGULAR_SEASON,
            "season": current_season(),
        }


class WithPositionAndSeason(SplitModel[StatsT], Generic[StatsT]):
    position: NamedPosition
    season: int

    @classmethod
    def _fallback_fields(cls) -> dict[str, Any]:
        return {"position": NamedPosition.unknown(), "season": current_season()}


class AccumulatedMatchup(SplitModel[StatsT], Generic[StatsT]):
    """Totals against one opposing team."""
    opposing_team: NamedTeam = Field(alias="opponent")
    game_type: GameType = GameType.REGULAR_SEASON
    team: NamedTeam

    @classmethod
    def _fallback_fields(cls) -> dict[str, Any]:
        return {
            "opposing_team": NamedTeam.unknown(),
            "game_type": GameType.REGULAR_SEASON,
            "team": NamedTeam.unknown(),
        }


class AccumulatedVsPlayerMatchup(AccumulatedMatchup[StatsT], Generic[StatsT]):
    """Totals for one pitcher/batter pairing (vsPlayer, vsPlayerTotal)."""
    pitcher: NamedPerson
    batter: NamedPerson

    @classmethod
    def _fallback_fields(cls) -> dict[str, Any]:
        fields = super()._fallback_fields()
        fields.update(pitcher=NamedPerson.unknown(), batter=NamedPerson.unknown())
        return fields


class AccumulatedVsTeamTotalMatchup(AccumulatedMatchup[StatsT], Generic[StatsT]):
    """A batter's totals against one team (vsTeamTotal)."""
    batter: NamedPerson

    @classmethod
    def _fallback_fields(cls) -> dict[str, Any]:
        fields = super()._fallback_fields()
        fields["batter"] = NamedPerson.unknown()
        return fields


class AccumulatedVsTeamSeasonalPitcherSplit(AccumulatedVsPlayerMatchup[StatsT], Generic[StatsT]):
    """A batter's line against one pitcher of a team in one season (vsTeam)."""
    season: int

    @classmethod
    def _fallback_fields(cls) -> dict[str, Any]:
        fields = super()._fallback_fields()
        fields["season"] = current_season()
        return fields


# ---------------------------------------------------------------------------
# Boolean-discriminated splits
# ---------------------------------------------------------------------------

class HomeOrAwaySplit(SplitModel[StatsT], Generic[StatsT]):
    """One half of a homeAndAway response, told apart by ``isHome``."""
    is_home: bool
    season: Optional[int] = None

    @classmethod
    def _fallback_fields(cls) -> dict[str, Any]:
        return {"is_home": True, "season": current_season()}

    @classmethod
    def fallback_for(cls, is_home: bool) -> Any:
        return cls.fallback().model_copy(update={"is_home": is_home})


class WinOrLossSplit(SplitModel[StatsT], Generic[StatsT]):
    """One half of a winLoss response, told apart by ``isWin``."""
    is_win: bool
    season: Optional[int] = None

    @classmethod
    def _fallback_fields(cls) -> dict[str, Any]:
        return {"is_win": True, "season": current_season()}

    @classmethod
    def fallback_for(cls, is_win: bool) -> Any:
        return cls.fallback().model_copy(update={"is_win": is_win})
