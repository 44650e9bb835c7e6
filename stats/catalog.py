"""Which aggregate each (stat type, stat group) resolves into.

Most stat types pick a split wrapper and a reduction independent of the
group; the group only chooses the record (``HittingStats`` for hitting and
so on).  A few pairs are special and are listed in ``_GROUP_SPECIFIC``.
"""

from __future__ import annotations

from typing import Callable

from models import StatGroup
from stats.aggregates import (
    BY_MONTH,
    BY_POSITION,
    BY_SEASON,
    BY_WEEKDAY,
    Aggregate,
    HomeAndAway,
    Map,
    Map2D,
    Multiple,
    Single,
    WinLoss,
)
from stats.errors import UnknownStatTypeError
from stats.records import (
    CatchingStats,
    ExpectedStats,
    FieldingStats,
    HittingStats,
    PitchingStats,
    PitchUsage,
    RawStats,
    SabermetricsHittingStats,
    SabermetricsPitchingStats,
)
from stats.splits import (
    AccumulatedVsPlayerMatchup,
    AccumulatedVsTeamSeasonalPitcherSplit,
    AccumulatedVsTeamTotalMatchup,
    Career,
    WithGame,
    WithMonth,
    WithNone,
    WithPlayer,
    WithPositionAndSeason,
    WithSeason,
    WithWeekday,
)

AggregateFactory = Callable[[type[RawStats]], type[Aggregate]]

STAT_GROUP_RECORDS: dict[StatGroup, type[RawStats]] = {
    StatGroup.HITTING: HittingStats,
    StatGroup.PITCHING: PitchingStats,
    StatGroup.FIELDING: FieldingStats,
    StatGroup.CATCHING: CatchingStats,
}


def _single(wrapper: type) -> AggregateFactory:
    return lambda record: Single.of(wrapper[record])


def _multiple(wrapper: type) -> AggregateFactory:
    return lambda record: Multiple.of(wrapper[record])


def _by_season() -> AggregateFactory:
    return lambda record: Map.of(WithSeason[record], BY_SEASON)


def _by_season_and(wrapper: type, inner) -> AggregateFactory:
    return lambda record: Map2D.of(wrapper[record], BY_SEASON, inner)


STAT_TYPES: dict[str, AggregateFactory] = {
    "season": _single(WithSeason),
    "statsSingleSeason": _single(WithSeason),
    "projected": _single(WithSeason),
    "career": _single(Career),
    "yearByYear": _by_season(),
    "yearByYearPlayoffs": _by_season(),
    "careerRegularSeason": _by_season(),
    "careerPlayoffs": _by_season(),
    "gameLog": _multiple(WithGame),
    "atGameStart": _multiple(WithGame),
    "byMonth": _by_season_and(WithMonth, BY_MONTH),
    "byMonthPlayoffs": _by_season_and(WithMonth, BY_MONTH),
    "byDayOfWeek": _by_season_and(WithWeekday, BY_WEEKDAY),
    "byDayOfWeekPlayoffs": _by_season_and(WithWeekday, BY_WEEKDAY),
    "homeAndAway": HomeAndAway.of,
    "homeAndAwayPlayoffs": HomeAndAway.of,
    "winLoss": WinLoss.of,
    "winLossPlayoffs": WinLoss.of,
    "vsPlayer": _multiple(AccumulatedVsPlayerMatchup),
    "vsPlayerTotal": _multiple(AccumulatedVsPlayerMatchup),
    "vsPlayer5Y": _multiple(AccumulatedVsPlayerMatchup),
    "lastXGames": _single(WithNone),
    "byDateRange": _single(WithNone),
}

# Fielding lines are reported once per position played; the remaining
# entries exist only for the groups listed.
_GROUP_SPECIFIC: dict[tuple[str, StatGroup], type[Aggregate]] = {
    ("season", StatGroup.FIELDING): Multiple.of(WithPositionAndSeason[FieldingStats]),
    ("yearByYear", StatGroup.FIELDING): Map2D.of(
        WithPositionAndSeason[FieldingStats], BY_SEASON, BY_POSITION),
    ("sabermetrics", StatGroup.HITTING): Single.of(WithPlayer[SabermetricsHittingStats]),
    ("sabermetrics", StatGroup.PITCHING): Single.of(WithPlayer[SabermetricsPitchingStats]),
    ("pitchArsenal", StatGroup.PITCHING): Multiple.of(WithNone[PitchUsage]),
    ("pitchArsenal", StatGroup.HITTING): Multiple.of(WithNone[PitchUsage]),
    ("expectedStatistics", StatGroup.HITTING): Single.of(WithPlayer[ExpectedStats]),
    ("expectedStatistics", StatGroup.PITCHING): Single.of(WithPlayer[ExpectedStats]),
    ("vsTeam", StatGroup.HITTING): Multiple.of(AccumulatedVsTeamSeasonalPitcherSplit[HittingStats]),
    ("vsTeam5Y", StatGroup.HITTING): Multiple.of(AccumulatedVsTeamSeasonalPitcherSplit[HittingStats]),
    ("vsTeamTotal", StatGroup.HITTING): Single.of(AccumulatedVsTeamTotalMatchup[HittingStats]),
}

_CANONICAL = {name.casefold(): name for name in STAT_TYPES}
_CANONICAL.update({name.casefold(): name for name, _ in _GROUP_SPECIFIC})


def canonical_stat_type(stat_type: str) -> str:
    """The table spelling of *stat_type*, matched case-insensitively."""
    return _CANONICAL.get(stat_type.casefold(), stat_type)


def aggregate_for(stat_type: str, group: StatGroup | str) -> type[Aggregate]:
    """Return the aggregate class ``stat_type``/``group`` resolves into.

    Raises:
        UnknownStatTypeError: If the pair is not supported.
    """
    try:
        group = StatGroup(group)
    except ValueError as exc:
        raise UnknownStatTypeError(stat_type, str(group)) from exc
    name = canonical_stat_type(stat_type)

    special = _GROUP_SPECIFIC.get((name, group))
    if special is not None:
        return special

    factory = STAT_TYPES.get(name)
    record = STAT_GROUP_RECORDS.get(group)
    if factory is None or record is None:
        raise UnknownStatTypeError(stat_type, group.value)
    return factory(record)
