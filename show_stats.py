# /// script
# requires-python = ">=3.12"
# dependencies = ["pydantic>=2.0"]
# ///
"""Show a player's or team's stats from the MLB Stats API.

Requests every combination of ``--types`` and ``--groups`` in one call and
prints one line per resolved (type, group).

Usage::

    # Season and career hitting for a player
    uv run show_stats.py --person 592450 --types season,career --groups hitting

    # A team's home/away pitching split for 2024
    uv run show_stats.py --team "Red Sox" --types homeAndAway --groups pitching --season 2024
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Any

import config
from stats.aggregates import HomeAndAway, Map, Map2D, Multiple, Single, WinLoss
from stats.omission import value_or
from stats.records import (
    CatchingStats,
    CountingStats,
    ExpectedStats,
    FieldingStats,
    HittingStats,
    PitchingStats,
    PitchUsage,
    SabermetricsHittingStats,
    SabermetricsPitchingStats,
)

logger = logging.getLogger(__name__)


def summarize_record(record: Any) -> str:
    """One-line summary of a stat record's headline numbers."""
    if isinstance(record, HittingStats):
        return (f"AVG {record.avg}  OBP {record.obp}  SLG {record.slg}  "
                f"HR {value_or(record.home_runs, '-')}  RBI {value_or(record.rbi, '-')}")
    if isinstance(record, PitchingStats):
        return (f"IP {value_or(record.innings_pitched, '0.0')}  ERA {record.era}  "
                f"WHIP {record.whip}  K {value_or(record.strike_outs, '-')}")
    if isinstance(record, FieldingStats):
        return f"FPCT {record.fielding_pct}  E {value_or(record.errors, '-')}"
    if isinstance(record, CatchingStats):
        return (f"CS% {record.caught_stealing_pct}  "
                f"PB {value_or(record.passed_balls, '-')}")
    if isinstance(record, SabermetricsHittingStats):
        return (f"wOBA {value_or(record.woba, '.---')}  "
                f"wRC+ {value_or(record.w_rc_plus, '-')}  WAR {value_or(record.war, '-')}")
    if isinstance(record, SabermetricsPitchingStats):
        return (f"FIP {value_or(record.fip, '-.--')}  "
                f"ERA- {value_or(record.era_minus, '-')}  WAR {value_or(record.war, '-')}")
    if isinstance(record, ExpectedStats):
        return (f"xBA {value_or(record.avg, '.---')}  xSLG {value_or(record.slg, '.---')}  "
                f"xwOBA {value_or(record.woba, '.---')}")
    if isinstance(record, PitchUsage):
        return f"{record.description or '?'} {value_or(record.percentage, '--.-%')}"
    return repr(record)


def _total_or_count(aggregate: Any) -> str:
    if issubclass(aggregate.split_model.stats_model(), CountingStats):
        return f"{len(aggregate)} split(s); total {summarize_record(aggregate.total())}"
    return f"{len(aggregate)} split(s)"


def format_aggregate(aggregate: Any) -> str:
    """Format a resolved aggregate for display."""
    if aggregate.is_fallback:
        return "(no data)"
    if isinstance(aggregate, Single):
        return summarize_record(aggregate.stats)
    if isinstance(aggregate, (Multiple, Map)):
        return _total_or_count(aggregate)
    if isinstance(aggregate, Map2D):
        return f"{len(aggregate)} season(s)"
    if isinstance(aggregate, HomeAndAway):
        return (f"home: {summarize_record(aggregate.home.stats)} | "
                f"away: {summarize_record(aggregate.away.stats)}")
    if isinstance(aggregate, WinLoss):
        return (f"wins: {summarize_record(aggregate.win.stats)} | "
                f"losses: {summarize_record(aggregate.loss.stats)}")
    return repr(aggregate)


def _split_csv(text: str) -> list[str]:
    return [part.strip() for part in text.split(",") if part.strip()]


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Show a player's or team's stats from the MLB Stats API."
    )
    target = parser.add_mutually_exclusive_group(required=True)
    target.add_argument(
        "--person", type=int, default=None,
        help="MLB person ID.",
    )
    target.add_argument(
        "--team", type=str, default=None,
        help="Team name, abbreviation, or numeric ID.",
    )
    parser.add_argument(
        "--types", type=_split_csv, default=["season"],
        help="Comma-separated stat types (default: season).",
    )
    parser.add_argument(
        "--groups", type=_split_csv, default=["hitting"],
        help="Comma-separated stat groups (default: hitting).",
    )
    parser.add_argument(
        "--season", type=int, default=None,
        help="Season year (default: the API's current season).",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=config.get_log_level(),
        format="%(levelname)s: %(message)s",
    )

    from data.mlb_api import MLBApiError, get_person_stats, get_team_stats
    from stats.errors import StatsError
    from stats.layout import StatsLayout

    try:
        layout = StatsLayout(args.types, args.groups)
    except (StatsError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2

    try:
        if args.person is not None:
            bundle = get_person_stats(args.person, layout, season=args.season)
        else:
            bundle = get_team_stats(args.team, layout, season=args.season)
    except (MLBApiError, StatsError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        if exc.__cause__ is not None:
            logger.debug("Caused by: %r", exc.__cause__)
        return 1

    for (stat_type, group), aggregate in bundle.items():
        print(f"{stat_type:<20} {group.value:<10} {format_aggregate(aggregate)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
