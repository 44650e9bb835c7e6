# /// script
# requires-python = ">=3.12"
# dependencies = ["pydantic>=2.0"]
# ///
"""Stat split resolution for MLB Stats API responses."""

from stats.aggregates import (
    BY_GAME,
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
    SplitKey,
    WinLoss,
)
from stats.catalog import aggregate_for
from stats.errors import (
    ReductionError,
    SplitDeserializeError,
    SplitReductionError,
    StatsDeserializeError,
    StatsError,
    StatsResolutionError,
    UnknownStatTypeError,
)
from stats.extract import extract_split
from stats.layout import StatsBundle, StatsLayout
from stats.omission import OMITTED, Omittable, Omitted
from stats.parse import StatEntry, StatPool, normalize_stats
