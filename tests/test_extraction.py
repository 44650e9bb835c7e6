# /// script
# requires-python = ">=3.12"
# dependencies = ["pytest>=7.0", "pydantic>=2.0"]
# ///
"""Tests for split extraction.

Validates stats/extract.py end to end with stats/parse.py:
  1. Matching records are validated, reduced and consumed
  2. Missing statistics resolve to the aggregate's fallback
  3. Bad splits raise SplitDeserializeError naming the split type
  4. Structural violations raise SplitReductionError wrapping the cause
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import pytest

from models import StatGroup
from stats.aggregates import BY_SEASON, HomeAndAway, Map, Multiple, Single
from stats.errors import (
    DuplicateEntryError,
    DuplicateHomeError,
    SplitDeserializeError,
    SplitReductionError,
    StatsError,
)
from stats.extract import extract_split
from stats.parse import StatEntry, StatPool, normalize_stats
from stats.records import FieldingStats, HittingStats, PitchingStats
from stats.splits import WithGame, WithSeason


@pytest.fixture
def home_away_response():
    return [
        {
            "type": "hitting",
            "group": "hitting",
            "splits": [
                {"isHome": True, "stat": {"hits": 2}},
                {"isHome": False, "stat": {"hits": 1}},
            ],
        }
    ]


@pytest.fixture
def person_stats_response():
    """Season and yearByYear hitting, as /people/{id}/stats returns them."""
    return {
        "stats": [
            {
                "type": {"displayName": "season"},
                "group": {"displayName": "hitting"},
                "splits": [{"season": "2024", "stat": {"hits": 180, "atBats": 559}}],
            },
            {
                "type": {"displayName": "yearByYear"},
                "group": {"displayName": "hitting"},
                "splits": [
                    {"season": "2023", "stat": {"hits": 110}},
                    {"season": "2024", "stat": {"hits": 180}},
                ],
            },
        ]
    }


# ===========================================================================
# Step 1: Successful extraction
# ===========================================================================

class TestStep1Extraction:

    def test_home_and_away_scenario(self, home_away_response):
        pool = normalize_stats(home_away_response)
        pair = extract_split(pool, HomeAndAway.of(HittingStats), "hitting", StatGroup.HITTING)
        assert pair.home.stats.hits == 2
        assert pair.away.stats.hits == 1
        assert not pair.is_fallback

    def test_single_season(self, person_stats_response):
        pool = normalize_stats(person_stats_response)
        season = extract_split(pool, Single.of(WithSeason[HittingStats]), "season",
                               StatGroup.HITTING)
        assert season.season == 2024
        assert str(season.stats.avg) == ".322"

    def test_year_by_year(self, person_stats_response):
        pool = normalize_stats(person_stats_response)
        years = extract_split(pool, Map.of(WithSeason[HittingStats], BY_SEASON),
                              "yearByYear", StatGroup.HITTING)
        assert years[2023].stats.hits == 110
        assert years.total().hits == 290

    def test_type_matched_case_insensitively(self, person_stats_response):
        pool = normalize_stats(person_stats_response)
        years = extract_split(pool, Map.of(WithSeason[HittingStats], BY_SEASON),
                              "YearByYear", StatGroup.HITTING)
        assert len(years) == 2

    def test_extraction_consumes_record(self, person_stats_response):
        pool = normalize_stats(person_stats_response)
        agg = Single.of(WithSeason[HittingStats])
        first = extract_split(pool, agg, "season", StatGroup.HITTING)
        second = extract_split(pool, agg, "season", StatGroup.HITTING)
        assert not first.is_fallback
        assert second.is_fallback
        assert len(pool) == 1


# ===========================================================================
# Step 2: Missing statistics
# ===========================================================================

class TestStep2Fallback:

    @pytest.mark.parametrize("aggregate", [
        Single.of(WithSeason[FieldingStats]),
        Multiple.of(WithGame[FieldingStats]),
        Map.of(WithSeason[FieldingStats], BY_SEASON),
        HomeAndAway.of(FieldingStats),
    ])
    def test_missing_pair_is_fallback(self, person_stats_response, aggregate):
        pool = normalize_stats(person_stats_response)
        result = extract_split(pool, aggregate, "fielding", StatGroup.FIELDING)
        assert result.is_fallback
        assert len(pool) == 2

    def test_group_mismatch_is_fallback(self, person_stats_response):
        pool = normalize_stats(person_stats_response)
        result = extract_split(pool, Single.of(WithSeason[PitchingStats]), "season",
                               StatGroup.PITCHING)
        assert result.is_fallback

    def test_empty_record_is_fallback(self):
        pool = StatPool([StatEntry("homeAndAway", StatGroup.HITTING, [])])
        result = extract_split(pool, HomeAndAway.of(HittingStats), "homeAndAway",
                               StatGroup.HITTING)
        assert result.is_fallback


# ===========================================================================
# Step 3: Split deserialization failures
# ===========================================================================

class TestStep3DeserializeFailures:

    def test_bad_split_raises(self):
        pool = normalize_stats([
            {"type": "season", "group": "hitting",
             "splits": [{"season": "not a year", "stat": {}}]},
        ])
        with pytest.raises(SplitDeserializeError) as exc_info:
            extract_split(pool, Single.of(WithSeason[HittingStats]), "season", StatGroup.HITTING)
        assert "WithSeason" in exc_info.value.split_type
        assert exc_info.value.__cause__ is exc_info.value.cause

    def test_fails_fast_on_first_bad_split(self):
        pool = normalize_stats([
            {"type": "yearByYear", "group": "hitting",
             "splits": [{"stat": {}}, {"season": "2024", "stat": {}}]},
        ])
        with pytest.raises(SplitDeserializeError):
            extract_split(pool, Map.of(WithSeason[HittingStats], BY_SEASON),
                          "yearByYear", StatGroup.HITTING)


# ===========================================================================
# Step 4: Reduction failures
# ===========================================================================

class TestStep4ReductionFailures:

    def test_duplicate_home(self):
        pool = normalize_stats([
            {"type": "homeAndAway", "group": "hitting", "splits": [
                {"isHome": True, "stat": {"hits": 1}},
                {"isHome": True, "stat": {"hits": 2}},
            ]},
        ])
        with pytest.raises(SplitReductionError) as exc_info:
            extract_split(pool, HomeAndAway.of(HittingStats), "homeAndAway", StatGroup.HITTING)
        assert isinstance(exc_info.value.cause, DuplicateHomeError)
        assert exc_info.value.stat_type == "homeAndAway"

    def test_duplicate_season_not_replaced_by_fallback(self):
        pool = normalize_stats([
            {"type": "yearByYear", "group": "hitting", "splits": [
                {"season": "2024", "stat": {}},
                {"season": "2024", "stat": {}},
            ]},
        ])
        with pytest.raises(SplitReductionError) as exc_info:
            extract_split(pool, Map.of(WithSeason[HittingStats], BY_SEASON),
                          "yearByYear", StatGroup.HITTING)
        assert isinstance(exc_info.value.__cause__, DuplicateEntryError)

    def test_errors_share_base(self):
        assert issubclass(SplitReductionError, StatsError)
        assert issubclass(SplitDeserializeError, StatsError)
