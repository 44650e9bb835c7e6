"""Raw stat records, one per stat group.

Each record is the ``stat`` object of a split.  Every field may be omitted
by the API, so every field is :data:`~stats.omission.Omittable` and
defaults to ``OMITTED``; a record built with no arguments is the all-unknown
fallback.

Counting records add field-wise, which is how game logs and seasons are
accumulated into totals::

    career = sum(season.stats for season in seasons)
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from models import PitchType
from stats import derived
from stats.omission import OMITTED, Omittable, combine
from stats.units import InningsPitched, Percentage, PlusStat, ThreeDecimalRate, TwoDecimalRate


class RawStats(BaseModel):
    """Base for ``stat`` payload records."""
    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        alias_generator=to_camel,
        populate_by_name=True,
    )

    @classmethod
    def fallback(cls) -> RawStats:
        return cls()


class CountingStats(RawStats):
    """A record whose fields can be accumulated with ``+``."""

    def __add__(self, other: object) -> Any:
        if not isinstance(other, type(self)):
            return NotImplemented
        merged = {
            name: combine(getattr(self, name), getattr(other, name))
            for name in type(self).model_fields
        }
        return type(self).model_construct(**merged)

    def __radd__(self, other: object) -> Any:
        # sum() starts from 0
        if isinstance(other, int) and not isinstance(other, bool) and other == 0:
            return self
        return NotImplemented


# ---------------------------------------------------------------------------
# Hitting
# ---------------------------------------------------------------------------

class HittingStats(CountingStats):
    games_played: Omittable[int] = OMITTED
    ground_outs: Omittable[int] = OMITTED
    air_outs: Omittable[int] = OMITTED
    runs: Omittable[int] = OMITTED
    doubles: Omittable[int] = OMITTED
    triples: Omittable[int] = OMITTED
    home_runs: Omittable[int] = OMITTED
    strike_outs: Omittable[int] = OMITTED
    base_on_balls: Omittable[int] = OMITTED
    intentional_walks: Omittable[int] = OMITTED
    hits: Omittable[int] = OMITTED
    hit_by_pitch: Omittable[int] = OMITTED
    at_bats: Omittable[int] = OMITTED
    caught_stealing: Omittable[int] = OMITTED
    stolen_bases: Omittable[int] = OMITTED
    ground_into_double_play: Omittable[int] = OMITTED
    number_of_pitches: Omittable[int] = OMITTED
    plate_appearances: Omittable[int] = OMITTED
    total_bases: Omittable[int] = OMITTED
    rbi: Omittable[int] = OMITTED
    left_on_base: Omittable[int] = OMITTED
    sac_bunts: Omittable[int] = OMITTED
    sac_flies: Omittable[int] = OMITTED

    @property
    def avg(self) -> ThreeDecimalRate:
        return derived.avg(self.hits, self.at_bats)

    @property
    def obp(self) -> ThreeDecimalRate:
        return derived.obp(self.hits, self.base_on_balls, self.hit_by_pitch,
                           self.at_bats, self.sac_flies)

    @property
    def slg(self) -> ThreeDecimalRate:
        return derived.slg(self.total_bases, self.at_bats)

    @property
    def ops(self) -> ThreeDecimalRate:
        return derived.ops(self.obp, self.slg)

    @property
    def babip(self) -> ThreeDecimalRate:
        return derived.babip(self.hits, self.home_runs, self.at_bats,
                             self.strike_outs, self.sac_flies)

    @property
    def extra_bases(self) -> Omittable[int]:
        return derived.extra_bases(self.doubles, self.triples, self.home_runs)

    @property
    def iso(self) -> ThreeDecimalRate:
        return derived.iso(self.doubles, self.triples, self.home_runs, self.at_bats)

    @property
    def k_pct(self) -> Percentage:
        return derived.pct_of(self.strike_outs, self.plate_appearances)

    @property
    def bb_pct(self) -> Percentage:
        return derived.pct_of(self.base_on_balls, self.plate_appearances)

    @property
    def stolen_base_pct(self) -> Percentage:
        return derived.stolen_base_pct(self.stolen_bases, self.caught_stealing)

    @property
    def caught_stealing_pct(self) -> Percentage:
        return derived.caught_stealing_pct(self.stolen_bases, self.caught_stealing)


class SabermetricsHittingStats(RawStats):
    """FanGraphs-style values from the ``sabermetrics`` stat type.

    These are already rates or run values, so they are not additive.
    """
    woba: Omittable[ThreeDecimalRate] = OMITTED
    w_raa: Omittable[float] = Field(default=OMITTED, alias="wRaa")
    w_rc: Omittable[float] = Field(default=OMITTED, alias="wRc")
    w_rc_plus: Omittable[PlusStat] = Field(default=OMITTED, alias="wRcPlus")
    rar: Omittable[float] = OMITTED
    war: Omittable[float] = OMITTED
    batting: Omittable[float] = OMITTED
    fielding: Omittable[float] = OMITTED
    base_running: Omittable[float] = OMITTED
    positional: Omittable[float] = OMITTED
    spd: Omittable[TwoDecimalRate] = OMITTED
    ubr: Omittable[TwoDecimalRate] = OMITTED
    w_sb: Omittable[TwoDecimalRate] = Field(default=OMITTED, alias="wSb")


# ---------------------------------------------------------------------------
# Pitching
# ---------------------------------------------------------------------------

class PitchingStats(CountingStats):
    games_played: Omittable[int] = OMITTED
    games_started: Omittable[int] = OMITTED
    games_pitched: Omittable[int] = OMITTED
    games_finished: Omittable[int] = OMITTED
    complete_games: Omittable[int] = OMITTED
    shutouts: Omittable[int] = OMITTED
    wins: Omittable[int] = OMITTED
    losses: Omittable[int] = OMITTED
    saves: Omittable[int] = OMITTED
    save_opportunities: Omittable[int] = OMITTED
    holds: Omittable[int] = OMITTED
    blown_saves: Omittable[int] = OMITTED
    ground_outs: Omittable[int] = OMITTED
    air_outs: Omittable[int] = OMITTED
    runs: Omittable[int] = OMITTED
    earned_runs: Omittable[int] = OMITTED
    doubles: Omittable[int] = OMITTED
    triples: Omittable[int] = OMITTED
    home_runs: Omittable[int] = OMITTED
    strike_outs: Omittable[int] = OMITTED
    base_on_balls: Omittable[int] = OMITTED
    intentional_walks: Omittable[int] = OMITTED
    hits: Omittable[int] = OMITTED
    hit_by_pitch: Omittable[int] = OMITTED
    at_bats: Omittable[int] = OMITTED
    batters_faced: Omittable[int] = OMITTED
    outs: Omittable[int] = OMITTED
    innings_pitched: Omittable[InningsPitched] = OMITTED
    number_of_pitches: Omittable[int] = OMITTED
    strikes: Omittable[int] = OMITTED
    balks: Omittable[int] = OMITTED
    wild_pitches: Omittable[int] = OMITTED
    pickoffs: Omittable[int] = OMITTED
    stolen_bases: Omittable[int] = OMITTED
    caught_stealing: Omittable[int] = OMITTED
    sac_bunts: Omittable[int] = OMITTED
    sac_flies: Omittable[int] = OMITTED
    inherited_runners: Omittable[int] = OMITTED
    inherited_runners_scored: Omittable[int] = OMITTED

    @property
    def era(self) -> TwoDecimalRate:
        return derived.era(self.earned_runs, self.innings_pitched)

    @property
    def whip(self) -> TwoDecimalRate:
        return derived.whip(self.hits, self.base_on_balls, self.innings_pitched)

    @property
    def k_per_9(self) -> TwoDecimalRate:
        return derived.per_nine(self.strike_outs, self.innings_pitched)

    @property
    def bb_per_9(self) -> TwoDecimalRate:
        return derived.per_nine(self.base_on_balls, self.innings_pitched)

    @property
    def hits_per_9(self) -> TwoDecimalRate:
        return derived.per_nine(self.hits, self.innings_pitched)

    @property
    def home_runs_per_9(self) -> TwoDecimalRate:
        return derived.per_nine(self.home_runs, self.innings_pitched)

    @property
    def runs_per_9(self) -> TwoDecimalRate:
        return derived.per_nine(self.runs, self.innings_pitched)

    @property
    def win_pct(self) -> ThreeDecimalRate:
        return derived.win_pct(self.wins, self.losses)

    @property
    def strikeout_to_walk_ratio(self) -> TwoDecimalRate:
        return derived.strikeout_to_walk_ratio(self.strike_outs, self.base_on_balls)

    @property
    def pitches_per_inning(self) -> TwoDecimalRate:
        return derived.pitches_per_inning(self.number_of_pitches, self.innings_pitched)

    @property
    def k_pct(self) -> Percentage:
        return derived.pct_of(self.strike_outs, self.batters_faced)

    @property
    def bb_pct(self) -> Percentage:
        return derived.pct_of(self.base_on_balls, self.batters_faced)


class SabermetricsPitchingStats(RawStats):
    """FanGraphs-style values for pitchers from the ``sabermetrics`` stat type."""
    fip: Omittable[TwoDecimalRate] = OMITTED
    xfip: Omittable[TwoDecimalRate] = OMITTED
    fip_minus: Omittable[PlusStat] = OMITTED
    era_minus: Omittable[PlusStat] = OMITTED
    ra9_war: Omittable[float] = Field(default=OMITTED, alias="ra9War")
    rar: Omittable[float] = OMITTED
    war: Omittable[float] = OMITTED
    shutdowns: Omittable[int] = OMITTED
    meltdowns: Omittable[int] = OMITTED


class PitchUsage(RawStats):
    """One pitch type from the ``pitchArsenal`` stat type."""
    count: Omittable[int] = OMITTED
    total_pitches: Omittable[int] = OMITTED
    average_speed: Omittable[float] = OMITTED
    percentage: Omittable[Percentage] = OMITTED
    pitch_type: Optional[PitchType] = Field(default=None, alias="type")

    @property
    def description(self) -> str:
        if self.pitch_type is None:
            return ""
        return self.pitch_type.description or self.pitch_type.code


class ExpectedStats(RawStats):
    """Statcast expected outcomes from the ``expectedStatistics`` stat type."""
    avg: Omittable[ThreeDecimalRate] = OMITTED
    slg: Omittable[ThreeDecimalRate] = OMITTED
    woba: Omittable[ThreeDecimalRate] = OMITTED
    wobacon: Omittable[ThreeDecimalRate] = OMITTED


# ---------------------------------------------------------------------------
# Fielding / catching
# ---------------------------------------------------------------------------

class FieldingStats(CountingStats):
    games_played: Omittable[int] = OMITTED
    games_started: Omittable[int] = OMITTED
    games: Omittable[int] = OMITTED
    assists: Omittable[int] = OMITTED
    put_outs: Omittable[int] = Field(default=OMITTED, alias="putOuts")
    errors: Omittable[int] = OMITTED
    chances: Omittable[int] = OMITTED
    innings: Omittable[InningsPitched] = OMITTED
    double_plays: Omittable[int] = OMITTED
    triple_plays: Omittable[int] = OMITTED
    throwing_errors: Omittable[int] = OMITTED

    @property
    def fielding_pct(self) -> ThreeDecimalRate:
        return derived.fielding_pct(self.put_outs, self.assists, self.errors)

    @property
    def range_factor_per_game(self) -> TwoDecimalRate:
        return derived.range_factor_per_game(self.put_outs, self.assists, self.games_played)

    @property
    def range_factor_per_9(self) -> TwoDecimalRate:
        return derived.range_factor_per_nine(self.put_outs, self.assists, self.innings)


class CatchingStats(CountingStats):
    games_played: Omittable[int] = OMITTED
    innings: Omittable[InningsPitched] = OMITTED
    stolen_bases: Omittable[int] = OMITTED
    caught_stealing: Omittable[int] = OMITTED
    passed_balls: Omittable[int] = Field(default=OMITTED, alias="passedBall")
    wild_pitches: Omittable[int] = OMITTED
    pickoffs: Omittable[int] = OMITTED
    catchers_interference: Omittable[int] = OMITTED
    earned_runs: Omittable[int] = OMITTED
    batters_faced: Omittable[int] = OMITTED

    @property
    def caught_stealing_pct(self) -> Percentage:
        return derived.caught_stealing_pct(self.stolen_bases, self.caught_stealing)

    @property
    def stolen_base_pct(self) -> Percentage:
        return derived.stolen_base_pct(self.stolen_bases, self.caught_stealing)

    @property
    def passed_balls_per_9(self) -> TwoDecimalRate:
        return derived.per_nine(self.passed_balls, self.innings)

    @property
    def catchers_era(self) -> TwoDecimalRate:
        return derived.era(self.earned_runs, self.innings)
