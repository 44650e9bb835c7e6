"""Derived rate stats computed from omission-aware counting stats.

Every formula takes possibly-omitted inputs.  When any input is omitted, or
the denominator is zero, the result is the rate type's not-applicable
sentinel rather than an exception or a misleading zero.
"""

from __future__ import annotations

import math
from typing import Any

from stats.omission import OMITTED, Omitted
from stats.units import Percentage, ThreeDecimalRate, TwoDecimalRate


def _any_omitted(*values: Any) -> bool:
    return any(isinstance(v, Omitted) for v in values)


def _ratio(numerator: float, denominator: float) -> float:
    if denominator == 0:
        return math.nan
    return numerator / denominator


def _per_nine(count: Any, innings: Any) -> TwoDecimalRate:
    if _any_omitted(count, innings):
        return TwoDecimalRate.na()
    return TwoDecimalRate(_ratio(count * 27.0, innings.outs))


# ---------------------------------------------------------------------------
# Hitting
# ---------------------------------------------------------------------------

def avg(hits: Any, at_bats: Any) -> ThreeDecimalRate:
    """AVG: hits per at bat."""
    if _any_omitted(hits, at_bats):
        return ThreeDecimalRate.na()
    return ThreeDecimalRate(_ratio(hits, at_bats))


def slg(total_bases: Any, at_bats: Any) -> ThreeDecimalRate:
    """SLG: total bases per at bat."""
    if _any_omitted(total_bases, at_bats):
        return ThreeDecimalRate.na()
    return ThreeDecimalRate(_ratio(total_bases, at_bats))


def obp(hits: Any, base_on_balls: Any, hit_by_pitch: Any,
        at_bats: Any, sac_flies: Any) -> ThreeDecimalRate:
    """OBP: times on base per (AB + BB + HBP + SF).

    ``base_on_balls`` already counts intentional walks.
    """
    if _any_omitted(hits, base_on_balls, hit_by_pitch, at_bats, sac_flies):
        return ThreeDecimalRate.na()
    on_base = hits + base_on_balls + hit_by_pitch
    return ThreeDecimalRate(_ratio(on_base, at_bats + base_on_balls + hit_by_pitch + sac_flies))


def ops(on_base: Any, slugging: Any) -> ThreeDecimalRate:
    """OPS: OBP + SLG, both weighted equally."""
    if _any_omitted(on_base, slugging):
        return ThreeDecimalRate.na()
    return ThreeDecimalRate(float(on_base) + float(slugging))


def babip(hits: Any, home_runs: Any, at_bats: Any,
          strikeouts: Any, sac_flies: Any) -> ThreeDecimalRate:
    """BABIP: batting average on balls in play."""
    if _any_omitted(hits, home_runs, at_bats, strikeouts, sac_flies):
        return ThreeDecimalRate.na()
    return ThreeDecimalRate(_ratio(hits - home_runs, at_bats - strikeouts - home_runs + sac_flies))


def extra_bases(doubles: Any, triples: Any, home_runs: Any) -> Any:
    """Bases gained beyond singles; omitted when any component is."""
    if _any_omitted(doubles, triples, home_runs):
        return OMITTED
    return doubles + triples * 2 + home_runs * 3


def iso(doubles: Any, triples: Any, home_runs: Any, at_bats: Any) -> ThreeDecimalRate:
    """ISO: extra bases per at bat."""
    bases = extra_bases(doubles, triples, home_runs)
    if _any_omitted(bases, at_bats):
        return ThreeDecimalRate.na()
    return ThreeDecimalRate(_ratio(bases, at_bats))


def pct_of(part: Any, whole: Any) -> Percentage:
    """Share of *whole* that is *part* (K%, BB%, Whiff%)."""
    if _any_omitted(part, whole):
        return Percentage.na()
    return Percentage.from_fraction(_ratio(part, whole))


def stolen_base_pct(stolen_bases: Any, caught_stealing: Any) -> Percentage:
    if _any_omitted(stolen_bases, caught_stealing):
        return Percentage.na()
    return Percentage.from_fraction(_ratio(stolen_bases, stolen_bases + caught_stealing))


def caught_stealing_pct(stolen_bases: Any, caught_stealing: Any) -> Percentage:
    if _any_omitted(stolen_bases, caught_stealing):
        return Percentage.na()
    return Percentage.from_fraction(_ratio(caught_stealing, stolen_bases + caught_stealing))


def strikeout_to_walk_ratio(strikeouts: Any, base_on_balls: Any) -> TwoDecimalRate:
    if _any_omitted(strikeouts, base_on_balls):
        return TwoDecimalRate.na()
    return TwoDecimalRate(_ratio(strikeouts, base_on_balls))


# ---------------------------------------------------------------------------
# Pitching
# ---------------------------------------------------------------------------

def era(earned_runs: Any, innings_pitched: Any) -> TwoDecimalRate:
    """ERA: earned runs per nine innings, computed on outs."""
    return _per_nine(earned_runs, innings_pitched)


def whip(hits: Any, base_on_balls: Any, innings_pitched: Any) -> TwoDecimalRate:
    """WHIP: walks plus hits per inning pitched."""
    if _any_omitted(hits, base_on_balls, innings_pitched):
        return TwoDecimalRate.na()
    return TwoDecimalRate(_ratio((hits + base_on_balls) * 3.0, innings_pitched.outs))


def per_nine(count: Any, innings_pitched: Any) -> TwoDecimalRate:
    """Any counting stat scaled to nine innings (K/9, BB/9, H/9, HR/9)."""
    return _per_nine(count, innings_pitched)


def win_pct(wins: Any, losses: Any) -> ThreeDecimalRate:
    if _any_omitted(wins, losses):
        return ThreeDecimalRate.na()
    return ThreeDecimalRate(_ratio(wins, wins + losses))


def pitches_per_inning(number_of_pitches: Any, innings_pitched: Any) -> TwoDecimalRate:
    if _any_omitted(number_of_pitches, innings_pitched):
        return TwoDecimalRate.na()
    return TwoDecimalRate(_ratio(number_of_pitches * 3.0, innings_pitched.outs))


# ---------------------------------------------------------------------------
# Fielding
# ---------------------------------------------------------------------------

def fielding_pct(put_outs: Any, assists: Any, errors: Any) -> ThreeDecimalRate:
    """Share of chances handled without an error."""
    if _any_omitted(put_outs, assists, errors):
        return ThreeDecimalRate.na()
    return ThreeDecimalRate(_ratio(put_outs + assists, put_outs + assists + errors))


def range_factor_per_game(put_outs: Any, assists: Any, games: Any) -> TwoDecimalRate:
    if _any_omitted(put_outs, assists, games):
        return TwoDecimalRate.na()
    return TwoDecimalRate(_ratio(put_outs + assists, games))


def range_factor_per_nine(put_outs: Any, assists: Any, innings: Any) -> TwoDecimalRate:
    if _any_omitted(put_outs, assists):
        return TwoDecimalRate.na()
    return _per_nine(put_outs + assists, innings)

