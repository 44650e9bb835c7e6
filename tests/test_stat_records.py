# /// script
# requires-python = ">=3.12"
# dependencies = ["pytest>=7.0", "pydantic>=2.0"]
# ///
"""Tests for raw stat records and derived stats.

Validates stats/records.py and stats/derived.py:
  1. Records parse camelCase wire payloads; absent fields are OMITTED
  2. Hitting rate stats (AVG, OBP, SLG, OPS, BABIP, ISO, K%)
  3. Pitching rate stats computed on outs (ERA, WHIP, K/9)
  4. Fielding and catching rate stats
  5. Field-wise accumulation with omission propagation
  6. Sabermetrics and pitch usage records
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import pytest

from stats import derived
from stats.omission import OMITTED
from stats.records import (
    CatchingStats,
    ExpectedStats,
    FieldingStats,
    HittingStats,
    PitchingStats,
    PitchUsage,
    SabermetricsHittingStats,
    SabermetricsPitchingStats,
)
from stats.units import InningsPitched, ThreeDecimalRate, TwoDecimalRate


@pytest.fixture
def hitting_payload():
    """A 2023-style season hitting line as sent by the API."""
    return {
        "gamesPlayed": 157,
        "atBats": 600,
        "plateAppearances": 680,
        "hits": 180,
        "doubles": 35,
        "triples": 3,
        "homeRuns": 30,
        "baseOnBalls": 60,
        "intentionalWalks": 5,
        "hitByPitch": 10,
        "sacFlies": 10,
        "strikeOuts": 120,
        "totalBases": 311,
        "stolenBases": 20,
        "caughtStealing": 5,
        "rbi": 100,
        "avg": ".300",
    }


@pytest.fixture
def pitching_payload():
    return {
        "wins": 12,
        "losses": 8,
        "earnedRuns": 60,
        "inningsPitched": "180.0",
        "hits": 150,
        "baseOnBalls": 45,
        "strikeOuts": 200,
        "battersFaced": 740,
        "numberOfPitches": 2900,
        "homeRuns": 20,
    }


# ===========================================================================
# Step 1: Parsing
# ===========================================================================

class TestStep1Parsing:

    def test_camel_case_fields(self, hitting_payload):
        line = HittingStats.model_validate(hitting_payload)
        assert line.home_runs == 30
        assert line.plate_appearances == 680

    def test_absent_fields_are_omitted(self, hitting_payload):
        line = HittingStats.model_validate(hitting_payload)
        assert line.ground_into_double_play is OMITTED
        assert line.number_of_pitches is OMITTED

    def test_fallback_is_all_omitted(self):
        line = HittingStats.fallback()
        assert all(getattr(line, name) is OMITTED for name in HittingStats.model_fields)

    def test_innings_text(self, pitching_payload):
        line = PitchingStats.model_validate(pitching_payload)
        assert line.innings_pitched == InningsPitched(180, 0)

    def test_bad_innings_rejected(self, pitching_payload):
        pitching_payload["inningsPitched"] = "5.4"
        with pytest.raises(ValueError):
            PitchingStats.model_validate(pitching_payload)

    def test_records_are_frozen(self, hitting_payload):
        line = HittingStats.model_validate(hitting_payload)
        with pytest.raises(ValueError):
            line.hits = 1


# ===========================================================================
# Step 2: Hitting rates
# ===========================================================================

class TestStep2HittingRates:

    def test_avg(self, hitting_payload):
        assert str(HittingStats.model_validate(hitting_payload).avg) == ".300"

    def test_obp(self, hitting_payload):
        # (180 + 60 + 10) / (600 + 60 + 10 + 10)
        line = HittingStats.model_validate(hitting_payload)
        assert float(line.obp) == pytest.approx(250 / 680)

    def test_slg_and_ops(self, hitting_payload):
        line = HittingStats.model_validate(hitting_payload)
        assert float(line.slg) == pytest.approx(311 / 600)
        assert float(line.ops) == pytest.approx(250 / 680 + 311 / 600)
        assert isinstance(line.ops, ThreeDecimalRate)

    def test_babip(self, hitting_payload):
        line = HittingStats.model_validate(hitting_payload)
        assert float(line.babip) == pytest.approx((180 - 30) / (600 - 120 - 30 + 10))

    def test_iso_and_extra_bases(self, hitting_payload):
        line = HittingStats.model_validate(hitting_payload)
        assert line.extra_bases == 35 + 3 * 2 + 30 * 3
        assert float(line.iso) == pytest.approx(131 / 600)

    def test_strikeout_pct(self, hitting_payload):
        line = HittingStats.model_validate(hitting_payload)
        assert float(line.k_pct) == pytest.approx(120 / 680)

    def test_stolen_base_pct(self, hitting_payload):
        line = HittingStats.model_validate(hitting_payload)
        assert str(line.stolen_base_pct) == "80.00%"

    def test_zero_at_bats_is_sentinel(self):
        line = HittingStats(hits=0, at_bats=0)
        assert str(line.avg) == ".---"

    def test_omitted_input_is_sentinel(self):
        line = HittingStats(hits=2)
        assert line.avg.is_na
        assert line.extra_bases is OMITTED

    def test_zero_hits_is_real_zero(self):
        assert str(HittingStats(hits=0, at_bats=4).avg) == ".000"


# ===========================================================================
# Step 3: Pitching rates
# ===========================================================================

class TestStep3PitchingRates:

    def test_era(self, pitching_payload):
        line = PitchingStats.model_validate(pitching_payload)
        assert str(line.era) == "3.00"

    def test_era_uses_outs(self):
        # 6.2 innings is 20 outs, not 6.2 innings
        line = PitchingStats(earned_runs=2, innings_pitched=InningsPitched(6, 2))
        assert float(line.era) == pytest.approx(2 * 27 / 20)

    def test_whip(self, pitching_payload):
        line = PitchingStats.model_validate(pitching_payload)
        assert str(line.whip) == "1.08"

    def test_per_nine(self, pitching_payload):
        line = PitchingStats.model_validate(pitching_payload)
        assert str(line.k_per_9) == "10.00"
        assert str(line.bb_per_9) == "2.25"

    def test_win_pct(self, pitching_payload):
        assert str(PitchingStats.model_validate(pitching_payload).win_pct) == ".600"

    def test_no_innings_is_sentinel(self):
        line = PitchingStats(earned_runs=3, innings_pitched=InningsPitched(0, 0))
        assert str(line.era) == "-.--"

    def test_omitted_innings_is_sentinel(self):
        assert PitchingStats(earned_runs=3).era == TwoDecimalRate.na()

    def test_strikeout_walk_ratio(self, pitching_payload):
        line = PitchingStats.model_validate(pitching_payload)
        assert float(line.strikeout_to_walk_ratio) == pytest.approx(200 / 45)


# ===========================================================================
# Step 4: Fielding and catching
# ===========================================================================

class TestStep4FieldingCatching:

    def test_fielding_pct(self):
        line = FieldingStats.model_validate({"putOuts": 250, "assists": 40, "errors": 10})
        assert str(line.fielding_pct) == ".967"

    def test_range_factor_per_game(self):
        line = FieldingStats(put_outs=250, assists=50, games_played=150)
        assert str(line.range_factor_per_game) == "2.00"

    def test_range_factor_per_nine(self):
        line = FieldingStats.model_validate(
            {"putOuts": 27, "assists": 0, "innings": "9.0"})
        assert str(line.range_factor_per_9) == "27.00"

    def test_catcher_caught_stealing(self):
        line = CatchingStats.model_validate({"stolenBases": 30, "caughtStealing": 10})
        assert str(line.caught_stealing_pct) == "25.00%"

    def test_passed_balls_wire_name(self):
        line = CatchingStats.model_validate({"passedBall": 4, "innings": "36.0"})
        assert line.passed_balls == 4
        assert str(line.passed_balls_per_9) == "1.00"


# ===========================================================================
# Step 5: Accumulation
# ===========================================================================

class TestStep5Accumulation:

    def test_add_present_fields(self):
        total = HittingStats(hits=2, at_bats=4) + HittingStats(hits=1, at_bats=3)
        assert total.hits == 3
        assert total.at_bats == 7

    def test_omitted_field_propagates(self):
        total = HittingStats(hits=2, number_of_pitches=15) + HittingStats(hits=1)
        assert total.hits == 3
        assert total.number_of_pitches is OMITTED

    def test_sum_of_records(self):
        games = [HittingStats(hits=h, at_bats=4) for h in (0, 1, 2, 3)]
        total = sum(games)
        assert total.hits == 6
        assert total.at_bats == 16
        assert str(total.avg) == ".375"

    def test_innings_accumulate_on_outs(self):
        a = PitchingStats(innings_pitched=InningsPitched(5, 2), earned_runs=1)
        b = PitchingStats(innings_pitched=InningsPitched(3, 1), earned_runs=2)
        total = a + b
        assert total.innings_pitched == InningsPitched(9, 0)
        assert str(total.era) == "3.00"

    def test_different_record_types_do_not_add(self):
        with pytest.raises(TypeError):
            HittingStats(hits=1) + PitchingStats(hits=1)


# ===========================================================================
# Step 6: Sabermetrics and pitch usage
# ===========================================================================

class TestStep6OtherRecords:

    def test_sabermetrics(self):
        line = SabermetricsHittingStats.model_validate(
            {"woba": 0.385, "wRcPlus": 141.6, "war": 5.2, "spd": 4.1})
        assert str(line.woba) == ".385"
        assert str(line.w_rc_plus) == "142"
        assert line.war == pytest.approx(5.2)
        assert line.rar is OMITTED

    def test_pitch_usage(self):
        usage = PitchUsage.model_validate({
            "count": 900,
            "totalPitches": 2900,
            "averageSpeed": 95.1,
            "percentage": 31.0,
            "type": {"code": "FF", "description": "Four-Seam Fastball"},
        })
        assert usage.description == "Four-Seam Fastball"
        assert str(usage.percentage) == "31.00%"

    def test_pitch_usage_without_type(self):
        assert PitchUsage().description == ""

    def test_pitch_usage_description_falls_back_to_code(self):
        usage = PitchUsage.model_validate({"type": {"code": "KN"}})
        assert usage.description == "KN"

    def test_pitching_sabermetrics(self):
        line = SabermetricsPitchingStats.model_validate({
            "fip": 3.184, "xfip": 3.5, "fipMinus": 78.4, "eraMinus": 71.2,
            "ra9War": 6.3, "war": 5.5, "shutdowns": 0,
        })
        assert str(line.fip) == "3.18"
        assert str(line.fip_minus) == "78"
        assert str(line.era_minus) == "71"
        assert line.ra9_war == pytest.approx(6.3)
        assert line.shutdowns == 0
        assert line.meltdowns is OMITTED

    def test_expected_statistics(self):
        line = ExpectedStats.model_validate({"avg": ".281", "slg": ".512", "woba": ".372"})
        assert line.avg == ThreeDecimalRate.parse(".281")
        assert str(line.slg) == ".512"
        assert line.wobacon is OMITTED


# ===========================================================================
# Derived formulas directly
# ===========================================================================

class TestDerivedFormulas:

    def test_pct_of_zero_denominator(self):
        assert derived.pct_of(0, 0).is_na

    def test_ops_of_sentinel_is_sentinel(self):
        assert derived.ops(ThreeDecimalRate.na(), ThreeDecimalRate(0.4)).is_na

    def test_pitches_per_inning(self):
        assert str(derived.pitches_per_inning(90, InningsPitched(6, 0))) == "15.00"
