# /// script
# requires-python = ">=3.12"
# dependencies = ["pytest>=7.0", "pydantic>=2.0"]
# ///
"""Tests for omission-aware stat values.

Validates stats/omission.py:
  1. OMITTED is a falsy singleton equal only to itself
  2. Addition with OMITTED on either side stays omitted
  3. wrap / combine / value_or helpers
  4. Pydantic fields annotated Omittable[...] map null and absent keys to OMITTED
"""

import copy
import pickle
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import pytest
from pydantic import BaseModel

from stats.omission import OMITTED, Omittable, Omitted, combine, is_omitted, value_or, wrap


class _Line(BaseModel):
    hits: Omittable[int] = OMITTED
    at_bats: Omittable[int] = OMITTED


# ===========================================================================
# Step 1: Singleton identity and equality
# ===========================================================================

class TestStep1Singleton:

    def test_constructor_returns_singleton(self):
        assert Omitted() is OMITTED

    def test_is_falsy(self):
        assert not OMITTED

    def test_equal_to_itself(self):
        assert OMITTED == OMITTED

    def test_not_equal_to_present_values(self):
        assert OMITTED != 0
        assert OMITTED != None  # noqa: E711
        assert 0 != OMITTED

    def test_repr(self):
        assert repr(OMITTED) == "OMITTED"

    def test_survives_copy_and_pickle(self):
        assert copy.deepcopy(OMITTED) is OMITTED
        assert pickle.loads(pickle.dumps(OMITTED)) is OMITTED

    def test_hashable(self):
        assert len({OMITTED, Omitted()}) == 1


# ===========================================================================
# Step 2: Addition
# ===========================================================================

class TestStep2Addition:

    def test_omitted_plus_number(self):
        assert OMITTED + 3 is OMITTED

    def test_number_plus_omitted(self):
        assert 3 + OMITTED is OMITTED

    def test_omitted_plus_omitted(self):
        assert OMITTED + OMITTED is OMITTED

    def test_sum_with_one_omitted_is_omitted(self):
        assert sum([10, OMITTED, 5]) is OMITTED


# ===========================================================================
# Step 3: Helpers
# ===========================================================================

class TestStep3Helpers:

    def test_wrap_none(self):
        assert wrap(None) is OMITTED

    def test_wrap_value(self):
        assert wrap(0) == 0
        assert not is_omitted(wrap(0))

    @pytest.mark.parametrize("a, b", [(OMITTED, 4), (4, OMITTED), (OMITTED, OMITTED)])
    def test_combine_omitted_wins(self, a, b):
        assert combine(a, b) is OMITTED

    def test_combine_present(self):
        assert combine(2, 3) == 5

    def test_value_or(self):
        assert value_or(OMITTED, "-") == "-"
        assert value_or(0, "-") == 0

    def test_is_omitted(self):
        assert is_omitted(OMITTED)
        assert not is_omitted(0)


# ===========================================================================
# Step 4: Pydantic integration
# ===========================================================================

class TestStep4Pydantic:

    def test_absent_key_is_omitted(self):
        line = _Line.model_validate({"hits": 2})
        assert line.hits == 2
        assert line.at_bats is OMITTED

    def test_null_is_omitted(self):
        line = _Line.model_validate({"hits": None, "at_bats": 4})
        assert line.hits is OMITTED
        assert line.at_bats == 4

    def test_zero_is_not_omitted(self):
        line = _Line.model_validate({"hits": 0})
        assert line.hits == 0
        assert not is_omitted(line.hits)

    def test_rejects_garbage(self):
        with pytest.raises(ValueError):
            _Line.model_validate({"hits": "lots"})
