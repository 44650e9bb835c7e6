"""Numeric units with the API's textual encodings.

Rate stats arrive either as JSON numbers or as display strings (``".300"``,
``"-.--"``).  They are stored as ``float`` subclasses so arithmetic stays
natural, with ``NaN`` standing in for "not applicable".  Unlike plain
floats, two not-applicable values compare equal.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

from pydantic_core import core_schema

from stats.omission import Omitted


def _has_digit(text: str) -> bool:
    return any(ch.isdigit() for ch in text)


def _is_ascii_digits(text: str) -> bool:
    # str.isdigit also accepts superscripts and non-Latin numerals
    return text.isascii() and text.isdigit()


class RateStat(float):
    """Base for fixed-precision rate values."""

    placeholder = "-"

    @classmethod
    def na(cls) -> RateStat:
        """The not-applicable sentinel."""
        return cls(math.nan)

    @classmethod
    def parse(cls, value: Any) -> RateStat:
        if isinstance(value, cls):
            return value
        if isinstance(value, bool):
            raise ValueError(f"{cls.__name__} cannot be parsed from a boolean")
        if isinstance(value, (int, float)):
            return cls._from_number(float(value))
        if isinstance(value, str):
            text = value.strip()
            if not _has_digit(text):
                return cls.na()
            try:
                return cls._from_number(float(text))
            except ValueError as exc:
                raise ValueError(f"invalid {cls.__name__}: {value!r}") from exc
        raise ValueError(f"{cls.__name__} expects a number or text, got {type(value).__name__}")

    @classmethod
    def _from_number(cls, number: float) -> RateStat:
        return cls(number)

    @property
    def is_na(self) -> bool:
        return not math.isfinite(self)

    def _format(self) -> str:
        raise NotImplementedError

    def __str__(self) -> str:
        if self.is_na:
            return self.placeholder
        return self._format()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self)!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Omitted):
            return False
        if isinstance(other, RateStat) and self.is_na and other.is_na:
            return type(other) is type(self)
        return float.__eq__(self, other)

    def __ne__(self, other: object) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __hash__(self) -> int:
        if self.is_na:
            return hash((type(self).__name__, "na"))
        return float.__hash__(self)

    def __add__(self, other: object) -> Any:
        if isinstance(other, Omitted):
            return other
        if isinstance(other, (int, float)):
            return type(self)(float(self) + float(other))
        return NotImplemented

    def __radd__(self, other: object) -> Any:
        return self.__add__(other)

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type: Any, handler: Any) -> core_schema.CoreSchema:
        return core_schema.no_info_plain_validator_function(
            cls.parse,
            serialization=core_schema.plain_serializer_function_ser_schema(str),
        )


class ThreeDecimalRate(RateStat):
    """Batting-average style rate: ``.300``, ``1.000``, ``.---``."""

    placeholder = ".---"

    def _format(self) -> str:
        text = f"{float(self):.3f}"
        if text.startswith("0."):
            return text[1:]
        if text.startswith("-0."):
            return "-" + text[2:]
        return text


class TwoDecimalRate(RateStat):
    """ERA / WHIP style rate: ``3.45``, ``-.--``."""

    placeholder = "-.--"

    def _format(self) -> str:
        return f"{float(self):.2f}"


class Percentage(RateStat):
    """A fraction in [0, 1] sent on the wire as a percent number.

    ``25.3``, ``25`` and ``"25.3%"`` all parse to ``0.253``.
    """

    placeholder = "--.-%"

    @classmethod
    def parse(cls, value: Any) -> RateStat:
        if isinstance(value, str):
            value = value.strip().rstrip("%")
        return super().parse(value)

    @classmethod
    def _from_number(cls, number: float) -> RateStat:
        return cls(number / 100.0)

    @classmethod
    def from_fraction(cls, fraction: float) -> Percentage:
        return cls(fraction)

    def _format(self) -> str:
        return f"{float(self) * 100.0:.2f}%"


class PlusStat(RateStat):
    """Index stats centred on 100 (wRC+, ERA-); shown as whole numbers."""

    placeholder = "-"

    def _format(self) -> str:
        return str(round(float(self)))


# ---------------------------------------------------------------------------
# Innings pitched
# ---------------------------------------------------------------------------

class InningsPitchedError(ValueError):
    """Base error for malformed innings-pitched text."""

    def __init__(self, message: str, text: str):
        self.text = text
        super().__init__(message)


class MissingSeparatorError(InningsPitchedError):
    def __init__(self, text: str):
        super().__init__(f"No '.' separator in innings pitched {text!r}", text)


class InvalidWholeInningsError(InningsPitchedError):
    def __init__(self, text: str, whole: str):
        self.whole = whole
        super().__init__(f"Invalid whole inning quantity {whole!r} in {text!r}", text)


class InvalidThirdsError(InningsPitchedError):
    def __init__(self, text: str, thirds: str):
        self.thirds = thirds
        super().__init__(f"Invalid inning out quantity {thirds!r} in {text!r}", text)


@dataclass(frozen=True, order=True)
class InningsPitched:
    """Innings as ``whole`` innings plus ``thirds`` outs (0, 1 or 2).

    The text form ``"6.2"`` means six innings and two outs, not 6.2
    innings, so arithmetic is always done on the outs count.
    """

    whole: int = 0
    thirds: int = 0

    def __post_init__(self) -> None:
        if self.whole < 0:
            raise ValueError(f"whole innings must be non-negative, got {self.whole}")
        if not 0 <= self.thirds < 3:
            raise ValueError(f"thirds must be 0, 1 or 2, got {self.thirds}")

    @classmethod
    def from_outs(cls, outs: int) -> InningsPitched:
        if outs < 0:
            raise ValueError(f"outs must be non-negative, got {outs}")
        return cls(outs // 3, outs % 3)

    @classmethod
    def parse(cls, text: str) -> InningsPitched:
        """Parse ``"{whole}.{thirds}"``.

        Raises:
            MissingSeparatorError: If there is no ``.``.
            InvalidWholeInningsError: If the whole part is not a
                non-negative integer.
            InvalidThirdsError: If the thirds part is not 0, 1 or 2.
        """
        whole, sep, thirds = text.strip().partition(".")
        if not sep:
            raise MissingSeparatorError(text)
        if not _is_ascii_digits(whole):
            raise InvalidWholeInningsError(text, whole)
        if not _is_ascii_digits(thirds) or int(thirds) >= 3:
            raise InvalidThirdsError(text, thirds)
        return cls(int(whole), int(thirds))

    @classmethod
    def from_fraction(cls, value: float) -> InningsPitched:
        """Nearest whole-out innings for a fractional value (lossy)."""
        return cls.from_outs(round(max(value, 0.0) * 3))

    @property
    def outs(self) -> int:
        return self.whole * 3 + self.thirds

    def as_fraction(self) -> float:
        """Innings as a plain number for rate formulas (lossy)."""
        return self.whole + self.thirds / 3.0

    def __add__(self, other: object) -> Any:
        if isinstance(other, Omitted):
            return other
        if isinstance(other, InningsPitched):
            return InningsPitched.from_outs(self.outs + other.outs)
        return NotImplemented

    def __radd__(self, other: object) -> Any:
        # sum() starts from 0
        if other == 0 and not isinstance(other, bool):
            return self
        return self.__add__(other)

    def __str__(self) -> str:
        return f"{self.whole}.{self.thirds}"

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type: Any, handler: Any) -> core_schema.CoreSchema:
        return core_schema.no_info_plain_validator_function(
            _validate_innings,
            serialization=core_schema.plain_serializer_function_ser_schema(str),
        )


def _validate_innings(value: Any) -> InningsPitched:
    if isinstance(value, InningsPitched):
        return value
    if isinstance(value, str):
        return InningsPitched.parse(value)
    raise ValueError(f"innings pitched must be text like '6.2', got {value!r}")
