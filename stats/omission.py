"""Omission-aware stat values.

For old data the API simply leaves fields out (pitch counts before the
2000s, for example).  A missing field is *not* zero: summing a career where
one season has no pitch count must not produce a pitch count.  Such fields
hold the singleton :data:`OMITTED` instead of a number.

``OMITTED`` absorbs addition from either side, compares equal only to
itself, and is falsy.  Present values are stored as-is, so ``hits + 1``
works on a present value without unwrapping.
"""

from __future__ import annotations

from typing import Any, TypeVar, Union

from pydantic_core import core_schema

T = TypeVar("T")


class Omitted:
    """The state of a stat field that was absent from the source record."""

    _instance: Omitted | None = None

    def __new__(cls) -> Omitted:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "OMITTED"

    def __bool__(self) -> bool:
        return False

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Omitted)

    def __hash__(self) -> int:
        return hash(Omitted)

    def __add__(self, other: object) -> Omitted:
        return self

    __radd__ = __add__

    def __reduce__(self) -> str:
        return "OMITTED"

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type: Any, handler: Any) -> core_schema.CoreSchema:
        return core_schema.no_info_plain_validator_function(
            _validate_omitted,
            serialization=core_schema.plain_serializer_function_ser_schema(lambda _: None),
        )


def _validate_omitted(value: Any) -> Omitted:
    if value is None or isinstance(value, Omitted):
        return OMITTED
    raise ValueError(f"expected null for an omitted stat, got {value!r}")


OMITTED = Omitted()

# Field annotation for a possibly-omitted stat, e.g. ``hits: Omittable[int] = OMITTED``.
Omittable = Union[T, Omitted]


def wrap(raw: T | None) -> T | Omitted:
    """Lift an optional raw value into the omission-aware domain."""
    return OMITTED if raw is None else raw


def is_omitted(value: object) -> bool:
    return isinstance(value, Omitted)


def combine(a: Any, b: Any) -> Any:
    """Add two omission-aware values; omitted on either side wins."""
    if isinstance(a, Omitted) or isinstance(b, Omitted):
        return OMITTED
    return a + b


def value_or(value: Any, default: Any) -> Any:
    """Return *value*, or *default* when it was omitted."""
    return default if isinstance(value, Omitted) else value
