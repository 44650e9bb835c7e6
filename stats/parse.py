"""Normalize the two shapes of a ``stats`` array into one pool of records.

The MLB Stats API returns statistics in two layouts.  A *flat* element
carries its own type and group next to a single ``stat`` payload::

    {"type": "season", "group": "hitting", "stat": {"hits": 180}}

A *wrapper* element carries a list of splits, each of which may repeat or
override the wrapper's type and group::

    {"type": {"displayName": "byMonth"}, "group": {"displayName": "hitting"},
     "splits": [{"month": 4, "season": "2023", "stat": {...}}, ...]}

``normalize_stats`` turns either into :class:`StatEntry` records, one per
(type, group) pair, whose ``values`` are the raw split objects in input
order.  :class:`StatPool` hands those records out, each at most once.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Annotated, Any, Iterator, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, ValidationError

from models import StatGroup
from stats.errors import StatsDeserializeError

logger = logging.getLogger(__name__)


def _display_name(value: Any) -> Any:
    """Accept ``"season"`` or ``{"displayName": "season"}``."""
    if isinstance(value, dict):
        if "displayName" not in value:
            raise ValueError("expected an object with 'displayName'")
        return value["displayName"]
    return value


def _group(value: Any) -> Any:
    name = _display_name(value)
    return StatGroup(name) if isinstance(name, str) else name


TypeName = Annotated[str, BeforeValidator(_display_name)]
GroupName = Annotated[StatGroup, BeforeValidator(_group)]


# ---------------------------------------------------------------------------
# Wire shapes
# ---------------------------------------------------------------------------

class FlatStatEntry(BaseModel):
    """``{type, group, stat}`` with the payload inline."""
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    stat_type: TypeName = Field(alias="type")
    group: GroupName
    stat: dict[str, Any]


class InlineSplit(BaseModel):
    """The type/group a split may carry for itself."""
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    stat_type: Optional[TypeName] = Field(default=None, alias="type")
    group: Optional[GroupName] = None


class WrappedStatEntry(BaseModel):
    """``{type?, group?, splits: [...]}``."""
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    stat_type: Optional[TypeName] = Field(default=None, alias="type")
    group: Optional[GroupName] = None
    splits: list[dict[str, Any]]


# ---------------------------------------------------------------------------
# Normalized records
# ---------------------------------------------------------------------------

@dataclass
class StatEntry:
    """All raw split values for one (type, group) pair."""
    stat_type: str
    group: StatGroup
    values: list[dict[str, Any]] = field(default_factory=list)

    def matches(self, stat_type: str, group: StatGroup) -> bool:
        # Type names vary in casing between endpoints; groups do not.
        return self.stat_type.casefold() == stat_type.casefold() and self.group == group


class StatPool:
    """The normalized records of one response.

    ``take`` removes what it returns, so asking twice for the same pair
    finds nothing the second time.  Use :meth:`copy` to extract the same
    statistic more than once or from several callers.
    """

    def __init__(self, entries: Optional[list[StatEntry]] = None):
        self._entries: list[StatEntry] = list(entries or [])

    def take(self, stat_type: str, group: StatGroup) -> Optional[StatEntry]:
        for idx, entry in enumerate(self._entries):
            if entry.matches(stat_type, group):
                return self._entries.pop(idx)
        return None

    def copy(self) -> StatPool:
        return StatPool([
            StatEntry(e.stat_type, e.group, list(e.values)) for e in self._entries
        ])

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[StatEntry]:
        return iter(self._entries)

    def __repr__(self) -> str:
        pairs = ", ".join(f"{e.stat_type}/{e.group.value}" for e in self._entries)
        return f"StatPool([{pairs}])"


# ---------------------------------------------------------------------------
# Normalization
# ---------------------------------------------------------------------------

def _decode_element(element: Any, index: int) -> list[tuple[str, StatGroup, dict[str, Any]]]:
    """Decode one array element as flat, then as a wrapper.

    Returns ``(type, group, raw_value)`` triples in input order.
    """
    try:
        flat = FlatStatEntry.model_validate(element)
    except ValidationError:
        pass
    else:
        return [(flat.stat_type, flat.group, element)]

    try:
        wrapper = WrappedStatEntry.model_validate(element)
    except ValidationError as exc:
        raise StatsDeserializeError(
            f"element is neither a flat stat entry nor a splits wrapper: {exc}", index,
        ) from exc

    triples = []
    for pos, raw in enumerate(wrapper.splits):
        try:
            inline = InlineSplit.model_validate(raw)
        except ValidationError as exc:
            raise StatsDeserializeError(f"splits[{pos}]: {exc}", index) from exc
        stat_type = inline.stat_type or wrapper.stat_type
        group = inline.group or wrapper.group
        if stat_type is None or group is None:
            raise StatsDeserializeError(f"splits[{pos}] has no stat type or group", index)
        triples.append((stat_type, group, raw))
    return triples


def _stats_array(raw: Any) -> list[Any]:
    if isinstance(raw, list):
        return raw
    if isinstance(raw, dict):
        for key in ("stats", "stat"):
            if key in raw:
                if not isinstance(raw[key], list):
                    raise StatsDeserializeError(f"'{key}' must be an array")
                return raw[key]
        raise StatsDeserializeError("response has no 'stats' array")
    raise StatsDeserializeError(f"expected a stats array or object, got {type(raw).__name__}")


def normalize_stats(raw: Any) -> StatPool:
    """Normalize a stats array (or a response holding one) into a pool.

    Records for the same (type, group) are merged in input order, so the
    pool holds at most one record per pair.

    Raises:
        StatsDeserializeError: If any element matches neither shape.
    """
    merged: dict[tuple[str, StatGroup], StatEntry] = {}
    for index, element in enumerate(_stats_array(raw)):
        for stat_type, group, value in _decode_element(element, index):
            key = (stat_type.casefold(), group)
            if key not in merged:
                merged[key] = StatEntry(stat_type, group)
            merged[key].values.append(value)

    pool = StatPool(list(merged.values()))
    logger.debug("Normalized %d stat record(s): %r", len(pool), pool)
    return pool
