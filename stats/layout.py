"""Composite stat layouts: several (type, group) pairs resolved at once.

A layout names the stat types and groups a caller wants.  It knows how to
ask the API for them and how to turn the response into a
:class:`StatsBundle`::

    layout = StatsLayout(["season", "career"], ["hitting", "pitching"])
    bundle = layout.resolve(response)
    bundle["season", StatGroup.HITTING].stats.home_runs
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from typing import Any, Optional

from models import StatGroup
from stats.aggregates import Aggregate
from stats.catalog import aggregate_for, canonical_stat_type
from stats.errors import StatsError, StatsResolutionError
from stats.extract import extract_split
from stats.parse import normalize_stats

logger = logging.getLogger(__name__)

StatKey = tuple[str, StatGroup]


class StatsBundle(Mapping):
    """Resolved aggregates keyed by ``(stat_type, group)``.

    Keys are looked up with the type name matched case-insensitively and
    the group given as a :class:`StatGroup` or its string value.
    """

    def __init__(self, entries: Mapping[StatKey, Aggregate]):
        self._entries = dict(entries)

    @staticmethod
    def _key(key: Any) -> StatKey:
        try:
            stat_type, group = key
            return canonical_stat_type(stat_type), StatGroup(group)
        except (TypeError, ValueError) as exc:
            raise KeyError(key) from exc

    def __getitem__(self, key: Any) -> Aggregate:
        return self._entries[self._key(key)]

    def __iter__(self) -> Iterator[StatKey]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"StatsBundle({self._entries!r})"


class StatsLayout:
    """The cross product of ``types`` and ``groups``, each with its aggregate.

    ``overrides`` replaces the catalog's aggregate for specific pairs, e.g.
    ``{("season", StatGroup.FIELDING): Single.of(WithSeason[FieldingStats])}``.

    Raises:
        UnknownStatTypeError: On construction, if any pair is unsupported
            and has no override.
    """

    def __init__(self, types: Iterable[str], groups: Iterable[StatGroup | str],
                 overrides: Optional[Mapping[tuple[str, StatGroup | str], type[Aggregate]]] = None):
        self.types = tuple(canonical_stat_type(t) for t in types)
        self.groups = tuple(StatGroup(g) for g in groups)
        if not self.types or not self.groups:
            raise ValueError("A stats layout needs at least one type and one group")

        custom = {
            (canonical_stat_type(t), StatGroup(g)): agg
            for (t, g), agg in (overrides or {}).items()
        }
        self.aggregates: dict[StatKey, type[Aggregate]] = {}
        for stat_type in self.types:
            for group in self.groups:
                key = (stat_type, group)
                self.aggregates[key] = custom.get(key) or aggregate_for(stat_type, group)

    def hydration_text(self) -> str:
        """The ``stats(...)`` hydration argument, e.g. ``type=[season],group=[hitting]``."""
        return (
            f"type=[{','.join(self.types)}],"
            f"group=[{','.join(g.value for g in self.groups)}]"
        )

    def query_params(self, season: Optional[int] = None) -> dict[str, Any]:
        """Query parameters for a ``/stats`` endpoint."""
        params: dict[str, Any] = {
            "stats": ",".join(self.types),
            "group": ",".join(g.value for g in self.groups),
        }
        if season is not None:
            params["season"] = season
        return params

    def resolve(self, raw: Any) -> StatsBundle:
        """Resolve every pair in the layout from one response.

        Missing pairs resolve to their fallback.  The first failure stops
        resolution.

        Raises:
            StatsResolutionError: If the response or any pair fails to
                resolve; the underlying error is chained as ``__cause__``.
        """
        try:
            pool = normalize_stats(raw)
        except StatsError as exc:
            logger.error("Could not normalize stats response: %s", exc)
            raise StatsResolutionError() from exc

        resolved: dict[StatKey, Aggregate] = {}
        for (stat_type, group), aggregate in self.aggregates.items():
            try:
                resolved[(stat_type, group)] = extract_split(pool, aggregate, stat_type, group)
            except StatsError as exc:
                logger.error("Could not resolve %s/%s: %s", stat_type, group.value, exc)
                raise StatsResolutionError(stat_type, group.value) from exc
        return StatsBundle(resolved)
