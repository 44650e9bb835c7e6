"""Reduction strategies: turning a sequence of splits into an aggregate.

The family is fixed.  Callers pick a shape and parametrize it with
``.of(...)``, which returns a memoized subclass bound to a split model::

    YearByYear = Map.of(WithSeason[HittingStats], BY_SEASON)
    years = YearByYear.from_splits(splits)
    years[2023].stats.home_runs

Every aggregate provides:

- ``split_model``: the pydantic model each raw split validates as.
- ``from_splits(splits)``: the reduction; raises a ``ReductionError``
  subclass on a structural violation.
- ``fallback()``: the value used when the API returned nothing, with
  ``is_fallback`` set so it can be told apart from real data.
"""

from __future__ import annotations

import functools
from collections.abc import Iterable, Iterator, Mapping
from operator import attrgetter
from types import MappingProxyType
from typing import Any, ClassVar

from stats.errors import (
    DuplicateAwayError,
    DuplicateEntryError,
    DuplicateHomeError,
    DuplicateLossError,
    DuplicateWinError,
    NotLen2Error,
    NotSingleError,
    ReductionError,
)
from stats.records import RawStats
from stats.splits import HomeOrAwaySplit, SplitModel, WinOrLossSplit


# ---------------------------------------------------------------------------
# Keys
# ---------------------------------------------------------------------------

class SplitKey:
    """A named attribute getter used to key splits in a map."""

    def __init__(self, name: str, attribute: str):
        self.name = name
        self.attribute = attribute
        self._get = attrgetter(attribute)

    def __call__(self, split: Any) -> Any:
        return self._get(split)

    def __repr__(self) -> str:
        return f"SplitKey({self.name!r})"


BY_SEASON = SplitKey("season", "season")
BY_MONTH = SplitKey("month", "month")
BY_WEEKDAY = SplitKey("weekday", "weekday")
BY_POSITION = SplitKey("position", "position")
BY_GAME = SplitKey("game", "game.game_pk")


# ---------------------------------------------------------------------------
# Base
# ---------------------------------------------------------------------------

@functools.lru_cache(maxsize=None)
def _parametrize(base: type, label: str, **params: Any) -> type:
    return type(base)(f"{base.__name__}[{label}]", (base,), dict(params))


def _accumulate(stats_model: type[RawStats], records: Iterable[RawStats]) -> RawStats:
    """Field-wise total of *records*; the all-omitted record when empty."""
    total = None
    for record in records:
        total = record if total is None else total + record
    return stats_model.fallback() if total is None else total


class Aggregate:
    split_model: ClassVar[type[SplitModel]]
    failure: ClassVar[type[ReductionError]] = ReductionError

    is_fallback: bool = False

    @classmethod
    def _require_parametrized(cls) -> None:
        if not hasattr(cls, "split_model"):
            raise TypeError(f"{cls.__name__} must be parametrized with .of(...) before use")

    @classmethod
    def from_splits(cls, splits: Iterable[Any]) -> Aggregate:
        raise NotImplementedError

    @classmethod
    def fallback(cls) -> Aggregate:
        raise NotImplementedError

    def _content(self) -> Any:
        raise NotImplementedError

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._content() == other._content()

    def __hash__(self) -> int:
        return hash((type(self), self._content()))


# ---------------------------------------------------------------------------
# Single record
# ---------------------------------------------------------------------------

class Single(Aggregate):
    """Exactly one split (season, career, lastXGames).

    Attribute access falls through to the split, so ``season.stats`` and
    ``season.season`` both work.
    """

    failure = NotSingleError

    def __init__(self, split: Any, *, is_fallback: bool = False):
        self.split = split
        self.is_fallback = is_fallback

    @classmethod
    def of(cls, split_model: type[SplitModel]) -> type[Single]:
        return _parametrize(cls, split_model.__name__, split_model=split_model)

    @classmethod
    def from_splits(cls, splits: Iterable[Any]) -> Single:
        cls._require_parametrized()
        items = list(splits)
        if len(items) != 1:
            raise NotSingleError(len(items))
        return cls(items[0])

    @classmethod
    def fallback(cls) -> Single:
        cls._require_parametrized()
        return cls(cls.split_model.fallback(), is_fallback=True)

    def __getattr__(self, name: str) -> Any:
        if name.startswith("__") or name == "split":
            raise AttributeError(name)
        return getattr(self.split, name)

    def _content(self) -> Any:
        return self.split

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.split!r})"


# ---------------------------------------------------------------------------
# Identity sequence
# ---------------------------------------------------------------------------

class Multiple(Aggregate):
    """All splits in input order (gameLog, vsPlayer)."""

    def __init__(self, splits: Iterable[Any] = (), *, is_fallback: bool = False):
        self._splits = tuple(splits)
        self.is_fallback = is_fallback

    @classmethod
    def of(cls, split_model: type[SplitModel]) -> type[Multiple]:
        return _parametrize(cls, split_model.__name__, split_model=split_model)

    @classmethod
    def from_splits(cls, splits: Iterable[Any]) -> Multiple:
        cls._require_parametrized()
        return cls(splits)

    @classmethod
    def fallback(cls) -> Multiple:
        cls._require_parametrized()
        return cls((), is_fallback=True)

    def total(self) -> RawStats:
        """Field-wise sum of every split's record."""
        return _accumulate(self.split_model.stats_model(), (s.stats for s in self._splits))

    def __len__(self) -> int:
        return len(self._splits)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._splits)

    def __getitem__(self, index: int) -> Any:
        return self._splits[index]

    def _content(self) -> Any:
        return self._splits

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self._splits)!r})"


# ---------------------------------------------------------------------------
# Unique-key map
# ---------------------------------------------------------------------------

class Map(Aggregate, Mapping):
    """Splits keyed by ``key``; a repeated key is a structural violation."""

    failure = DuplicateEntryError
    key: ClassVar[SplitKey]

    def __init__(self, entries: Mapping[Any, Any] | None = None, *, is_fallback: bool = False):
        self._entries = MappingProxyType(dict(entries or {}))
        self.is_fallback = is_fallback

    @classmethod
    def of(cls, split_model: type[SplitModel], key: SplitKey) -> type[Map]:
        return _parametrize(cls, f"{split_model.__name__}, {key.name}",
                            split_model=split_model, key=key)

    @classmethod
    def from_splits(cls, splits: Iterable[Any]) -> Map:
        cls._require_parametrized()
        entries: dict[Any, Any] = {}
        for split in splits:
            k = cls.key(split)
            if k in entries:
                raise DuplicateEntryError(k)
            entries[k] = split
        return cls(entries)

    @classmethod
    def fallback(cls) -> Map:
        cls._require_parametrized()
        return cls(is_fallback=True)

    def total(self) -> RawStats:
        return _accumulate(self.split_model.stats_model(), (s.stats for s in self._entries.values()))

    def __getitem__(self, k: Any) -> Any:
        return self._entries[k]

    def __iter__(self) -> Iterator[Any]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def _content(self) -> Any:
        return tuple(self._entries.items())

    __eq__ = Aggregate.__eq__
    __hash__ = Aggregate.__hash__

    def __repr__(self) -> str:
        return f"{type(self).__name__}({dict(self._entries)!r})"


# ---------------------------------------------------------------------------
# Two-level map
# ---------------------------------------------------------------------------

class Map2D(Aggregate, Mapping):
    """Splits keyed by ``outer`` then ``inner`` (season, then month).

    ``by_month[2023][6]`` is the June 2023 split.  Duplicates are detected
    on the inner key within one outer bucket.
    """

    failure = DuplicateEntryError
    outer: ClassVar[SplitKey]
    inner: ClassVar[SplitKey]

    def __init__(self, entries: Mapping[Any, Mapping[Any, Any]] | None = None, *,
                 is_fallback: bool = False):
        self._entries = MappingProxyType({
            o: MappingProxyType(dict(bucket)) for o, bucket in (entries or {}).items()
        })
        self.is_fallback = is_fallback

    @classmethod
    def of(cls, split_model: type[SplitModel], outer: SplitKey, inner: SplitKey) -> type[Map2D]:
        return _parametrize(cls, f"{split_model.__name__}, {outer.name}, {inner.name}",
                            split_model=split_model, outer=outer, inner=inner)

    @classmethod
    def from_splits(cls, splits: Iterable[Any]) -> Map2D:
        cls._require_parametrized()
        entries: dict[Any, dict[Any, Any]] = {}
        for split in splits:
            o = cls.outer(split)
            i = cls.inner(split)
            bucket = entries.setdefault(o, {})
            if i in bucket:
                raise DuplicateEntryError(i, outer=o)
            bucket[i] = split
        return cls(entries)

    @classmethod
    def fallback(cls) -> Map2D:
        cls._require_parametrized()
        return cls(is_fallback=True)

    def get_split(self, outer: Any, inner: Any, default: Any = None) -> Any:
        bucket = self._entries.get(outer)
        if bucket is None:
            return default
        return bucket.get(inner, default)

    def __getitem__(self, k: Any) -> Mapping[Any, Any]:
        return self._entries[k]

    def __iter__(self) -> Iterator[Any]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def _content(self) -> Any:
        return tuple((o, tuple(bucket.items())) for o, bucket in self._entries.items())

    __eq__ = Aggregate.__eq__
    __hash__ = Aggregate.__hash__

    def __repr__(self) -> str:
        nested = {o: dict(b) for o, b in self._entries.items()}
        return f"{type(self).__name__}({nested!r})"


# ---------------------------------------------------------------------------
# Boolean-discriminated pairs
# ---------------------------------------------------------------------------

class HomeAndAway(Aggregate):
    """The two halves of a homeAndAway split, in named slots."""

    failure = ReductionError

    def __init__(self, home: Any, away: Any, *, is_fallback: bool = False):
        self.home = home
        self.away = away
        self.is_fallback = is_fallback

    @classmethod
    def of(cls, stats_model: type[RawStats]) -> type[HomeAndAway]:
        return _parametrize(cls, stats_model.__name__,
                            split_model=HomeOrAwaySplit[stats_model])

    @classmethod
    def from_splits(cls, splits: Iterable[Any]) -> HomeAndAway:
        cls._require_parametrized()
        items = list(splits)
        if len(items) != 2:
            raise NotLen2Error(len(items))
        a, b = items
        if a.is_home == b.is_home:
            raise DuplicateHomeError() if a.is_home else DuplicateAwayError()
        return cls(a, b) if a.is_home else cls(b, a)

    @classmethod
    def fallback(cls) -> HomeAndAway:
        cls._require_parametrized()
        return cls(cls.split_model.fallback_for(True), cls.split_model.fallback_for(False),
                   is_fallback=True)

    def _content(self) -> Any:
        return (self.home, self.away)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(home={self.home!r}, away={self.away!r})"


class WinLoss(Aggregate):
    """The two halves of a winLoss split, in named slots."""

    failure = ReductionError

    def __init__(self, win: Any, loss: Any, *, is_fallback: bool = False):
        self.win = win
        self.loss = loss
        self.is_fallback = is_fallback

    @classmethod
    def of(cls, stats_model: type[RawStats]) -> type[WinLoss]:
        return _parametrize(cls, stats_model.__name__,
                            split_model=WinOrLossSplit[stats_model])

    @classmethod
    def from_splits(cls, splits: Iterable[Any]) -> WinLoss:
        cls._require_parametrized()
        items = list(splits)
        if len(items) != 2:
            raise NotLen2Error(len(items))
        a, b = items
        if a.is_win == b.is_win:
            raise DuplicateWinError() if a.is_win else DuplicateLossError()
        return cls(a, b) if a.is_win else cls(b, a)

    @classmethod
    def fallback(cls) -> WinLoss:
        cls._require_parametrized()
        return cls(cls.split_model.fallback_for(True), cls.split_model.fallback_for(False),
                   is_fallback=True)

    def _content(self) -> Any:
        return (self.win, self.loss)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(win={self.win!r}, loss={self.loss!r})"
