"""Exceptions raised while resolving statistics."""

from __future__ import annotations

from typing import Any, Optional


class StatsError(Exception):
    """Base for every stats-engine error."""


# ---------------------------------------------------------------------------
# Deserialization
# ---------------------------------------------------------------------------

class StatsDeserializeError(StatsError):
    """The outer statistics array could not be decoded."""

    def __init__(self, message: str, index: Optional[int] = None):
        self.index = index
        if index is not None:
            message = f"stats[{index}]: {message}"
        super().__init__(message)


class SplitDeserializeError(StatsError):
    """A raw split value did not validate as the requested split model."""

    def __init__(self, split_type: str, cause: Exception):
        self.split_type = split_type
        self.cause = cause
        super().__init__(f"Failed to deserialize split as {split_type}: {cause}")


# ---------------------------------------------------------------------------
# Reduction
# ---------------------------------------------------------------------------

class ReductionError(StatsError):
    """A split sequence violated the structure an aggregate requires."""


class NotSingleError(ReductionError):
    def __init__(self, count: int):
        self.count = count
        super().__init__(f"Expected exactly one split, found {count}")


class DuplicateEntryError(ReductionError):
    def __init__(self, key: Any, outer: Any = None):
        self.key = key
        self.outer = outer
        where = f" under {outer!r}" if outer is not None else ""
        super().__init__(f"Duplicate entry for key {key!r}{where}")


class NotLen2Error(ReductionError):
    def __init__(self, count: int):
        self.count = count
        super().__init__(f"Did not find exactly two splits (found {count})")


class DuplicateHomeError(ReductionError):
    def __init__(self) -> None:
        super().__init__("Found multiple home splits")


class DuplicateAwayError(ReductionError):
    def __init__(self) -> None:
        super().__init__("Found multiple away splits")


class DuplicateWinError(ReductionError):
    def __init__(self) -> None:
        super().__init__("Found multiple win splits")


class DuplicateLossError(ReductionError):
    def __init__(self) -> None:
        super().__init__("Found multiple loss splits")


class SplitReductionError(StatsError):
    """Wraps a :class:`ReductionError` with the statistic it came from."""

    def __init__(self, stat_type: str, group: str, cause: ReductionError):
        self.stat_type = stat_type
        self.group = group
        self.cause = cause
        super().__init__(f"Failed to reduce {stat_type}/{group} splits: {cause}")


# ---------------------------------------------------------------------------
# Composite layouts
# ---------------------------------------------------------------------------

class UnknownStatTypeError(StatsError):
    def __init__(self, stat_type: str, group: str):
        self.stat_type = stat_type
        self.group = group
        super().__init__(f"No aggregate is known for stat type {stat_type!r} in group {group!r}")


class StatsResolutionError(StatsError):
    """A composite layout failed to resolve; the cause is chained."""

    def __init__(self, stat_type: Optional[str] = None, group: Optional[str] = None):
        self.stat_type = stat_type
        self.group = group
        super().__init__("Failed to resolve stats from the response")
