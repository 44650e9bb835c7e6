"""Pull one statistic out of a normalized pool and reduce it."""

from __future__ import annotations

import logging
from typing import Any, TypeVar

from pydantic import ValidationError

from models import StatGroup
from stats.aggregates import Aggregate
from stats.errors import SplitDeserializeError, SplitReductionError
from stats.parse import StatPool

logger = logging.getLogger(__name__)

AggregateT = TypeVar("AggregateT", bound=Aggregate)


def extract_split(pool: StatPool, aggregate: type[AggregateT], stat_type: str,
                  group: StatGroup) -> AggregateT:
    """Resolve ``stat_type``/``group`` from *pool* into *aggregate*.

    The matching record is removed from the pool.  When nothing matches, or
    the record holds no splits, the aggregate's fallback is returned.

    Raises:
        SplitDeserializeError: If a raw split does not validate as the
            aggregate's split model.
        SplitReductionError: If the splits violate the aggregate's shape.
    """
    entry = pool.take(stat_type, group)
    if entry is None:
        logger.debug("No %s/%s stats in response; using fallback", stat_type, group.value)
        return aggregate.fallback()

    split_model = aggregate.split_model
    splits: list[Any] = []
    for raw in entry.values:
        try:
            splits.append(split_model.model_validate(raw))
        except ValidationError as exc:
            raise SplitDeserializeError(split_model.__name__, exc) from exc

    if not splits:
        return aggregate.fallback()

    try:
        return aggregate.from_splits(splits)
    except aggregate.failure as exc:
        raise SplitReductionError(stat_type, group.value, exc) from exc
