"""Aggregation pipeline stages.

A pipeline is an ordered sequence of stages, each one of a closed set of
variants. Mongo-style stage literals (``{"$match": {...}}``,
``{"$group": {"_id": "$status", "count": {"$sum": 1}}}``) are converted by
:func:`parse_stage`.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from doc_store.domain.entities.filters import Filter, parse_filter
from doc_store.domain.value_objects import FIELD_REF_PREFIX, ID_FIELD, is_field_ref, is_number


class StageType(Enum):
    """Pipeline stage operators."""

    MATCH = "$match"
    LIMIT = "$limit"
    SKIP = "$skip"
    SORT = "$sort"
    GROUP = "$group"
    LOOKUP = "$lookup"


class AccumulatorOp(Enum):
    """Group accumulator operators."""

    SUM = "$sum"
    AVG = "$avg"
    MIN = "$min"
    MAX = "$max"


ASCENDING = 1
DESCENDING = -1


@dataclass(frozen=True)
class SortKey:
    """The field a sort orders by, and its direction."""

    field: str
    direction: int = ASCENDING

    @property
    def descending(self) -> bool:
        return self.direction == DESCENDING


def parse_sort(spec: Mapping[str, Any] | SortKey | None) -> SortKey | None:
    """Read the first field of a sort specification.

    Only the first key of ``{"a": 1, "b": -1}`` is used; later keys have no
    effect. A direction of -1 is descending, anything else ascending.
    """
    if spec is None or isinstance(spec, SortKey):
        return spec
    if not isinstance(spec, Mapping):
        raise TypeError(f"sort must be a mapping, got {type(spec).__name__}")
    for name, direction in spec.items():
        return SortKey(field=str(name), direction=DESCENDING if direction == -1 else ASCENDING)
    return None


@dataclass(frozen=True)
class Accumulator:
    """A named per-group aggregate.

    ``argument`` is either a ``$field`` reference or a literal (``1`` for
    a count).
    """

    alias: str
    op: AccumulatorOp
    argument: Any

    @property
    def field(self) -> str | None:
        """The referenced field name, or None for a literal argument."""
        if is_field_ref(self.argument):
            return self.argument[len(FIELD_REF_PREFIX):]
        return None


@dataclass(frozen=True)
class Stage:
    """Base class for pipeline stages."""


@dataclass(frozen=True)
class MatchStage(Stage):
    filter: Filter


@dataclass(frozen=True)
class LimitStage(Stage):
    count: int


@dataclass(frozen=True)
class SkipStage(Stage):
    count: int


@dataclass(frozen=True)
class SortStage(Stage):
    key: SortKey | None


@dataclass(frozen=True)
class GroupStage(Stage):
    """Partition documents by ``key`` and compute accumulators per group.

    ``key`` is a ``$field`` reference, None for a single group, or any
    other literal (also a single group, identified by the literal).
    """

    key: Any
    accumulators: tuple[Accumulator, ...] = field(default_factory=tuple)

    @property
    def key_field(self) -> str | None:
        if is_field_ref(self.key):
            return self.key[len(FIELD_REF_PREFIX):]
        return None


@dataclass(frozen=True)
class LookupStage(Stage):
    """Attach matching documents from another collection."""

    from_collection: str
    local_field: str
    foreign_field: str
    as_field: str


def _parse_count(params: Any) -> int | None:
    if is_number(params):
        return int(params)
    return None


def _parse_group(params: Any) -> GroupStage | None:
    if not isinstance(params, Mapping):
        return None

    accumulators: list[Accumulator] = []
    for alias, spec in params.items():
        if alias == ID_FIELD or not isinstance(spec, Mapping) or not spec:
            continue
        op_name, argument = next(iter(spec.items()))
        try:
            op = AccumulatorOp(op_name)
        except ValueError:
            # Unsupported accumulators produce no output field
            continue
        accumulators.append(Accumulator(alias=str(alias), op=op, argument=argument))

    return GroupStage(key=params.get(ID_FIELD), accumulators=tuple(accumulators))


def _parse_lookup(params: Any) -> LookupStage | None:
    if not isinstance(params, Mapping):
        return None
    names = [params.get(k) for k in ("from", "localField", "foreignField", "as")]
    if not all(isinstance(name, str) for name in names):
        return None
    return LookupStage(*names)


def parse_stage(raw: Mapping[str, Any] | Stage) -> Stage | None:
    """Convert one stage literal into a :class:`Stage`.

    Only the first key of the literal is read. Returns None for an unknown
    operator or malformed parameters, so callers can skip the stage.

    Raises:
        TypeError: If raw is neither a mapping nor a Stage.
    """
    if isinstance(raw, Stage):
        return raw
    if not isinstance(raw, Mapping):
        raise TypeError(f"pipeline stage must be a mapping, got {type(raw).__name__}")
    if not raw:
        return None

    op_name, params = next(iter(raw.items()))
    try:
        stage_type = StageType(op_name)
    except ValueError:
        return None

    if stage_type == StageType.MATCH:
        return MatchStage(parse_filter(params)) if isinstance(params, Mapping) else None
    if stage_type == StageType.LIMIT:
        count = _parse_count(params)
        return None if count is None else LimitStage(count)
    if stage_type == StageType.SKIP:
        count = _parse_count(params)
        return None if count is None else SkipStage(count)
    if stage_type == StageType.SORT:
        return SortStage(parse_sort(params)) if isinstance(params, Mapping) else None
    if stage_type == StageType.GROUP:
        return _parse_group(params)
    return _parse_lookup(params)


def as_stage_list(pipeline: Sequence[Mapping[str, Any] | Stage]) -> list[Mapping[str, Any] | Stage]:
    """Validate that a pipeline is a sequence of stages."""
    if isinstance(pipeline, (str, bytes, Mapping)) or not isinstance(pipeline, Sequence):
        raise TypeError(f"pipeline must be a sequence, got {type(pipeline).__name__}")
    return list(pipeline)
