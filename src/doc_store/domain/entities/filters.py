"""Filter specifications.

A filter is a conjunction of per-field conditions. Each condition holds
one or more predicates, all of which must hold for the field's value.
Mongo-style literals such as ``{"status": "active", "age": {"$gte": 18}}``
are converted by :func:`parse_filter`.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class RangeOp(Enum):
    """Ordering operators recognized inside an operator object."""

    GTE = "$gte"
    LTE = "$lte"
    GT = "$gt"
    LT = "$lt"


IN_OPERATOR = "$in"


@dataclass(frozen=True)
class Predicate:
    """Base class for a single test against a field value."""


@dataclass(frozen=True)
class Equals(Predicate):
    """Field value strictly equals a literal."""

    value: Any


@dataclass(frozen=True)
class In(Predicate):
    """Field value strictly equals one of a set of candidates."""

    values: tuple[Any, ...]


@dataclass(frozen=True)
class Gte(Predicate):
    bound: Any


@dataclass(frozen=True)
class Lte(Predicate):
    bound: Any


@dataclass(frozen=True)
class Gt(Predicate):
    bound: Any


@dataclass(frozen=True)
class Lt(Predicate):
    bound: Any


@dataclass(frozen=True)
class NoMatch(Predicate):
    """An operator object with no recognized operator. Never matches."""

    spec: Any = None


_RANGE_PREDICATES: dict[RangeOp, type[Predicate]] = {
    RangeOp.GTE: Gte,
    RangeOp.LTE: Lte,
    RangeOp.GT: Gt,
    RangeOp.LT: Lt,
}


@dataclass(frozen=True)
class FieldCondition:
    """All predicates that apply to one field."""

    field: str
    predicates: tuple[Predicate, ...]


@dataclass(frozen=True)
class Filter:
    """A conjunctive filter over document fields.

    An empty filter matches every document.
    """

    conditions: tuple[FieldCondition, ...] = field(default_factory=tuple)

    @property
    def is_empty(self) -> bool:
        return not self.conditions

    def __len__(self) -> int:
        return len(self.conditions)


FilterLike = Mapping[str, Any] | Filter | None


def parse_predicates(spec: Any) -> tuple[Predicate, ...]:
    """Convert the value side of a filter entry into predicates.

    A mapping is read as an operator object: ``$in`` (with a list argument)
    and the four range operators are recognized, other keys are ignored.
    A mapping with no recognized operator yields a single ``NoMatch``.
    Anything else is an equality test.
    """
    if not isinstance(spec, Mapping):
        return (Equals(spec),)

    predicates: list[Predicate] = []
    candidates = spec.get(IN_OPERATOR)
    if isinstance(candidates, (list, tuple, set, frozenset)):
        predicates.append(In(tuple(candidates)))
    for op, predicate_type in _RANGE_PREDICATES.items():
        if op.value in spec:
            predicates.append(predicate_type(spec[op.value]))

    if not predicates:
        return (NoMatch(dict(spec)),)
    return tuple(predicates)


def parse_filter(spec: FilterLike) -> Filter:
    """Build a :class:`Filter` from a Mongo-style mapping.

    Args:
        spec: Mapping of field name to literal or operator object, an
            already-built Filter, or None for "all documents".

    Returns:
        The parsed filter.

    Raises:
        TypeError: If spec is not a mapping, Filter or None.
    """
    if spec is None:
        return Filter()
    if isinstance(spec, Filter):
        return spec
    if not isinstance(spec, Mapping):
        raise TypeError(f"filter must be a mapping, got {type(spec).__name__}")

    return Filter(
        tuple(
            FieldCondition(field=str(name), predicates=parse_predicates(value))
            for name, value in spec.items()
        )
    )
