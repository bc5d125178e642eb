"""Filter evaluation against documents.

Matching is permissive: absent fields, incomparable types and unrecognized
operator objects make a predicate fail, they never raise.
"""

from __future__ import annotations

from typing import Any, Callable, Iterable

from doc_store.domain.entities.filters import (
    Equals,
    Filter,
    FilterLike,
    Gt,
    Gte,
    In,
    Lt,
    Lte,
    Predicate,
    parse_filter,
)
from doc_store.domain.value_objects import MISSING, Document, get_field, strict_equals


class FilterMatcher:
    """Evaluates a filter against documents.

    Example:
        >>> matcher = FilterMatcher({"status": "active", "age": {"$gte": 18}})
        >>> matcher.matches({"status": "active", "age": 30})
        True
    """

    def __init__(self, spec: FilterLike) -> None:
        self._filter = parse_filter(spec)

    @property
    def filter(self) -> Filter:
        return self._filter

    @property
    def matches_all(self) -> bool:
        """True if the filter has no conditions."""
        return self._filter.is_empty

    def matches(self, document: Document) -> bool:
        """Check whether every field condition holds for the document."""
        for condition in self._filter.conditions:
            value = get_field(document, condition.field)
            for predicate in condition.predicates:
                if not evaluate_predicate(predicate, value):
                    return False
        return True

    def select(self, documents: Iterable[Document]) -> list[Document]:
        """Return the matching documents, preserving order."""
        if self.matches_all:
            return list(documents)
        return [doc for doc in documents if self.matches(doc)]

    def first(self, documents: Iterable[Document]) -> Document | None:
        """Return the first matching document, or None."""
        for doc in documents:
            if self.matches(doc):
                return doc
        return None


def evaluate_predicate(predicate: Predicate, value: Any) -> bool:
    """Evaluate a single predicate against a field value (or MISSING)."""
    if isinstance(predicate, Equals):
        return strict_equals(value, predicate.value)
    if isinstance(predicate, In):
        return any(strict_equals(value, candidate) for candidate in predicate.values)
    if isinstance(predicate, Gte):
        return _ordered(value, predicate.bound, lambda a, b: a >= b)
    if isinstance(predicate, Lte):
        return _ordered(value, predicate.bound, lambda a, b: a <= b)
    if isinstance(predicate, Gt):
        return _ordered(value, predicate.bound, lambda a, b: a > b)
    if isinstance(predicate, Lt):
        return _ordered(value, predicate.bound, lambda a, b: a < b)
    # NoMatch and anything unrecognized
    return False


def _ordered(value: Any, bound: Any, compare: Callable[[Any, Any], bool]) -> bool:
    if value is MISSING or value is None or bound is None:
        return False
    try:
        return bool(compare(value, bound))
    except TypeError:
        # Incomparable types are a non-match
        return False


def matches(spec: FilterLike, document: Document) -> bool:
    """Convenience wrapper: does ``document`` satisfy ``spec``?"""
    return FilterMatcher(spec).matches(document)
