"""Aggregation pipeline evaluation.

Every stage consumes the full output list of the previous stage and
produces a new list; nothing is streamed. Source documents are never
mutated: ``$group`` synthesizes new documents and ``$lookup`` attaches its
output field to copies.

Stages:
    - $match: keep documents satisfying a filter
    - $limit / $skip: truncate the list
    - $sort: order by the first field of the sort specification
    - $group: one output document per distinct group key
    - $lookup: nested-loop equality join against another collection
"""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any, Callable

from doc_store.domain.entities.pipeline import (
    Accumulator,
    AccumulatorOp,
    GroupStage,
    LimitStage,
    LookupStage,
    MatchStage,
    SkipStage,
    SortStage,
    Stage,
    as_stage_list,
    parse_stage,
)
from doc_store.domain.services.filter_matcher import FilterMatcher
from doc_store.domain.services.sorting import sort_documents
from doc_store.domain.value_objects import (
    ID_FIELD,
    MISSING,
    Document,
    get_field,
    is_number,
    strict_equals,
)
from doc_store.infrastructure.logging import get_logger

if TYPE_CHECKING:
    from doc_store.infrastructure.metrics import MetricsRegistry

logger = get_logger(__name__)

ForeignResolver = Callable[[str], list[Document]]
"""Returns a snapshot of a named collection, or [] if it does not exist."""

_MISSING_GROUP_KEY = "undefined"


def _no_foreign_collections(name: str) -> list[Document]:
    return []


class AggregationEngine:
    """Runs pipelines over document lists.

    Example:
        >>> engine = AggregationEngine()
        >>> engine.run(
        ...     [{"status": "a"}, {"status": "a"}, {"status": "b"}],
        ...     [{"$group": {"_id": "$status", "count": {"$sum": 1}}}],
        ... )
        [{'_id': 'a', 'count': 2}, {'_id': 'b', 'count': 1}]
    """

    def __init__(
        self,
        foreign_resolver: ForeignResolver | None = None,
        metrics: MetricsRegistry | None = None,
    ) -> None:
        """Initialize the engine.

        Args:
            foreign_resolver: Resolves ``$lookup`` collection names.
            metrics: Optional metrics registry for stage counts.
        """
        self._resolve = foreign_resolver or _no_foreign_collections
        self._metrics = metrics

    def run(
        self,
        documents: Sequence[Document],
        pipeline: Sequence[Mapping[str, Any] | Stage],
    ) -> list[Document]:
        """Apply every stage in order and return the final list.

        Unknown or malformed stages are skipped.

        Raises:
            TypeError: If pipeline is not a sequence of mappings/stages.
        """
        results = list(documents)
        for raw in as_stage_list(pipeline):
            stage = parse_stage(raw)
            if stage is None:
                logger.warning("pipeline_stage_skipped", stage=repr(raw))
                continue
            results = self.apply(stage, results)
            if self._metrics is not None:
                self._metrics.pipeline_stages_total.labels(
                    stage=type(stage).__name__
                ).inc()
        return results

    def apply(self, stage: Stage, documents: list[Document]) -> list[Document]:
        """Apply a single stage, returning a new list."""
        if isinstance(stage, MatchStage):
            return FilterMatcher(stage.filter).select(documents)
        if isinstance(stage, LimitStage):
            return documents[: stage.count]
        if isinstance(stage, SkipStage):
            return documents[stage.count :]
        if isinstance(stage, SortStage):
            return sort_documents(documents, stage.key)
        if isinstance(stage, GroupStage):
            return self._group(stage, documents)
        if isinstance(stage, LookupStage):
            return self._lookup(stage, documents)
        raise TypeError(f"Unsupported stage type: {type(stage).__name__}")

    # $group

    def _group(self, stage: GroupStage, documents: list[Document]) -> list[Document]:
        groups: dict[str, tuple[Any, list[Document]]] = {}

        for doc in documents:
            group_id, group_key = _group_identity(stage, doc)
            if group_key not in groups:
                groups[group_key] = (group_id, [])
            groups[group_key][1].append(doc)

        output: list[Document] = []
        for group_id, members in groups.values():
            result: Document = {ID_FIELD: group_id}
            for accumulator in stage.accumulators:
                value = accumulate(accumulator, members)
                if value is not MISSING:
                    result[accumulator.alias] = value
            output.append(result)
        return output

    # $lookup

    def _lookup(self, stage: LookupStage, documents: list[Document]) -> list[Document]:
        foreign_docs = self._resolve(stage.from_collection)

        output: list[Document] = []
        for doc in documents:
            local_value = get_field(doc, stage.local_field)
            joined = [
                dict(foreign)
                for foreign in foreign_docs
                if strict_equals(get_field(foreign, stage.foreign_field), local_value)
            ]
            output.append({**doc, stage.as_field: joined})
        return output


def _canonical(value: Any) -> Any:
    # Integral floats collapse onto ints so 1 and 1.0 share a group
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, Mapping):
        return {str(k): _canonical(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_canonical(v) for v in value]
    return value


def _render_key(value: Any) -> str:
    return json.dumps(_canonical(value), default=str, sort_keys=True)


def _group_identity(stage: GroupStage, doc: Document) -> tuple[Any, str]:
    """Return ``(group _id, partition key)`` for a document."""
    key_field = stage.key_field
    if key_field is not None:
        value = get_field(doc, key_field)
        if value is MISSING:
            return None, _MISSING_GROUP_KEY
        return value, _render_key(value)
    return stage.key, _render_key(stage.key)


def _numbers(members: list[Document], field: str) -> list[int | float]:
    return [value for value in (get_field(doc, field) for doc in members) if is_number(value)]


def _defined(members: list[Document], field: str) -> list[int | float]:
    """Every value that is present, non-numeric ones (null included) as 0."""
    values = (get_field(doc, field) for doc in members)
    return [value if is_number(value) else 0 for value in values if value is not MISSING]


def accumulate(accumulator: Accumulator, members: list[Document]) -> Any:
    """Compute one accumulator over a group's documents.

    Returns MISSING when the accumulator has no output (an unsupported
    argument), so the alias is left off the group document.
    """
    field = accumulator.field

    if accumulator.op == AccumulatorOp.SUM:
        if field is None:
            if is_number(accumulator.argument) and accumulator.argument == 1:
                return len(members)
            return MISSING
        return sum(_numbers(members, field))

    if field is None:
        return MISSING

    if accumulator.op == AccumulatorOp.AVG:
        defined = _defined(members, field)
        return sum(defined) / len(defined) if defined else 0

    values = _numbers(members, field)
    if accumulator.op == AccumulatorOp.MIN:
        return min(values) if values else None
    if accumulator.op == AccumulatorOp.MAX:
        return max(values) if values else None
    return MISSING
