"""Domain entities for the document store.

Exports:
    Filters:
        - Filter, FieldCondition: Conjunctive filter over document fields
        - Predicate: Equals, In, Gte, Lte, Gt, Lt, NoMatch
        - parse_filter: Build a Filter from a Mongo-style mapping

    Updates:
        - UpdateSpec, parse_update: ``$set`` / ``$inc`` specifiers

    Pipeline:
        - Stage: MatchStage, LimitStage, SkipStage, SortStage, GroupStage, LookupStage
        - Accumulator, AccumulatorOp: Group accumulators
        - SortKey, parse_sort: First-field sort specification
        - parse_stage: Build a Stage from a Mongo-style literal
"""

from doc_store.domain.entities.filters import (
    Equals,
    FieldCondition,
    Filter,
    FilterLike,
    Gt,
    Gte,
    In,
    Lt,
    Lte,
    NoMatch,
    Predicate,
    RangeOp,
    parse_filter,
    parse_predicates,
)
from doc_store.domain.entities.pipeline import (
    ASCENDING,
    DESCENDING,
    Accumulator,
    AccumulatorOp,
    GroupStage,
    LimitStage,
    LookupStage,
    MatchStage,
    SkipStage,
    SortKey,
    SortStage,
    Stage,
    StageType,
    as_stage_list,
    parse_sort,
    parse_stage,
)
from doc_store.domain.entities.updates import UpdateSpec, parse_update

__all__ = [
    # Filters
    "Filter",
    "FilterLike",
    "FieldCondition",
    "Predicate",
    "Equals",
    "In",
    "Gte",
    "Lte",
    "Gt",
    "Lt",
    "NoMatch",
    "RangeOp",
    "parse_filter",
    "parse_predicates",
    # Updates
    "UpdateSpec",
    "parse_update",
    # Pipeline
    "Stage",
    "StageType",
    "MatchStage",
    "LimitStage",
    "SkipStage",
    "SortStage",
    "GroupStage",
    "LookupStage",
    "Accumulator",
    "AccumulatorOp",
    "SortKey",
    "ASCENDING",
    "DESCENDING",
    "as_stage_list",
    "parse_sort",
    "parse_stage",
]
