"""Domain services for query evaluation.

Services implement the logic that operates on documents and query
specifications: filter matching, sorting and pipeline execution.
"""

from doc_store.domain.services.aggregation import AggregationEngine, ForeignResolver, accumulate
from doc_store.domain.services.filter_matcher import FilterMatcher, evaluate_predicate, matches
from doc_store.domain.services.sorting import compare_values, sort_documents

__all__ = [
    "AggregationEngine",
    "ForeignResolver",
    "FilterMatcher",
    "accumulate",
    "compare_values",
    "evaluate_predicate",
    "matches",
    "sort_documents",
]
