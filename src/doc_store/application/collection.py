"""In-memory collection.

A collection is an ordered list of documents. Insertion order is the
natural order used by every scan; only an explicit sort reorders results.

Thread Safety:
    Each collection owns a re-entrant lock. Writes mutate the backing
    list under it and reads take a snapshot under it, so a collection has
    a single writer at a time. Nothing is atomic across collections.
"""

from __future__ import annotations

import threading
import time
from collections.abc import Mapping, Sequence
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, Iterator

from doc_store.application.cursor import FindCursor, PipelineCursor
from doc_store.domain.entities import FilterLike, Stage, UpdateSpec, as_stage_list, parse_update
from doc_store.domain.services import AggregationEngine, FilterMatcher
from doc_store.domain.services.aggregation import ForeignResolver
from doc_store.domain.value_objects import (
    ID_FIELD,
    Document,
    IdFormat,
    generate_document_id,
    is_number,
)
from doc_store.infrastructure.logging import get_logger
from doc_store.infrastructure.tracing import trace_span
from doc_store.ports.inbound import DeleteResult, InsertManyResult, InsertOneResult, UpdateResult

if TYPE_CHECKING:
    from doc_store.infrastructure.metrics import MetricsRegistry


INDEX_NAME_PREFIX = "idx_"


class InMemoryCollection:
    """A named, ordered, mutable sequence of documents.

    Identity uniqueness is not enforced: two documents may share an
    ``_id``, and lookups return the first in natural order.

    Example:
        >>> users = InMemoryCollection("users")
        >>> users.insert_one({"name": "Alice", "age": 30}).inserted_id
        '0b9c...'
        >>> users.find({"age": {"$gte": 18}}).sort({"name": 1}).to_list()
    """

    def __init__(
        self,
        name: str,
        id_format: IdFormat = "uuid",
        foreign_resolver: ForeignResolver | None = None,
        metrics: MetricsRegistry | None = None,
    ) -> None:
        """Initialize an empty collection.

        Args:
            name: Collection name.
            id_format: Format of identities assigned on insert.
            foreign_resolver: Resolves ``$lookup`` targets by name.
            metrics: Optional metrics registry.
        """
        self._name = name
        self._id_format = id_format
        self._documents: list[Document] = []
        self._lock = threading.RLock()
        self._metrics = metrics
        self._engine = AggregationEngine(foreign_resolver, metrics)
        self._logger = get_logger(__name__, collection=name)

    @property
    def name(self) -> str:
        return self._name

    def __len__(self) -> int:
        return len(self._documents)

    def __repr__(self) -> str:
        return f"InMemoryCollection({self._name!r}, documents={len(self._documents)})"

    def snapshot(self) -> list[Document]:
        """Return the current documents as a new list (same document objects)."""
        with self._lock:
            return list(self._documents)

    # Reads

    def find_one(self, filter: FilterLike = None) -> Document | None:
        matcher = FilterMatcher(filter)
        with self._observe("find_one"), self._lock:
            return matcher.first(self._documents)

    def find(
        self,
        filter: FilterLike = None,
        projection: Mapping[str, int] | None = None,
    ) -> FindCursor:
        """Filter now; sort/skip/limit are applied when the cursor is drained.

        ``projection`` is accepted for driver compatibility and not applied.
        """
        matcher = FilterMatcher(filter)
        with self._observe("find"), self._lock:
            return FindCursor(matcher.select(self._documents))

    def count_documents(self, filter: FilterLike = None) -> int:
        matcher = FilterMatcher(filter)
        with self._observe("count_documents"), self._lock:
            if matcher.matches_all:
                return len(self._documents)
            return sum(1 for doc in self._documents if matcher.matches(doc))

    # Inserts

    def insert_one(self, document: Mapping[str, Any]) -> InsertOneResult:
        """Append a copy of ``document``, assigning ``_id`` if absent or None."""
        with self._observe("insert_one"), self._lock:
            inserted_id = self._append(document)
        self._count_written("inserted", 1)
        return InsertOneResult(inserted_id=inserted_id)

    def insert_many(self, documents: Sequence[Mapping[str, Any]]) -> InsertManyResult:
        if isinstance(documents, Mapping) or not isinstance(documents, Sequence):
            raise TypeError(f"documents must be a sequence, got {type(documents).__name__}")

        with self._observe("insert_many"), self._lock:
            inserted_ids = [self._append(doc) for doc in documents]
        self._count_written("inserted", len(inserted_ids))
        return InsertManyResult(inserted_count=len(inserted_ids), inserted_ids=inserted_ids)

    def _append(self, document: Mapping[str, Any]) -> Any:
        if not isinstance(document, Mapping):
            raise TypeError(f"document must be a mapping, got {type(document).__name__}")
        stored = dict(document)
        if stored.get(ID_FIELD) is None:
            stored[ID_FIELD] = generate_document_id(self._id_format)
        self._documents.append(stored)
        return stored[ID_FIELD]

    # Updates

    def update_one(self, filter: FilterLike, update: Mapping[str, Any] | UpdateSpec) -> UpdateResult:
        """Apply ``$set`` then ``$inc`` to the first matching document.

        ``$inc`` treats a missing or non-numeric field as 0.
        """
        matcher = FilterMatcher(filter)
        spec = parse_update(update)
        with self._observe("update_one"), self._lock:
            doc = matcher.first(self._documents)
            if doc is None:
                return UpdateResult(matched_count=0, modified_count=0)
            if spec.set_fields:
                doc.update(spec.set_fields)
            if spec.inc_fields:
                _increment(doc, spec.inc_fields)
        self._count_written("modified", 1)
        return UpdateResult(matched_count=1, modified_count=1)

    def update_many(self, filter: FilterLike, update: Mapping[str, Any] | UpdateSpec) -> UpdateResult:
        """Apply ``$set`` to every matching document.

        ``$inc`` is not applied here; only ``update_one`` increments. The
        modified count is 0 unless the update carries ``$set``.
        """
        matcher = FilterMatcher(filter)
        spec = parse_update(update)
        if spec.has_inc:
            self._logger.debug("update_many_inc_ignored", fields=sorted(spec.inc_fields or {}))

        with self._observe("update_many"), self._lock:
            matched = matcher.select(self._documents)
            modified = 0
            if spec.set_fields is not None:
                for doc in matched:
                    doc.update(spec.set_fields)
                    modified += 1
        self._count_written("modified", modified)
        return UpdateResult(matched_count=len(matched), modified_count=modified)

    # Deletes

    def delete_one(self, filter: FilterLike) -> DeleteResult:
        matcher = FilterMatcher(filter)
        with self._observe("delete_one"), self._lock:
            for index, doc in enumerate(self._documents):
                if matcher.matches(doc):
                    del self._documents[index]
                    break
            else:
                return DeleteResult(deleted_count=0)
        self._count_written("deleted", 1)
        return DeleteResult(deleted_count=1)

    def delete_many(self, filter: FilterLike) -> DeleteResult:
        """Remove every matching document. An empty filter clears the collection."""
        matcher = FilterMatcher(filter)
        with self._observe("delete_many"), self._lock:
            before = len(self._documents)
            if matcher.matches_all:
                self._documents.clear()
                self._logger.debug("collection_cleared", deleted=before)
            else:
                self._documents[:] = [doc for doc in self._documents if not matcher.matches(doc)]
            deleted = before - len(self._documents)
        self._count_written("deleted", deleted)
        return DeleteResult(deleted_count=deleted)

    # Aggregation

    def aggregate(self, pipeline: Sequence[Mapping[str, Any] | Stage]) -> PipelineCursor:
        """Return a cursor that runs ``pipeline`` over this collection when drained."""
        return PipelineCursor(self, as_stage_list(pipeline))

    def run_pipeline(self, pipeline: Sequence[Mapping[str, Any] | Stage]) -> list[Document]:
        """Run ``pipeline`` over a snapshot of the current documents."""
        documents = self.snapshot()
        with self._observe("aggregate"), trace_span(
            "docstore.aggregate",
            {"collection": self._name, "stages": len(pipeline)},
        ):
            results = self._engine.run(documents, pipeline)
        self._logger.debug("aggregate_complete", stages=len(pipeline), results=len(results))
        return results

    # Indexes

    def create_index(self, keys: Mapping[str, int]) -> str:
        """Return a name for the index. No index structure is built."""
        if not isinstance(keys, Mapping):
            raise TypeError(f"index keys must be a mapping, got {type(keys).__name__}")
        return INDEX_NAME_PREFIX + "_".join(str(key) for key in keys)

    # Instrumentation

    @contextmanager
    def _observe(self, operation: str) -> Iterator[None]:
        if self._metrics is None:
            yield
            return
        start = time.perf_counter()
        try:
            yield
        finally:
            self._metrics.operations_total.labels(
                collection=self._name, operation=operation
            ).inc()
            self._metrics.operation_latency_seconds.labels(operation=operation).observe(
                time.perf_counter() - start
            )

    def _count_written(self, kind: str, count: int) -> None:
        if self._metrics is not None and count:
            self._metrics.documents_written_total.labels(
                collection=self._name, kind=kind
            ).inc(count)


def _increment(document: Document, deltas: Mapping[str, Any]) -> None:
    for field, delta in deltas.items():
        if not is_number(delta):
            continue
        current = document.get(field)
        document[field] = (current if is_number(current) else 0) + delta
