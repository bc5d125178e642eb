"""Find and aggregate cursors.

A find cursor wraps a working set that was filtered when ``find`` was
called. Sort, skip and limit are only recorded when configured and applied
when the cursor is drained, always in that order. An aggregate cursor
holds a pipeline and runs it against the collection when drained.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Iterator, Mapping, Sequence

from doc_store.domain.entities import SortKey, Stage, parse_sort
from doc_store.domain.services import sort_documents
from doc_store.domain.value_objects import Document

if TYPE_CHECKING:
    from doc_store.application.collection import InMemoryCollection


class FindCursor:
    """Deferred sort/skip/limit over a filtered working set.

    Example:
        >>> cursor = collection.find({"status": "active"})
        >>> cursor.sort({"created_at": -1}).skip(10).limit(5).to_list()
    """

    def __init__(self, documents: list[Document]) -> None:
        self._documents = documents
        self._sort_key: SortKey | None = None
        self._skip = 0
        self._limit = 0

    def sort(self, spec: Mapping[str, int] | SortKey) -> FindCursor:
        """Order by the first field of ``spec``; later fields are ignored."""
        self._sort_key = parse_sort(spec)
        return self

    def skip(self, count: int) -> FindCursor:
        self._skip = count
        return self

    def limit(self, count: int) -> FindCursor:
        """Cap the result size. A limit of 0 means no limit."""
        self._limit = count
        return self

    def to_list(self) -> list[Document]:
        results = self._documents
        if self._sort_key is not None:
            results = sort_documents(results, self._sort_key)
        if self._skip:
            results = results[self._skip :]
        if self._limit:
            results = results[: self._limit]
        return list(results)

    def __iter__(self) -> Iterator[Document]:
        return iter(self.to_list())


class PipelineCursor:
    """Runs an aggregation pipeline against a collection when drained."""

    def __init__(
        self,
        collection: InMemoryCollection,
        pipeline: Sequence[Mapping[str, Any] | Stage],
    ) -> None:
        self._collection = collection
        self._pipeline = pipeline

    @property
    def pipeline(self) -> Sequence[Mapping[str, Any] | Stage]:
        return self._pipeline

    def to_list(self) -> list[Document]:
        return self._collection.run_pipeline(self._pipeline)

    def __iter__(self) -> Iterator[Document]:
        return iter(self.to_list())
