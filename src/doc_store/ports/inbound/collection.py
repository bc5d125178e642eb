"""Collection port for document CRUD, cursors and aggregation.

This inbound port mirrors the subset of the MongoDB driver API that the
benchmark workloads use, so that every backend can be driven by the same
workload code.

Key responsibilities:
- CRUD over a named, ordered sequence of documents
- Deferred sort/skip/limit over find results
- Staged aggregation with grouping and cross-collection joins
"""

from __future__ import annotations

from abc import abstractmethod
from dataclasses import dataclass, field
from typing import Any, Iterator, Mapping, Protocol, Sequence

from doc_store.domain.entities import FilterLike, Stage
from doc_store.domain.value_objects import Document, DocumentId


@dataclass(frozen=True)
class InsertOneResult:
    """Result of inserting a single document."""

    inserted_id: DocumentId | Any
    acknowledged: bool = True


@dataclass(frozen=True)
class InsertManyResult:
    """Result of inserting a batch of documents."""

    inserted_count: int
    inserted_ids: list[Any] = field(default_factory=list)
    acknowledged: bool = True


@dataclass(frozen=True)
class UpdateResult:
    """Result of an update."""

    matched_count: int
    modified_count: int
    acknowledged: bool = True


@dataclass(frozen=True)
class DeleteResult:
    """Result of a delete."""

    deleted_count: int
    acknowledged: bool = True


class Cursor(Protocol):
    """Deferred view over find results.

    Configuration is applied when the cursor is drained, always in the
    order sort, skip, limit. Each configuration method returns the cursor.
    """

    @abstractmethod
    def sort(self, spec: Mapping[str, int]) -> Cursor:
        """Order by the first field of ``spec`` (1 ascending, -1 descending)."""
        ...

    @abstractmethod
    def skip(self, count: int) -> Cursor:
        """Drop the first ``count`` results."""
        ...

    @abstractmethod
    def limit(self, count: int) -> Cursor:
        """Return at most ``count`` results (0 means no limit)."""
        ...

    @abstractmethod
    def to_list(self) -> list[Document]:
        """Drain the cursor."""
        ...

    @abstractmethod
    def __iter__(self) -> Iterator[Document]:
        """Drain the cursor and iterate the results."""
        ...


class AggregateCursor(Protocol):
    """Handle on a pipeline, evaluated when drained."""

    @abstractmethod
    def to_list(self) -> list[Document]:
        """Run the pipeline and return the final documents."""
        ...

    @abstractmethod
    def __iter__(self) -> Iterator[Document]:
        """Drain the cursor and iterate the results."""
        ...


class Collection(Protocol):
    """Protocol for a named collection of documents."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the collection name."""
        ...

    @abstractmethod
    def find_one(self, filter: FilterLike = None) -> Document | None:
        """Return the first matching document in insertion order, or None."""
        ...

    @abstractmethod
    def find(
        self,
        filter: FilterLike = None,
        projection: Mapping[str, int] | None = None,
    ) -> Cursor:
        """Filter now and return a cursor for deferred sort/skip/limit."""
        ...

    @abstractmethod
    def insert_one(self, document: Mapping[str, Any]) -> InsertOneResult:
        """Append a document, assigning an identity if it has none."""
        ...

    @abstractmethod
    def insert_many(self, documents: Sequence[Mapping[str, Any]]) -> InsertManyResult:
        """Append documents in order."""
        ...

    @abstractmethod
    def update_one(self, filter: FilterLike, update: Mapping[str, Any]) -> UpdateResult:
        """Apply ``$set`` and ``$inc`` to the first matching document."""
        ...

    @abstractmethod
    def update_many(self, filter: FilterLike, update: Mapping[str, Any]) -> UpdateResult:
        """Apply ``$set`` to every matching document. ``$inc`` is ignored."""
        ...

    @abstractmethod
    def delete_one(self, filter: FilterLike) -> DeleteResult:
        """Remove the first matching document."""
        ...

    @abstractmethod
    def delete_many(self, filter: FilterLike) -> DeleteResult:
        """Remove every matching document."""
        ...

    @abstractmethod
    def aggregate(self, pipeline: Sequence[Mapping[str, Any] | Stage]) -> AggregateCursor:
        """Return a handle that runs ``pipeline`` when drained."""
        ...

    @abstractmethod
    def count_documents(self, filter: FilterLike = None) -> int:
        """Count matching documents."""
        ...

    @abstractmethod
    def create_index(self, keys: Mapping[str, int]) -> str:
        """Accept an index definition and return its name. Builds nothing."""
        ...


class Store(Protocol):
    """Registry of named collections."""

    @abstractmethod
    def collection(self, name: str) -> Collection:
        """Return the named collection, creating it on first reference."""
        ...

    @abstractmethod
    def close(self) -> None:
        """Release store resources."""
        ...
