"""Asynchronous calling convention for the in-memory store.

Benchmark workloads are written against async drivers. This adapter lets
the in-memory store be driven by the same code: every result is awaitable,
but evaluation is synchronous and never yields to the event loop while an
operation runs.

Usage:
    store = AsyncDocumentStore()
    users = store.collection("users")
    await users.insert_one({"name": "Alice"})
    docs = await users.find({}).sort({"name": 1}).limit(10).to_list()
"""

from __future__ import annotations

from typing import Any, Mapping, Sequence

from doc_store.application import DocumentStore, FindCursor, InMemoryCollection, PipelineCursor
from doc_store.domain.entities import FilterLike, Stage, UpdateSpec
from doc_store.domain.value_objects import Document
from doc_store.ports.inbound import DeleteResult, InsertManyResult, InsertOneResult, UpdateResult


class AsyncCursor:
    """Wraps a find or aggregate cursor; only draining is awaitable."""

    def __init__(self, cursor: FindCursor | PipelineCursor) -> None:
        self._cursor = cursor

    def sort(self, spec: Mapping[str, int]) -> AsyncCursor:
        if not isinstance(self._cursor, FindCursor):
            raise TypeError("aggregate cursors cannot be sorted; use a $sort stage")
        self._cursor.sort(spec)
        return self

    def skip(self, count: int) -> AsyncCursor:
        if not isinstance(self._cursor, FindCursor):
            raise TypeError("aggregate cursors cannot be skipped; use a $skip stage")
        self._cursor.skip(count)
        return self

    def limit(self, count: int) -> AsyncCursor:
        if not isinstance(self._cursor, FindCursor):
            raise TypeError("aggregate cursors cannot be limited; use a $limit stage")
        self._cursor.limit(count)
        return self

    async def to_list(self) -> list[Document]:
        return self._cursor.to_list()


class AsyncCollection:
    """Awaitable facade over an :class:`InMemoryCollection`."""

    def __init__(self, collection: InMemoryCollection) -> None:
        self._collection = collection

    @property
    def name(self) -> str:
        return self._collection.name

    async def find_one(self, filter: FilterLike = None) -> Document | None:
        return self._collection.find_one(filter)

    def find(
        self,
        filter: FilterLike = None,
        projection: Mapping[str, int] | None = None,
    ) -> AsyncCursor:
        return AsyncCursor(self._collection.find(filter, projection))

    async def insert_one(self, document: Mapping[str, Any]) -> InsertOneResult:
        return self._collection.insert_one(document)

    async def insert_many(self, documents: Sequence[Mapping[str, Any]]) -> InsertManyResult:
        return self._collection.insert_many(documents)

    async def update_one(
        self, filter: FilterLike, update: Mapping[str, Any] | UpdateSpec
    ) -> UpdateResult:
        return self._collection.update_one(filter, update)

    async def update_many(
        self, filter: FilterLike, update: Mapping[str, Any] | UpdateSpec
    ) -> UpdateResult:
        return self._collection.update_many(filter, update)

    async def delete_one(self, filter: FilterLike) -> DeleteResult:
        return self._collection.delete_one(filter)

    async def delete_many(self, filter: FilterLike) -> DeleteResult:
        return self._collection.delete_many(filter)

    def aggregate(self, pipeline: Sequence[Mapping[str, Any] | Stage]) -> AsyncCursor:
        return AsyncCursor(self._collection.aggregate(pipeline))

    async def count_documents(self, filter: FilterLike = None) -> int:
        return self._collection.count_documents(filter)

    async def create_index(self, keys: Mapping[str, int]) -> str:
        return self._collection.create_index(keys)


class AsyncDocumentStore:
    """Awaitable facade over a :class:`DocumentStore`."""

    def __init__(self, store: DocumentStore | None = None) -> None:
        self._store = store or DocumentStore()
        self._collections: dict[str, AsyncCollection] = {}

    @property
    def store(self) -> DocumentStore:
        return self._store

    def collection(self, name: str) -> AsyncCollection:
        if name not in self._collections:
            self._collections[name] = AsyncCollection(self._store.collection(name))
        return self._collections[name]

    async def close(self) -> None:
        self._store.close()
