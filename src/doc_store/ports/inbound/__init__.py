"""Inbound ports - API contracts for the document store."""

from doc_store.ports.inbound.collection import (
    AggregateCursor,
    Collection,
    Cursor,
    DeleteResult,
    Store,
    InsertManyResult,
    InsertOneResult,
    UpdateResult,
)

__all__ = [
    "AggregateCursor",
    "Collection",
    "Cursor",
    "Store",
    "DeleteResult",
    "InsertManyResult",
    "InsertOneResult",
    "UpdateResult",
]
