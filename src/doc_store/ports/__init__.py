"""Ports layer - interface definitions following Hexagonal Architecture.

Inbound ports define the contract the benchmark harness programs against:
a store of named collections, each offering CRUD, find cursors and
aggregation. Adapters and the application layer implement them.
"""

from doc_store.ports.inbound import (
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
