"""Inbound adapters for the document store.

Exports:
    Async API:
        - AsyncDocumentStore: Awaitable facade over DocumentStore
        - AsyncCollection: Awaitable facade over a collection
        - AsyncCursor: Chainable cursor with an awaitable ``to_list``
"""

from doc_store.adapters.inbound.async_api import (
    AsyncCollection,
    AsyncCursor,
    AsyncDocumentStore,
)

__all__ = [
    "AsyncDocumentStore",
    "AsyncCollection",
    "AsyncCursor",
]
