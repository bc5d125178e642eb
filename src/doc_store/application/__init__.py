"""Application layer for the document store.

Exports:
    - DocumentStore: Registry of named collections, the main entry point
    - InMemoryCollection: CRUD, find and aggregate over one collection
    - FindCursor: Deferred sort/skip/limit over find results
    - PipelineCursor: Deferred aggregation pipeline
"""

from doc_store.application.collection import InMemoryCollection
from doc_store.application.cursor import FindCursor, PipelineCursor
from doc_store.application.store import DocumentStore

__all__ = [
    "DocumentStore",
    "InMemoryCollection",
    "FindCursor",
    "PipelineCursor",
]
