"""Document store - registry of named collections.

Usage:
    from doc_store.application import DocumentStore

    store = DocumentStore()
    orders = store.collection("orders")
    orders.insert_many([{"status": "paid", "total": 12.5}, {"status": "open", "total": 3}])

    orders.find({"status": "paid"}).sort({"total": -1}).limit(10).to_list()
    orders.aggregate([{"$group": {"_id": "$status", "count": {"$sum": 1}}}]).to_list()
"""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING

from doc_store.application.collection import InMemoryCollection
from doc_store.domain.value_objects import Document, IdFormat
from doc_store.infrastructure.logging import get_logger

if TYPE_CHECKING:
    from doc_store.infrastructure.metrics import MetricsRegistry

logger = get_logger(__name__)


class DocumentStore:
    """Owns the name to collection registry.

    Collections are created on first reference and live as long as the
    store. Resetting data between runs is the caller's job
    (``collection(name).delete_many({})``).
    """

    def __init__(
        self,
        id_format: IdFormat = "uuid",
        metrics: MetricsRegistry | None = None,
    ) -> None:
        """Initialize an empty store.

        Args:
            id_format: Format of identities assigned on insert.
            metrics: Optional metrics registry shared by all collections.
        """
        self._id_format = id_format
        self._metrics = metrics
        self._collections: dict[str, InMemoryCollection] = {}
        self._lock = threading.Lock()

    def collection(self, name: str) -> InMemoryCollection:
        """Return the named collection, creating it if unseen."""
        existing = self._collections.get(name)
        if existing is not None:
            return existing

        with self._lock:
            if name not in self._collections:
                self._collections[name] = InMemoryCollection(
                    name,
                    id_format=self._id_format,
                    foreign_resolver=self._foreign_documents,
                    metrics=self._metrics,
                )
                if self._metrics is not None:
                    self._metrics.collections.set(len(self._collections))
                logger.debug("collection_created", collection=name)
            return self._collections[name]

    def close(self) -> None:
        """Nothing to release; present for driver compatibility."""
        logger.debug("store_closed", collections=len(self._collections))

    def _foreign_documents(self, name: str) -> list[Document]:
        # A $lookup never creates its target collection
        target = self._collections.get(name)
        if target is None:
            return []
        return target.snapshot()
