"""Prometheus metrics for the document store."""

from __future__ import annotations

from prometheus_client import (
    Counter,
    Gauge,
    Histogram,
    Info,
    start_http_server,
    REGISTRY,
    CollectorRegistry,
)


class MetricsRegistry:
    """Registry of all document store metrics."""

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        """Initialize metrics registry."""
        self._registry = registry or REGISTRY

        # Operation metrics
        self.operations_total = Counter(
            "docstore_operations_total",
            "Total number of collection operations",
            ["collection", "operation"],  # find_one, insert_many, aggregate, ...
            registry=self._registry,
        )

        self.operation_latency_seconds = Histogram(
            "docstore_operation_latency_seconds",
            "Collection operation latency in seconds",
            ["operation"],
            buckets=(0.00001, 0.0001, 0.0005, 0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0),
            registry=self._registry,
        )

        # Write metrics
        self.documents_written_total = Counter(
            "docstore_documents_written_total",
            "Total documents touched by writes",
            ["collection", "kind"],  # inserted, modified, deleted
            registry=self._registry,
        )

        # Aggregation metrics
        self.pipeline_stages_total = Counter(
            "docstore_pipeline_stages_total",
            "Total aggregation stages executed",
            ["stage"],
            registry=self._registry,
        )

        # Registry metrics
        self.collections = Gauge(
            "docstore_collections",
            "Number of collections in the store",
            registry=self._registry,
        )

        self.info = Info(
            "docstore",
            "Document store information",
            registry=self._registry,
        )

    @property
    def registry(self) -> CollectorRegistry:
        """The underlying Prometheus collector registry."""
        return self._registry


# Global metrics registry
_metrics: MetricsRegistry | None = None


def setup_metrics(port: int = 8001, registry: CollectorRegistry | None = None) -> MetricsRegistry:
    """
    Set up Prometheus metrics server.

    Args:
        port: Port for the metrics HTTP server
        registry: Optional custom registry

    Returns:
        The metrics registry
    """
    global _metrics
    _metrics = MetricsRegistry(registry)

    from doc_store import __version__
    _metrics.info.info({
        "version": __version__,
    })

    start_http_server(port, registry=registry or REGISTRY)

    return _metrics


def get_metrics() -> MetricsRegistry:
    """Get the global metrics registry."""
    global _metrics
    if _metrics is None:
        _metrics = MetricsRegistry()
    return _metrics
