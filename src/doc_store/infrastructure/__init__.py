"""Infrastructure layer - cross-cutting concerns."""

from doc_store.infrastructure.config import Config, get_config
from doc_store.infrastructure.container import Container, build_container
from doc_store.infrastructure.logging import setup_logging, get_logger
from doc_store.infrastructure.metrics import setup_metrics, get_metrics, MetricsRegistry
from doc_store.infrastructure.tracing import setup_tracing, get_tracer, trace_span

__all__ = [
    "Config",
    "get_config",
    "Container",
    "build_container",
    "setup_logging",
    "get_logger",
    "setup_metrics",
    "get_metrics",
    "MetricsRegistry",
    "setup_tracing",
    "get_tracer",
    "trace_span",
]
