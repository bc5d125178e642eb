"""Pytest configuration and fixtures for doc_store tests."""

from __future__ import annotations

import pytest
from prometheus_client import CollectorRegistry

from doc_store.application import DocumentStore, InMemoryCollection
from doc_store.infrastructure.config import Config, ObservabilityConfig, StoreConfig
from doc_store.infrastructure.metrics import MetricsRegistry


@pytest.fixture
def test_config() -> Config:
    """Provide a test configuration that starts no servers."""
    return Config(
        store=StoreConfig(id_format="uuid"),
        observability=ObservabilityConfig(log_level="DEBUG", metrics_enabled=False),
    )


@pytest.fixture
def metrics_registry() -> MetricsRegistry:
    """Provide a fresh metrics registry for each test."""
    # Use a separate registry to avoid conflicts between tests
    registry = CollectorRegistry(auto_describe=True)
    return MetricsRegistry(registry=registry)


@pytest.fixture
def store() -> DocumentStore:
    """Provide an empty store."""
    return DocumentStore()


@pytest.fixture
def collection(store: DocumentStore) -> InMemoryCollection:
    """Provide an empty collection named 'items'."""
    return store.collection("items")


# Markers for test categories
def pytest_configure(config: pytest.Config) -> None:
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated)")
    config.addinivalue_line("markers", "integration: Integration tests")
