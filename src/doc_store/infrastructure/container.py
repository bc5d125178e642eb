"""Dependency injection container."""

from __future__ import annotations

from typing import Any, Callable, TypeVar

from doc_store.infrastructure.config import Config

T = TypeVar("T")


class Container:
    """
    Simple dependency injection container.

    Supports singleton and factory registrations with lazy initialization.
    """

    def __init__(self) -> None:
        """Initialize the container."""
        self._instances: dict[type, Any] = {}
        self._factories: dict[type, Callable[[Container], Any]] = {}

    def register_singleton(self, interface: type[T], instance: T) -> None:
        """Register an already-built instance."""
        self._instances[interface] = instance

    def register_factory(
        self,
        interface: type[T],
        factory: Callable[[Container], T],
    ) -> None:
        """
        Register a factory function for lazy instantiation.

        The factory runs on first resolve; its result is cached.

        Args:
            interface: The interface/type to register
            factory: Factory function that takes the container and returns an instance
        """
        self._factories[interface] = factory

    def resolve(self, interface: type[T]) -> T:
        """
        Resolve a dependency.

        Args:
            interface: The interface/type to resolve

        Returns:
            The resolved instance

        Raises:
            KeyError: If no registration exists for the interface
        """
        if interface in self._instances:
            return self._instances[interface]

        if interface in self._factories:
            instance = self._factories[interface](self)
            self._instances[interface] = instance
            return instance

        raise KeyError(f"No registration found for {interface}")

    def has(self, interface: type) -> bool:
        """Check if an interface is registered."""
        return interface in self._instances or interface in self._factories

    def clear(self) -> None:
        """Clear all registrations and instances."""
        self._instances.clear()
        self._factories.clear()


def build_container(
    config: Config | None = None,
    configure_observability: bool = False,
) -> Container:
    """
    Wire the store and its cross-cutting dependencies.

    Registers ``Config``, ``MetricsRegistry`` and ``DocumentStore``. The
    metrics endpoint is only started when ``observability.metrics_enabled``.

    Args:
        config: Configuration to use; defaults to ``get_config()``
        configure_observability: Also set up logging and tracing from config

    Returns:
        A container ready to resolve a ``DocumentStore``
    """
    from doc_store.application.store import DocumentStore
    from doc_store.infrastructure.config import get_config
    from doc_store.infrastructure.metrics import MetricsRegistry, get_metrics, setup_metrics

    config = config or get_config()
    container = Container()
    container.register_singleton(Config, config)

    if configure_observability:
        from doc_store.infrastructure.logging import setup_logging
        from doc_store.infrastructure.tracing import setup_tracing

        observability = config.observability
        setup_logging(observability.log_level, observability.log_format)
        setup_tracing(observability.otel_service_name, observability.otel_endpoint)

    def make_metrics(c: Container) -> MetricsRegistry:
        observability = c.resolve(Config).observability
        if observability.metrics_enabled:
            return setup_metrics(port=observability.metrics_port)
        return get_metrics()

    def make_store(c: Container) -> DocumentStore:
        return DocumentStore(
            id_format=c.resolve(Config).store.id_format,
            metrics=c.resolve(MetricsRegistry),
        )

    container.register_factory(MetricsRegistry, make_metrics)
    container.register_factory(DocumentStore, make_store)
    return container
