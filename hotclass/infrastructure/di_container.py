"""
DI Container - wiring for settings, metrics and managers.

Applications take managers from here instead of building them by hand, so
tests can swap settings or metrics in one place.
"""
import logging
from typing import Optional

from dependency_injector import containers, providers

from hotclass.core.class_manager import ClassManager
from hotclass.core.config import HotclassSettings
from hotclass.infrastructure.manager_registry import ManagerRegistry
from hotclass.observability import SwapMetricsCollector

logger = logging.getLogger(__name__)


class Container(containers.DeclarativeContainer):
    """Dependency injection container for hotclass."""

    settings = providers.Singleton(HotclassSettings)

    metrics = providers.Singleton(SwapMetricsCollector)

    # New manager per call
    class_manager = providers.Factory(
        ClassManager,
        settings=settings,
        metrics=metrics,
    )

    manager_registry = providers.Singleton(
        ManagerRegistry,
        settings=settings,
        metrics=metrics,
    )


# Global container instance
container = Container()


def get_class_manager(proxy_type: Optional[type] = None) -> ClassManager:
    """
    Factory para obtener un ClassManager.

    Args:
        proxy_type: Proxy type to probe; None for a plain manager

    Returns:
        New ClassManager sharing the container's settings and metrics
    """
    return container.class_manager(proxy_type)


def get_manager_registry() -> ManagerRegistry:
    """Process-wide ManagerRegistry (singleton)."""
    return container.manager_registry()


def get_metrics() -> SwapMetricsCollector:
    return container.metrics()


# Convenience functions for testing/mocking
def override_settings(settings: HotclassSettings):
    """Override settings (for testing)."""
    container.settings.override(providers.Object(settings))


def reset_overrides():
    """Reset all overrides and singletons."""
    container.reset_singletons()
    container.settings.reset_override()
    logger.debug("[DI Container] Overrides and singletons reset")
