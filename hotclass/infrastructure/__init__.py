"""Infrastructure layer exports."""

from .di_container import (
    container,
    get_class_manager,
    get_manager_registry,
    get_metrics,
    override_settings,
    reset_overrides,
)
from .manager_registry import ManagerRegistry

__all__ = [
    "container",
    "get_class_manager",
    "get_manager_registry",
    "get_metrics",
    "override_settings",
    "reset_overrides",
    "ManagerRegistry",
]
