"""
Manager Registry - named ClassManagers for a whole process.

Lets the code that detects new implementations (file watchers, admin
endpoints, test harnesses) find the right manager by name.
"""
import logging
import threading
from typing import Optional

from hotclass.core.class_manager import ClassManager
from hotclass.core.config import HotclassSettings
from hotclass.domain.models import UpdateReport
from hotclass.observability import SwapMetricsCollector

logger = logging.getLogger(__name__)


class ManagerRegistry:
    """
    Registry of ClassManagers keyed by name.

    Example:
        >>> registry = ManagerRegistry()
        >>> registry.create("counter", ReloadProxy, Counter)
        >>> counter = registry.get("counter").create_instance(5)
        >>> registry.update("counter", FastCounter)
    """

    def __init__(
        self,
        settings: Optional[HotclassSettings] = None,
        metrics: Optional[SwapMetricsCollector] = None,
    ):
        self._managers: dict[str, ClassManager] = {}
        self._settings = settings
        self._metrics = metrics
        self._lock = threading.Lock()
        logger.info("[ManagerRegistry] Initialized")

    def create(
        self,
        name: str,
        proxy_type: Optional[type] = None,
        implement_class: Optional[type] = None,
    ) -> ClassManager:
        """
        Create and register a manager.

        Args:
            name: Manager name (e.g., "counter", "pricing_engine")
            proxy_type: Proxy type to probe; None for a plain manager
            implement_class: Initial implementation, installed right away
        """
        manager = ClassManager(proxy_type, settings=self._settings, metrics=self._metrics)
        if implement_class is not None:
            manager.update(implement_class)
        self.register(name, manager)
        return manager

    def register(self, name: str, manager: ClassManager) -> None:
        with self._lock:
            previous = self._managers.get(name)
            self._managers[name] = manager
        if previous is not None:
            logger.warning(f"[ManagerRegistry] Overwriting existing manager: {name}")
        logger.info(
            f"[ManagerRegistry] Registered: {name} "
            f"({'reloadable' if manager.is_reloadable() else 'plain'})"
        )

    def get(self, name: str) -> ClassManager:
        """
        Raises:
            KeyError: If no manager is registered under ``name``
        """
        with self._lock:
            manager = self._managers.get(name)
            available = list(self._managers)
        if manager is None:
            raise KeyError(
                f"[ManagerRegistry] Manager '{name}' not found. "
                f"Available: {available}"
            )
        return manager

    def update(self, name: str, new_class: type) -> UpdateReport:
        """Install ``new_class`` in the named manager."""
        return self.get(name).update(new_class)

    def list_managers(self) -> dict[str, Optional[str]]:
        """Manager name -> current implementation class name."""
        with self._lock:
            managers = dict(self._managers)
        result = {}
        for name, manager in managers.items():
            implement_class = manager.get_implement_class()
            result[name] = implement_class.__qualname__ if implement_class else None
        return result

    def unregister(self, name: str) -> None:
        with self._lock:
            manager = self._managers.pop(name, None)
        if manager is None:
            logger.warning(f"[ManagerRegistry] Cannot unregister: '{name}' not found")
        else:
            logger.info(f"[ManagerRegistry] Unregistered: {name}")

    def __contains__(self, name: str) -> bool:
        with self._lock:
            return name in self._managers

    def __len__(self) -> int:
        with self._lock:
            return len(self._managers)
