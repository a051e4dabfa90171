"""
ClassManager - swaps the implementation behind live proxies.

Callers hold proxies; the manager owns the current implementation class
and its constructor catalogue. update() installs a new class under the
write lock and then, outside the lock, rebuilds the backing object of
every registered proxy and carries the old object's state over.
"""
import logging
import time
from typing import Any, Optional

from hotclass.core.capability_probe import ProxyCapability, probe_proxy_type
from hotclass.core.catalogue import ConstructorCatalogue, collect_constructors
from hotclass.core.config import HotclassSettings, settings as default_settings
from hotclass.core.exceptions import ConstructionError
from hotclass.core.instance_registry import InstanceRegistry
from hotclass.core.rwlock import ReadWriteLock
from hotclass.domain.models import SwapFailure, UpdateReport
from hotclass.domain.ports import StateTransfer
from hotclass.observability import SwapMetricsCollector, get_swap_metrics
from hotclass.utils.reflect import ConstructorDescriptor, invoke_constructor, merge_object

logger = logging.getLogger(__name__)


def transfer_state(previous: Any, current: Any) -> None:
    """Carry state from ``previous`` into ``current``."""
    if isinstance(current, StateTransfer):
        current.transfer_state(previous)
    else:
        merge_object(previous, current)


class ClassManager:
    """
    Manager for one swappable implementation.

    The mode is decided once, at construction:
    - plain: no usable proxy type; create_instance() returns bare objects
      and update() only affects future constructions.
    - reloadable: create_instance() returns tracked proxies and update()
      re-targets every live one.

    Example:
        >>> manager = ClassManager(ReloadProxy)
        >>> manager.update(Counter)
        >>> counter = manager.create_instance(5)
        >>> manager.update(FastCounter)   # counter now backed by FastCounter
    """

    def __init__(
        self,
        proxy_type: Optional[type] = None,
        *,
        settings: Optional[HotclassSettings] = None,
        metrics: Optional[SwapMetricsCollector] = None,
    ):
        self._settings = settings or default_settings
        self._metrics = metrics or get_swap_metrics()
        self._lock = ReadWriteLock()
        self._implement_class: Optional[type] = None
        self._constructors: Optional[ConstructorCatalogue] = None
        self._generation = 0  # bumped with every committed update

        self._capability: Optional[ProxyCapability] = None
        if proxy_type is not None:
            self._capability = probe_proxy_type(proxy_type)
        self._registry: Optional[InstanceRegistry] = InstanceRegistry() if self._capability else None

        mode = "reloadable" if self._capability else "plain"
        logger.info(f"[ClassManager] Initialized ({mode})")

    # -------------------------------------------------------------------------
    # Introspection
    # -------------------------------------------------------------------------

    def is_reloadable(self) -> bool:
        return self._capability is not None

    def get_proxy_class(self) -> Optional[type]:
        return self._capability.proxy_type if self._capability else None

    def get_implement_class(self) -> Optional[type]:
        with self._lock.read_locked():
            return self._implement_class

    def get_catalogue(self) -> Optional[ConstructorCatalogue]:
        with self._lock.read_locked():
            return self._constructors

    def live_instance_count(self) -> int:
        """Registered proxies still alive (0 in plain mode)."""
        return len(self._registry) if self._registry is not None else 0

    def forget(self, proxy: Any) -> bool:
        """Stop re-targeting ``proxy`` on future updates."""
        if self._registry is None:
            return False
        return self._registry.discard(proxy)

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    def match_constructor(self, *args: Any) -> Optional[ConstructorDescriptor]:
        """
        Constructor of the current implementation that ``args`` would use.

        Returns None when no implementation is installed or nothing matches.
        """
        with self._lock.read_locked():
            catalogue = self._constructors
        if catalogue is None:
            return None
        return catalogue.match(args)

    def _current_generation(self) -> int:
        with self._lock.read_locked():
            return self._generation

    def _build_target(self, args: tuple) -> tuple[Any, int]:
        """
        Build a bare backing object of the current implementation.

        Returns:
            The object and the update generation its class was read at

        Raises:
            ConstructionError: nothing installed, no match, or constructor failure
        """
        with self._lock.read_locked():
            implement_class = self._implement_class
            catalogue = self._constructors
            generation = self._generation

        if implement_class is None or catalogue is None:
            raise ConstructionError("<unset>", "no implementation class installed")

        descriptor = catalogue.match(args)
        if descriptor is None:
            raise ConstructionError(
                implement_class.__qualname__,
                f"no constructor accepts {[type(a).__name__ for a in args]}",
            )
        logger.debug(f"[ClassManager] {implement_class.__qualname__} via {descriptor!r}")
        return invoke_constructor(descriptor, args), generation

    def create_instance(self, *args: Any) -> Any:
        """
        Build a new instance of the current implementation.

        In reloadable mode the backing object is wrapped in a new proxy and
        the proxy is tracked so future update() calls re-target it. If an
        update commits while the object is being built, the proxy is
        re-targeted here before it is returned.

        Returns:
            The proxy (reloadable) or the bare object (plain), or None if no
            implementation is installed or the object cannot be built.
        """
        logger.debug(f"[ClassManager] create_instance{args!r}")
        try:
            target, generation = self._build_target(args)
            instance = self._capability.wrap(target) if self._capability else target
        except ConstructionError as e:
            logger.warning(f"[ClassManager] create_instance{args!r} -> None ({e.message})")
            self._record_creation(False)
            return None

        if self._registry is not None:
            self._registry.register(instance, args)
            # a sweep that snapshotted before register() has missed this proxy
            current = self._current_generation()
            while current != generation:
                logger.debug(f"[ClassManager] create_instance{args!r} raced an update, re-targeting")
                generation = current
                self._swap(instance, args)
                current = self._current_generation()
        self._record_creation(True)
        return instance

    # -------------------------------------------------------------------------
    # Hot swap
    # -------------------------------------------------------------------------

    def update(self, new_class: type) -> UpdateReport:
        """
        Install ``new_class`` and re-target every live proxy.

        The class/catalogue pair is swapped under the write lock. The sweep
        runs unlocked afterwards; a proxy whose swap fails keeps its old
        target and is listed in the returned report.

        Raises:
            TypeError: ``new_class`` is not a class (nothing is committed)
        """
        if not isinstance(new_class, type):
            raise TypeError(f"update() expects a class, got {new_class!r}")

        started = time.perf_counter()
        name = new_class.__qualname__
        logger.debug(f"[ClassManager] update({name})")
        catalogue = collect_constructors(new_class)

        with self._lock.write_locked():
            previous = self._implement_class
            self._implement_class = new_class
            self._constructors = catalogue
            self._generation += 1

        report = UpdateReport(
            implement_class=new_class,
            previous_class=previous,
            reloadable=self.is_reloadable(),
        )
        previous_name = previous.__qualname__ if previous else None
        logger.info(f"[ClassManager] 🔄 Implementation {previous_name} → {name}")

        if self._registry is not None:
            entries = self._registry.snapshot()
            logger.debug(f"[ClassManager] update({name}) -> sweeping {len(entries)} proxies")
            for proxy, args in entries:
                failure = self._swap(proxy, args)
                if failure is None:
                    report.swapped += 1
                else:
                    report.failures.append(failure)
            del entries
            logger.debug(f"[ClassManager] update({name}) -> sweep done")

        report.duration_ms = (time.perf_counter() - started) * 1000
        if self._settings.METRICS_ENABLED:
            self._metrics.record_update(name, report.swapped, len(report.failures), report.duration_ms)
        return report

    def _swap(self, proxy: Any, args: tuple) -> Optional[SwapFailure]:
        stage = "read"
        try:
            old_target = self._capability.read(proxy)
            stage = "construct"
            new_target, _ = self._build_target(args)
            stage = "merge"
            if old_target is not None:
                transfer_state(old_target, new_target)
            stage = "install"
            self._capability.write(proxy, new_target)
        except Exception as e:
            logger.error(
                f"[ClassManager] Swap failed for proxy {id(proxy):#x} at {stage}: {e}",
                exc_info=self._settings.SWEEP_LOG_TRACEBACKS,
            )
            return SwapFailure(
                proxy_id=id(proxy),
                args=args,
                stage=stage,
                error=f"{type(e).__name__}: {e}",
                exception=e,
            )
        return None

    def _record_creation(self, created: bool) -> None:
        if self._settings.METRICS_ENABLED:
            self._metrics.record_creation(created)
