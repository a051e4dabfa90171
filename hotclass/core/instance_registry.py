"""
Instance Registry - live proxies and the arguments that built their targets.

Entries hold proxies weakly. When a proxy is collected its weakref
callback only queues the key; the queue is drained lazily by the next
registry operation, so nothing is mutated from inside the collector.
"""
import logging
import threading
import weakref
from collections import deque
from typing import Any

logger = logging.getLogger(__name__)


class InstanceRegistry:
    """
    Proxy identity -> (weakref to proxy, construction args).

    Example:
        >>> registry = InstanceRegistry()
        >>> registry.register(proxy, (5,))
        >>> for proxy, args in registry.snapshot():
        ...     ...
    """

    def __init__(self):
        self._entries: dict[int, tuple[weakref.ref, tuple]] = {}
        self._pending: deque[int] = deque()
        self._lock = threading.Lock()

        def _on_collected(ref, selfref=weakref.ref(self)):
            registry = selfref()
            if registry is not None:
                registry._pending.append(ref.key)

        self._on_collected = _on_collected

    def register(self, proxy: Any, args: tuple) -> None:
        key = id(proxy)
        ref = weakref.KeyedRef(proxy, self._on_collected, key)
        with self._lock:
            self._purge()
            self._entries[key] = (ref, tuple(args))
        logger.debug(f"[InstanceRegistry] Registered proxy {key:#x} args={args!r}")

    def discard(self, proxy: Any) -> bool:
        """Forget ``proxy``; returns False if it was not registered."""
        key = id(proxy)
        with self._lock:
            self._purge()
            entry = self._entries.get(key)
            if entry is None or entry[0]() is not proxy:
                return False
            del self._entries[key]
        return True

    def args_for(self, proxy: Any) -> tuple | None:
        with self._lock:
            entry = self._entries.get(id(proxy))
        if entry is None or entry[0]() is not proxy:
            return None
        return entry[1]

    def snapshot(self) -> list[tuple[Any, tuple]]:
        """
        Strong references to every live proxy with its args.

        Proxies registered after the snapshot is taken are not included.
        """
        with self._lock:
            self._purge()
            entries = list(self._entries.values())
        live = []
        for ref, args in entries:
            proxy = ref()
            if proxy is not None:
                live.append((proxy, args))
        return live

    def compact(self) -> int:
        """Drop entries whose proxies are gone; returns how many were removed."""
        with self._lock:
            removed = self._purge()
            dead = [key for key, (ref, _) in self._entries.items() if ref() is None]
            for key in dead:
                del self._entries[key]
        removed += len(dead)
        if removed:
            logger.debug(f"[InstanceRegistry] Compacted {removed} dead entries")
        return removed

    def _purge(self) -> int:
        # Caller holds self._lock
        removed = 0
        while self._pending:
            key = self._pending.popleft()
            entry = self._entries.get(key)
            # the id may already belong to a newer proxy
            if entry is not None and entry[0]() is None:
                del self._entries[key]
                removed += 1
        return removed

    def __len__(self) -> int:
        with self._lock:
            self._purge()
            return sum(1 for ref, _ in self._entries.values() if ref() is not None)

    def __contains__(self, proxy: Any) -> bool:
        return self.args_for(proxy) is not None
