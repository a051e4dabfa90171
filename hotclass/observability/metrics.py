"""
Swap Metrics Collection.

Centralized counters for instance creation and hot-swap sweeps across all
class managers of the process.
"""
import logging
import threading
import time
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)


@dataclass
class UpdateMetrics:
    """Timing and outcome of one update() call."""
    implement_class: str
    swapped: int = 0
    failed: int = 0
    duration_ms: float = 0.0

    # Timestamps
    created_at: float = field(default_factory=time.time)

    def to_dict(self) -> dict:
        """Export metrics as dict."""
        return {
            'implement_class': self.implement_class,
            'swapped': self.swapped,
            'failed': self.failed,
            'duration_ms': round(self.duration_ms, 2),
            'created_at': self.created_at,
        }


class SwapMetricsCollector:
    """
    Thread-safe metrics collection for class managers.

    Keeps global counters plus the most recent updates (bounded).
    """

    def __init__(self, max_updates: int = 100):
        """
        Initialize metrics collector.

        Args:
            max_updates: Maximum number of update records to keep in memory
        """
        self._updates: list[UpdateMetrics] = []
        self._max_updates = max_updates
        self._lock = threading.Lock()

        # Global stats
        self._stats = {
            'instances_created': 0,
            'creation_misses': 0,
            'updates': 0,
            'proxies_swapped': 0,
            'swap_failures': 0,
        }

    def record_creation(self, created: bool) -> None:
        with self._lock:
            if created:
                self._stats['instances_created'] += 1
            else:
                self._stats['creation_misses'] += 1

    def record_update(self, implement_class: str, swapped: int, failed: int, duration_ms: float) -> None:
        """
        Record the outcome of one update sweep.

        Args:
            implement_class: Name of the newly installed implementation
            swapped: Proxies that received a new target
            failed: Proxies whose swap failed
            duration_ms: Wall time of the whole update() call
        """
        metrics = UpdateMetrics(
            implement_class=implement_class,
            swapped=swapped,
            failed=failed,
            duration_ms=duration_ms,
        )
        with self._lock:
            self._stats['updates'] += 1
            self._stats['proxies_swapped'] += swapped
            self._stats['swap_failures'] += failed
            self._updates.append(metrics)
            if len(self._updates) > self._max_updates:
                self._updates.pop(0)

        if failed:
            logger.warning(
                f"📊 [Metrics] update({implement_class}) swapped={swapped} "
                f"failed={failed} duration={duration_ms:.2f}ms"
            )
        else:
            logger.debug(
                f"📊 [Metrics] update({implement_class}) swapped={swapped} "
                f"duration={duration_ms:.2f}ms"
            )

    def get_stats(self) -> dict:
        """Global counters plus the last update duration."""
        with self._lock:
            stats = dict(self._stats)
            last = self._updates[-1] if self._updates else None
        stats['last_update_ms'] = round(last.duration_ms, 2) if last else None
        return stats

    def get_recent_updates(self, limit: int = 10) -> list[dict]:
        with self._lock:
            recent = self._updates[-limit:] if limit > 0 else []
        return [m.to_dict() for m in recent]

    def reset(self) -> None:
        with self._lock:
            self._updates.clear()
            for key in self._stats:
                self._stats[key] = 0


# Global metrics collector instance
_collector = SwapMetricsCollector()


def get_swap_metrics() -> SwapMetricsCollector:
    """Get global swap metrics collector."""
    return _collector
