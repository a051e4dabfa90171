"""
Sweep Report - value objects returned by ClassManager.update().
"""
from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass(frozen=True)
class SwapFailure:
    """One proxy whose backing object could not be replaced."""
    proxy_id: int
    args: tuple
    stage: str  # "read", "construct", "merge", "install"
    error: str
    exception: Optional[BaseException] = field(default=None, compare=False, repr=False)


@dataclass
class UpdateReport:
    """Outcome of a single update() call."""
    implement_class: type
    previous_class: Optional[type] = None
    reloadable: bool = False
    swapped: int = 0
    failures: list[SwapFailure] = field(default_factory=list)
    duration_ms: float = 0.0

    @property
    def ok(self) -> bool:
        return not self.failures

    @property
    def visited(self) -> int:
        return self.swapped + len(self.failures)

    def to_dict(self) -> dict[str, Any]:
        """Export report as dict."""
        return {
            'implement_class': self.implement_class.__qualname__,
            'previous_class': self.previous_class.__qualname__ if self.previous_class else None,
            'reloadable': self.reloadable,
            'swapped': self.swapped,
            'failed': len(self.failures),
            'failures': [
                {'proxy_id': f.proxy_id, 'stage': f.stage, 'error': f.error}
                for f in self.failures
            ],
            'duration_ms': round(self.duration_ms, 2),
        }
