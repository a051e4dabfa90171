"""
Fixtures compartidas para todos los tests.
"""
import pytest

from hotclass import ClassManager, HotclassSettings, ReloadProxy
from hotclass.observability import SwapMetricsCollector
from tests.mocks import Counter


# =============================================================================
# Settings / Metrics
# =============================================================================

@pytest.fixture
def test_settings():
    """Settings isolated from the process environment."""
    return HotclassSettings(_env_file=None, SWEEP_LOG_TRACEBACKS=False)


@pytest.fixture
def metrics():
    """Fresh metrics collector per test."""
    return SwapMetricsCollector()


# =============================================================================
# Managers
# =============================================================================

@pytest.fixture
def manager(test_settings, metrics):
    """Reloadable manager with Counter installed."""
    manager = ClassManager(ReloadProxy, settings=test_settings, metrics=metrics)
    manager.update(Counter)
    return manager


@pytest.fixture
def plain_manager(test_settings, metrics):
    """Manager without proxy support, nothing installed."""
    return ClassManager(settings=test_settings, metrics=metrics)
