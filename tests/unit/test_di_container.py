"""Unit tests for DI Container."""
from hotclass import ClassManager, HotclassSettings, ReloadProxy
from hotclass.infrastructure import (
    container,
    get_class_manager,
    get_manager_registry,
    get_metrics,
    override_settings,
    reset_overrides,
)
from tests.mocks import Counter


def teardown_function():
    reset_overrides()


def test_container_exists():
    """Test that container instance exists."""
    assert container is not None


def test_class_manager_is_factory():
    """Each call builds a new manager."""
    first = get_class_manager(ReloadProxy)
    second = get_class_manager(ReloadProxy)

    assert isinstance(first, ClassManager)
    assert first is not second
    assert first.is_reloadable()


def test_plain_manager_by_default():
    assert not get_class_manager().is_reloadable()


def test_manager_registry_is_singleton():
    assert get_manager_registry() is get_manager_registry()


def test_managers_share_container_metrics():
    manager = get_class_manager()
    manager.update(Counter)

    assert get_metrics().get_stats()['updates'] >= 1


def test_override_settings():
    """Overridden settings reach newly built managers."""
    override_settings(HotclassSettings(_env_file=None, METRICS_ENABLED=False))
    metrics = get_metrics()
    before = metrics.get_stats()['updates']

    manager = get_class_manager()
    manager.update(Counter)

    assert metrics.get_stats()['updates'] == before


def test_reset_overrides_restores_settings():
    override_settings(HotclassSettings(_env_file=None, LOG_LEVEL="DEBUG"))
    assert container.settings().LOG_LEVEL == "DEBUG"

    reset_overrides()

    assert container.settings() is not None
    assert get_manager_registry() is get_manager_registry()
