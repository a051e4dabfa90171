"""
Unit Tests for the forwarding ReloadProxy.
"""
import pytest

from hotclass import ReloadProxy, ReloadableProxy
from tests.mocks import Counter


class TestReloadProxy:

    def test_satisfies_contract(self):
        assert issubclass(ReloadProxy, ReloadableProxy)
        assert isinstance(ReloadProxy(), ReloadableProxy)

    def test_forwards_attributes_and_methods(self):
        proxy = ReloadProxy(Counter(5))

        assert proxy.value == 5
        assert proxy.increment() == 6

    def test_setattr_and_delattr_reach_target(self):
        target = Counter()
        proxy = ReloadProxy(target)

        proxy.label = "hits"
        assert target.label == "hits"

        del proxy.label
        assert not hasattr(target, "label")

    def test_retarget(self):
        proxy = ReloadProxy(Counter(1))
        replacement = Counter(10)

        proxy.set_reload_target(replacement)

        assert proxy.get_reload_target() is replacement
        assert proxy.value == 10

    def test_container_protocols(self):
        proxy = ReloadProxy([1, 2, 3])

        assert len(proxy) == 3
        assert list(proxy) == [1, 2, 3]
        assert proxy[0] == 1
        assert 2 in proxy

    def test_truth_follows_target(self):
        """Targets without __len__ are truthy; falsy targets stay falsy."""
        proxy = ReloadProxy(Counter(5))

        assert bool(proxy) is True
        assert (proxy or None) is proxy

        proxy.set_reload_target([])
        assert not proxy

    def test_call_repr_str(self):
        proxy = ReloadProxy(lambda x: x * 2)
        assert proxy(4) == 8

        proxy.set_reload_target(7)
        assert str(proxy) == "7"
        assert repr(proxy) == "<ReloadProxy -> 7>"

    def test_missing_attribute(self):
        with pytest.raises(AttributeError):
            ReloadProxy(Counter()).missing
