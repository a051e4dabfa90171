"""
Integration tests: hot swap under concurrent construction.

Real threads call create_instance() while the main thread keeps swapping
implementations. Readers must always see a class paired with its own
catalogue, and every proxy must end up on the last installed class.
"""
import threading
import time

from hotclass import ClassManager, ReloadProxy
from tests.mocks import Counter, FastCounter

WORKERS = 4
UPDATES = 50


class SlowCounter(Counter):
    pass


def _run_workers(target):
    stop = threading.Event()
    errors = []

    def loop():
        try:
            while not stop.is_set():
                target()
        except Exception as e:  # surfaced to the test below
            errors.append(e)
            stop.set()

    threads = [threading.Thread(target=loop, daemon=True) for _ in range(WORKERS)]
    for t in threads:
        t.start()
    return stop, threads, errors


class TestConcurrentHotSwap:

    def setup_method(self):
        self.manager = ClassManager(ReloadProxy)
        self.manager.update(Counter)

    def test_readers_never_see_torn_pair(self):
        """Class and catalogue are always read together."""
        manager = self.manager

        def check_pair():
            with manager._lock.read_locked():
                assert manager._constructors.implement_class is manager._implement_class

        stop, threads, errors = _run_workers(check_pair)
        for i in range(UPDATES):
            manager.update(SlowCounter if i % 2 == 0 else Counter)
        stop.set()
        for t in threads:
            t.join(timeout=5)

        assert errors == []

    def test_instances_created_during_swaps(self):
        """Every construction succeeds and yields one of the two classes."""
        manager = self.manager
        created = []
        lock = threading.Lock()

        def create():
            proxy = manager.create_instance(1)
            assert proxy is not None
            assert type(proxy.get_reload_target()) in (Counter, SlowCounter)
            with lock:
                if len(created) < 200:
                    created.append(proxy)

        stop, threads, errors = _run_workers(create)
        for _ in range(1000):
            if created or errors:
                break
            time.sleep(0.001)
        for i in range(UPDATES):
            manager.update(SlowCounter if i % 2 == 0 else Counter)
        stop.set()
        for t in threads:
            t.join(timeout=5)

        assert errors == []
        assert created

        # one final sweep with no concurrent writers settles every proxy
        report = manager.update(FastCounter)
        assert report.ok
        assert all(type(p.get_reload_target()) is FastCounter for p in created)

    def test_new_instances_after_update_use_new_class(self):
        """Once update() returns, no thread builds the previous class."""
        manager = self.manager
        manager.update(FastCounter)
        results = []

        def create():
            results.append(type(manager.create_instance(1).get_reload_target()))

        threads = [threading.Thread(target=create) for _ in range(WORKERS)]
        for t in threads:
            t.start()
        for t in threads:
            t.join(timeout=5)

        assert results == [FastCounter] * WORKERS
