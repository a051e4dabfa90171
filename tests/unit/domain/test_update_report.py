"""Unit tests for UpdateReport / SwapFailure value objects."""
from hotclass import SwapFailure, UpdateReport
from tests.mocks import Counter, FastCounter


def test_empty_report_is_ok():
    report = UpdateReport(implement_class=Counter)
    assert report.ok
    assert report.visited == 0


def test_failures_make_report_not_ok():
    report = UpdateReport(implement_class=FastCounter, previous_class=Counter, reloadable=True)
    report.swapped = 2
    report.failures.append(SwapFailure(proxy_id=1, args=(0,), stage="merge", error="MergeError: x"))

    assert not report.ok
    assert report.visited == 3


def test_to_dict():
    report = UpdateReport(implement_class=FastCounter, previous_class=Counter, duration_ms=3.14159)
    report.failures.append(SwapFailure(proxy_id=7, args=(), stage="construct", error="boom"))

    data = report.to_dict()

    assert data['implement_class'] == "FastCounter"
    assert data['previous_class'] == "Counter"
    assert data['failed'] == 1
    assert data['failures'] == [{'proxy_id': 7, 'stage': 'construct', 'error': 'boom'}]
    assert data['duration_ms'] == 3.14


def test_failure_equality_ignores_exception():
    a = SwapFailure(1, (), "read", "err", exception=RuntimeError("a"))
    b = SwapFailure(1, (), "read", "err", exception=RuntimeError("b"))
    assert a == b
