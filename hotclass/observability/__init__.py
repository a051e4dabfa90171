"""Observability package for swap metrics."""

from hotclass.observability.metrics import SwapMetricsCollector, UpdateMetrics, get_swap_metrics

__all__ = ['SwapMetricsCollector', 'UpdateMetrics', 'get_swap_metrics']
