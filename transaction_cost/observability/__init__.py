"""Observability: in-process metrics for lookups and the audit sink."""

from transaction_cost.observability.metrics import MetricsCollector, get_metrics_collector

__all__ = ["MetricsCollector", "get_metrics_collector"]
