"""Prometheus metrics module."""

from shared.metrics.service import MetricsService

__all__ = [
    "MetricsService",
]
