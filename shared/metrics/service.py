"""Prometheus metrics service for service monitoring.

Each application owns a private CollectorRegistry, so two applications in
one process (or one per test) never collide on metric names. The registry
holds:

- a request counter, incremented by the request tracker for every
  completed request and labelled by method and status code
- an uptime gauge, read from the process clock at scrape time
- shutdown state metrics, fed by lifecycle events
"""

import logging
import time
from typing import TYPE_CHECKING

from prometheus_client import (
    CollectorRegistry,
    Counter,
    Gauge,
    Histogram,
    disable_created_metrics,
    generate_latest,
)

from shared.core.lifecycle import LifecycleEvent

if TYPE_CHECKING:
    from shared.core.clock import ProcessClock
    from shared.core.lifecycle import LifecycleCoordinatorProtocol

logger = logging.getLogger(__name__)


class MetricsService:
    """Metrics registry and Prometheus text rendering for one service."""

    def __init__(
        self,
        clock: "ProcessClock",
        lifecycle_coordinator: "LifecycleCoordinatorProtocol",
        requests_metric: str,
        requests_help: str,
        uptime_metric: str,
        uptime_help: str,
    ):
        """Initialize metrics service.

        Args:
            clock: Process clock the uptime gauge reads from
            lifecycle_coordinator: Coordinator for graceful shutdown
            requests_metric: Name of the request counter series
            requests_help: HELP text of the request counter
            uptime_metric: Name of the uptime gauge series
            uptime_help: HELP text of the uptime gauge
        """
        # Counters render as HELP/TYPE/sample only, without the extra *_created series
        disable_created_metrics()
        self.registry = CollectorRegistry(auto_describe=True)
        self._shutdown_start_time: float | None = None

        lifecycle_coordinator.register_lifecycle_notification(self._on_lifecycle_event)

        self.requests_total = Counter(
            requests_metric,
            requests_help,
            ["method", "status"],
            registry=self.registry,
        )
        # Expose a sample from the first scrape onwards
        self.requests_total.labels(method="GET", status="200")

        self.uptime_seconds = Gauge(uptime_metric, uptime_help, registry=self.registry)
        self.uptime_seconds.set_function(clock.uptime_seconds)

        self.application_shutting_down = Gauge(
            "application_shutting_down",
            "Whether application is shutting down (1=yes, 0=no)",
            registry=self.registry,
        )

        self.graceful_shutdown_duration_seconds = Histogram(
            "graceful_shutdown_duration_seconds",
            "Duration of graceful shutdowns",
            registry=self.registry,
        )

    def record_request(self, method: str, status: int) -> None:
        self.requests_total.labels(method=method, status=str(status)).inc()

    def get_metrics_text(self) -> str:
        """Generate metrics in Prometheus text format, trimmed of surrounding whitespace."""
        return generate_latest(self.registry).decode("utf-8").strip()

    def set_shutdown_state(self, is_shutting_down: bool) -> None:
        self.application_shutting_down.set(1 if is_shutting_down else 0)
        if is_shutting_down:
            self._shutdown_start_time = time.perf_counter()

    def _on_lifecycle_event(self, event: LifecycleEvent) -> None:
        match event:
            case LifecycleEvent.PREPARE_SHUTDOWN:
                self.set_shutdown_state(True)
            case LifecycleEvent.SHUTDOWN:
                self._record_shutdown_duration()

    def _record_shutdown_duration(self) -> None:
        if self._shutdown_start_time is not None:
            duration = time.perf_counter() - self._shutdown_start_time
            self.graceful_shutdown_duration_seconds.observe(duration)
