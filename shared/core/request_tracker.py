"""In-flight request tracking and admission control.

RequestTracker wraps the WSGI application. It counts requests from the moment
they are admitted until the server closes their response, which lets the
lifecycle coordinator wait for in-flight work during a drain. Once the
service is draining, new requests are refused with 503, except for the probe
endpoints which keep answering until the process exits.
"""

import json
import logging
import threading
from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING, Any

from werkzeug.wrappers import Response
from werkzeug.wsgi import ClosingIterator

from shared.core.lifecycle import LifecycleEvent

if TYPE_CHECKING:
    from shared.core.lifecycle import LifecycleCoordinatorProtocol
    from shared.metrics.service import MetricsService

logger = logging.getLogger(__name__)

PROBE_PATHS = frozenset({"/health", "/ready", "/metrics"})

WSGIApp = Callable[[dict[str, Any], Callable[..., Any]], Iterable[bytes]]


class RequestTracker:
    """Counts in-flight requests and refuses new work while draining."""

    def __init__(
        self,
        lifecycle_coordinator: "LifecycleCoordinatorProtocol",
        metrics_service: "MetricsService",
    ):
        self.metrics_service = metrics_service
        self._condition = threading.Condition()
        self._in_flight = 0
        self._draining = False

        lifecycle_coordinator.register_lifecycle_notification(self._on_lifecycle_event)
        lifecycle_coordinator.register_shutdown_waiter("http-requests", self.wait_for_idle)

    @property
    def in_flight(self) -> int:
        with self._condition:
            return self._in_flight

    @property
    def draining(self) -> bool:
        with self._condition:
            return self._draining

    def middleware(self, wsgi_app: WSGIApp) -> WSGIApp:
        """Wrap a WSGI application so its requests are tracked."""

        def tracked_app(environ: dict[str, Any], start_response: Callable[..., Any]) -> Iterable[bytes]:
            method = environ.get("REQUEST_METHOD", "GET")

            if not self._admit(environ.get("PATH_INFO", "")):
                self.metrics_service.record_request(method, 503)
                return _refused_response()(environ, start_response)

            status: list[int] = [500]

            def tracking_start_response(status_line: str, headers: Any, exc_info: Any = None) -> Any:
                status[0] = int(status_line.split(" ", 1)[0])
                return start_response(status_line, headers, exc_info)

            try:
                app_iter = wsgi_app(environ, tracking_start_response)
            except BaseException:
                self._finish(method, 500)
                raise

            return ClosingIterator(app_iter, lambda: self._finish(method, status[0]))

        return tracked_app

    def wait_for_idle(self, timeout: float) -> bool:
        """Block until no request is in flight, or the timeout expires."""
        with self._condition:
            if self._in_flight == 0:
                logger.info("No in-flight requests to wait for")
                return True

            logger.info(
                f"Waiting for {self._in_flight} in-flight requests "
                f"(timeout: {timeout:.1f}s)"
            )
            completed = self._condition.wait_for(lambda: self._in_flight == 0, timeout=timeout)

            if completed:
                logger.info("All in-flight requests completed")
            else:
                logger.warning(
                    f"Timeout waiting for requests, {self._in_flight} still in flight"
                )

            return completed

    def _admit(self, path: str) -> bool:
        with self._condition:
            if self._draining and path not in PROBE_PATHS:
                logger.debug(f"Refusing request to {path} while draining")
                return False
            self._in_flight += 1
            return True

    def _finish(self, method: str, status: int) -> None:
        with self._condition:
            self._in_flight -= 1
            if self._in_flight == 0:
                self._condition.notify_all()

        self.metrics_service.record_request(method, status)

    def _on_lifecycle_event(self, event: LifecycleEvent) -> None:
        if event == LifecycleEvent.PREPARE_SHUTDOWN:
            with self._condition:
                self._draining = True
                logger.info(f"Request admission closed with {self._in_flight} in flight")


def _refused_response() -> Response:
    return Response(
        json.dumps({"error": "Service is shutting down"}),
        status=503,
        mimetype="application/json",
    )
