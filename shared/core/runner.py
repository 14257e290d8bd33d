"""Service runner with graceful shutdown support."""

import logging
import sys
import threading
import time
from typing import TYPE_CHECKING

from paste.translogger import TransLogger  # type: ignore[import-untyped]
from waitress import create_server
from waitress.channel import HTTPChannel

from shared.core.app import create_app
from shared.core.exceptions import BindError, ConfigurationError
from shared.core.lifecycle import LifecycleEvent
from shared.core.logger import configure_logging
from shared.core.settings import Settings

if TYPE_CHECKING:
    from waitress.server import BaseWSGIServer

    from shared.core.definition import ServiceDefinition
    from shared.core.flask_app import App

logger = logging.getLogger(__name__)

FLUSH_POLL_INTERVAL = 0.05


class ServiceRunner:
    """Serves one application with waitress and drains it on shutdown.

    The listener is bound in ``bind()`` on the calling thread, so a bind
    failure surfaces before any signal handler is installed. ``start()``
    moves the service to RUNNING and serves on a daemon thread; the
    lifecycle coordinator then owns the exit.

    Draining happens in two steps: the request tracker waits for handlers
    to return, then the runner waits for every connection to flush its
    buffered output, so the process never exits mid-response.
    """

    def __init__(self, app: "App", host: str, port: int, threads: int = 4):
        self.app = app
        self.host = host
        self.port = port
        self.threads = threads
        self.server: "BaseWSGIServer | None" = None
        self._thread: threading.Thread | None = None
        self._terminated = threading.Event()

        self.lifecycle_coordinator = app.container.lifecycle_coordinator()
        self.lifecycle_coordinator.register_lifecycle_notification(self._on_lifecycle_event)
        self.lifecycle_coordinator.register_shutdown_waiter("http-connections", self.wait_for_flush)

    @property
    def effective_port(self) -> int:
        """Port actually bound, which differs from ``port`` when binding port 0."""
        if self.server is None:
            return self.port
        return int(self.server.effective_port)  # type: ignore[attr-defined]

    def bind(self) -> None:
        """Acquire the listening socket.

        Raises:
            BindError: When the address is in use or not permitted
        """
        wsgi = TransLogger(self.app, setup_console_handler=False)
        try:
            self.server = create_server(wsgi, host=self.host, port=self.port, threads=self.threads)
        except OSError as e:
            raise BindError(self.host, self.port, e) from e

    def start(self, install_signal_handlers: bool = True) -> None:
        """Enter RUNNING and serve requests on a background thread."""
        if self.server is None:
            self.bind()

        if install_signal_handlers:
            self.lifecycle_coordinator.initialize()

        self.lifecycle_coordinator.fire_startup()

        self._thread = threading.Thread(target=self._serve, daemon=True, name="waitress")
        self._thread.start()

        logger.info(
            f"{self.app.container.identity().name} listening on port {self.effective_port} "
            f"with {self.threads} threads"
        )

    def wait(self, timeout: float | None = None) -> bool:
        """Block until the service has terminated."""
        return self._terminated.wait(timeout)

    def wait_for_flush(self, timeout: float) -> bool:
        """Block until no connection has a request or unsent output, or the timeout expires."""
        deadline = time.perf_counter() + timeout

        while (pending := self._pending_connections()) > 0:
            if time.perf_counter() >= deadline:
                logger.warning(f"Timeout flushing responses, {pending} connections still busy")
                return False
            time.sleep(FLUSH_POLL_INTERVAL)

        logger.info("All responses flushed")
        return True

    def _pending_connections(self) -> int:
        if self.server is None:
            return 0
        channels = list(self.server._map.values())  # type: ignore[attr-defined]
        return sum(
            1
            for channel in channels
            if isinstance(channel, HTTPChannel) and (channel.requests or channel.total_outbufs_len)
        )

    def _serve(self) -> None:
        assert self.server is not None
        self.server.run()

    def _stop_accepting(self) -> None:
        if self.server is None:
            return
        # Checked by the server loop before each accept
        self.server.accepting = False  # type: ignore[attr-defined]
        # The socket map belongs to the server thread, so close from there
        self.server.trigger.pull_trigger(self._close_listener)  # type: ignore[attr-defined]

    def _close_listener(self) -> None:
        assert self.server is not None
        self.server.close()  # type: ignore[attr-defined]
        logger.info("Listener closed, new connections are refused")

    def _on_lifecycle_event(self, event: LifecycleEvent) -> None:
        match event:
            case LifecycleEvent.PREPARE_SHUTDOWN:
                self._stop_accepting()
            case LifecycleEvent.AFTER_SHUTDOWN:
                self._terminated.set()


def run(definition: "ServiceDefinition", settings: "Settings | None" = None) -> None:
    """Run a service until it is told to shut down, then exit the process.

    Exits with status 0 after a drain, and with status 1 when the
    configuration is invalid or the listener cannot bind.

    Usage in a service's __main__.py:
        from shared import run
        from api_service.startup import API_SERVICE

        if __name__ == "__main__":
            run(API_SERVICE)
    """
    if settings is None:
        settings = Settings.load(default_port=definition.default_port)

    configure_logging(
        service=definition.name,
        environment=settings.app_env,
        level=settings.logging.level,
        log_format=settings.logging.format,
    )

    try:
        app = create_app(definition, settings)
    except ConfigurationError as e:
        logger.error(str(e))
        sys.exit(1)

    runner = ServiceRunner(
        app,
        host=settings.host,
        port=settings.port,
        threads=settings.waitress_threads,
    )

    try:
        runner.bind()
    except BindError as e:
        logger.error(f"{definition.name} failed to start: {e}")
        sys.exit(1)

    runner.start()
    runner.wait()
    sys.exit(0)
