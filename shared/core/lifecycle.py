"""Lifecycle coordinator for service startup and graceful shutdown.

A service moves through four states:

    STARTING -> RUNNING -> DRAINING -> TERMINATED

RUNNING is entered once the listener is bound. The first termination
signal moves the service to DRAINING: listeners are notified, registered
shutdown waiters are given a shared, bounded amount of time to finish their
in-flight work, and the service then becomes TERMINATED.
"""

import logging
import signal
import threading
import time
from abc import ABC, abstractmethod
from collections.abc import Callable
from enum import Enum

logger = logging.getLogger(__name__)


class LifecycleEvent(str, Enum):
    STARTUP = "startup"
    PREPARE_SHUTDOWN = "prepare-shutdown"
    SHUTDOWN = "shutdown"
    AFTER_SHUTDOWN = "after-shutdown"


class LifecycleState(str, Enum):
    STARTING = "starting"
    RUNNING = "running"
    DRAINING = "draining"
    TERMINATED = "terminated"


class LifecycleCoordinatorProtocol(ABC):
    """Protocol for lifecycle coordinator implementations."""

    @abstractmethod
    def initialize(self) -> None: ...

    @abstractmethod
    def register_lifecycle_notification(self, callback: Callable[[LifecycleEvent], None]) -> None: ...

    @abstractmethod
    def register_shutdown_waiter(self, name: str, handler: Callable[[float], bool]) -> None: ...

    @abstractmethod
    def is_shutting_down(self) -> bool: ...

    @abstractmethod
    def shutdown(self) -> None: ...

    @abstractmethod
    def fire_startup(self) -> None: ...


class LifecycleCoordinator(LifecycleCoordinatorProtocol):
    """Coordinator for service lifecycle events and graceful shutdown.

    Handles SIGTERM/SIGINT and coordinates the drain across registered
    services, allowing them to complete in-flight work within
    ``graceful_shutdown_timeout`` seconds.
    """

    def __init__(self, graceful_shutdown_timeout: float):
        """Initialize lifecycle coordinator.

        Args:
            graceful_shutdown_timeout: Maximum seconds to wait for waiters during drain
        """
        self._graceful_shutdown_timeout = graceful_shutdown_timeout
        self._state = LifecycleState.STARTING
        self._drained_cleanly: bool | None = None
        self._lifecycle_lock = threading.RLock()
        self._lifecycle_notifications: list[Callable[[LifecycleEvent], None]] = []
        self._shutdown_waiters: dict[str, Callable[[float], bool]] = {}

        logger.debug("LifecycleCoordinator initialized")

    @property
    def state(self) -> LifecycleState:
        with self._lifecycle_lock:
            return self._state

    @property
    def drained_cleanly(self) -> bool | None:
        """Whether every waiter finished before the deadline (None until drained)."""
        return self._drained_cleanly

    def initialize(self) -> None:
        """Setup the signal handlers."""
        signal.signal(signal.SIGTERM, self._handle_sigterm)
        signal.signal(signal.SIGINT, self._handle_sigterm)

    def register_lifecycle_notification(self, callback: Callable[[LifecycleEvent], None]) -> None:
        with self._lifecycle_lock:
            self._lifecycle_notifications.append(callback)
            logger.debug(
                f"Registered lifecycle notification: "
                f"{getattr(callback, '__name__', repr(callback))}"
            )

    def register_shutdown_waiter(self, name: str, handler: Callable[[float], bool]) -> None:
        with self._lifecycle_lock:
            self._shutdown_waiters[name] = handler
            logger.debug(f"Registered shutdown waiter: {name}")

    def is_shutting_down(self) -> bool:
        with self._lifecycle_lock:
            return self._state in (LifecycleState.DRAINING, LifecycleState.TERMINATED)

    def fire_startup(self) -> None:
        with self._lifecycle_lock:
            if self._state != LifecycleState.STARTING:
                return
            self._state = LifecycleState.RUNNING
        self._raise_lifecycle_event(LifecycleEvent.STARTUP)

    def _handle_sigterm(self, signum: int, frame: object) -> None:
        logger.info(f"Received signal {signum}, initiating graceful shutdown")
        self.shutdown()

    def shutdown(self) -> None:
        with self._lifecycle_lock:
            if self._state in (LifecycleState.DRAINING, LifecycleState.TERMINATED):
                logger.warning("Shutdown already in progress, ignoring request")
                return
            self._state = LifecycleState.DRAINING
            self._raise_lifecycle_event(LifecycleEvent.PREPARE_SHUTDOWN)
            waiters = list(self._shutdown_waiters.items())

        logger.info(
            f"Draining {len(waiters)} services "
            f"(timeout: {self._graceful_shutdown_timeout}s)"
        )

        start_time = time.perf_counter()
        all_ready = True

        for name, waiter in waiters:
            elapsed = time.perf_counter() - start_time
            remaining = self._graceful_shutdown_timeout - elapsed

            if remaining <= 0:
                logger.error(f"Shutdown timeout exceeded before checking {name}")
                all_ready = False
                break

            try:
                logger.info(f"Waiting for {name} to complete (remaining: {remaining:.1f}s)")
                if not waiter(remaining):
                    logger.warning(f"{name} was not ready within timeout")
                    all_ready = False
            except Exception as e:
                logger.error(f"Error in shutdown waiter {name}: {e}")
                all_ready = False

        total_duration = time.perf_counter() - start_time
        self._drained_cleanly = all_ready

        if all_ready:
            logger.info(f"Drain completed in {total_duration:.2f}s")
        else:
            logger.error(
                f"Drain did not complete after {total_duration:.1f}s, forcing shutdown"
            )

        self._raise_lifecycle_event(LifecycleEvent.SHUTDOWN)

        with self._lifecycle_lock:
            self._state = LifecycleState.TERMINATED

        logger.info("Process terminated")
        self._raise_lifecycle_event(LifecycleEvent.AFTER_SHUTDOWN)

    def _raise_lifecycle_event(self, event: LifecycleEvent) -> None:
        logger.debug(f"Raising lifecycle event {event.value}")

        for callback in list(self._lifecycle_notifications):
            try:
                callback(event)
            except Exception as e:
                logger.error(
                    f"Error in lifecycle event notification "
                    f"{getattr(callback, '__name__', repr(callback))}: {e}"
                )
