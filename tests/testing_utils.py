"""Shared testing utilities for lifecycle coordinator stubs."""

import logging
from collections.abc import Callable

from shared.core.lifecycle import LifecycleCoordinatorProtocol, LifecycleEvent


class StubLifecycleCoordinator(LifecycleCoordinatorProtocol):
    """Basic lifecycle coordinator stub for testing.

    This stub only stores registrations and maintains state - it never
    executes callbacks or waiters. Use this for unit tests that just
    need dependency injection without lifecycle behavior testing.
    """

    def __init__(self) -> None:
        self._shutting_down = False
        self._notifications: list[Callable[[LifecycleEvent], None]] = []
        self._waiters: dict[str, Callable[[float], bool]] = {}

    def initialize(self) -> None:
        pass

    def register_lifecycle_notification(self, callback: Callable[[LifecycleEvent], None]) -> None:
        self._notifications.append(callback)

    def register_shutdown_waiter(self, name: str, handler: Callable[[float], bool]) -> None:
        self._waiters[name] = handler

    def is_shutting_down(self) -> bool:
        return self._shutting_down

    def shutdown(self) -> None:
        pass

    def fire_startup(self) -> None:
        pass


class TestLifecycleCoordinator(StubLifecycleCoordinator):
    """Lifecycle coordinator stub with controllable execution.

    Use this when a test needs to drive callbacks and waiters step by step
    instead of running the whole shutdown sequence at once.
    """

    __test__ = False

    def simulate_shutdown(self) -> None:
        """Set the shutdown state and execute PREPARE_SHUTDOWN callbacks."""
        self._shutting_down = True
        self._notify(LifecycleEvent.PREPARE_SHUTDOWN)

    def run_waiters(self, timeout: float) -> dict[str, bool]:
        """Run every registered waiter and return its result by name."""
        return {name: waiter(timeout) for name, waiter in self._waiters.items()}

    def simulate_full_shutdown(self, timeout: float = 30.0) -> None:
        """Simulate the full sequence: PREPARE_SHUTDOWN, waiters, SHUTDOWN, AFTER_SHUTDOWN."""
        self.simulate_shutdown()
        self.run_waiters(timeout)
        self._notify(LifecycleEvent.SHUTDOWN)
        self._notify(LifecycleEvent.AFTER_SHUTDOWN)

    def _notify(self, event: LifecycleEvent) -> None:
        for callback in self._notifications:
            try:
                callback(event)
            except Exception as e:
                logging.getLogger(__name__).error(f"Error in test {event.value} callback: {e}")
