"""Base dependency injection container."""

from dependency_injector import containers, providers

from shared.core.clock import ProcessClock, ServiceIdentity
from shared.core.definition import ServiceDefinition
from shared.core.lifecycle import LifecycleCoordinator
from shared.core.request_tracker import RequestTracker
from shared.core.settings import Settings
from shared.metrics.service import MetricsService


class CommonContainer(containers.DeclarativeContainer):
    """Base container with the operational services every service shares.

    One container is created per application and holds the single-instance
    service context: clock, identity, lifecycle coordinator, metrics and
    request tracker. Services extend it to add their own providers:

        class AppContainer(CommonContainer):
            user_service = providers.Singleton(UserService, clock=CommonContainer.clock)
    """

    # Configuration - must be overridden by the application factory
    config = providers.Dependency(instance_of=Settings)
    definition = providers.Dependency(instance_of=ServiceDefinition)

    clock = providers.Singleton(ProcessClock)

    identity = providers.Singleton(
        ServiceIdentity,
        name=definition.provided.name,
        version=definition.provided.version,
        environment=config.provided.app_env,
    )

    lifecycle_coordinator = providers.Singleton(
        LifecycleCoordinator,
        graceful_shutdown_timeout=config.provided.graceful_shutdown_timeout,
    )

    metrics_service = providers.Singleton(
        MetricsService,
        clock=clock,
        lifecycle_coordinator=lifecycle_coordinator,
        requests_metric=definition.provided.requests_metric,
        requests_help=definition.provided.requests_help,
        uptime_metric=definition.provided.uptime_metric,
        uptime_help=definition.provided.uptime_help,
    )

    request_tracker = providers.Singleton(
        RequestTracker,
        lifecycle_coordinator=lifecycle_coordinator,
        metrics_service=metrics_service,
    )
