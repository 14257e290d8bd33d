"""API service dependency injection container."""

from dependency_injector import providers

from api_service.services.user_service import UserService
from shared.core.container import CommonContainer


class AppContainer(CommonContainer):
    """API service container.

    Inherits the operational providers from CommonContainer:
    - config, definition (must be provided)
    - clock, identity, lifecycle_coordinator, metrics_service, request_tracker
    """

    user_service = providers.Singleton(UserService)
