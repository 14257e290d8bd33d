"""API service definition and startup hooks.

Hook points used by the shared application factory:
  - register_blueprints()
"""

from api_service.container import AppContainer
from shared.core.definition import ServiceDefinition
from shared.core.flask_app import App


def register_blueprints(app: App) -> None:
    """Register the /api/v1 blueprints."""
    from api_service.api import api_v1_bp

    app.register_blueprint(api_v1_bp)


API_SERVICE = ServiceDefinition(
    name="api-service",
    version="1.0.0",
    default_port=8080,
    requests_metric="api_requests_total",
    requests_help="Total number of API requests",
    uptime_metric="api_uptime_seconds",
    uptime_help="API service uptime in seconds",
    container_class=AppContainer,
    register_blueprints=register_blueprints,
    wire_packages=("api_service.api",),
)
