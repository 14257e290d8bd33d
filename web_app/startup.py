"""Web app definition and startup hooks."""

from shared.core.definition import ServiceDefinition
from shared.core.flask_app import App


def register_blueprints(app: App) -> None:
    from web_app.api.home import home_bp

    app.register_blueprint(home_bp)


WEB_APP = ServiceDefinition(
    name="web-app",
    version="1.0.0",
    default_port=3000,
    requests_metric="http_requests_total",
    requests_help="Total number of HTTP requests",
    uptime_metric="app_uptime_seconds",
    uptime_help="Application uptime in seconds",
    register_blueprints=register_blueprints,
    wire_packages=("web_app.api",),
)
