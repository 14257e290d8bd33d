"""Flask application factory."""

import importlib
import logging

from flask_cors import CORS

from shared.core.container import CommonContainer
from shared.core.definition import ServiceDefinition
from shared.core.errors import register_error_handlers
from shared.core.flask_app import App
from shared.core.settings import Settings
from shared.health.routes import health_bp
from shared.metrics.routes import metrics_bp

logger = logging.getLogger(__name__)


def create_app(definition: ServiceDefinition, settings: "Settings | None" = None) -> App:
    """Create and configure the Flask application for one service.

    The shared operational surface (health, readiness, metrics, error
    handling, request tracking) is registered here; the service adds its own
    routes through ``definition.register_blueprints``.

    Args:
        definition: Identity and hooks of the service being built
        settings: Optional settings instance (loaded from the environment if not provided)

    Returns:
        Configured Flask application instance
    """
    app = App(__name__)

    if settings is None:
        settings = Settings.load(default_port=definition.default_port)

    # Validate configuration before proceeding
    settings.validate_config()
    for warning in settings.config_warnings():
        logger.warning(warning)

    app.settings = settings

    # Initialize service container
    container_class = definition.container_class or CommonContainer
    container = container_class()
    container.config.override(settings)
    container.definition.override(definition)

    wire_packages = [importlib.import_module(name) for name in definition.wire_packages]
    container.wire(packages=wire_packages)

    app.container = container

    CORS(
        app,
        origins=settings.security.cors_origin,
        supports_credentials=settings.security.cors_credentials,
    )

    register_error_handlers(app)

    app.register_blueprint(health_bp)
    app.register_blueprint(metrics_bp)

    definition.register_blueprints(app)

    # Track in-flight requests for the shutdown drain
    request_tracker = container.request_tracker()
    app.wsgi_app = request_tracker.middleware(app.wsgi_app)  # type: ignore[method-assign]

    logger.debug(f"{definition.name} application created")

    return app
