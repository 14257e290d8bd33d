"""Demo API service: operational probes plus a mock users resource."""

from api_service.startup import API_SERVICE
from shared.core.app import create_app as create_service_app
from shared.core.flask_app import App
from shared.core.settings import Settings


def create_app(settings: "Settings | None" = None) -> App:
    """Create the API service Flask application."""
    return create_service_app(API_SERVICE, settings)
