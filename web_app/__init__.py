"""Demo web app: landing route plus the operational probes."""

from shared.core.app import create_app as create_service_app
from shared.core.flask_app import App
from shared.core.settings import Settings
from web_app.startup import WEB_APP


def create_app(settings: "Settings | None" = None) -> App:
    """Create the web app Flask application."""
    return create_service_app(WEB_APP, settings)
