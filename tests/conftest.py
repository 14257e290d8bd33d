"""Pytest configuration and fixtures."""

import logging
from collections.abc import Generator

import pytest
from flask.testing import FlaskClient

from api_service import create_app
from shared.core.flask_app import App
from shared.core.settings import Settings
from web_app import create_app as create_web_app


def _build_test_settings() -> Settings:
    """Construct base Settings object for tests."""
    return Settings(
        app_env="testing",
        host="127.0.0.1",
        port=0,
        waitress_threads=4,
        graceful_shutdown_timeout=5,
    )


@pytest.fixture
def test_settings() -> Settings:
    """Create test settings."""
    return _build_test_settings()


@pytest.fixture
def app(test_settings: Settings) -> App:
    """Create an API service application with a fresh service container."""
    return create_app(test_settings)


@pytest.fixture
def client(app: App) -> FlaskClient:
    """Create test client for the API service."""
    return app.test_client()


@pytest.fixture
def web_app(test_settings: Settings) -> App:
    """Create a web app application with a fresh service container."""
    return create_web_app(test_settings)


@pytest.fixture
def web_client(web_app: App) -> FlaskClient:
    """Create test client for the web app."""
    return web_app.test_client()


@pytest.fixture
def restore_root_logger() -> Generator[logging.Logger, None, None]:
    """Restore root logger handlers and level changed by configure_logging()."""
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level
    yield root_logger
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)
