"""Flask error handlers translating service exceptions into JSON responses."""

import logging
from typing import Any

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from shared.core.exceptions import ServiceException

logger = logging.getLogger(__name__)


def register_error_handlers(app: Flask) -> None:
    """Register JSON error handlers on the application.

    - ServiceException subclasses map to their ``status_code``
    - werkzeug HTTP errors (404, 405, ...) keep their code
    - anything else becomes a logged 500
    """

    @app.errorhandler(ServiceException)
    def handle_service_exception(error: ServiceException) -> Any:
        logger.debug(f"{error.error_code}: {error.message}")
        return jsonify({"error": error.message}), error.status_code

    @app.errorhandler(HTTPException)
    def handle_http_exception(error: HTTPException) -> Any:
        return jsonify({"error": error.name}), error.code

    @app.errorhandler(Exception)
    def handle_unexpected_exception(error: Exception) -> Any:
        logger.error(f"Unhandled exception: {error}", exc_info=True)
        return jsonify({"error": "Internal server error"}), 500
