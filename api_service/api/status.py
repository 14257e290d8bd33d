"""Service status endpoint."""

from typing import Any

from dependency_injector.wiring import Provide, inject
from flask import Blueprint

from shared.core.clock import ServiceIdentity

status_bp = Blueprint("status", __name__)


@status_bp.route("/status", methods=["GET"])
@inject
def get_status(
    identity: ServiceIdentity = Provide["identity"],
) -> Any:
    """Report service name, version and deployment environment."""
    return {
        "service": identity.name,
        "version": identity.version,
        "status": "running",
        "environment": identity.environment,
    }
