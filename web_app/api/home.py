"""Web app landing route."""

from typing import Any

from dependency_injector.wiring import Provide, inject
from flask import Blueprint

from shared.core.clock import ServiceIdentity

home_bp = Blueprint("home", __name__)

WELCOME_MESSAGE = "Hello from Kubernetes DevOps Pipeline Demo!"


@home_bp.route("/", methods=["GET"])
@inject
def index(
    identity: ServiceIdentity = Provide["identity"],
) -> Any:
    return {
        "message": WELCOME_MESSAGE,
        "version": identity.version,
        "environment": identity.environment,
    }
