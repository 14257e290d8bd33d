"""Liveness and readiness probe endpoints."""

from typing import Any

from flask import Blueprint, current_app

from shared.core.clock import ProcessClock, ServiceIdentity, utc_timestamp
from shared.core.lifecycle import LifecycleCoordinatorProtocol
from shared.health.schemas import HealthResponse, ReadinessResponse

health_bp = Blueprint("health", __name__)


def _get_identity() -> ServiceIdentity:
    """Get service identity from container."""
    return current_app.container.identity()  # type: ignore[attr-defined]


def _get_clock() -> ProcessClock:
    """Get process clock from container."""
    return current_app.container.clock()  # type: ignore[attr-defined]


def _get_lifecycle_coordinator() -> LifecycleCoordinatorProtocol:
    """Get lifecycle coordinator from container."""
    return current_app.container.lifecycle_coordinator()  # type: ignore[attr-defined]


@health_bp.route("/health", methods=["GET"])
def health() -> Any:
    """Liveness probe: answers 200 for as long as the process is serving."""
    return HealthResponse(
        status="healthy",
        service=_get_identity().name,
        timestamp=utc_timestamp(),
        uptime=_get_clock().uptime_seconds(),
    ).model_dump()


@health_bp.route("/ready", methods=["GET"])
def ready() -> Any:
    """Readiness probe: 503 once the service has started draining."""
    service = _get_identity().name

    if _get_lifecycle_coordinator().is_shutting_down():
        body = ReadinessResponse(
            status="shutting down",
            service=service,
            timestamp=utc_timestamp(),
        )
        return body.model_dump(), 503

    return ReadinessResponse(
        status="ready",
        service=service,
        timestamp=utc_timestamp(),
    ).model_dump()
