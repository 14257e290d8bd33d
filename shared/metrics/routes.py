"""Metrics API endpoint for Prometheus scraping."""

from typing import Any

from flask import Blueprint, Response, current_app

from shared.metrics.service import MetricsService

metrics_bp = Blueprint("metrics", __name__)

METRICS_CONTENT_TYPE = "text/plain; charset=utf-8"


def _get_metrics_service() -> MetricsService:
    """Get metrics service from container."""
    return current_app.container.metrics_service()  # type: ignore[attr-defined]


@metrics_bp.route("/metrics", methods=["GET"])
def get_metrics() -> Any:
    """Return metrics in Prometheus text exposition format."""
    return Response(_get_metrics_service().get_metrics_text(), content_type=METRICS_CONTENT_TYPE)
