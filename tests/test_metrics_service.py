"""Tests for MetricsService."""

from unittest.mock import MagicMock, patch

from prometheus_client.parser import text_string_to_metric_families

from shared.core.lifecycle import LifecycleEvent
from shared.metrics.service import MetricsService
from tests.testing_utils import StubLifecycleCoordinator, TestLifecycleCoordinator


def _make_service(lifecycle_coordinator=None, uptime=12.5):
    clock = MagicMock()
    clock.uptime_seconds.return_value = uptime
    return MetricsService(
        clock=clock,
        lifecycle_coordinator=lifecycle_coordinator or StubLifecycleCoordinator(),
        requests_metric="api_requests_total",
        requests_help="Total number of API requests",
        uptime_metric="api_uptime_seconds",
        uptime_help="API service uptime in seconds",
    )


def _sample(service: MetricsService, name: str, labels: dict | None = None) -> float | None:
    for family in text_string_to_metric_families(service.get_metrics_text()):
        for sample in family.samples:
            if sample.name == name and (labels is None or sample.labels == labels):
                return sample.value
    return None


class TestMetricsRendering:
    def test_help_and_type_lines(self):
        text = _make_service().get_metrics_text()

        assert "# HELP api_requests_total Total number of API requests" in text
        assert "# TYPE api_requests_total counter" in text
        assert "# HELP api_uptime_seconds API service uptime in seconds" in text
        assert "# TYPE api_uptime_seconds gauge" in text

    def test_text_is_trimmed(self):
        text = _make_service().get_metrics_text()

        assert text == text.strip()
        assert text.startswith("# HELP")

    def test_no_created_series(self):
        text = _make_service().get_metrics_text()

        assert "_created" not in text

    def test_created_series_disabled_on_construction(self):
        with patch("shared.metrics.service.disable_created_metrics") as disable:
            _make_service()

        disable.assert_called_once_with()

    def test_request_counter_starts_at_zero(self):
        service = _make_service()

        assert _sample(service, "api_requests_total", {"method": "GET", "status": "200"}) == 0.0

    def test_uptime_read_from_clock(self):
        service = _make_service(uptime=42.0)

        assert _sample(service, "api_uptime_seconds") == 42.0


class TestRequestCounting:
    def test_record_request_increments_labelled_series(self):
        service = _make_service()

        service.record_request("GET", 200)
        service.record_request("GET", 200)
        service.record_request("POST", 400)

        assert _sample(service, "api_requests_total", {"method": "GET", "status": "200"}) == 2.0
        assert _sample(service, "api_requests_total", {"method": "POST", "status": "400"}) == 1.0

    def test_services_do_not_share_registries(self):
        first = _make_service()
        second = _make_service()

        first.record_request("GET", 200)

        assert _sample(first, "api_requests_total", {"method": "GET", "status": "200"}) == 1.0
        assert _sample(second, "api_requests_total", {"method": "GET", "status": "200"}) == 0.0


class TestShutdownMetrics:
    def test_registers_lifecycle_notification(self):
        coordinator = StubLifecycleCoordinator()
        service = _make_service(coordinator)

        assert service._on_lifecycle_event in coordinator._notifications

    def test_set_shutdown_state(self):
        service = _make_service()

        service.set_shutdown_state(True)
        assert _sample(service, "application_shutting_down") == 1.0

        service.set_shutdown_state(False)
        assert _sample(service, "application_shutting_down") == 0.0

    def test_full_shutdown_records_duration(self):
        coordinator = TestLifecycleCoordinator()
        service = _make_service(coordinator)

        coordinator.simulate_full_shutdown()

        assert _sample(service, "application_shutting_down") == 1.0
        assert _sample(service, "graceful_shutdown_duration_seconds_count") == 1.0

    def test_shutdown_without_prepare_records_nothing(self):
        service = _make_service()

        service._on_lifecycle_event(LifecycleEvent.SHUTDOWN)

        assert _sample(service, "graceful_shutdown_duration_seconds_count") == 0.0
