"""
Tests for Prometheus metrics collection
"""
import pytest
from prometheus_client import CONTENT_TYPE_LATEST

from core.metrics import REGISTRY, MetricsCollector, get_metrics_collector, get_metrics_response

pytestmark = pytest.mark.unit


def sample(name, **labels):
    return REGISTRY.get_sample_value(name, labels) or 0.0


class TestMetricsCollector:
    def test_track_evaluation(self):
        collector = MetricsCollector(enabled=True)
        before = sample("leadscore_leads_evaluated_total", band="HIGH")
        count_before = sample("leadscore_evaluation_duration_seconds_count")

        collector.track_evaluation("HIGH", 0.002)

        assert sample("leadscore_leads_evaluated_total", band="HIGH") == before + 1
        assert sample("leadscore_evaluation_duration_seconds_count") == count_before + 1

    def test_track_rule_skipped(self):
        collector = MetricsCollector(enabled=True)
        before = sample("leadscore_rules_skipped_total", reason="disabled")

        collector.track_rule_skipped("disabled")

        assert sample("leadscore_rules_skipped_total", reason="disabled") == before + 1

    def test_track_error(self):
        collector = MetricsCollector(enabled=True)
        before = sample("leadscore_errors_total", error_type="RuntimeError", domain="lead_scoring")

        collector.track_error("RuntimeError", "lead_scoring")

        assert sample("leadscore_errors_total", error_type="RuntimeError", domain="lead_scoring") == before + 1

    def test_track_config_reload(self):
        collector = MetricsCollector(enabled=True)
        before = sample("leadscore_config_reload_total", config_type="scoring_rules", status="failure")

        collector.track_config_reload("scoring_rules", 0.01, status="failure")

        assert sample("leadscore_config_reload_total", config_type="scoring_rules", status="failure") == before + 1

    def test_disabled_collector_records_nothing(self):
        collector = MetricsCollector(enabled=False)
        before = sample("leadscore_leads_evaluated_total", band="LOW")

        collector.track_evaluation("LOW", 0.001)
        collector.track_rule_skipped("disabled")
        collector.track_error("RuntimeError", "lead_scoring")

        assert sample("leadscore_leads_evaluated_total", band="LOW") == before


class TestMetricsExport:
    def test_global_collector(self):
        assert get_metrics_collector() is get_metrics_collector()

    def test_metrics_response(self):
        body, content_type = get_metrics_response()

        assert content_type == CONTENT_TYPE_LATEST
        assert b"leadscore_app_info" in body
