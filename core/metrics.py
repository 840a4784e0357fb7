"""
Core metrics collection for LeadScore using Prometheus
"""
from prometheus_client import CONTENT_TYPE_LATEST, CollectorRegistry, Counter, Histogram, Info, generate_latest

from core.config import settings
from core.logging import get_logger

# Create a global registry for the application
REGISTRY = CollectorRegistry()

# Application info
app_info = Info("leadscore_app", "LeadScore application information", registry=REGISTRY)

# Scoring metrics
leads_evaluated = Counter(
    "leadscore_leads_evaluated_total",
    "Total number of leads evaluated",
    ["band"],
    registry=REGISTRY,
)

rules_skipped = Counter(
    "leadscore_rules_skipped_total",
    "Scoring rules skipped during evaluation",
    ["reason"],
    registry=REGISTRY,
)

evaluation_duration = Histogram(
    "leadscore_evaluation_duration_seconds",
    "Time taken to evaluate one lead",
    buckets=(0.0005, 0.001, 0.005, 0.01, 0.05, 0.1, 0.5),
    registry=REGISTRY,
)

# Error metrics
error_count = Counter(
    "leadscore_errors_total",
    "Total number of absorbed errors",
    ["error_type", "domain"],
    registry=REGISTRY,
)

config_reload_total = Counter(
    "leadscore_config_reload_total",
    "Total configuration reloads",
    ["config_type", "status"],
    registry=REGISTRY,
)

config_reload_duration = Histogram(
    "leadscore_config_reload_duration_seconds",
    "Configuration reload duration",
    ["config_type"],
    buckets=(0.001, 0.01, 0.05, 0.1, 0.5, 1.0),
    registry=REGISTRY,
)


class MetricsCollector:
    """Helper class for collecting metrics"""

    def __init__(self, enabled: bool = True):
        self.logger = get_logger("metrics")
        self.enabled = enabled

        app_info.info({"version": settings.app_version, "environment": settings.environment})

    def track_evaluation(self, band: str, duration: float):
        """Track one completed lead evaluation"""
        if not self.enabled:
            return
        leads_evaluated.labels(band=band).inc()
        evaluation_duration.observe(duration)

    def track_rule_skipped(self, reason: str):
        """Track a rule that contributed nothing because it was disabled or malformed"""
        if not self.enabled:
            return
        rules_skipped.labels(reason=reason).inc()

    def track_error(self, error_type: str, domain: str):
        """Track errors"""
        if not self.enabled:
            return
        error_count.labels(error_type=error_type, domain=domain).inc()

    def track_config_reload(self, config_type: str, duration: float, status: str = "success"):
        """Track configuration reload metrics"""
        if not self.enabled:
            return
        config_reload_total.labels(config_type=config_type, status=status).inc()
        config_reload_duration.labels(config_type=config_type).observe(duration)

    def get_metrics(self) -> bytes:
        """Get current metrics in Prometheus format"""
        return generate_latest(REGISTRY)


# Global metrics collector instance
metrics = MetricsCollector(enabled=settings.prometheus_enabled)


def get_metrics_collector() -> MetricsCollector:
    """Get the global metrics collector instance"""
    return metrics


def get_metrics_response() -> tuple[bytes, str]:
    """Get metrics response for a Prometheus scrape endpoint"""
    return metrics.get_metrics(), CONTENT_TYPE_LATEST
