from ordercapture.shared.metrics.metrics_collector import MetricsCollector
from ordercapture.shared.metrics.metrics_schema import TelemetryMetrics

__all__ = ["MetricsCollector", "TelemetryMetrics"]
