from ordercapture.shared.telemetry.base import DependencyRecord, TelemetryClient
from ordercapture.shared.telemetry.dependency_tracker import DependencyTracker
from ordercapture.shared.telemetry.logging_telemetry import LoggingTelemetryClient

__all__ = ["DependencyRecord", "TelemetryClient", "DependencyTracker", "LoggingTelemetryClient"]
