from typing import Optional

from ordercapture.shared.logger import StructuredLogger
from ordercapture.shared.metrics import MetricsCollector, TelemetryMetrics
from ordercapture.shared.telemetry.base import DependencyRecord, TelemetryClient


class LoggingTelemetryClient(TelemetryClient):
    """
    Telemetry sink that writes every record as a structured log line and keeps counters.
    Stands in for a hosted telemetry backend; records are not validated.
    """

    def __init__(
        self,
        instrumentation_key: str = "",
        logger: Optional[StructuredLogger] = None,
        metrics: Optional[MetricsCollector] = None,
    ):
        self.instrumentation_key = instrumentation_key
        self.logger = logger or StructuredLogger("Telemetry")
        self.metrics = metrics or MetricsCollector(self.logger)

    def track_event(self, name: str, properties: dict | None = None) -> None:
        self.metrics.increment(TelemetryMetrics.EVENTS)
        self.logger.info("telemetry.event", event_name=name, ikey=self.instrumentation_key, **(properties or {}))

    def track_dependency(self, record: DependencyRecord) -> None:
        self.metrics.increment(
            TelemetryMetrics.DEPENDENCY_SUCCEEDED if record.success else TelemetryMetrics.DEPENDENCY_FAILED
        )
        self.metrics.increment(TelemetryMetrics.dependency_key(record.name, record.success))
        self.logger.info(
            "telemetry.dependency",
            name=record.name,
            target=record.target,
            type=record.dependency_type,
            start_time=record.start_time.isoformat(),
            duration_ms=round(record.duration.total_seconds() * 1000, 3),
            result_code=record.result_code,
            success=record.success,
            ikey=self.instrumentation_key,
        )

    def track_exception(self, exc: BaseException, properties: dict | None = None) -> None:
        self.metrics.increment(TelemetryMetrics.EXCEPTIONS)
        self.logger.error(
            "telemetry.exception",
            exception_type=type(exc).__name__,
            error=str(exc),
            ikey=self.instrumentation_key,
            **(properties or {}),
        )
