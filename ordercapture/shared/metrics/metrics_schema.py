class TelemetryMetrics:
    """Standard metric keys for telemetry clients"""
    EVENTS = "telemetry_events"
    DEPENDENCY_SUCCEEDED = "dependency_calls_succeeded"
    DEPENDENCY_FAILED = "dependency_calls_failed"
    EXCEPTIONS = "telemetry_exceptions"

    @staticmethod
    def dependency_key(name: str, success: bool) -> str:
        """Per-backend counter, e.g. ``dependency.self-managed-store.200``"""
        return f"dependency.{name}.{'200' if success else '500'}"
