from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Protocol


@dataclass(frozen=True)
class DependencyRecord:
    """One outbound call to an external system."""
    name: str
    target: str
    dependency_type: str
    start_time: datetime
    duration: timedelta
    result_code: str
    success: bool


class TelemetryClient(Protocol):
    def track_event(self, name: str, properties: dict | None = None) -> None:
        raise NotImplementedError

    def track_dependency(self, record: DependencyRecord) -> None:
        raise NotImplementedError

    def track_exception(self, exc: BaseException, properties: dict | None = None) -> None:
        raise NotImplementedError
