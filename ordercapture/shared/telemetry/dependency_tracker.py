import asyncio
import time
from datetime import datetime, timedelta, timezone
from typing import Any, Awaitable, Callable, Optional, TypeVar

from ordercapture.shared.logger import StructuredLogger
from ordercapture.shared.telemetry.base import DependencyRecord, TelemetryClient

T = TypeVar("T")


class DependencyTracker:
    """
    Times a single call to an external dependency and reports its outcome.

    Every invocation emits exactly one DependencyRecord, with result code "200" on success
    and "500" on failure. Failures are additionally logged at critical level and, when an
    exception sink is configured, reported as exception telemetry before being re-raised
    unchanged. The operation is attempted once.
    """

    def __init__(
        self,
        telemetry: TelemetryClient,
        logger: Optional[StructuredLogger] = None,
        exception_telemetry: Optional[TelemetryClient] = None,
    ):
        self.telemetry = telemetry
        self.exception_telemetry = exception_telemetry
        self.logger = logger or StructuredLogger("DependencyTracker")

    async def track(
        self,
        name: str,
        target: str,
        dependency_type: str,
        operation: Callable[[], Awaitable[T]],
        **context: Any,
    ) -> T:
        start_time = datetime.now(timezone.utc)
        started = time.perf_counter()
        success = False
        try:
            result = await operation()
            success = True
            return result
        except asyncio.CancelledError:
            raise
        except Exception as exc:
            self.logger.critical(str(exc) or type(exc).__name__, dependency=name, exc_info=True, **context)
            if self.exception_telemetry is not None:
                self.exception_telemetry.track_exception(exc, {"dependency": name, **context})
            raise
        finally:
            self.telemetry.track_dependency(
                DependencyRecord(
                    name=name,
                    target=target,
                    dependency_type=dependency_type,
                    start_time=start_time,
                    duration=timedelta(seconds=time.perf_counter() - started),
                    result_code="200" if success else "500",
                    success=success,
                )
            )
