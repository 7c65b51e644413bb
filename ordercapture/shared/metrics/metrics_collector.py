import threading
from typing import Dict, Optional

from ordercapture.shared.logger import StructuredLogger


class MetricsCollector:
    """
    Thread-safe named counters.
    Snapshots can be emitted as a structured log line via the injected logger.
    """
    def __init__(self, logger: Optional[StructuredLogger] = None):
        self.logger = logger
        self._counters: Dict[str, int] = {}
        self._lock = threading.Lock()

    def increment(self, key: str, amount: int = 1):
        """Increment a metric counter"""
        with self._lock:
            self._counters[key] = self._counters.get(key, 0) + amount

    def get(self, key: str) -> int:
        """Get the current value of a metric"""
        with self._lock:
            return self._counters.get(key, 0)

    def snapshot(self) -> Dict[str, int]:
        with self._lock:
            return dict(self._counters)

    def report(self):
        """Emit structured log of current metrics"""
        counters = self.snapshot()
        if counters and self.logger:
            self.logger.info("Metrics update", **counters)
