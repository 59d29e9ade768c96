import logging
from collections import Counter
from typing import Dict, Optional

from src.app.services.metrics_service import IMetricsService

logger = logging.getLogger(__name__)


class LoggingMetricsService(IMetricsService):
    """Keeps counters in process and emits every data point as a log record"""

    def __init__(self):
        self.counters: Counter = Counter()
        self.last_cleanup_duration_ms: Optional[float] = None

    def record_cleanup_job(self, sessions_cleaned: int, duration_ms: float) -> None:
        self.counters["session_cleanups_total"] += 1
        self.counters["sessions_cleaned_total"] += sessions_cleaned
        self.last_cleanup_duration_ms = duration_ms
        logger.info(f"[Metrics] Cleaned {sessions_cleaned} sessions in {duration_ms}ms")

    def record_cleanup_failure(self) -> None:
        self.counters["session_cleanup_failures_total"] += 1
        logger.error("[Metrics] Cleanup job failed")

    def increment_counter(
        self, metric_name: str, tags: Optional[Dict[str, str]] = None
    ) -> None:
        self.counters[metric_name] += 1
        logger.info(f"[Metrics] Incremented {metric_name} {tags or {}}")
