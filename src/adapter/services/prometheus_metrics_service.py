import logging
from typing import Dict, Optional

from prometheus_client import CollectorRegistry, Counter, Histogram, generate_latest

from src.app.services.metrics_service import IMetricsService

logger = logging.getLogger(__name__)

CLEANUP_DURATION_BUCKETS = (0.1, 0.5, 1, 5)


class PrometheusMetricsService(IMetricsService):
    """
    Prometheus metrics (METRICS_BACKEND=prometheus), scraped from GET /metrics.

    Each instance owns its registry so several apps can live in one process.
    Ad-hoc counters fix their label names on first use.
    """

    def __init__(self, registry: Optional[CollectorRegistry] = None):
        self.registry = registry or CollectorRegistry()
        self.cleanups = Counter(
            "session_cleanups_total",
            "Total number of expired sessions removed by cleanup",
            registry=self.registry,
        )
        self.cleanup_duration = Histogram(
            "session_cleanup_duration_seconds",
            "Duration of session cleanup runs",
            buckets=CLEANUP_DURATION_BUCKETS,
            registry=self.registry,
        )
        self.cleanup_failures = Counter(
            "session_cleanup_failures_total",
            "Total number of failed session cleanup operations",
            registry=self.registry,
        )
        self._counters: Dict[str, Counter] = {}

    def record_cleanup_job(self, sessions_cleaned: int, duration_ms: float) -> None:
        self.cleanups.inc(sessions_cleaned)
        self.cleanup_duration.observe(duration_ms / 1000)

    def record_cleanup_failure(self) -> None:
        self.cleanup_failures.inc()

    def increment_counter(
        self, metric_name: str, tags: Optional[Dict[str, str]] = None
    ) -> None:
        tags = tags or {}
        counter = self._counters.get(metric_name)
        if counter is None:
            counter = Counter(
                metric_name, metric_name, labelnames=sorted(tags), registry=self.registry
            )
            self._counters[metric_name] = counter
        try:
            if tags:
                counter.labels(**tags).inc()
            else:
                counter.inc()
        except ValueError as exc:
            logger.warning(f"Dropping sample for {metric_name} {tags}: {exc}")

    def render(self) -> bytes:
        """Text exposition of every metric in the registry"""
        return generate_latest(self.registry)
