from abc import ABC, abstractmethod
from typing import Dict, Optional


class IMetricsService(ABC):
    """Metrics sink - application layer"""

    @abstractmethod
    def record_cleanup_job(self, sessions_cleaned: int, duration_ms: float) -> None:
        """Record a successful session cleanup run"""
        pass

    @abstractmethod
    def record_cleanup_failure(self) -> None:
        """Record a failed session cleanup run"""
        pass

    @abstractmethod
    def increment_counter(
        self, metric_name: str, tags: Optional[Dict[str, str]] = None
    ) -> None:
        """Increment a named counter"""
        pass
