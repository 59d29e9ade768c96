"""
Cleanup Sessions Use Case

Deletes sessions past their expiry. Run daily by SessionCleanupScheduler.
"""

import logging
import time

from libs.result import Result, Return
from src.app.services.metrics_service import IMetricsService
from src.app.services.notification_service import INotificationService
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth.errors import internal_error

logger = logging.getLogger(__name__)

FAILURE_ALERT = "Session cleanup job failed - check logs for details"


class CleanupSessionsUseCase:
    """
    Use case for sweeping expired sessions.

    Business Rules:
    - Deletes every session with expires_at < now
    - Duration and count always recorded as metrics
    - Admins notified only when something was deleted
    - Failures metered, alerted and reported as INTERNAL_ERROR
    - No retry within a run; the next scheduled run is the retry
    """

    def __init__(
        self,
        uow: UnitOfWork,
        metrics: IMetricsService,
        notifications: INotificationService,
    ):
        self.uow = uow
        self.metrics = metrics
        self.notifications = notifications

    async def execute(self) -> Result[int]:
        started = time.perf_counter()
        try:
            async with self.uow:
                count = await self.uow.sessions.cleanup_expired_sessions()
                await self.uow.commit()
        except Exception:
            logger.error("Failed to cleanup sessions", exc_info=True)
            self.metrics.record_cleanup_failure()
            await self.notifications.send_system_alert(FAILURE_ALERT)
            return Return.err(internal_error("Failed to cleanup expired sessions"))

        duration_ms = round((time.perf_counter() - started) * 1000, 2)
        self.metrics.record_cleanup_job(count, duration_ms)
        logger.info(f"Successfully cleaned up {count} expired sessions")

        if count > 0:
            await self.notifications.send_admin_alert(
                f"Cleaned up {count} expired sessions in {duration_ms}ms"
            )

        return Return.ok(count)
