import logging
from typing import Callable

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.error import ServerError
from src.app.services.metrics_service import IMetricsService
from src.app.services.notification_service import INotificationService
from src.app.use_cases.sessions import CleanupSessionsUseCase

logger = logging.getLogger(__name__)

JOB_ID = "session_cleanup"


class SessionCleanupScheduler:
    """
    Runs CleanupSessionsUseCase once a day.

    A failed run is logged by APScheduler and left for the next day; there
    is no retry inside a run.
    """

    def __init__(
        self,
        session_factory: Callable[[], AsyncSession],
        metrics: IMetricsService,
        notifications: INotificationService,
        hour: int = 3,
        minute: int = 0,
        scheduler: AsyncIOScheduler = None,
    ):
        self.session_factory = session_factory
        self.metrics = metrics
        self.notifications = notifications
        self.hour = hour
        self.minute = minute
        self.scheduler = scheduler or AsyncIOScheduler()
        self.is_running = False

    async def run_once(self) -> int:
        logger.info("Starting session cleanup job...")
        async with self.session_factory() as session:
            use_case = CleanupSessionsUseCase(
                SqlAlchemyUnitOfWork(session), self.metrics, self.notifications
            )
            result = await use_case.execute()
        if result.is_err():
            raise ServerError(result.error)
        return result.value

    def start(self) -> None:
        if self.is_running:
            logger.warning("Session cleanup job is already running")
            return

        self.scheduler.add_job(
            self.run_once,
            CronTrigger(hour=self.hour, minute=self.minute),
            id=JOB_ID,
            replace_existing=True,
            max_instances=1,
            coalesce=True,
        )
        self.scheduler.start()
        self.is_running = True
        logger.info(
            f"Session cleanup job scheduled to run daily at {self.hour:02d}:{self.minute:02d}"
        )

    def stop(self) -> None:
        if not self.is_running:
            return
        self.scheduler.shutdown(wait=False)
        self.is_running = False
