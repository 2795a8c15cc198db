import logging
from datetime import datetime, timedelta, timezone

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.date import DateTrigger
from apscheduler.triggers.interval import IntervalTrigger

from flight_dispatch.services.flight_status_refresher import FlightStatusRefresher, RefreshSummary

logger = logging.getLogger(__name__)

REFRESH_JOB_ID = 'refresh_flight_statuses'
INITIAL_REFRESH_JOB_ID = 'initial_flight_status_refresh'


class SchedulerService:
    """Service for scheduled background tasks"""

    def __init__(
        self,
        refresher: FlightStatusRefresher,
        interval_minutes: int = 30,
        initial_delay_seconds: int = 10,
    ):
        self.refresher = refresher
        self.interval_minutes = interval_minutes
        self.initial_delay_seconds = initial_delay_seconds
        self.scheduler = AsyncIOScheduler(timezone=timezone.utc)
        self.setup_jobs()

    def setup_jobs(self):
        """Configure all scheduled jobs"""
        # A tick that fires while the previous pass is still running is dropped
        self.scheduler.add_job(
            func=self.refresh_flight_statuses,
            trigger=IntervalTrigger(minutes=self.interval_minutes),
            id=REFRESH_JOB_ID,
            name='Refresh cached flight statuses',
            replace_existing=True,
            max_instances=1,
            coalesce=True,
        )
        self.scheduler.add_job(
            func=self.refresh_flight_statuses,
            trigger=DateTrigger(
                run_date=datetime.now(timezone.utc) + timedelta(seconds=self.initial_delay_seconds)
            ),
            id=INITIAL_REFRESH_JOB_ID,
            name='Initial flight status refresh',
            replace_existing=True,
            max_instances=1,
        )
        logger.info(
            f"Scheduled job: flight status refresh every {self.interval_minutes} minutes "
            f"(first run in {self.initial_delay_seconds}s)"
        )

    async def refresh_flight_statuses(self) -> RefreshSummary:
        """Run one refresh pass; the refresher reports its own failures"""
        logger.info("Running scheduled flight status update...")
        return await self.refresher.refresh()

    def start(self):
        """Start the scheduler (must be called from the running event loop)"""
        if not self.scheduler.running:
            self.scheduler.start()
            logger.info("Scheduler service started")

    def shutdown(self):
        """Stop scheduling and ask an in-flight refresh to stop"""
        self.refresher.stop()
        if self.scheduler.running:
            self.scheduler.shutdown(wait=False)
            logger.info("Scheduler service stopped")
