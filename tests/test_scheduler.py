from unittest.mock import AsyncMock, MagicMock

import pytest
from apscheduler.triggers.date import DateTrigger
from apscheduler.triggers.interval import IntervalTrigger

from flight_dispatch.services.flight_status_refresher import RefreshSummary
from flight_dispatch.services.scheduler import INITIAL_REFRESH_JOB_ID, REFRESH_JOB_ID, SchedulerService


@pytest.fixture
def mock_refresher():
    refresher = MagicMock()
    refresher.refresh = AsyncMock(return_value=RefreshSummary(flights=2, updated=2))
    return refresher


def test_refresh_jobs_are_registered(mock_refresher):
    service = SchedulerService(mock_refresher, interval_minutes=15, initial_delay_seconds=10)

    periodic = service.scheduler.get_job(REFRESH_JOB_ID)
    assert isinstance(periodic.trigger, IntervalTrigger)
    assert periodic.trigger.interval.total_seconds() == 15 * 60
    assert periodic.max_instances == 1
    assert periodic.coalesce is True

    initial = service.scheduler.get_job(INITIAL_REFRESH_JOB_ID)
    assert isinstance(initial.trigger, DateTrigger)


@pytest.mark.asyncio
async def test_scheduled_refresh_delegates_to_the_refresher(mock_refresher):
    service = SchedulerService(mock_refresher)

    summary = await service.refresh_flight_statuses()

    mock_refresher.refresh.assert_awaited_once()
    assert summary.updated == 2


@pytest.mark.asyncio
async def test_shutdown_stops_the_refresher(mock_refresher):
    service = SchedulerService(mock_refresher, initial_delay_seconds=3600)

    service.start()
    assert service.scheduler.running

    service.shutdown()
    assert not service.scheduler.running
    mock_refresher.stop.assert_called_once()
