"""
Periodic refresh of the flight status cache stored on job rows.
"""
import asyncio
import json
import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import List, Optional

from flight_dispatch import crud
from flight_dispatch.core.cache import RedisClient
from flight_dispatch.db.session import Storage
from flight_dispatch.schemas.flight import FlightSnapshot
from flight_dispatch.services.flight_status import FlightStatusFetcher, InvalidFlightNumberError

logger = logging.getLogger(__name__)

REFRESH_LOCK_NAME = "flight-dispatch:flight-status-refresh"


@dataclass
class RefreshSummary:
    """Outcome of one refresh pass"""
    flights: int = 0
    updated: int = 0
    not_found: int = 0
    failed: int = 0
    skipped: bool = False
    cancelled: bool = False


class FlightStatusRefresher:
    """
    Refreshes the cached status of every flight on recent or upcoming jobs.

    Only one pass runs at a time; a pass requested while another is running is
    skipped. A failure on one flight never stops the others, and refresh()
    never raises.
    """

    def __init__(
        self,
        storage: Storage,
        fetcher: FlightStatusFetcher,
        *,
        request_delay: float = 0.5,
        lookback_days: int = 7,
        redis_client: Optional[RedisClient] = None,
        lock_ttl: int = 1800,
    ):
        self.storage = storage
        self.fetcher = fetcher
        self.request_delay = request_delay
        self.lookback_days = lookback_days
        self.redis_client = redis_client
        self.lock_ttl = lock_ttl
        self._slot = asyncio.Lock()
        self._stopping = asyncio.Event()

    @property
    def running(self) -> bool:
        return self._slot.locked()

    def stop(self) -> None:
        """Ask an in-flight pass to stop before its next flight."""
        self._stopping.set()

    async def wait_until_idle(self, timeout: Optional[float] = None) -> bool:
        """Wait for an in-flight pass to finish. Returns False on timeout."""
        try:
            await asyncio.wait_for(self._slot.acquire(), timeout)
        except asyncio.TimeoutError:
            return False
        self._slot.release()
        return True

    async def refresh(self) -> RefreshSummary:
        if self._slot.locked():
            logger.warning("Flight status refresh already running, skipping this pass")
            return RefreshSummary(skipped=True)

        async with self._slot:
            if self._stopping.is_set():
                return RefreshSummary(skipped=True)

            lock_token = None
            if self.redis_client is not None:
                try:
                    lock_token = await self.redis_client.acquire_lock(REFRESH_LOCK_NAME, self.lock_ttl)
                except Exception as e:
                    logger.error(f"Could not take the refresh lock, skipping this pass: {str(e)}")
                    return RefreshSummary(skipped=True)
                if lock_token is None:
                    logger.info("Flight status refresh running on another instance, skipping this pass")
                    return RefreshSummary(skipped=True)

            try:
                return await self._run_pass(lock_token)
            except Exception as e:
                logger.error(f"Error in flight status refresh: {str(e)}", exc_info=True)
                return RefreshSummary(failed=1)
            finally:
                if lock_token is not None:
                    await self.redis_client.release_lock(REFRESH_LOCK_NAME, lock_token)

    async def _run_pass(self, lock_token: Optional[str] = None) -> RefreshSummary:
        if not self.fetcher.is_configured:
            logger.info("AviationStack API key not configured, skipping flight status refresh")
            return RefreshSummary(skipped=True)

        since = date.today() - timedelta(days=self.lookback_days)
        flight_numbers = await asyncio.to_thread(self._active_flight_numbers, since)
        summary = RefreshSummary(flights=len(flight_numbers))
        logger.info(f"Refreshing flight status for {len(flight_numbers)} unique flight(s)")

        for index, flight_number in enumerate(flight_numbers):
            if self._stopping.is_set():
                summary.cancelled = True
                logger.info("Flight status refresh cancelled")
                break

            if lock_token is not None and index > 0 and not await self._extend_lock(lock_token):
                summary.cancelled = True
                logger.warning("Lost the refresh lock to another instance, stopping this pass")
                break

            try:
                snapshot = await self.fetcher.fetch(flight_number)
            except InvalidFlightNumberError as e:
                logger.warning(str(e))
                snapshot = None
            except Exception as e:
                logger.error(f"Error fetching flight status for {flight_number}: {str(e)}", exc_info=True)
                snapshot = None

            try:
                if snapshot is not None:
                    rows = await asyncio.to_thread(self._store_snapshot, flight_number, snapshot)
                    summary.updated += 1
                    logger.info(f"Updated flight status for {flight_number}: {snapshot.status} ({rows} job(s))")
                else:
                    await asyncio.to_thread(self._mark_not_found, flight_number)
                    summary.not_found += 1
            except Exception as e:
                summary.failed += 1
                logger.error(f"Error updating flight status for {flight_number}: {str(e)}", exc_info=True)

            if index < len(flight_numbers) - 1:
                await self._pause()

        logger.info(
            f"Flight status refresh completed: {summary.updated} updated, "
            f"{summary.not_found} not found, {summary.failed} failed"
        )
        return summary

    async def _extend_lock(self, lock_token: str) -> bool:
        try:
            return await self.redis_client.extend_lock(REFRESH_LOCK_NAME, lock_token, self.lock_ttl)
        except Exception as e:
            logger.error(f"Could not extend the refresh lock: {str(e)}")
            return False

    async def _pause(self) -> None:
        """Rate-limit pause between provider calls; returns early on stop()."""
        try:
            await asyncio.wait_for(self._stopping.wait(), self.request_delay)
        except asyncio.TimeoutError:
            pass

    def _active_flight_numbers(self, since: date) -> List[str]:
        with self.storage.session() as db:
            return crud.job.active_flight_numbers(db, since=since)

    def _store_snapshot(self, flight_number: str, snapshot: FlightSnapshot) -> int:
        data = json.dumps(snapshot.model_dump(mode="json", by_alias=True))
        with self.storage.session() as db:
            return crud.job.apply_flight_status(
                db,
                flight_number=flight_number,
                status=snapshot.status,
                data=data,
                at=datetime.utcnow(),
            )

    def _mark_not_found(self, flight_number: str) -> int:
        with self.storage.session() as db:
            return crud.job.mark_flight_not_found(db, flight_number=flight_number, at=datetime.utcnow())
