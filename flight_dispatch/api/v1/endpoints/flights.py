import json
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import ValidationError
from sqlalchemy.orm import Session

from flight_dispatch import crud, schemas
from flight_dispatch.api import deps
from flight_dispatch.core.cache import RedisClient
from flight_dispatch.core.config import Settings
from flight_dispatch.schemas.flight import NOT_FOUND
from flight_dispatch.services.clients.aviationstack import AviationStackClientError
from flight_dispatch.services.flight_status import FlightStatusFetcher, InvalidFlightNumberError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/flights", tags=["flights"])

def _cache_key(flight_number: str) -> str:
    return f"flight-dispatch:flight-status:{flight_number}"

def _from_cache_row(flight_number: str, job) -> Optional[schemas.FlightStatusResponse]:
    try:
        snapshot = schemas.FlightSnapshot.model_validate(json.loads(job.flight_status_data))
    except (ValueError, ValidationError) as e:
        logger.warning(f"Ignoring unreadable cached status for {flight_number}: {str(e)}")
        return None
    return schemas.FlightStatusResponse(
        **snapshot.model_dump(),
        cached=True,
        updated_at=job.flight_status_updated_at,
    )

@router.get(
    "/status/{flight_number}",
    response_model=schemas.FlightStatusResponse,
    response_model_exclude_none=True,
)
async def read_flight_status(
    flight_number: str,
    db: Session = Depends(deps.get_db),
    settings: Settings = Depends(deps.get_settings),
    fetcher: FlightStatusFetcher = Depends(deps.get_flight_fetcher),
    redis_client: Optional[RedisClient] = Depends(deps.get_redis),
):
    """
    Latest known status of a flight: the refreshed cache when there is one,
    otherwise a live lookup.
    """
    try:
        fetcher.validate(flight_number)
    except InvalidFlightNumberError:
        raise HTTPException(status_code=400, detail="Invalid flight number format")

    cached_job = crud.job.latest_flight_status(db, flight_number=flight_number)
    if cached_job is not None:
        response = _from_cache_row(flight_number, cached_job)
        if response is not None:
            return response

    if redis_client is not None:
        hit = await redis_client.get(_cache_key(flight_number))
        if hit:
            return schemas.FlightStatusResponse.model_validate(hit)

    if not fetcher.is_configured:
        raise HTTPException(status_code=500, detail="AviationStack API key not configured")

    try:
        snapshot = await fetcher.lookup(flight_number)
    except AviationStackClientError as e:
        logger.error(f"Live flight status lookup failed for {flight_number}: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to fetch flight status")

    if snapshot is None:
        return schemas.FlightStatusResponse(
            flight_number=flight_number,
            status=NOT_FOUND,
            message="Flight information not available",
        )

    response = schemas.FlightStatusResponse(**snapshot.model_dump())
    if redis_client is not None:
        await redis_client.set(_cache_key(flight_number), response, expire=settings.CACHE_TTL)
    return response
