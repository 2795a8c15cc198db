import logging
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from flight_dispatch import crud, schemas
from flight_dispatch.api import deps
from flight_dispatch.core.config import Settings
from flight_dispatch.services import job_service
from flight_dispatch.services.job_service import JobStateError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/jobs", tags=["jobs"])

def _ensure_driver_exists(db: Session, driver_id: Optional[int]) -> None:
    if driver_id is not None and crud.driver.get(db, id=driver_id) is None:
        raise HTTPException(
            status_code=400,
            detail="The driver with this ID does not exist in the system",
        )

def _get_job_or_404(db: Session, job_id: int):
    job = crud.job.get_with_driver(db, id=job_id)
    if not job:
        raise HTTPException(status_code=404, detail="Job not found")
    return job

@router.get("", response_model=List[schemas.Job])
def read_jobs(
    db: Session = Depends(deps.get_db),
    status: Optional[schemas.JobStatus] = None,
    driver_id: Optional[int] = Query(None, alias="driverId"),
    pickup_date: Optional[date] = Query(None, alias="date"),
):
    """
    Retrieve jobs, optionally filtered by status, driver and pickup date.
    """
    return crud.job.get_multi_filtered(db, status=status, driver_id=driver_id, pickup_date=pickup_date)

@router.get("/{job_id}", response_model=schemas.Job)
def read_job(
    job_id: int,
    db: Session = Depends(deps.get_db),
):
    """
    Get job by ID.
    """
    return _get_job_or_404(db, job_id)

@router.post("", response_model=schemas.JobCreated, status_code=status.HTTP_201_CREATED)
def create_job(
    *,
    db: Session = Depends(deps.get_db),
    settings: Settings = Depends(deps.get_settings),
    job_in: schemas.JobCreate,
):
    """
    Create new job. Recurring jobs also create their future occurrences.
    """
    _ensure_driver_exists(db, job_in.driver_id)
    created = job_service.create_job(db, job_in, default_recurrence_count=settings.DEFAULT_RECURRENCE_COUNT)
    job = crud.job.get_with_driver(db, id=created[0].id)
    return schemas.JobCreated(
        **schemas.Job.model_validate(job).model_dump(),
        created_instances=len(created),
    )

@router.put("/{job_id}", response_model=schemas.Job)
def update_job(
    *,
    db: Session = Depends(deps.get_db),
    job_id: int,
    job_in: schemas.JobUpdate,
):
    """
    Update a job. Status follows the driver assignment.
    """
    job = _get_job_or_404(db, job_id)
    if "driver_id" in job_in.model_fields_set:
        _ensure_driver_exists(db, job_in.driver_id)
    try:
        job_service.update_job(db, job, job_in)
    except JobStateError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return crud.job.get_with_driver(db, id=job_id)

@router.delete("/{job_id}")
def delete_job(
    job_id: int,
    db: Session = Depends(deps.get_db),
):
    """
    Delete a job.
    """
    if not job_service.delete_job(db, job_id):
        raise HTTPException(status_code=404, detail="Job not found")
    return {"message": "Job deleted successfully"}

def _get_own_job_or_404(db: Session, job_id: int, driver: schemas.TokenPayload):
    # Jobs of other drivers are reported as missing rather than forbidden
    job = crud.job.get_for_driver(db, id=job_id, driver_id=driver.id)
    if not job:
        raise HTTPException(status_code=404, detail="Job not found or not assigned to you")
    return job

@router.post("/{job_id}/pickup", response_model=schemas.Job)
def mark_pickup(
    job_id: int,
    db: Session = Depends(deps.get_db),
    current_driver: schemas.TokenPayload = Depends(deps.get_current_driver),
):
    """
    Record that the assigned driver picked up the passengers.
    """
    job = _get_own_job_or_404(db, job_id, current_driver)
    try:
        job_service.mark_pickup(db, job)
    except JobStateError as e:
        raise HTTPException(status_code=400, detail=str(e))
    logger.info(f"Driver {current_driver.id} picked up job {job_id}")
    return crud.job.get_with_driver(db, id=job_id)

@router.post("/{job_id}/dropoff", response_model=schemas.Job)
def mark_dropoff(
    job_id: int,
    db: Session = Depends(deps.get_db),
    current_driver: schemas.TokenPayload = Depends(deps.get_current_driver),
):
    """
    Record that the assigned driver dropped off the passengers.
    """
    job = _get_own_job_or_404(db, job_id, current_driver)
    try:
        job_service.mark_dropoff(db, job)
    except JobStateError as e:
        raise HTTPException(status_code=400, detail=str(e))
    logger.info(f"Driver {current_driver.id} dropped off job {job_id}")
    return crud.job.get_with_driver(db, id=job_id)
