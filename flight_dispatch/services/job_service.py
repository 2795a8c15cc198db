import logging
from datetime import datetime
from typing import List

from sqlalchemy.orm import Session

from flight_dispatch import crud
from flight_dispatch.models.job import Job, status_for_driver
from flight_dispatch.schemas.job import JobCreate, JobUpdate
from flight_dispatch.services.recurrence import expand_dates

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = (
    "pickup_date",
    "pickup_time",
    "flight_number",
    "pickup_location",
    "dropoff_location",
    "number_of_passengers",
)

class JobStateError(ValueError):
    """Raised when a requested change would leave a job in an inconsistent state"""
    pass

def _new_instance(job: JobCreate, *, pickup_date, driver_id, recurrence_count) -> Job:
    return Job(
        pickup_date=pickup_date,
        pickup_time=job.pickup_time,
        flight_number=job.flight_number,
        pickup_location=job.pickup_location,
        dropoff_location=job.dropoff_location,
        driver_id=driver_id,
        number_of_passengers=job.number_of_passengers,
        is_recurring=job.is_recurring,
        recurrence_frequency=job.recurrence_frequency,
        recurrence_count=recurrence_count,
    )

def create_job(db: Session, job: JobCreate, default_recurrence_count: int = 12) -> List[Job]:
    """
    Create a job, fanning out future occurrences when it is recurring.

    The first row keeps the requested driver; every generated occurrence is
    created without a driver and must be assigned separately. All rows are
    written in one transaction.

    Returns:
        The created rows, origin first
    """
    count = job.recurrence_count or default_recurrence_count
    stored_count = count if job.is_recurring else None

    instances = [
        _new_instance(job, pickup_date=job.pickup_date, driver_id=job.driver_id, recurrence_count=stored_count)
    ]
    if job.is_recurring and job.recurrence_frequency:
        for occurrence in expand_dates(job.pickup_date, job.recurrence_frequency, count):
            instances.append(
                _new_instance(job, pickup_date=occurrence, driver_id=None, recurrence_count=stored_count)
            )

    created = crud.job.create_series(db, instances=instances)
    logger.info(f"Created job {created[0].id} for flight {job.flight_number} ({len(created)} instance(s))")
    return created

def update_job(db: Session, db_job: Job, job_in: JobUpdate) -> Job:
    """
    Apply a partial update.

    Status follows driver presence. An explicit status is accepted only when
    it agrees with the resulting driver assignment.
    """
    update_data = job_in.model_dump(exclude_unset=True)
    # null on a required column keeps the current value; driver_id=None unassigns
    for field in REQUIRED_FIELDS:
        if field in update_data and update_data[field] is None:
            del update_data[field]
    requested_status = update_data.pop("status", None)

    driver_id = update_data.get("driver_id", db_job.driver_id)
    derived = status_for_driver(driver_id)
    if requested_status is not None and requested_status != derived:
        raise JobStateError(
            f"Status '{requested_status.value}' conflicts with the driver assignment; "
            f"a job {'with' if driver_id is not None else 'without'} a driver is '{derived.value}'"
        )

    update_data["status"] = derived
    return crud.job.update(db, db_obj=db_job, obj_in=update_data)

def mark_pickup(db: Session, db_job: Job) -> Job:
    if db_job.driver_dropped_off_at is not None:
        raise JobStateError("Dropoff has already been recorded for this job")
    return crud.job.update(db, db_obj=db_job, obj_in={"driver_picked_up_at": datetime.utcnow()})

def mark_dropoff(db: Session, db_job: Job) -> Job:
    if db_job.driver_picked_up_at is None:
        raise JobStateError("Pickup must be recorded before dropoff")
    return crud.job.update(db, db_obj=db_job, obj_in={"driver_dropped_off_at": datetime.utcnow()})

def delete_job(db: Session, job_id: int) -> bool:
    return crud.job.remove(db, id=job_id) is not None
