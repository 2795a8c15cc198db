from pydantic import Field, field_validator
from datetime import date, datetime, time
from typing import Optional

from flight_dispatch.models.job import JobStatus, RecurrenceFrequency
from flight_dispatch.schemas.base import CamelModel
from flight_dispatch.schemas.flight import normalize_flight_number

class JobBase(CamelModel):
    # Mandatory fields
    pickup_date: date
    pickup_time: time
    flight_number: str
    pickup_location: str = Field(..., min_length=1)
    dropoff_location: str = Field(..., min_length=1)

    # Non-mandatory fields
    driver_id: Optional[int] = None
    number_of_passengers: int = Field(1, ge=1)

class JobCreate(JobBase):
    is_recurring: bool = False
    recurrence_frequency: Optional[RecurrenceFrequency] = None
    recurrence_count: Optional[int] = Field(None, ge=1, le=365)

    @field_validator('flight_number')
    def validate_flight_number(cls, v):
        return normalize_flight_number(v)

class JobUpdate(CamelModel):
    pickup_date: Optional[date] = None
    pickup_time: Optional[time] = None
    flight_number: Optional[str] = None
    pickup_location: Optional[str] = Field(None, min_length=1)
    dropoff_location: Optional[str] = Field(None, min_length=1)
    driver_id: Optional[int] = None
    number_of_passengers: Optional[int] = Field(None, ge=1)
    status: Optional[JobStatus] = None

    @field_validator('flight_number')
    def validate_flight_number(cls, v):
        return normalize_flight_number(v) if v is not None else v

class Job(JobBase):
    id: int
    status: JobStatus
    driver_name: Optional[str] = None
    driver_picked_up_at: Optional[datetime] = None
    driver_dropped_off_at: Optional[datetime] = None
    is_recurring: bool = False
    recurrence_frequency: Optional[RecurrenceFrequency] = None
    recurrence_count: Optional[int] = None
    flight_status: Optional[str] = None
    flight_status_updated_at: Optional[datetime] = None
    flight_status_data: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

class JobCreated(Job):
    created_instances: int
