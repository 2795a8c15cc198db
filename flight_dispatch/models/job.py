from sqlalchemy import Column, String, DateTime, Date, Time, Integer, Enum, Boolean, Text, ForeignKey, event
from sqlalchemy.orm import relationship
from flight_dispatch.db.base_class import Base
import enum
from datetime import datetime

class JobStatus(str, enum.Enum):
    assigned = "Assigned"
    unassigned = "Unassigned"

class RecurrenceFrequency(str, enum.Enum):
    daily = "daily"
    weekly = "weekly"
    monthly = "monthly"

def status_for_driver(driver_id) -> JobStatus:
    return JobStatus.assigned if driver_id is not None else JobStatus.unassigned

class Job(Base):
    __tablename__ = "jobs"

    id = Column(Integer, primary_key=True, index=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Itinerary
    pickup_date = Column(Date, nullable=False, index=True)
    pickup_time = Column(Time, nullable=False)
    flight_number = Column(String, nullable=False, index=True)
    pickup_location = Column(String, nullable=False)
    dropoff_location = Column(String, nullable=False)
    number_of_passengers = Column(Integer, nullable=False, default=1)

    # Assignment (status is derived from driver_id, see sync_status below)
    driver_id = Column(Integer, ForeignKey("drivers.id"), nullable=True, index=True)
    status = Column(
        Enum(JobStatus, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=JobStatus.unassigned,
    )

    # Execution tracking (UTC)
    driver_picked_up_at = Column(DateTime, nullable=True)
    driver_dropped_off_at = Column(DateTime, nullable=True)

    # Recurrence, stored per instance
    is_recurring = Column(Boolean, nullable=False, default=False)
    recurrence_frequency = Column(Enum(RecurrenceFrequency), nullable=True)
    recurrence_count = Column(Integer, nullable=True)

    # Flight status cache, keyed by flight_number across rows
    flight_status = Column(String, nullable=True)
    flight_status_updated_at = Column(DateTime, nullable=True)
    flight_status_data = Column(Text, nullable=True, comment="Serialized snapshot of the last provider response")

    # Relationships
    driver = relationship("Driver", back_populates="jobs")

    @property
    def driver_name(self):
        return self.driver.name if self.driver is not None else None

    def __repr__(self):
        return f"<Job {self.id} {self.flight_number} {self.pickup_date}>"


@event.listens_for(Job, "before_insert")
@event.listens_for(Job, "before_update")
def sync_status(mapper, connection, target):
    target.status = status_for_driver(target.driver_id)
