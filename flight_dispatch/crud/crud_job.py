import logging
from datetime import date, datetime
from typing import List, Optional, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from flight_dispatch.crud.base import CRUDBase
from flight_dispatch.models.job import Job, JobStatus
from flight_dispatch.schemas.flight import NOT_FOUND
from flight_dispatch.schemas.job import JobCreate, JobUpdate

logger = logging.getLogger(__name__)

class CRUDJob(CRUDBase[Job, JobCreate, JobUpdate]):
    def _with_driver(self, db: Session):
        return db.query(Job).options(joinedload(Job.driver))

    def get_with_driver(self, db: Session, *, id: int) -> Optional[Job]:
        return self._with_driver(db).filter(Job.id == id).first()

    def get_multi_filtered(
        self,
        db: Session,
        *,
        status: Optional[JobStatus] = None,
        driver_id: Optional[int] = None,
        pickup_date: Optional[date] = None,
    ) -> List[Job]:
        query = self._with_driver(db)
        if status is not None:
            query = query.filter(Job.status == status)
        if driver_id is not None:
            query = query.filter(Job.driver_id == driver_id)
        if pickup_date is not None:
            query = query.filter(Job.pickup_date == pickup_date)
        return query.order_by(Job.pickup_date, Job.pickup_time, Job.id).all()

    def get_by_driver(self, db: Session, *, driver_id: int) -> List[Job]:
        return self.get_multi_filtered(db, driver_id=driver_id)

    def get_for_driver(self, db: Session, *, id: int, driver_id: int) -> Optional[Job]:
        """A job only if it is assigned to the given driver."""
        return (
            self._with_driver(db)
            .filter(Job.id == id, Job.driver_id == driver_id)
            .first()
        )

    def create_series(self, db: Session, *, instances: Sequence[Job]) -> List[Job]:
        """
        Insert a job and its recurrence instances in a single transaction.

        Either every row is committed or none is.
        """
        try:
            db.add_all(instances)
            db.flush()
            db.commit()
        except SQLAlchemyError:
            db.rollback()
            logger.error(f"Rolled back job series of {len(instances)} instance(s)")
            raise
        return list(instances)

    # Flight status cache

    def active_flight_numbers(self, db: Session, *, since: date) -> List[str]:
        rows = (
            db.query(Job.flight_number)
            .filter(
                Job.pickup_date >= since,
                Job.flight_number.isnot(None),
                Job.flight_number != "",
            )
            .distinct()
            .order_by(Job.flight_number)
            .all()
        )
        return [row[0] for row in rows]

    def apply_flight_status(
        self, db: Session, *, flight_number: str, status: str, data: str, at: datetime
    ) -> int:
        count = (
            db.query(Job)
            .filter(Job.flight_number == flight_number)
            .update(
                {
                    Job.flight_status: status,
                    Job.flight_status_data: data,
                    Job.flight_status_updated_at: at,
                },
                synchronize_session=False,
            )
        )
        db.commit()
        return count

    def mark_flight_not_found(self, db: Session, *, flight_number: str, at: datetime) -> int:
        """Only rows that never received a status; a good cached value is kept."""
        count = (
            db.query(Job)
            .filter(Job.flight_number == flight_number, Job.flight_status.is_(None))
            .update(
                {Job.flight_status: NOT_FOUND, Job.flight_status_updated_at: at},
                synchronize_session=False,
            )
        )
        db.commit()
        return count

    def latest_flight_status(self, db: Session, *, flight_number: str) -> Optional[Job]:
        return (
            db.query(Job)
            .filter(
                Job.flight_number == flight_number,
                Job.flight_status_data.isnot(None),
            )
            .order_by(Job.flight_status_updated_at.desc(), Job.id.desc())
            .first()
        )

# Create a singleton instance
job = CRUDJob(Job)
