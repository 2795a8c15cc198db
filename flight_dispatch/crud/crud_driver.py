from typing import Optional
from sqlalchemy.orm import Session

from flight_dispatch.core.security import hash_password, verify_password
from flight_dispatch.crud.base import CRUDBase
from flight_dispatch.models.driver import Driver
from flight_dispatch.models.job import Job
from flight_dispatch.schemas.driver import DriverCreate, DriverUpdate

class CRUDDriver(CRUDBase[Driver, DriverCreate, DriverUpdate]):
    def get_by_email(self, db: Session, *, email: str) -> Optional[Driver]:
        return db.query(Driver).filter(Driver.email == email).first()

    def get_multi(self, db: Session, *, skip: int = 0, limit: int = 100) -> list[Driver]:
        return (
            db.query(self.model)
            .order_by(Driver.name)
            .offset(skip)
            .limit(limit)
            .all()
        )

    def create(self, db: Session, *, obj_in: DriverCreate) -> Driver:
        db_obj = Driver(
            name=obj_in.name,
            email=obj_in.email,
            phone=obj_in.phone or None,
            password_hash=hash_password(obj_in.password),
        )
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def update(self, db: Session, *, db_obj: Driver, obj_in: DriverUpdate) -> Driver:
        update_data = obj_in.model_dump(exclude_unset=True)
        password = update_data.pop("password", None)
        if "phone" in update_data:
            update_data["phone"] = update_data["phone"] or None
        if password:
            update_data["password_hash"] = hash_password(password)
        return super().update(db, db_obj=db_obj, obj_in=update_data)

    def has_jobs(self, db: Session, *, driver_id: int) -> bool:
        return db.query(Job.id).filter(Job.driver_id == driver_id).first() is not None

    def authenticate(self, db: Session, *, email: str, password: str) -> Optional[Driver]:
        driver = self.get_by_email(db, email=email)
        if not driver or not verify_password(password, driver.password_hash):
            return None
        return driver

# Create a singleton instance
driver = CRUDDriver(Driver)
