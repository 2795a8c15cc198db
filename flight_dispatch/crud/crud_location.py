from sqlalchemy.orm import Session

from flight_dispatch.crud.base import CRUDBase
from flight_dispatch.models.location import Location
from flight_dispatch.schemas.location import LocationCreate, LocationUpdate

class CRUDLocation(CRUDBase[Location, LocationCreate, LocationUpdate]):
    def get_multi(self, db: Session, *, skip: int = 0, limit: int = 1000) -> list[Location]:
        return (
            db.query(self.model)
            .order_by(Location.name)
            .offset(skip)
            .limit(limit)
            .all()
        )

    def get_by_name(self, db: Session, *, name: str):
        return db.query(Location).filter(Location.name == name).first()

# Create a singleton instance
location = CRUDLocation(Location)
