from sqlalchemy import Column, String, Integer, Enum
from flight_dispatch.db.base_class import Base
import enum

class LocationType(str, enum.Enum):
    airport = "airport"
    hotel = "hotel"
    other = "other"

class Location(Base):
    __tablename__ = "locations"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    address = Column(String, nullable=False)
    type = Column(Enum(LocationType), nullable=False, default=LocationType.other)

    def __repr__(self):
        return f"<Location {self.name} ({self.type})>"
