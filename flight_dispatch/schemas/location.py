from pydantic import Field
from typing import Optional

from flight_dispatch.models.location import LocationType
from flight_dispatch.schemas.base import CamelModel

class LocationBase(CamelModel):
    name: str = Field(..., min_length=1, max_length=200)
    address: str = Field(..., min_length=1, max_length=500)
    type: LocationType = LocationType.other

class LocationCreate(LocationBase):
    pass

class LocationUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    address: Optional[str] = Field(None, min_length=1, max_length=500)
    type: Optional[LocationType] = None

class Location(LocationBase):
    id: int
