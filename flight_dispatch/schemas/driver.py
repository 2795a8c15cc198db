from pydantic import EmailStr, Field
from datetime import datetime
from typing import Optional

from flight_dispatch.schemas.base import CamelModel

class DriverBase(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    phone: Optional[str] = Field(None, max_length=30)

class DriverCreate(DriverBase):
    password: str = Field(..., min_length=1)

class DriverUpdate(DriverBase):
    # Password is re-hashed only when supplied
    password: Optional[str] = None

class Driver(DriverBase):
    id: int
    created_at: Optional[datetime] = None
