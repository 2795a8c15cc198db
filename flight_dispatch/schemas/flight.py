import re
from datetime import datetime
from typing import Optional, Union

from pydantic import Field

from flight_dispatch.schemas.base import CamelModel

FLIGHT_NUMBER_RE = re.compile(r"^[A-Z]+[0-9]+$")

UNKNOWN = "Unknown"
NOT_FOUND = "Not found"


def normalize_flight_number(value: str) -> str:
    """Trim and upper-case a flight number, rejecting anything not shaped like AA123."""
    normalized = (value or "").strip().upper()
    if not FLIGHT_NUMBER_RE.match(normalized):
        raise ValueError("Invalid flight number format, expected airline code followed by digits (e.g. AA123)")
    return normalized


class FlightLeg(CamelModel):
    airport: str = UNKNOWN
    scheduled: Optional[str] = None
    actual: Optional[str] = None
    delay: Optional[Union[int, float]] = None  # minutes


class FlightSnapshot(CamelModel):
    """Normalized provider response for one flight."""
    flight_number: str
    status: str = UNKNOWN
    departure: FlightLeg = Field(default_factory=FlightLeg)
    arrival: FlightLeg = Field(default_factory=FlightLeg)
    airline: str = UNKNOWN


class FlightStatusResponse(CamelModel):
    flight_number: str
    status: str
    departure: Optional[FlightLeg] = None
    arrival: Optional[FlightLeg] = None
    airline: Optional[str] = None
    cached: bool = False
    updated_at: Optional[datetime] = None
    message: Optional[str] = None
