"""
Flight status lookups against the aviation data provider.
"""
import logging
from typing import Any, Dict, Optional

from pydantic import ValidationError

from flight_dispatch.schemas.flight import (
    FLIGHT_NUMBER_RE,
    UNKNOWN,
    FlightLeg,
    FlightSnapshot,
)
from flight_dispatch.services.clients.aviationstack import AviationStackClient, AviationStackClientError

logger = logging.getLogger(__name__)


class InvalidFlightNumberError(ValueError):
    """Raised for flight numbers not shaped like AA123"""
    pass


def _section(record: Dict[str, Any], key: str) -> Dict[str, Any]:
    value = record.get(key)
    return value if isinstance(value, dict) else {}


def _leg(section: Dict[str, Any]) -> FlightLeg:
    return FlightLeg(
        airport=section.get("airport") or UNKNOWN,
        scheduled=section.get("scheduled"),
        actual=section.get("actual"),
        delay=section.get("delay"),
    )


def normalize_flight(flight_number: str, record: Dict[str, Any]) -> FlightSnapshot:
    """
    Map a raw provider record onto a snapshot.

    Every field defaults on its own ("Unknown" for text, None otherwise).

    Raises:
        pydantic.ValidationError: If a present field has an unusable type
    """
    return FlightSnapshot(
        flight_number=flight_number,
        status=record.get("flight_status") or UNKNOWN,
        departure=_leg(_section(record, "departure")),
        arrival=_leg(_section(record, "arrival")),
        airline=_section(record, "airline").get("name") or UNKNOWN,
    )


class FlightStatusFetcher:
    """
    Fetches and normalizes the status of a single flight.
    """

    def __init__(self, client: AviationStackClient):
        self.client = client

    @property
    def is_configured(self) -> bool:
        return self.client.is_configured

    @staticmethod
    def validate(flight_number: str) -> str:
        if not isinstance(flight_number, str) or not FLIGHT_NUMBER_RE.match(flight_number):
            raise InvalidFlightNumberError(f"Invalid flight number format: {flight_number!r}")
        return flight_number

    async def lookup(self, flight_number: str) -> Optional[FlightSnapshot]:
        """
        Query the provider for one flight.

        Returns:
            The snapshot, or None when the provider has no record

        Raises:
            InvalidFlightNumberError: Before any network call, for malformed numbers
            AviationStackClientError: On provider failure or a malformed payload
        """
        self.validate(flight_number)
        record = await self.client.get_flight(flight_number)
        if record is None:
            return None
        try:
            return normalize_flight(flight_number, record)
        except ValidationError as e:
            raise AviationStackClientError(f"Malformed flight record for {flight_number}: {e}")

    async def fetch(self, flight_number: str) -> Optional[FlightSnapshot]:
        """
        Like lookup, but any provider failure yields None ("status unknown").

        Raises:
            InvalidFlightNumberError: For malformed numbers
        """
        try:
            return await self.lookup(flight_number)
        except AviationStackClientError as e:
            logger.warning(f"No flight status for {flight_number}: {e}")
            return None
