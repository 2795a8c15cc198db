import logging

from sqlalchemy.orm import Session

from flight_dispatch import crud
from flight_dispatch.core.config import Settings
from flight_dispatch.models.location import LocationType
from flight_dispatch.schemas.driver import DriverCreate
from flight_dispatch.schemas.location import LocationCreate

logger = logging.getLogger(__name__)

DEFAULT_LOCATIONS = [
    LocationCreate(name="Airport Terminal 1", address="123 Airport Blvd", type=LocationType.airport),
    LocationCreate(name="Airport Terminal 2", address="456 Airport Blvd", type=LocationType.airport),
    LocationCreate(name="Downtown Hotel", address="789 Main St", type=LocationType.hotel),
    LocationCreate(name="Crew Quarters", address="321 Crew Ave", type=LocationType.other),
]


def seed_defaults(db: Session, settings: Settings) -> None:
    """Insert the default admin account and common locations if missing."""
    if crud.driver.get_by_email(db, email=settings.DEFAULT_ADMIN_EMAIL) is None:
        crud.driver.create(
            db,
            obj_in=DriverCreate(
                name="Admin User",
                email=settings.DEFAULT_ADMIN_EMAIL,
                password=settings.DEFAULT_ADMIN_PASSWORD,
                phone="555-0000",
            ),
        )
        logger.info(f"Created default admin user {settings.DEFAULT_ADMIN_EMAIL}")

    for location_in in DEFAULT_LOCATIONS:
        if crud.location.get_by_name(db, name=location_in.name) is None:
            crud.location.create(db, obj_in=location_in)
