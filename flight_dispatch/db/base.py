# Import all the models, so that Base has them before being
# imported by Alembic or used for create_all
from flight_dispatch.db.base_class import Base  # noqa: F401
from flight_dispatch.models.driver import Driver  # noqa: F401
from flight_dispatch.models.job import Job  # noqa: F401
from flight_dispatch.models.location import Location  # noqa: F401
