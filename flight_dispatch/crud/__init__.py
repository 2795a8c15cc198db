from .base import CRUDBase
from .crud_driver import driver
from .crud_job import job
from .crud_location import location

__all__ = [
    'CRUDBase',
    'driver',
    'job',
    'location',
]
