from .job import Job, JobCreate, JobCreated, JobUpdate, JobStatus, RecurrenceFrequency
from .driver import Driver, DriverCreate, DriverUpdate
from .location import Location, LocationCreate, LocationUpdate, LocationType
from .auth import LoginRequest, RegisterRequest, AuthUser, TokenResponse, TokenPayload
from .flight import FlightLeg, FlightSnapshot, FlightStatusResponse

__all__ = [
    'Job', 'JobCreate', 'JobCreated', 'JobUpdate', 'JobStatus', 'RecurrenceFrequency',
    'Driver', 'DriverCreate', 'DriverUpdate',
    'Location', 'LocationCreate', 'LocationUpdate', 'LocationType',
    'LoginRequest', 'RegisterRequest', 'AuthUser', 'TokenResponse', 'TokenPayload',
    'FlightLeg', 'FlightSnapshot', 'FlightStatusResponse',
]
