from fastapi import APIRouter

from flight_dispatch.api.v1.endpoints import auth, drivers, flights, jobs, locations

api_router = APIRouter()

# Include all endpoint routers
api_router.include_router(jobs.router)
api_router.include_router(drivers.router)
api_router.include_router(locations.router)
api_router.include_router(auth.router)
api_router.include_router(flights.router)
