from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from flight_dispatch import crud, schemas
from flight_dispatch.api import deps

router = APIRouter(prefix="/locations", tags=["locations"])

@router.get("", response_model=List[schemas.Location])
def read_locations(
    db: Session = Depends(deps.get_db),
):
    """
    Retrieve known locations ordered by name.
    """
    return crud.location.get_multi(db)

@router.post("", response_model=schemas.Location, status_code=status.HTTP_201_CREATED)
def create_location(
    *,
    db: Session = Depends(deps.get_db),
    location_in: schemas.LocationCreate,
):
    """
    Create new location.
    """
    return crud.location.create(db=db, obj_in=location_in)
