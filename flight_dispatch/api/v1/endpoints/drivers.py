from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from flight_dispatch import crud, schemas
from flight_dispatch.api import deps

router = APIRouter(prefix="/drivers", tags=["drivers"])

@router.get("", response_model=List[schemas.Driver])
def read_drivers(
    db: Session = Depends(deps.get_db),
    skip: int = 0,
    limit: int = 100,
):
    """
    Retrieve drivers ordered by name.
    """
    return crud.driver.get_multi(db, skip=skip, limit=limit)

@router.post("", response_model=schemas.Driver, status_code=status.HTTP_201_CREATED)
def create_driver(
    *,
    db: Session = Depends(deps.get_db),
    driver_in: schemas.DriverCreate,
):
    """
    Create new driver.
    """
    driver = crud.driver.get_by_email(db, email=driver_in.email)
    if driver:
        raise HTTPException(
            status_code=400,
            detail="Email already exists",
        )
    return crud.driver.create(db=db, obj_in=driver_in)

@router.get("/{driver_id}", response_model=schemas.Driver)
def read_driver(
    driver_id: int,
    db: Session = Depends(deps.get_db),
):
    """
    Get driver by ID.
    """
    driver = crud.driver.get(db, id=driver_id)
    if not driver:
        raise HTTPException(
            status_code=404,
            detail="Driver not found",
        )
    return driver

@router.put("/{driver_id}", response_model=schemas.Driver)
def update_driver(
    *,
    db: Session = Depends(deps.get_db),
    driver_id: int,
    driver_in: schemas.DriverUpdate,
):
    """
    Update a driver. The password is changed only when a new one is supplied.
    """
    driver = crud.driver.get(db, id=driver_id)
    if not driver:
        raise HTTPException(
            status_code=404,
            detail="Driver not found",
        )

    # Check if email is being updated to an existing one
    if driver_in.email != driver.email:
        existing_driver = crud.driver.get_by_email(db, email=driver_in.email)
        if existing_driver and existing_driver.id != driver_id:
            raise HTTPException(
                status_code=400,
                detail="Email already exists",
            )

    return crud.driver.update(db=db, db_obj=driver, obj_in=driver_in)

@router.delete("/{driver_id}")
def delete_driver(
    *,
    db: Session = Depends(deps.get_db),
    driver_id: int,
):
    """
    Delete a driver that has no jobs.
    """
    driver = crud.driver.get(db, id=driver_id)
    if not driver:
        raise HTTPException(
            status_code=404,
            detail="Driver not found",
        )

    # Check if driver is assigned to any jobs
    if crud.driver.has_jobs(db, driver_id=driver_id):
        raise HTTPException(
            status_code=400,
            detail="Cannot delete driver with assigned jobs. Please reassign jobs first.",
        )

    crud.driver.remove(db=db, id=driver_id)
    return {"message": "Driver deleted successfully"}

@router.get("/{driver_id}/jobs", response_model=List[schemas.Job])
def read_driver_jobs(
    driver_id: int,
    db: Session = Depends(deps.get_db),
):
    """
    Retrieve the jobs assigned to a driver.
    """
    return crud.job.get_by_driver(db, driver_id=driver_id)
