import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from flight_dispatch import crud, schemas
from flight_dispatch.api import deps
from flight_dispatch.core.config import Settings
from flight_dispatch.core.security import create_access_token

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])

def _token_response(settings: Settings, driver) -> schemas.TokenResponse:
    token = create_access_token(settings, driver_id=driver.id, email=driver.email, name=driver.name)
    return schemas.TokenResponse(token=token, user=schemas.AuthUser.model_validate(driver))

@router.post("/login", response_model=schemas.TokenResponse)
def login(
    *,
    db: Session = Depends(deps.get_db),
    settings: Settings = Depends(deps.get_settings),
    credentials: schemas.LoginRequest,
):
    """
    Exchange email and password for a session token.
    """
    driver = crud.driver.authenticate(db, email=credentials.email, password=credentials.password)
    if not driver:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")
    logger.info(f"Driver {driver.id} logged in")
    return _token_response(settings, driver)

@router.post("/register", response_model=schemas.TokenResponse, status_code=status.HTTP_201_CREATED)
def register(
    *,
    db: Session = Depends(deps.get_db),
    settings: Settings = Depends(deps.get_settings),
    driver_in: schemas.RegisterRequest,
):
    """
    Create an account and return a session token for it.
    """
    if crud.driver.get_by_email(db, email=driver_in.email):
        raise HTTPException(status_code=400, detail="Email already exists")
    driver = crud.driver.create(db, obj_in=schemas.DriverCreate(**driver_in.model_dump()))
    return _token_response(settings, driver)
