from typing import Generator, Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from flight_dispatch.core.cache import RedisClient
from flight_dispatch.core.config import Settings
from flight_dispatch.core.security import InvalidTokenError, decode_access_token
from flight_dispatch.schemas.auth import TokenPayload
from flight_dispatch.services.flight_status import FlightStatusFetcher

bearer_scheme = HTTPBearer(auto_error=False)

def get_settings(request: Request) -> Settings:
    return request.app.state.settings

def get_db(request: Request) -> Generator:
    """
    Dependency that provides a database session.
    """
    with request.app.state.storage.session() as db:
        yield db

def get_flight_fetcher(request: Request) -> FlightStatusFetcher:
    return request.app.state.flight_fetcher

def get_redis(request: Request) -> Optional[RedisClient]:
    return getattr(request.app.state, "redis", None)

def get_current_driver(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    settings: Settings = Depends(get_settings),
) -> TokenPayload:
    """
    Resolve the driver from the `Authorization: Bearer <token>` header.
    """
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="No token provided",
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        claims = decode_access_token(settings, credentials.credentials)
    except InvalidTokenError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return TokenPayload(id=claims["id"], email=claims.get("email", ""), name=claims.get("name", ""))
