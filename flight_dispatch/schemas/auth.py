from pydantic import EmailStr, Field
from typing import Optional

from flight_dispatch.schemas.base import CamelModel

class LoginRequest(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=1)

class RegisterRequest(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=1)
    phone: Optional[str] = Field(None, max_length=30)

class AuthUser(CamelModel):
    id: int
    name: str
    email: str
    phone: Optional[str] = None

class TokenResponse(CamelModel):
    token: str
    user: AuthUser

class TokenPayload(CamelModel):
    id: int
    email: str
    name: str
