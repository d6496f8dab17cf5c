# expenses_api/schemas/account.py
import enum
from typing import Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel

MIN_PASSWORD_LENGTH = 6


class CamelModel(BaseModel):
    """JSON uses camelCase keys; snake_case is accepted on input as well."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class IdentityClaims(BaseModel):
    user_id: int
    email: str


class LoginRequest(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=MIN_PASSWORD_LENGTH)


class RegisterRequest(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=MIN_PASSWORD_LENGTH, description="At least 6 characters")


class AuthFailure(str, enum.Enum):
    CONFLICT = "conflict"
    AUTHENTICATION = "authentication"


class AuthResult(CamelModel):
    success: bool
    message: str
    token: Optional[str] = None
    # Internal only; lets callers tell a duplicate email from bad credentials
    failure: Optional[AuthFailure] = Field(default=None, exclude=True)


# Public fields returned for a profile; the password hash is never exposed
class UserRead(CamelModel):
    id: int
    email: EmailStr
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    created_at: datetime
    updated_at: datetime


# Fields accepted on PUT /api/Account/UpdateUserProfile/{userId}
class UserProfileUpdate(CamelModel):
    email: EmailStr
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
