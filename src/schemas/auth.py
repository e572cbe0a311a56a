"""Authentication and profile schemas."""

from datetime import datetime

from pydantic import ConfigDict, EmailStr, Field

from src.schemas.base import CamelModel, RequestModel


class SignupRequest(RequestModel):
    """Credential sign-up request."""

    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr = Field(..., max_length=255)
    password: str = Field(..., min_length=8, max_length=128)


class LoginRequest(RequestModel):
    """Credential sign-in request."""

    email: EmailStr = Field(..., max_length=255)
    password: str = Field(..., min_length=1, max_length=128)


class UserResponse(CamelModel):
    """Session identity returned with a token."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    name: str | None


class AuthResponse(CamelModel):
    """Authentication response with token and user info."""

    access_token: str
    token_type: str = "bearer"  # noqa: S105
    user: UserResponse


class ProfileResponse(CamelModel):
    """Stored profile, never including the password hash."""

    model_config = ConfigDict(from_attributes=True)

    email: str
    name: str | None
    image: str | None
    provider_account_id: str | None
    created_at: datetime
    updated_at: datetime


class ProfileUpdate(RequestModel):
    """Profile fields a user may change."""

    name: str | None = Field(None, max_length=255)
    image: str | None = Field(None, max_length=1024)
