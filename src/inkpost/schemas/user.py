"""User-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from inkpost.core.security import MAX_PASSWORD_BYTES


def _check_password_bytes(value: str) -> str:
    if len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
    return value


class RegisterRequest(BaseModel):
    """Schema for creating an account."""

    fullname: str = Field(..., min_length=3, max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=8)
    avatar_url: str | None = Field(None, description="Avatar URL")

    @field_validator("password")
    @classmethod
    def check_password_length(cls, value: str) -> str:
        return _check_password_bytes(value)


class LoginRequest(BaseModel):
    """Schema for exchanging credentials for an access token."""

    email: EmailStr
    password: str = Field(..., min_length=8)


class UserUpdate(BaseModel):
    """Schema for partial profile updates."""

    fullname: str | None = Field(None, min_length=3, max_length=255)
    email: EmailStr | None = None
    password: str | None = Field(None, min_length=8)
    avatar_url: str | None = None

    @field_validator("password")
    @classmethod
    def check_password_length(cls, value: str | None) -> str | None:
        if value is None:
            return value
        return _check_password_bytes(value)


class UserResponse(BaseModel):
    """Public account fields; the password hash is never serialized."""

    id: int
    fullname: str
    email: str
    avatar_url: str | None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class AuthResponse(UserResponse):
    """Account fields plus a freshly issued access token."""

    token: str
