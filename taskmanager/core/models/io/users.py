"""
User I/O models for API requests and responses.

These schemas define the contract for signup, login, profile reads and
profile updates. Password hashes, tokens and avatar bytes never appear in a
response model.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator, model_validator

PASSWORD_MIN_LENGTH = 6
# bcrypt limit, counted in UTF-8 bytes
PASSWORD_MAX_LENGTH = 72

UPDATABLE_USER_FIELDS = ("name", "email", "password", "age")


def _clean_name(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("Name is required")
    return value


def _clean_email(value: str) -> str:
    return value.strip().lower()


def _check_password(value: str) -> str:
    if len(value.encode("utf-8")) > PASSWORD_MAX_LENGTH:
        raise ValueError(f"Password cannot be longer than {PASSWORD_MAX_LENGTH} bytes")
    if "password" in value.lower():
        raise ValueError('Password cannot contain "password"')
    return value


class UserRead(BaseModel):
    """Public representation of a user."""

    id: int
    name: str
    email: str
    age: int
    is_admin: bool
    has_avatar: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class UserCreate(BaseModel):
    """Schema for signing up a new user."""

    name: str = Field(description="Display name")
    email: EmailStr = Field(description="Login email, stored lowercased")
    password: str = Field(min_length=PASSWORD_MIN_LENGTH, max_length=PASSWORD_MAX_LENGTH)
    age: int = Field(default=0, ge=0)

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        return _clean_name(value)

    @field_validator("password")
    @classmethod
    def validate_password(cls, value: str) -> str:
        return _check_password(value)

    @field_validator("email", mode="before")
    @classmethod
    def strip_email(cls, value):
        return value.strip() if isinstance(value, str) else value

    @field_validator("email")
    @classmethod
    def lower_email(cls, value: str) -> str:
        return _clean_email(value)


class UserUpdate(BaseModel):
    """Schema for updating a profile. Only the listed fields may be sent."""

    name: Optional[str] = None
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(default=None, min_length=PASSWORD_MIN_LENGTH, max_length=PASSWORD_MAX_LENGTH)
    age: Optional[int] = Field(default=None, ge=0)

    model_config = ConfigDict(extra="forbid")

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: Optional[str]) -> Optional[str]:
        return None if value is None else _clean_name(value)

    @field_validator("email", mode="before")
    @classmethod
    def strip_email(cls, value):
        return value.strip() if isinstance(value, str) else value

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: Optional[str]) -> Optional[str]:
        return None if value is None else _clean_email(value)

    @field_validator("password")
    @classmethod
    def validate_password(cls, value: Optional[str]) -> Optional[str]:
        return None if value is None else _check_password(value)

    @model_validator(mode="after")
    def reject_explicit_nulls(self) -> "UserUpdate":
        for name in self.model_fields_set:
            if getattr(self, name) is None:
                raise ValueError(f"Field '{name}' cannot be null")
        return self


class LoginRequest(BaseModel):
    """Credentials presented at login."""

    email: str
    password: str


class AuthResponse(BaseModel):
    """A user together with a freshly issued access token."""

    user: UserRead
    token: str
