"""Request/response schemas for signup, login, session and profile endpoints."""

from datetime import datetime

from pydantic import field_validator

from ratestore.models import Role
from ratestore.schemas.common import CamelModel
from ratestore.services.validation import (
    SIGNUP_NAME_MIN_LEN,
    address_problem,
    email_problem,
    name_problem,
    password_problem,
)


def _check(problem: str | None) -> None:
    if problem:
        raise ValueError(problem)


class SignupRequest(CamelModel):
    """
    Self-service registration. Any client-supplied role is ignored; signups are
    always NORMAL_USER.
    """

    name: str
    email: str
    password: str
    address: str

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        _check(name_problem(v, min_len=SIGNUP_NAME_MIN_LEN))
        return v

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        v = v.strip()
        _check(email_problem(v))
        return v

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        _check(password_problem(v))
        return v

    @field_validator("address")
    @classmethod
    def validate_address(cls, v: str) -> str:
        _check(address_problem(v))
        return v


class LoginRequest(CamelModel):
    """Credentials for login. No strength checks here; they would leak policy hints."""

    email: str
    password: str

    @field_validator("email", "password")
    @classmethod
    def validate_present(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Email and password are required")
        return v

    @field_validator("email")
    @classmethod
    def strip_email(cls, v: str) -> str:
        return v.strip()


class ChangePasswordRequest(CamelModel):
    current_password: str
    new_password: str

    @field_validator("current_password")
    @classmethod
    def validate_current(cls, v: str) -> str:
        if not v:
            raise ValueError("Current password and new password are required")
        return v

    @field_validator("new_password")
    @classmethod
    def validate_new(cls, v: str) -> str:
        _check(password_problem(v))
        return v


class ProfileUpdateRequest(CamelModel):
    """Editable profile fields; email and role are immutable."""

    name: str
    address: str

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        _check(name_problem(v))
        return v

    @field_validator("address")
    @classmethod
    def validate_address(cls, v: str) -> str:
        _check(address_problem(v))
        return v


class UserOut(CamelModel):
    """Public account fields (never the password hash)."""

    id: str
    name: str
    email: str
    role: Role
    address: str
    created_at: datetime


class SignupResponse(CamelModel):
    message: str
    user: UserOut


class LoginResponse(CamelModel):
    message: str
    user: UserOut
    redirect_to: str


class MeResponse(CamelModel):
    user: UserOut
    redirect_to: str


class ProfileResponse(CamelModel):
    message: str
    user: UserOut
