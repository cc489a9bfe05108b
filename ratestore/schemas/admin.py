"""Schemas for the administrator console: account/store creation, listings, stats."""

from typing import Any

from pydantic import field_validator

from ratestore.models import Role
from ratestore.schemas.auth import UserOut
from ratestore.schemas.common import CamelModel
from ratestore.schemas.stores import StoreListItem
from ratestore.services.validation import (
    ADMIN_NAME_MIN_LEN,
    STORE_NAME_MIN_LEN,
    address_problem,
    email_problem,
    name_problem,
    password_problem,
)


def _check(problem: str | None) -> None:
    if problem:
        raise ValueError(problem)


class AdminCreateUserRequest(CamelModel):
    """
    Admin-created account of any role. Names need only 2 characters here,
    unlike self-service signup (20).
    """

    name: str
    email: str
    password: str
    address: str
    role: Role

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        _check(name_problem(v, min_len=ADMIN_NAME_MIN_LEN))
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

    @field_validator("role", mode="before")
    @classmethod
    def validate_role(cls, v: Any) -> Any:
        if v not in {r.value for r in Role}:
            raise ValueError("Invalid role")
        return v


class AdminCreateStoreRequest(CamelModel):
    """New store together with its (new) STORE_OWNER account."""

    owner_name: str
    owner_email: str
    owner_password: str
    owner_address: str
    store_name: str
    store_email: str
    store_address: str

    @field_validator("owner_name")
    @classmethod
    def validate_owner_name(cls, v: str) -> str:
        _check(name_problem(v, min_len=ADMIN_NAME_MIN_LEN))
        return v

    @field_validator("store_name")
    @classmethod
    def validate_store_name(cls, v: str) -> str:
        problem = name_problem(v, min_len=STORE_NAME_MIN_LEN)
        _check(problem and problem.replace("Name", "Store name", 1))
        return v

    @field_validator("owner_email", "store_email")
    @classmethod
    def validate_emails(cls, v: str) -> str:
        v = v.strip()
        _check(email_problem(v))
        return v

    @field_validator("owner_password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        _check(password_problem(v))
        return v

    @field_validator("owner_address", "store_address")
    @classmethod
    def validate_addresses(cls, v: str) -> str:
        _check(address_problem(v))
        return v


class OwnedStoreSummary(CamelModel):
    id: str
    name: str
    rating_count: int
    average_rating: float | None


class AdminUserItem(UserOut):
    store: OwnedStoreSummary | None = None


class AdminUsersResponse(CamelModel):
    users: list[AdminUserItem]


class AdminUserCreatedResponse(CamelModel):
    message: str
    user: UserOut


class StoreOwnerOut(CamelModel):
    id: str
    name: str
    email: str
    address: str
    role: Role


class AdminStoreItem(StoreListItem):
    owner: StoreOwnerOut


class AdminStoresResponse(CamelModel):
    stores: list[AdminStoreItem]


class AdminStoreCreatedResponse(CamelModel):
    message: str
    store: AdminStoreItem


class PlatformStatsOut(CamelModel):
    total_users: int
    total_stores: int
    total_ratings: int
    average_rating: float | None


class StatsResponse(CamelModel):
    stats: PlatformStatsOut
