"""Pydantic request/response schemas."""

from ratestore.schemas.admin import (
    AdminCreateStoreRequest,
    AdminCreateUserRequest,
    AdminStoresResponse,
    AdminUsersResponse,
    StatsResponse,
)
from ratestore.schemas.auth import (
    ChangePasswordRequest,
    LoginRequest,
    LoginResponse,
    MeResponse,
    ProfileUpdateRequest,
    SignupRequest,
    UserOut,
)
from ratestore.schemas.common import ErrorResponse, MessageResponse
from ratestore.schemas.health import HealthResponse
from ratestore.schemas.stores import (
    OwnerStoreResponse,
    RatingRequest,
    RatingResponse,
    StoreDetailResponse,
    StoresResponse,
)

__all__ = [
    "AdminCreateStoreRequest",
    "AdminCreateUserRequest",
    "AdminStoresResponse",
    "AdminUsersResponse",
    "ChangePasswordRequest",
    "ErrorResponse",
    "HealthResponse",
    "LoginRequest",
    "LoginResponse",
    "MeResponse",
    "MessageResponse",
    "OwnerStoreResponse",
    "ProfileUpdateRequest",
    "RatingRequest",
    "RatingResponse",
    "SignupRequest",
    "StatsResponse",
    "StoreDetailResponse",
    "StoresResponse",
    "UserOut",
]
