"""Schemas for public store listings, store detail, ratings and the owner dashboard."""

from datetime import datetime
from typing import Any

from pydantic import field_validator

from ratestore.schemas.common import CamelModel
from ratestore.services.validation import rating_value_problem


class StoreListItem(CamelModel):
    """
    Store with its rating summary.

    average_rating is null when the store has no ratings (shown as "unavailable").
    """

    id: str
    name: str
    email: str
    address: str
    owner_id: str
    owner_name: str
    created_at: datetime
    rating_count: int
    average_rating: float | None


class StoresResponse(CamelModel):
    stores: list[StoreListItem]


class StoreDetail(StoreListItem):
    """Store detail; user_rating is the caller's own rating when logged in."""

    user_rating: int | None = None


class StoreDetailResponse(CamelModel):
    store: StoreDetail


class RatingRequest(CamelModel):
    store_id: str
    value: Any

    @field_validator("store_id")
    @classmethod
    def validate_store_id(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Store ID and rating value are required")
        return v.strip()

    @field_validator("value")
    @classmethod
    def validate_value(cls, v: Any) -> int:
        # Accept 4.0 as 4 (JSON numbers), reject 4.5, "4" and booleans.
        if isinstance(v, float) and v.is_integer():
            v = int(v)
        problem = rating_value_problem(v)
        if problem:
            raise ValueError(problem)
        return v


class RatingOut(CamelModel):
    id: str
    value: int
    user_id: str
    store_id: str
    created_at: datetime
    updated_at: datetime


class RatingResponse(CamelModel):
    message: str
    rating: RatingOut


class RecentRating(CamelModel):
    id: str
    value: int
    user_name: str
    created_at: datetime
    updated_at: datetime


class OwnerStoreInfo(StoreListItem):
    recent_ratings: list[RecentRating]


class OwnerStoreResponse(CamelModel):
    store: OwnerStoreInfo
