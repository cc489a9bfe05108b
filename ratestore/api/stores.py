"""Public store listing and store detail."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ratestore.api.auth import get_optional_session
from ratestore.core.database import get_db
from ratestore.core.security import SessionClaims
from ratestore.schemas.stores import (
    StoreDetail,
    StoreDetailResponse,
    StoreListItem,
    StoresResponse,
)
from ratestore.services import stores as store_service
from ratestore.services.stores import StoreListing

router = APIRouter()


def listing_fields(listing: StoreListing) -> dict:
    """Flatten a StoreListing into StoreListItem fields."""
    store = listing.store
    return {
        "id": store.id,
        "name": store.name,
        "email": store.email,
        "address": store.address,
        "owner_id": store.owner_id,
        "owner_name": listing.owner.name,
        "created_at": store.created_at,
        "rating_count": listing.ratings.count,
        "average_rating": listing.ratings.average,
    }


@router.get("", response_model=StoresResponse)
def list_stores(
    db: Annotated[Session, Depends(get_db)],
    search: Annotated[str | None, Query(max_length=100)] = None,
) -> StoresResponse:
    """All stores with rating count and average (null when unrated)."""
    listings = store_service.list_stores(db, search=search)
    return StoresResponse(stores=[StoreListItem(**listing_fields(li)) for li in listings])


@router.get("/{store_id}", response_model=StoreDetailResponse)
def get_store(
    store_id: str,
    db: Annotated[Session, Depends(get_db)],
    session: Annotated[SessionClaims | None, Depends(get_optional_session)],
) -> StoreDetailResponse:
    """Store detail; includes userRating when the caller is logged in and has rated it."""
    detail = store_service.store_detail(
        db,
        store_id,
        caller_id=session.account_id if session else None,
    )
    return StoreDetailResponse(
        store=StoreDetail(**listing_fields(detail.listing), user_rating=detail.caller_rating)
    )
