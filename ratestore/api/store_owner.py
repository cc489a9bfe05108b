"""Store owner dashboard data: the owner's own store and its recent ratings."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ratestore.api.auth import require_store_owner
from ratestore.api.stores import listing_fields
from ratestore.core.database import get_db
from ratestore.core.security import SessionClaims
from ratestore.schemas.stores import OwnerStoreInfo, OwnerStoreResponse, RecentRating
from ratestore.services.stores import owner_store_info

router = APIRouter()


@router.get("/info", response_model=OwnerStoreResponse)
def get_store_info(
    owner: Annotated[SessionClaims, Depends(require_store_owner)],
    db: Annotated[Session, Depends(get_db)],
) -> OwnerStoreResponse:
    """The owner's store with rating summary and the 10 most recent ratings."""
    view = owner_store_info(db, owner.account_id)
    recent = [
        RecentRating(
            id=r.id,
            value=r.value,
            user_name=r.user.name,
            created_at=r.created_at,
            updated_at=r.updated_at,
        )
        for r in view.recent_ratings
    ]
    return OwnerStoreResponse(
        store=OwnerStoreInfo(**listing_fields(view.listing), recent_ratings=recent)
    )
