"""Rating submission: one rating per (user, store), resubmission overwrites."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ratestore.api.auth import get_session
from ratestore.core.database import get_db
from ratestore.core.security import SessionClaims
from ratestore.schemas.stores import RatingOut, RatingRequest, RatingResponse
from ratestore.services.ratings import submit_rating

router = APIRouter()


@router.post("", response_model=RatingResponse, status_code=status.HTTP_201_CREATED)
def post_rating(
    body: RatingRequest,
    session: Annotated[SessionClaims, Depends(get_session)],
    db: Annotated[Session, Depends(get_db)],
) -> RatingResponse:
    """Submit or update the caller's rating (integer 1-5) for a store."""
    rating = submit_rating(db, session.account_id, body.store_id, body.value)
    return RatingResponse(
        message="Rating submitted successfully",
        rating=RatingOut.model_validate(rating),
    )
