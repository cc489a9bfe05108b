"""Profile endpoint: edit the caller's name and address."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ratestore.api.auth import get_session
from ratestore.core.database import get_db
from ratestore.core.security import SessionClaims
from ratestore.schemas.auth import ProfileResponse, ProfileUpdateRequest, UserOut
from ratestore.services import accounts
from ratestore.services.errors import NotFound, Unauthenticated

router = APIRouter()


@router.put("", response_model=ProfileResponse)
def update_profile(
    body: ProfileUpdateRequest,
    session: Annotated[SessionClaims, Depends(get_session)],
    db: Annotated[Session, Depends(get_db)],
) -> ProfileResponse:
    """Update name (2-60 chars) and address (max 400). Email and role cannot change."""
    try:
        user = accounts.update_profile(db, session.account_id, body.name, body.address)
    except NotFound as e:
        raise Unauthenticated("User not found") from e
    return ProfileResponse(message="Profile updated successfully", user=UserOut.model_validate(user))
