"""Administrator console: manage accounts and stores, platform statistics."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ratestore.api.auth import require_admin
from ratestore.api.stores import listing_fields
from ratestore.core.database import get_db
from ratestore.core.security import SessionClaims
from ratestore.models import Role
from ratestore.schemas.admin import (
    AdminCreateStoreRequest,
    AdminCreateUserRequest,
    AdminStoreCreatedResponse,
    AdminStoreItem,
    AdminStoresResponse,
    AdminUserCreatedResponse,
    AdminUserItem,
    AdminUsersResponse,
    OwnedStoreSummary,
    PlatformStatsOut,
    StatsResponse,
    StoreOwnerOut,
)
from ratestore.schemas.auth import UserOut
from ratestore.services import accounts
from ratestore.services import stores as store_service
from ratestore.services.accounts import AccountListing
from ratestore.services.stores import StoreListing

router = APIRouter()


def _user_item(listing: AccountListing) -> AdminUserItem:
    # Built from UserOut so the ORM "store" relationship is not read directly.
    fields = UserOut.model_validate(listing.user).model_dump()
    store = None
    if listing.store is not None and listing.store_ratings is not None:
        store = OwnedStoreSummary(
            id=listing.store.id,
            name=listing.store.name,
            rating_count=listing.store_ratings.count,
            average_rating=listing.store_ratings.average,
        )
    return AdminUserItem(**fields, store=store)


def _store_item(listing: StoreListing) -> AdminStoreItem:
    return AdminStoreItem(
        **listing_fields(listing),
        owner=StoreOwnerOut.model_validate(listing.owner),
    )


@router.get("/users", response_model=AdminUsersResponse)
def list_users(
    _admin: Annotated[SessionClaims, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
    search: Annotated[str | None, Query(max_length=100)] = None,
    role: Role | None = None,
) -> AdminUsersResponse:
    """All accounts, newest first; filter by name/email/address substring and role."""
    listings = accounts.list_accounts(db, search=search, role=role)
    return AdminUsersResponse(users=[_user_item(li) for li in listings])


@router.post("/users", response_model=AdminUserCreatedResponse)
def create_user(
    body: AdminCreateUserRequest,
    _admin: Annotated[SessionClaims, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> AdminUserCreatedResponse:
    """Create an account with any role. Returns 409 if the email is taken."""
    user = accounts.create_account(
        db,
        name=body.name,
        email=body.email,
        password=body.password,
        address=body.address,
        role=body.role,
    )
    return AdminUserCreatedResponse(
        message="User created successfully",
        user=UserOut.model_validate(user),
    )


@router.get("/stores", response_model=AdminStoresResponse)
def list_stores(
    _admin: Annotated[SessionClaims, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
    search: Annotated[str | None, Query(max_length=100)] = None,
) -> AdminStoresResponse:
    """All stores with owner details and rating summary."""
    listings = store_service.list_stores(db, search=search)
    return AdminStoresResponse(stores=[_store_item(li) for li in listings])


@router.post("/stores", response_model=AdminStoreCreatedResponse)
def create_store(
    body: AdminCreateStoreRequest,
    _admin: Annotated[SessionClaims, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> AdminStoreCreatedResponse:
    """
    Create a store and its STORE_OWNER account atomically.
    Returns 409 if the owner email or the store email is already in use.
    """
    store = store_service.create_store_with_owner(
        db,
        owner_name=body.owner_name,
        owner_email=body.owner_email,
        owner_password=body.owner_password,
        owner_address=body.owner_address,
        store_name=body.store_name,
        store_email=body.store_email,
        store_address=body.store_address,
    )
    listing = store_service.get_store_listing(db, store.id)
    return AdminStoreCreatedResponse(
        message="Store and owner created successfully",
        store=_store_item(listing),
    )


@router.get("/stats", response_model=StatsResponse)
def get_stats(
    _admin: Annotated[SessionClaims, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> StatsResponse:
    """Total users, stores and ratings, and the overall average rating."""
    stats = store_service.platform_stats(db)
    return StatsResponse(
        stats=PlatformStatsOut(
            total_users=stats.total_users,
            total_stores=stats.total_stores,
            total_ratings=stats.total_ratings,
            average_rating=stats.ratings.average,
        )
    )
