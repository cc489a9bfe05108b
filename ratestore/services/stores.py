"""Store creation, listings, and the per-store views that aggregate ratings on read."""

import logging
from dataclasses import dataclass

from sqlalchemy import func, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from ratestore.core.security import hash_password
from ratestore.models import Rating, Role, Store, User
from ratestore.services.accounts import DUPLICATE_EMAIL_MESSAGE, email_in_use, like_pattern
from ratestore.services.errors import Conflict, NotFound
from ratestore.services.ratings import (
    RatingSummary,
    get_caller_rating,
    rating_aggregates,
    summarize_totals,
)

logger = logging.getLogger(__name__)

RECENT_RATINGS_LIMIT = 10
DUPLICATE_STORE_EMAIL_MESSAGE = "Store with this email already exists"


@dataclass(frozen=True)
class StoreListing:
    store: Store
    owner: User
    ratings: RatingSummary


@dataclass(frozen=True)
class StoreDetailView:
    listing: StoreListing
    caller_rating: int | None


@dataclass(frozen=True)
class OwnerStoreView:
    listing: StoreListing
    recent_ratings: list[Rating]


@dataclass(frozen=True)
class PlatformStats:
    total_users: int
    total_stores: int
    total_ratings: int
    ratings: RatingSummary


def create_store_with_owner(
    db: Session,
    *,
    owner_name: str,
    owner_email: str,
    owner_password: str,
    owner_address: str,
    store_name: str,
    store_email: str,
    store_address: str,
) -> Store:
    """
    Create a STORE_OWNER account and its store in a single transaction.

    Raises Conflict if the owner email is already an account or the store email
    is already a store; on any failure neither row is persisted.
    """
    if email_in_use(db, owner_email):
        raise Conflict(DUPLICATE_EMAIL_MESSAGE)
    if db.query(Store.id).filter(Store.email == store_email).first() is not None:
        raise Conflict(DUPLICATE_STORE_EMAIL_MESSAGE)

    owner = User(
        name=owner_name,
        email=owner_email,
        password_hash=hash_password(owner_password),
        address=owner_address,
        role=Role.STORE_OWNER,
    )
    store = Store(name=store_name, email=store_email, address=store_address, owner=owner)
    db.add(store)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise Conflict("User or store with this email already exists") from e
    db.refresh(store)
    logger.info("Store created: id=%s owner_id=%s", store.id, owner.id)
    return store


def _listing_query(db: Session):
    agg = rating_aggregates()
    return (
        db.query(Store, User, agg.c.rating_count, agg.c.rating_total)
        .join(User, Store.owner_id == User.id)
        .outerjoin(agg, agg.c.store_id == Store.id)
    )


def _to_listing(row) -> StoreListing:
    store, owner, count, total = row
    return StoreListing(store=store, owner=owner, ratings=summarize_totals(count, total))


def list_stores(db: Session, search: str | None = None) -> list[StoreListing]:
    """All stores, newest first, each with rating count and average."""
    query = _listing_query(db)
    if search and search.strip():
        pattern = like_pattern(search.strip())
        query = query.filter(
            or_(
                Store.name.ilike(pattern, escape="\\"),
                Store.email.ilike(pattern, escape="\\"),
                Store.address.ilike(pattern, escape="\\"),
            )
        )
    rows = query.order_by(Store.created_at.desc(), Store.name).all()
    return [_to_listing(row) for row in rows]


def get_store_listing(db: Session, store_id: str) -> StoreListing:
    row = _listing_query(db).filter(Store.id == store_id).first()
    if row is None:
        raise NotFound("Store not found")
    return _to_listing(row)


def store_detail(db: Session, store_id: str, caller_id: str | None = None) -> StoreDetailView:
    """Store with its rating summary and, for a logged-in caller, their own rating."""
    listing = get_store_listing(db, store_id)
    caller_rating = get_caller_rating(db, caller_id, store_id) if caller_id else None
    return StoreDetailView(listing=listing, caller_rating=caller_rating)


def owner_store_info(
    db: Session,
    owner_id: str,
    recent_limit: int = RECENT_RATINGS_LIMIT,
) -> OwnerStoreView:
    """The owner's own store with its summary and most recent ratings (with rater)."""
    store_id = db.query(Store.id).filter(Store.owner_id == owner_id).scalar()
    if store_id is None:
        raise NotFound("Store not found")
    listing = get_store_listing(db, store_id)
    recent = (
        db.query(Rating)
        .options(joinedload(Rating.user))
        .filter(Rating.store_id == store_id)
        .order_by(Rating.created_at.desc(), Rating.id)
        .limit(recent_limit)
        .all()
    )
    return OwnerStoreView(listing=listing, recent_ratings=recent)


def platform_stats(db: Session) -> PlatformStats:
    """Totals across the platform and the overall average rating."""
    total_users = db.query(func.count(User.id)).scalar() or 0
    total_stores = db.query(func.count(Store.id)).scalar() or 0
    count, total = db.query(func.count(Rating.id), func.sum(Rating.value)).one()
    return PlatformStats(
        total_users=total_users,
        total_stores=total_stores,
        total_ratings=int(count or 0),
        ratings=summarize_totals(count, total),
    )
