"""Rating aggregation and the per-(user, store) rating upsert."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from sqlalchemy import func, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session

from ratestore.models import Rating, Store
from ratestore.models.user import new_id
from ratestore.services.errors import InternalError, NotFound
from ratestore.services.validation import ensure_valid, rating_value_problem

logger = logging.getLogger(__name__)

# Dialect-specific INSERT constructs that support ON CONFLICT DO UPDATE.
_UPSERT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}

_TWO_PLACES = Decimal("0.01")


@dataclass(frozen=True)
class RatingSummary:
    """Count and mean of a store's ratings; average is None when there are none."""

    count: int
    average: float | None


def average_rating(total: int, count: int) -> float | None:
    """
    Arithmetic mean rounded half-up to 2 decimals.

    Returns None for zero ratings so callers never display an unrated store as 0/5.
    """
    if count <= 0:
        return None
    mean = (Decimal(total) / Decimal(count)).quantize(_TWO_PLACES, rounding=ROUND_HALF_UP)
    return float(mean)


def summarize_totals(count: int | None, total: int | None) -> RatingSummary:
    """Build a summary from SQL aggregates (NULL when an outer join found no ratings)."""
    count = int(count or 0)
    return RatingSummary(count=count, average=average_rating(int(total or 0), count))


def summarize_ratings(values: Iterable[int]) -> RatingSummary:
    """Summarize an in-memory collection of rating values."""
    values = list(values)
    return summarize_totals(len(values), sum(values))


def rating_aggregates():
    """Subquery of (store_id, rating_count, rating_total) per rated store."""
    return (
        select(
            Rating.store_id.label("store_id"),
            func.count(Rating.id).label("rating_count"),
            func.sum(Rating.value).label("rating_total"),
        )
        .group_by(Rating.store_id)
        .subquery()
    )


def _upsert_insert(db: Session):
    dialect = db.get_bind().dialect.name
    try:
        return _UPSERT_INSERTS[dialect]
    except KeyError:
        logger.error("Rating upsert is not supported on dialect %s", dialect)
        raise InternalError("Failed to submit rating") from None


def submit_rating(db: Session, account_id: str, store_id: str, value: int) -> Rating:
    """
    Create or overwrite the caller's rating for a store.

    Uses the database's native INSERT .. ON CONFLICT DO UPDATE on the
    (user_id, store_id) unique constraint, so concurrent submissions by the same
    user never produce two rows; the last write wins.
    """
    ensure_valid(rating_value_problem(value))
    if db.get(Store, store_id) is None:
        raise NotFound("Store not found")

    insert = _upsert_insert(db)
    stmt = insert(Rating).values(
        id=new_id(),
        value=value,
        user_id=account_id,
        store_id=store_id,
    )
    stmt = stmt.on_conflict_do_update(
        index_elements=["user_id", "store_id"],
        set_={"value": stmt.excluded.value, "updated_at": func.now()},
    )
    db.execute(stmt)
    db.commit()

    rating = (
        db.query(Rating)
        .filter(Rating.user_id == account_id, Rating.store_id == store_id)
        .one()
    )
    logger.info(
        "Rating upserted: account_id=%s store_id=%s value=%s",
        account_id,
        store_id,
        value,
    )
    return rating


def get_caller_rating(db: Session, account_id: str, store_id: str) -> int | None:
    """Return the caller's own rating value for a store, if any."""
    row = (
        db.query(Rating.value)
        .filter(Rating.user_id == account_id, Rating.store_id == store_id)
        .first()
    )
    return row[0] if row else None
