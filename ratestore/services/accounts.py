"""Account persistence: creation, credential checks, profile and password changes."""

import logging
from dataclasses import dataclass

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ratestore.core.security import hash_password, verify_password
from ratestore.models import Role, Store, User
from ratestore.services.errors import Conflict, NotFound, Unauthenticated
from ratestore.services.ratings import RatingSummary, rating_aggregates, summarize_totals
from ratestore.services.validation import (
    address_problem,
    ensure_valid,
    name_problem,
    password_problem,
)

logger = logging.getLogger(__name__)

# Same message for unknown email and wrong password, so callers cannot probe for accounts.
INVALID_CREDENTIALS_MESSAGE = "Invalid credentials"
DUPLICATE_EMAIL_MESSAGE = "User with this email already exists"
# Checked against when the email is unknown so both login failures cost one bcrypt round.
_DUMMY_HASH = hash_password("dummy-password-for-timing")


@dataclass(frozen=True)
class AccountListing:
    """Account row for the admin listing, with the owned store when there is one."""

    user: User
    store: Store | None
    store_ratings: RatingSummary | None


def like_pattern(search: str) -> str:
    """Case-insensitive substring pattern with LIKE wildcards escaped."""
    escaped = search.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def get_account(db: Session, account_id: str) -> User:
    user = db.get(User, account_id)
    if user is None:
        raise NotFound("User not found")
    return user


def email_in_use(db: Session, email: str) -> bool:
    return db.query(User.id).filter(User.email == email).first() is not None


def create_account(
    db: Session,
    *,
    name: str,
    email: str,
    password: str,
    address: str,
    role: Role,
) -> User:
    """
    Persist a new account with a bcrypt-hashed password.

    Raises Conflict if the email is already registered. Field policies (name
    length, password strength) are enforced by the caller's request schema since
    they differ between signup and admin creation.
    """
    if email_in_use(db, email):
        raise Conflict(DUPLICATE_EMAIL_MESSAGE)
    user = User(
        name=name,
        email=email,
        password_hash=hash_password(password),
        address=address,
        role=Role(role),
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError as e:
        # Lost a race with a concurrent registration of the same email.
        db.rollback()
        raise Conflict(DUPLICATE_EMAIL_MESSAGE) from e
    db.refresh(user)
    logger.info("Account created: id=%s role=%s", user.id, user.role.value)
    return user


def verify_credentials(db: Session, email: str, password: str) -> User:
    """Return the account for email/password or raise Unauthenticated (generic message)."""
    user = db.query(User).filter(User.email == email).first()
    if user is None:
        verify_password(password, _DUMMY_HASH)
        logger.warning("Failed login attempt for email=%s", email)
        raise Unauthenticated(INVALID_CREDENTIALS_MESSAGE)
    if not verify_password(password, user.password_hash):
        logger.warning("Failed login attempt for email=%s", email)
        raise Unauthenticated(INVALID_CREDENTIALS_MESSAGE)
    return user


def update_profile(db: Session, account_id: str, name: str, address: str) -> User:
    """Update name and address. Email and role are not editable here."""
    ensure_valid(name_problem(name), address_problem(address))
    user = get_account(db, account_id)
    user.name = name
    user.address = address
    db.commit()
    db.refresh(user)
    logger.info("Profile updated: id=%s", user.id)
    return user


def change_password(
    db: Session,
    account_id: str,
    current_password: str,
    new_password: str,
) -> None:
    """Replace the password after re-verifying the current one."""
    ensure_valid(password_problem(new_password))
    user = get_account(db, account_id)
    if not verify_password(current_password, user.password_hash):
        logger.warning("Password change rejected (wrong current password): id=%s", user.id)
        raise Unauthenticated("Current password is incorrect")
    user.password_hash = hash_password(new_password)
    db.commit()
    logger.info("Password changed: id=%s", user.id)


def list_accounts(
    db: Session,
    search: str | None = None,
    role: Role | None = None,
) -> list[AccountListing]:
    """
    All accounts, newest first, for the admin console.

    search matches name, email or address case-insensitively; role filters exactly.
    Store owners carry their store with its rating count and average.
    """
    agg = rating_aggregates()
    query = (
        db.query(User, Store, agg.c.rating_count, agg.c.rating_total)
        .outerjoin(Store, Store.owner_id == User.id)
        .outerjoin(agg, agg.c.store_id == Store.id)
    )
    if search and search.strip():
        pattern = like_pattern(search.strip())
        query = query.filter(
            or_(
                User.name.ilike(pattern, escape="\\"),
                User.email.ilike(pattern, escape="\\"),
                User.address.ilike(pattern, escape="\\"),
            )
        )
    if role is not None:
        query = query.filter(User.role == role)
    rows = query.order_by(User.created_at.desc(), User.name).all()
    return [
        AccountListing(
            user=user,
            store=store,
            store_ratings=summarize_totals(count, total) if store is not None else None,
        )
        for user, store, count, total in rows
    ]
