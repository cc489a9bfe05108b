"""Seed the database with sample accounts, stores and ratings.

Creates:
- One system administrator
- Two store owners, each with a store
- Two normal users
- Sample ratings from the normal users

Idempotent: existing accounts and stores (matched by email) are left untouched and
ratings go through the regular upsert.

Usage:
    python -m ratestore.scripts.seed
"""

import logging
import sys

from sqlalchemy.orm import Session

from ratestore.core.config import get_settings
from ratestore.core.database import SessionLocal
from ratestore.core.logging_config import configure_logging
from ratestore.models import Role, Store, User
from ratestore.services.accounts import create_account
from ratestore.services.ratings import submit_rating
from ratestore.services.stores import create_store_with_owner

logger = logging.getLogger(__name__)

ADMIN = {
    "name": "System Administrator",
    "email": "admin@storerating.com",
    "password": "Admin@123",
    "address": "123 Admin Street, Tech City, TC 12345",
}

STORES = [
    {
        "owner_name": "John Store Owner One",
        "owner_email": "owner1@grocery.com",
        "owner_password": "Store@123",
        "owner_address": "456 Market Avenue, Downtown, DT 67890",
        "store_name": "Fresh Grocery Mart Store",
        "store_email": "contact@grocery.com",
        "store_address": "456 Market Avenue, Downtown, DT 67890",
    },
    {
        "owner_name": "Jane Store Owner Two",
        "owner_email": "owner2@electronics.com",
        "owner_password": "Store@456",
        "owner_address": "789 Tech Boulevard, Innovation Park, IP 11223",
        "store_name": "TechWorld Electronics Store",
        "store_email": "contact@electronics.com",
        "store_address": "789 Tech Boulevard, Innovation Park, IP 11223",
    },
]

NORMAL_USERS = [
    {
        "name": "Alice Normal User One",
        "email": "user1@example.com",
        "password": "User@123",
        "address": "321 Residential Lane, Suburb Area, SA 44556",
    },
    {
        "name": "Bob Normal User Two",
        "email": "user2@example.com",
        "password": "User@456",
        "address": "654 Community Drive, Neighborhood, NB 77889",
    },
]

# (user email, store email, value)
RATINGS = [
    ("user1@example.com", "contact@grocery.com", 5),
    ("user1@example.com", "contact@electronics.com", 4),
    ("user2@example.com", "contact@grocery.com", 4),
    ("user2@example.com", "contact@electronics.com", 3),
]


def _account(db: Session, email: str) -> User | None:
    return db.query(User).filter(User.email == email).first()


def _ensure_account(db: Session, fields: dict, role: Role) -> User:
    existing = _account(db, fields["email"])
    if existing is not None:
        logger.info("Account exists, skipping: %s", fields["email"])
        return existing
    return create_account(db, role=role, **fields)


def seed(db: Session) -> None:
    _ensure_account(db, ADMIN, Role.SYSTEM_ADMIN)

    for fields in STORES:
        if db.query(Store.id).filter(Store.email == fields["store_email"]).first():
            logger.info("Store exists, skipping: %s", fields["store_name"])
            continue
        create_store_with_owner(db, **fields)

    for fields in NORMAL_USERS:
        _ensure_account(db, fields, Role.NORMAL_USER)

    for user_email, store_email, value in RATINGS:
        user = _account(db, user_email)
        store = db.query(Store).filter(Store.email == store_email).one()
        submit_rating(db, user.id, store.id, value)


def main() -> int:
    configure_logging(get_settings().LOG_LEVEL)
    db = SessionLocal()
    try:
        seed(db)
        logger.info("Seeding completed")
        return 0
    except Exception as e:
        logger.exception("Seeding failed: %s", e)
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
