"""
Create an account (e.g. the first administrator). Run from project root:
  python -m ratestore.scripts.create_user NAME EMAIL PASSWORD ADDRESS [role]
Example:
  python -m ratestore.scripts.create_user "Site Admin" admin@example.com 'Admin@123' "1 Main St" SYSTEM_ADMIN
"""
import argparse
import logging
import sys

from ratestore.core.config import get_settings
from ratestore.core.database import SessionLocal
from ratestore.core.logging_config import configure_logging
from ratestore.models import Role
from ratestore.services.accounts import create_account
from ratestore.services.errors import ServiceError
from ratestore.services.validation import (
    ADMIN_NAME_MIN_LEN,
    address_problem,
    email_problem,
    ensure_valid,
    name_problem,
    password_problem,
)

logger = logging.getLogger(__name__)


def main() -> int:
    parser = argparse.ArgumentParser(description="Create a RateStore account.")
    parser.add_argument("name", help="Display name (2-60 chars)")
    parser.add_argument("email", help="Unique email address")
    parser.add_argument("password", help="Password (8-16 chars, one uppercase, one special)")
    parser.add_argument("address", help="Address (max 400 chars)")
    parser.add_argument(
        "role",
        nargs="?",
        default=Role.SYSTEM_ADMIN.value,
        choices=[r.value for r in Role],
    )
    args = parser.parse_args()
    configure_logging(get_settings().LOG_LEVEL)

    email = args.email.strip()
    db = SessionLocal()
    try:
        ensure_valid(
            name_problem(args.name, min_len=ADMIN_NAME_MIN_LEN),
            email_problem(email),
            password_problem(args.password),
            address_problem(args.address),
        )
        user = create_account(
            db,
            name=args.name,
            email=email,
            password=args.password,
            address=args.address,
            role=Role(args.role),
        )
    except ServiceError as e:
        print(e.message, file=sys.stderr)
        return 1
    finally:
        db.close()
    print(f"Created account '{user.email}' with role '{user.role.value}' (id {user.id}).")
    return 0


if __name__ == "__main__":
    sys.exit(main())
