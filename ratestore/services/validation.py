"""Field policies shared by request schemas and services.

Each ``*_problem`` function returns a human-readable message when the value
violates the policy, or None when it is acceptable. Schemas turn the message
into a pydantic ValueError; services raise ValidationError via ``ensure_valid``.
"""

import re

from ratestore.models.rating import RATING_MAX, RATING_MIN
from ratestore.services.errors import ValidationError

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
UPPERCASE_PATTERN = re.compile(r"[A-Z]")
PASSWORD_SPECIAL_CHARACTERS = '!@#$%^&*(),.?":{}|<>'

PASSWORD_MIN_LEN = 8
PASSWORD_MAX_LEN = 16
# Self-service signup requires a longer display name than admin-created accounts.
SIGNUP_NAME_MIN_LEN = 20
ADMIN_NAME_MIN_LEN = 2
NAME_MAX_LEN = 60
ADDRESS_MAX_LEN = 400
STORE_NAME_MIN_LEN = 1


def name_problem(name: str, min_len: int = ADMIN_NAME_MIN_LEN) -> str | None:
    if not name or not name.strip():
        return "Name is required"
    if not (min_len <= len(name) <= NAME_MAX_LEN):
        return f"Name must be between {min_len} and {NAME_MAX_LEN} characters"
    return None


def address_problem(address: str) -> str | None:
    if not address or not address.strip():
        return "Address is required"
    if len(address) > ADDRESS_MAX_LEN:
        return f"Address must not exceed {ADDRESS_MAX_LEN} characters"
    return None


def email_problem(email: str) -> str | None:
    if not email or not email.strip():
        return "Email is required"
    if not EMAIL_PATTERN.match(email):
        return "Invalid email format"
    return None


def password_problem(password: str) -> str | None:
    """Password policy: 8-16 chars, one uppercase letter, one special character."""
    if not password:
        return "Password is required"
    if not (PASSWORD_MIN_LEN <= len(password) <= PASSWORD_MAX_LEN):
        return f"Password must be between {PASSWORD_MIN_LEN} and {PASSWORD_MAX_LEN} characters"
    if not UPPERCASE_PATTERN.search(password):
        return "Password must contain at least one uppercase letter"
    if not any(c in PASSWORD_SPECIAL_CHARACTERS for c in password):
        return "Password must contain at least one special character"
    return None


def rating_value_problem(value: object) -> str | None:
    # bool is an int subclass; True must not count as a rating of 1.
    if isinstance(value, bool) or not isinstance(value, int):
        return f"Rating must be an integer between {RATING_MIN} and {RATING_MAX}"
    if not (RATING_MIN <= value <= RATING_MAX):
        return f"Rating must be an integer between {RATING_MIN} and {RATING_MAX}"
    return None


def ensure_valid(*problems: str | None) -> None:
    """Raise ValidationError for the first reported problem, if any."""
    for problem in problems:
        if problem:
            raise ValidationError(problem)
