"""SQLAlchemy ORM models."""

from ratestore.models.base import Base
from ratestore.models.rating import Rating
from ratestore.models.store import Store
from ratestore.models.user import Role, User

__all__ = ["Base", "Rating", "Role", "Store", "User"]
