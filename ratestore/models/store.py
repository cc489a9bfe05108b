"""ORM model for rated stores."""

from sqlalchemy import Column, DateTime, ForeignKey, String, func
from sqlalchemy.orm import relationship

from ratestore.models.base import Base
from ratestore.models.user import ADDRESS_MAX_LENGTH, EMAIL_MAX_LENGTH, NAME_MAX_LENGTH, new_id


class Store(Base):
    """
    A store that normal users rate.

    Each store has exactly one owner account (role STORE_OWNER) and each owner
    has at most one store.
    """

    __tablename__ = "stores"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(NAME_MAX_LENGTH), nullable=False, index=True)
    email = Column(String(EMAIL_MAX_LENGTH), nullable=False, unique=True, index=True)
    address = Column(String(ADDRESS_MAX_LENGTH), nullable=False)
    owner_id = Column(String(36), ForeignKey("users.id"), nullable=False, unique=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    owner = relationship("User", back_populates="store")
    ratings = relationship("Rating", back_populates="store")
