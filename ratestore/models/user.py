"""ORM model for accounts (auth and role-based access control)."""

import enum
import uuid

from sqlalchemy import Column, DateTime, Enum, String, func
from sqlalchemy.orm import relationship

from ratestore.models.base import Base

NAME_MAX_LENGTH = 60
EMAIL_MAX_LENGTH = 255
ADDRESS_MAX_LENGTH = 400


class Role(str, enum.Enum):
    """Flat, non-hierarchical account roles."""

    NORMAL_USER = "NORMAL_USER"
    STORE_OWNER = "STORE_OWNER"
    SYSTEM_ADMIN = "SYSTEM_ADMIN"


def new_id() -> str:
    return str(uuid.uuid4())


class User(Base):
    """
    Account for cookie-based JWT authentication.

    Passwords are stored only as bcrypt hashes. Email and role never change after
    creation; name and address are editable through the profile endpoint.
    """

    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(NAME_MAX_LENGTH), nullable=False)
    email = Column(String(EMAIL_MAX_LENGTH), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    address = Column(String(ADDRESS_MAX_LENGTH), nullable=False)
    role = Column(
        Enum(Role, name="user_role", native_enum=False, length=32),
        nullable=False,
        default=Role.NORMAL_USER,
        index=True,
    )
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    store = relationship("Store", back_populates="owner", uselist=False)
    ratings = relationship("Rating", back_populates="user")
