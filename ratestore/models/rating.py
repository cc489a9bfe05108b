"""ORM model for per-user store ratings."""

from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import relationship

from ratestore.models.base import Base
from ratestore.models.user import new_id

RATING_MIN = 1
RATING_MAX = 5


class Rating(Base):
    """
    One rating per (user, store); resubmission updates the value in place.
    """

    __tablename__ = "ratings"
    __table_args__ = (
        UniqueConstraint("user_id", "store_id", name="uq_ratings_user_store"),
        CheckConstraint(
            f"value >= {RATING_MIN} AND value <= {RATING_MAX}",
            name="value_range",
        ),
    )

    id = Column(String(36), primary_key=True, default=new_id)
    value = Column(Integer, nullable=False)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    store_id = Column(String(36), ForeignKey("stores.id"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    user = relationship("User", back_populates="ratings")
    store = relationship("Store", back_populates="ratings")
