# backend/app/models/review.py
"""
Review model.

Reviews are immutable once written; the search backend only reads them to
build rating summaries and the recent-review list on a profile.
"""

from datetime import datetime, timezone

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import relationship

from ..core.constants import MAX_RATING, MIN_RATING
from ..core.ulid_helper import generate_ulid
from ..database import Base


class Review(Base):
    """Review of a sitter left by a pet owner."""

    __tablename__ = "reviews"

    id = Column(String(26), primary_key=True, default=generate_ulid)
    sitter_id = Column(String(26), ForeignKey("sitters.id", ondelete="CASCADE"), nullable=False, index=True)
    owner_id = Column(String(26), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    rating = Column(Integer, nullable=False)
    comment = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    owner = relationship("User")

    __table_args__ = (
        CheckConstraint(
            f"rating >= {MIN_RATING} AND rating <= {MAX_RATING}", name="ck_reviews_rating_range"
        ),
        Index("idx_reviews_sitter_created_at", "sitter_id", "created_at"),
    )
