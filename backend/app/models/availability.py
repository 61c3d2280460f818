from __future__ import annotations

from sqlalchemy import Boolean, Column, Date, ForeignKey, Index, String

from app.database import Base


class Availability(Base):
    """
    One row per (sitter, calendar date).

    The composite primary key keeps at most one record per pair. A date with
    no row is treated as unavailable.
    """

    __tablename__ = "availability"

    sitter_id = Column(String(26), ForeignKey("sitters.id", ondelete="CASCADE"), primary_key=True)
    date = Column(Date, primary_key=True)
    is_available = Column(Boolean, nullable=False, default=True)

    __table_args__ = (Index("ix_availability_date_available", "date", "is_available"),)
