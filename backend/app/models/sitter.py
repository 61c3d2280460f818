# backend/app/models/sitter.py
"""
Sitter (provider) models.

Design notes:
- ULID string IDs (26 chars); search tie-breaks order on the id string
- Rates and prices are integer cents; conversion to dollars happens only
  when a response is assembled
- One fixed coordinate per sitter plus an individual service radius in km
"""

from datetime import datetime, timezone

from sqlalchemy import CheckConstraint, Column, DateTime, Float, ForeignKey, Index, Integer, String, Text
from sqlalchemy import UniqueConstraint
from sqlalchemy.orm import relationship

from ..core.ulid_helper import generate_ulid
from ..database import Base


class Sitter(Base):
    """Pet sitter offering services around a fixed location."""

    __tablename__ = "sitters"

    id = Column(String(26), primary_key=True, default=generate_ulid)
    user_id = Column(String(26), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True)

    bio = Column(Text, nullable=True)
    rate_boarding_cents = Column(Integer, nullable=True)
    rate_daycare_cents = Column(Integer, nullable=True)
    response_time_minutes = Column(Integer, nullable=True)
    repeat_client_pct = Column(Integer, nullable=True)

    radius_km = Column(Float, nullable=False)
    lat = Column(Float, nullable=False)
    lng = Column(Float, nullable=False)

    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    user = relationship("User", back_populates="sitter")
    services = relationship("SitterService", back_populates="sitter", cascade="all, delete-orphan")

    __table_args__ = (
        CheckConstraint("radius_km >= 0", name="ck_sitters_radius_non_negative"),
        CheckConstraint("lat >= -90 AND lat <= 90", name="ck_sitters_lat_range"),
        CheckConstraint("lng >= -180 AND lng <= 180", name="ck_sitters_lng_range"),
        Index("idx_sitters_lat", "lat"),
    )


class SitterService(Base):
    """A kind of service (boarding, daycare, ...) offered by a sitter."""

    __tablename__ = "sitter_services"

    id = Column(String(26), primary_key=True, default=generate_ulid)
    sitter_id = Column(String(26), ForeignKey("sitters.id", ondelete="CASCADE"), nullable=False, index=True)
    service = Column(String(32), nullable=False)
    price_cents = Column(Integer, nullable=False)

    sitter = relationship("Sitter", back_populates="services")

    __table_args__ = (
        UniqueConstraint("sitter_id", "service", name="uq_sitter_services_kind"),
        CheckConstraint("price_cents >= 0", name="ck_sitter_services_price_non_negative"),
    )
