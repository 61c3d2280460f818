# backend/app/models/user.py
"""
Account model.

Account management lives outside this service; the search backend only
reads the e-mail to derive a display name for sitters and reviewers.
"""

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, String
from sqlalchemy.orm import relationship

from ..core.ulid_helper import generate_ulid
from ..database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(String(26), primary_key=True, default=generate_ulid)
    email = Column(String(255), nullable=False, unique=True, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    sitter = relationship("Sitter", back_populates="user", uselist=False)

    @property
    def display_name(self) -> str:
        """E-mail local part, e.g. 'jane' for jane@example.com."""
        return (self.email or "").split("@", 1)[0]
