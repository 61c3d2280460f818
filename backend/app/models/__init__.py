"""
Database models for the PetBnB search backend.

- User: account owning a sitter profile or writing reviews
- Sitter / SitterService: provider profile and the services it offers
- Availability: per-day availability flags
- Review: owner reviews feeding rating summaries
"""

from .availability import Availability
from .review import Review
from .sitter import Sitter, SitterService
from .user import User

__all__ = [
    "Availability",
    "Review",
    "Sitter",
    "SitterService",
    "User",
]
