# backend/app/repositories/__init__.py
"""
Repository layer for the PetBnB search backend.

Repositories own every query against the database and translate driver
failures into RepositoryException; services never touch the session
directly.
"""

from .availability_repository import AvailabilityRepository
from .base_repository import BaseRepository
from .review_repository import ReviewRepository
from .sitter_repository import SitterRepository

__all__ = [
    "AvailabilityRepository",
    "BaseRepository",
    "ReviewRepository",
    "SitterRepository",
]
