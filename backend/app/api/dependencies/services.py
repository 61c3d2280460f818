# backend/app/api/dependencies/services.py
"""
Service layer dependencies for dependency injection.

This module provides factory functions that create service instances
with their required dependencies properly injected.
"""

from functools import lru_cache
import logging

from fastapi import Depends
from sqlalchemy.orm import Session

from ...database import SessionLocal
from ...services.search.rating_aggregator import RatingAggregator
from ...services.sitter_profile_service import SitterProfileService
from ...services.sitter_search_service import SitterSearchService
from .database import get_db

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_rating_aggregator_singleton() -> RatingAggregator:
    """Process-wide rating aggregator; its snapshot is shared by every search."""
    return RatingAggregator(SessionLocal)


def get_rating_aggregator() -> RatingAggregator:
    """Get rating aggregator for dependency injection."""
    return get_rating_aggregator_singleton()


def get_sitter_search_service(
    db: Session = Depends(get_db),
    rating_aggregator: RatingAggregator = Depends(get_rating_aggregator),
) -> SitterSearchService:
    """
    Get sitter search service instance.

    Args:
        db: Database session
        rating_aggregator: Shared rating aggregator

    Returns:
        SitterSearchService instance
    """
    return SitterSearchService(db, rating_aggregator)


def get_sitter_profile_service(db: Session = Depends(get_db)) -> SitterProfileService:
    """Provide sitter profile service instance for dependency injection."""
    return SitterProfileService(db)
