"""
Pydantic response schemas for the PetBnB search API.

All public models serialize with camelCase keys.
"""

from .health import HealthResponse
from .search import PagingResponse, SitterSearchResponse, SitterSummaryResponse
from .sitter_profile import (
    LocationResponse,
    ProfileReviewResponse,
    RatingResponse,
    ReviewOwnerResponse,
    ServiceOfferingResponse,
    SitterProfileResponse,
)

__all__ = [
    "HealthResponse",
    "LocationResponse",
    "PagingResponse",
    "ProfileReviewResponse",
    "RatingResponse",
    "ReviewOwnerResponse",
    "ServiceOfferingResponse",
    "SitterProfileResponse",
    "SitterSearchResponse",
    "SitterSummaryResponse",
]
