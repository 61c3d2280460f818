# backend/app/services/search/__init__.py
"""
Sitter search engine.

Leaves first: availability matching, rating aggregation, candidate
filtering, ranking, pagination and map geometry. The orchestrating service
lives in app.services.sitter_search_service.
"""

from app.services.search.availability_matcher import AvailabilityMatcher, expand_date_range
from app.services.search.candidate_filter import (
    Candidate,
    CandidateFilter,
    FullyAvailable,
    NeedsCompatible,
    PetSizeCompatible,
    WithinServiceRadius,
)
from app.services.search.geometry import Projection, bounding_box, project
from app.services.search.paginator import Page, paginate
from app.services.search.query import SearchQuery
from app.services.search.ranker import rank
from app.services.search.rating_aggregator import (
    NO_REVIEWS,
    RatingAggregator,
    RatingSnapshot,
    RatingSummary,
)

__all__ = [
    # Query
    "SearchQuery",
    # Availability
    "AvailabilityMatcher",
    "expand_date_range",
    # Ratings
    "NO_REVIEWS",
    "RatingAggregator",
    "RatingSnapshot",
    "RatingSummary",
    # Filtering
    "Candidate",
    "CandidateFilter",
    "FullyAvailable",
    "NeedsCompatible",
    "PetSizeCompatible",
    "WithinServiceRadius",
    # Ordering and paging
    "rank",
    "Page",
    "paginate",
    # Geometry
    "Projection",
    "bounding_box",
    "project",
]
