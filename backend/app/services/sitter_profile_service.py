# backend/app/services/sitter_profile_service.py
"""
Sitter profile lookup.

Returns the full detail view of one sitter: listing fields, service
offerings, rating summary, the most recent reviews and upcoming available
dates. The rating here is aggregated live so it always agrees with the
reviews shown next to it.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from ..core.config import settings
from ..core.constants import ERROR_PROFILE_FAILED, MINOR_UNITS_PER_MAJOR
from ..core.exceptions import DataAccessException, RepositoryException, SitterNotFoundException
from ..repositories.availability_repository import AvailabilityRepository
from ..repositories.review_repository import ReviewRepository
from ..repositories.sitter_repository import SitterRepository
from .base import BaseService
from .search.candidate_filter import sitter_display_name, sitter_image_url
from .search.rating_aggregator import NO_REVIEWS, RatingSummary, summarize

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ServiceOffering:
    type: str
    price_dollars: float


@dataclass(frozen=True)
class ReviewOwner:
    id: str
    name: str


@dataclass(frozen=True)
class ProfileReview:
    id: str
    rating: int
    comment: Optional[str]
    date: datetime
    owner: ReviewOwner


@dataclass(frozen=True)
class SitterLocation:
    lat: float
    lng: float
    radius_km: float


@dataclass(frozen=True)
class SitterProfile:
    id: str
    name: str
    bio: Optional[str]
    response_time: Optional[int]
    repeat_client: Optional[int]
    image_url: str
    location: SitterLocation
    rating: RatingSummary
    services: List[ServiceOffering]
    reviews: List[ProfileReview]
    availability: List[date]


class SitterProfileService(BaseService):
    """Read-only detail view of a single sitter."""

    def __init__(
        self,
        db: Session,
        sitter_repository: Optional[SitterRepository] = None,
        review_repository: Optional[ReviewRepository] = None,
        availability_repository: Optional[AvailabilityRepository] = None,
    ) -> None:
        super().__init__(db)
        self.sitter_repository = sitter_repository or SitterRepository(db)
        self.review_repository = review_repository or ReviewRepository(db)
        self.availability_repository = availability_repository or AvailabilityRepository(db)

    @BaseService.measure_operation("get_profile")
    def get_profile(self, sitter_id: str, today: Optional[date] = None) -> SitterProfile:
        """
        Load a sitter profile.

        Args:
            sitter_id: Sitter ULID
            today: First day of the availability window (defaults to the
                current UTC date)

        Raises:
            SitterNotFoundException: no sitter with this id
            DataAccessException: the database failed
        """
        self.logger.info(f"Fetching sitter profile {sitter_id}")
        window_start = today or datetime.now(timezone.utc).date()
        window_end = window_start + timedelta(days=settings.availability_horizon_days)

        try:
            sitter = self.sitter_repository.get_by_id(sitter_id)
            if sitter is None:
                raise SitterNotFoundException(sitter_id)

            offerings = self.sitter_repository.services_for(sitter_id)
            aggregates = self.review_repository.aggregate_for([sitter_id])
            reviews = self.review_repository.recent_for_sitter(
                sitter_id, settings.recent_reviews_limit
            )
            available = self.availability_repository.available_dates(
                sitter_id, window_start, window_end
            )
        except RepositoryException as exc:
            self.logger.error(f"Error fetching sitter profile {sitter_id}: {exc}", exc_info=True)
            raise DataAccessException(
                ERROR_PROFILE_FAILED, code="PROFILE_FAILED", details={"sitter_id": sitter_id}
            ) from exc

        return SitterProfile(
            id=sitter.id,
            name=sitter_display_name(sitter),
            bio=sitter.bio,
            response_time=sitter.response_time_minutes,
            repeat_client=sitter.repeat_client_pct,
            image_url=sitter_image_url(sitter.id),
            location=SitterLocation(lat=sitter.lat, lng=sitter.lng, radius_km=sitter.radius_km),
            rating=summarize(aggregates).get(sitter_id, NO_REVIEWS),
            services=[
                ServiceOffering(type=s.service, price_dollars=s.price_cents / MINOR_UNITS_PER_MAJOR)
                for s in offerings
            ],
            reviews=[
                ProfileReview(
                    id=r.id,
                    rating=r.rating,
                    comment=r.comment,
                    date=r.created_at,
                    owner=ReviewOwner(id=r.owner_id, name=r.owner.display_name if r.owner else ""),
                )
                for r in reviews
            ],
            availability=available,
        )
