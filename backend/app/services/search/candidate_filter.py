# backend/app/services/search/candidate_filter.py
"""
Candidate filtering for sitter search.

Inclusion is expressed as small predicates over a Candidate, evaluated after
a first-pass fetch of sitters whose latitude band can reach the origin:

1. Radius - exact great-circle distance within the sitter's own radius
2. Availability - every day of the stay is marked available
3. Pet size - offers boarding or daycare (only when a pet size is given)
4. Needs - offers any service at all (only when needs are given)

Rules 3 and 4 are placeholders for a real capability model and are kept as
weak as the listing data allows; do not tighten them here.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
import logging
from typing import TYPE_CHECKING, Dict, FrozenSet, List, Optional, Protocol, Sequence, Set

from app.core.config import settings
from app.core.constants import METERS_PER_KM, PET_SIZE_COMPATIBLE_SERVICES
from app.repositories.availability_repository import AvailabilityRepository
from app.repositories.sitter_repository import SitterRepository
from app.services.search.availability_matcher import AvailabilityMatcher
from app.services.search.query import SearchQuery
from app.services.search.rating_aggregator import NO_REVIEWS, RatingAggregator, RatingSummary
from app.utils.geo import haversine_meters

if TYPE_CHECKING:
    from sqlalchemy.orm import Session

    from app.models.sitter import Sitter

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Candidate:
    """A sitter annotated with its distance to the query origin and its rating."""

    id: str
    name: str
    bio: Optional[str]
    rate_boarding_cents: Optional[int]
    rate_daycare_cents: Optional[int]
    response_time_minutes: Optional[int]
    repeat_client_pct: Optional[int]
    radius_km: float
    lat: float
    lng: float
    distance_m: float
    rating: RatingSummary = NO_REVIEWS
    service_kinds: FrozenSet[str] = field(default_factory=frozenset)

    @classmethod
    def from_sitter(cls, sitter: "Sitter", distance_m: float) -> "Candidate":
        return cls(
            id=sitter.id,
            name=sitter_display_name(sitter),
            bio=sitter.bio,
            rate_boarding_cents=sitter.rate_boarding_cents,
            rate_daycare_cents=sitter.rate_daycare_cents,
            response_time_minutes=sitter.response_time_minutes,
            repeat_client_pct=sitter.repeat_client_pct,
            radius_km=sitter.radius_km,
            lat=sitter.lat,
            lng=sitter.lng,
            distance_m=distance_m,
        )

    @property
    def min_rate_cents(self) -> Optional[int]:
        """Lower of the two rates; a zero or missing rate is not offered."""
        rates = [rate for rate in (self.rate_boarding_cents, self.rate_daycare_cents) if rate]
        return min(rates) if rates else None

    @property
    def image_url(self) -> str:
        return sitter_image_url(self.id)


def sitter_display_name(sitter: "Sitter") -> str:
    """Owner e-mail local part, or 'Sitter <id>' when there is none."""
    name = sitter.user.display_name if sitter.user is not None else ""
    return name or f"Sitter {sitter.id}"


def sitter_image_url(sitter_id: str) -> str:
    return settings.sitter_image_url_template.format(sitter_id=sitter_id)


class CandidatePredicate(Protocol):
    name: str

    def __call__(self, candidate: Candidate) -> bool:
        ...


class WithinServiceRadius:
    name = "radius"

    def __call__(self, candidate: Candidate) -> bool:
        return candidate.distance_m <= candidate.radius_km * METERS_PER_KM


class FullyAvailable:
    name = "availability"

    def __init__(self, available_ids: Set[str]) -> None:
        self.available_ids = available_ids

    def __call__(self, candidate: Candidate) -> bool:
        return candidate.id in self.available_ids


class PetSizeCompatible:
    """Any sitter offering boarding or daycare passes, whatever the pet size."""

    name = "pet_size"

    def __call__(self, candidate: Candidate) -> bool:
        return any(kind in PET_SIZE_COMPATIBLE_SERVICES for kind in candidate.service_kinds)


class NeedsCompatible:
    """Any sitter with at least one service offering passes, whatever the needs."""

    name = "needs"

    def __call__(self, candidate: Candidate) -> bool:
        return bool(candidate.service_kinds)


def apply_predicates(
    candidates: Sequence[Candidate], predicates: Sequence[CandidatePredicate]
) -> List[Candidate]:
    return [c for c in candidates if all(predicate(c) for predicate in predicates)]


class CandidateFilter:
    """
    Produces the candidate set for a query.

    Read-only: issues queries through the repositories and never writes.
    """

    def __init__(
        self,
        db: "Session",
        rating_aggregator: RatingAggregator,
        sitter_repository: Optional[SitterRepository] = None,
        availability_matcher: Optional[AvailabilityMatcher] = None,
    ) -> None:
        self.db = db
        self.rating_aggregator = rating_aggregator
        self.sitter_repository = sitter_repository or SitterRepository(db)
        self.availability_matcher = availability_matcher or AvailabilityMatcher(
            AvailabilityRepository(db)
        )

    def filter(self, query: SearchQuery) -> List[Candidate]:
        stats: Dict[str, int] = {}

        # Stage 1: latitude envelope, then exact distance
        sitters = self.sitter_repository.find_in_latitude_band(query.lat)
        stats["envelope"] = len(sitters)
        working = [
            Candidate.from_sitter(s, haversine_meters(query.lat, query.lng, s.lat, s.lng))
            for s in sitters
        ]
        working = apply_predicates(working, [WithinServiceRadius()])
        stats["radius"] = len(working)
        if not working:
            self._log_stats(stats)
            return []

        # Stage 2: full-range availability
        available_ids = self.availability_matcher.fully_available_ids(
            [c.id for c in working], query.start_date, query.end_date
        )
        working = apply_predicates(working, [FullyAvailable(available_ids)])
        stats["availability"] = len(working)

        # Stage 3: service-based screens
        screens: List[CandidatePredicate] = []
        if query.pet_size is not None:
            screens.append(PetSizeCompatible())
        if query.needs:
            screens.append(NeedsCompatible())
        if screens and working:
            kinds = self.sitter_repository.service_kinds_for(c.id for c in working)
            working = [replace(c, service_kinds=frozenset(kinds.get(c.id, ()))) for c in working]
            working = apply_predicates(working, screens)
            stats["services"] = len(working)

        # Stage 4: attach ratings to survivors
        if working:
            ratings = self.rating_aggregator.summaries_for([c.id for c in working], db=self.db)
            working = [replace(c, rating=ratings.get(c.id, NO_REVIEWS)) for c in working]

        self._log_stats(stats)
        return working

    @staticmethod
    def _log_stats(stats: Dict[str, int]) -> None:
        logger.debug(
            "Candidate filter: %s",
            ", ".join(f"{stage}={count}" for stage, count in stats.items()),
        )
