# backend/app/services/sitter_search_service.py
"""
Sitter search orchestration.

Runs one search through the pipeline

    received -> filtering -> ranking -> paginating -> projecting -> responded

and ends in `failed` or `cancelled` instead when a stage raises or the caller
gives up. Nothing is retried and no partial result is ever returned. The
service keeps no state between calls, so concurrent searches never
coordinate.
"""
from __future__ import annotations

from dataclasses import dataclass
import logging
import threading
import time
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from ..core.config import settings
from ..core.constants import ERROR_SEARCH_FAILED
from ..core.enums import DistanceUnit, SearchStage
from ..core.exceptions import (
    DataAccessException,
    DomainException,
    RepositoryException,
    SearchCancelledException,
)
from ..core.metrics import SEARCH_CANDIDATES, SEARCH_REQUESTS_TOTAL, SEARCH_STAGE_DURATION_SECONDS
from ..utils.money import cents_to_dollars, format_distance
from .base import BaseService
from .search.candidate_filter import Candidate, CandidateFilter
from .search.geometry import BBox, project
from .search.paginator import paginate
from .search.query import SearchQuery
from .search.ranker import rank
from .search.rating_aggregator import RatingAggregator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SitterSummary:
    """One search result row, already in response units."""

    id: str
    name: str
    bio: Optional[str]
    distance: float
    distance_unit: DistanceUnit
    rate_boarding: Optional[float]
    rate_daycare: Optional[float]
    response_time: Optional[int]
    repeat_client: Optional[int]
    avg_rating: float
    review_count: int
    image_url: str


@dataclass(frozen=True)
class SearchResult:
    results: List[SitterSummary]
    geojson: Dict[str, Any]
    total: int
    page: int
    page_size: int
    total_pages: int
    bbox: Optional[BBox]


class _StageTracker:
    """Walks a single search through its stages and times each one."""

    def __init__(self, cancel_event: Optional[threading.Event]) -> None:
        self._cancel_event = cancel_event
        self.stage = SearchStage.RECEIVED
        self._stage_started = time.perf_counter()

    def advance(self, stage: SearchStage) -> None:
        """Enter the next working stage unless the caller has cancelled."""
        if self._cancel_event is not None and self._cancel_event.is_set():
            raise SearchCancelledException(stage.value)
        self._enter(stage)
        logger.debug(f"Search stage -> {stage.value}")

    def finish(self, stage: SearchStage) -> SearchStage:
        """Enter a terminal stage; returns the stage that was interrupted or completed."""
        previous = self.stage
        self._enter(stage)
        return previous

    def _enter(self, stage: SearchStage) -> None:
        now = time.perf_counter()
        SEARCH_STAGE_DURATION_SECONDS.labels(stage=self.stage.value).observe(
            now - self._stage_started
        )
        self._stage_started = now
        self.stage = stage


class SitterSearchService(BaseService):
    """
    Search & ranking entry point.

    Collaborators are injected so tests can replace the candidate filter; by
    default it is built on the request's session.
    """

    def __init__(
        self,
        db: Session,
        rating_aggregator: RatingAggregator,
        candidate_filter: Optional[CandidateFilter] = None,
        distance_unit: Optional[str] = None,
    ) -> None:
        super().__init__(db)
        self.rating_aggregator = rating_aggregator
        self.candidate_filter = candidate_filter or CandidateFilter(db, rating_aggregator)
        self.distance_unit = DistanceUnit(distance_unit or settings.distance_unit)

    @BaseService.measure_operation("search")
    def search(
        self, query: SearchQuery, cancel_event: Optional[threading.Event] = None
    ) -> SearchResult:
        """
        Run a search end to end.

        Args:
            query: Parsed search parameters
            cancel_event: Set by the caller to abandon the search; checked at
                every stage boundary

        Returns:
            SearchResult; an empty result set is a normal outcome

        Raises:
            ValidationException: query cannot be executed
            DataAccessException: the database failed during any stage
            SearchCancelledException: cancel_event was set
        """
        self.logger.info(
            f"Searching for sitters: lat={query.lat} lng={query.lng} "
            f"start={query.start_date} end={query.end_date} page={query.page} "
            f"page_size={query.page_size} pet_size={query.pet_size} "
            f"needs={sorted(query.needs)} sort={query.sort.value}"
        )
        tracker = _StageTracker(cancel_event)

        try:
            query.validate()

            tracker.advance(SearchStage.FILTERING)
            candidates = self.candidate_filter.filter(query)
            SEARCH_CANDIDATES.observe(len(candidates))

            tracker.advance(SearchStage.RANKING)
            ordered = rank(candidates, query.sort)

            tracker.advance(SearchStage.PAGINATING)
            page = paginate(ordered, query.page, query.page_size)

            tracker.advance(SearchStage.PROJECTING)
            projection = project(page.items)
            results = [self._summarize(c) for c in page.items]
        except SearchCancelledException as exc:
            tracker.finish(SearchStage.CANCELLED)
            SEARCH_REQUESTS_TOTAL.labels(outcome="cancelled").inc()
            self.logger.info(f"Search cancelled before {exc.details.get('stage')}")
            raise
        except RepositoryException as exc:
            failed_at = tracker.finish(SearchStage.FAILED)
            SEARCH_REQUESTS_TOTAL.labels(outcome="failed").inc()
            self.logger.error(f"Search failed during {failed_at.value}: {exc}", exc_info=True)
            raise DataAccessException(
                ERROR_SEARCH_FAILED,
                code="SEARCH_FAILED",
                details={"stage": failed_at.value},
            ) from exc
        except DomainException as exc:
            failed_at = tracker.finish(SearchStage.FAILED)
            SEARCH_REQUESTS_TOTAL.labels(outcome="failed").inc()
            self.logger.warning(f"Search rejected during {failed_at.value}: {exc.message}")
            raise
        except Exception:
            failed_at = tracker.finish(SearchStage.FAILED)
            SEARCH_REQUESTS_TOTAL.labels(outcome="failed").inc()
            self.logger.error(f"Unexpected error during {failed_at.value}", exc_info=True)
            raise

        tracker.finish(SearchStage.RESPONDED)
        SEARCH_REQUESTS_TOTAL.labels(outcome="ok" if page.total else "empty").inc()

        return SearchResult(
            results=results,
            geojson=projection.feature_collection,
            total=page.total,
            page=page.page,
            page_size=page.page_size,
            total_pages=page.total_pages,
            bbox=projection.bbox,
        )

    def _summarize(self, candidate: Candidate) -> SitterSummary:
        return SitterSummary(
            id=candidate.id,
            name=candidate.name,
            bio=candidate.bio,
            distance=format_distance(candidate.distance_m, self.distance_unit),
            distance_unit=self.distance_unit,
            rate_boarding=cents_to_dollars(candidate.rate_boarding_cents),
            rate_daycare=cents_to_dollars(candidate.rate_daycare_cents),
            response_time=candidate.response_time_minutes,
            repeat_client=candidate.repeat_client_pct,
            avg_rating=candidate.rating.average,
            review_count=candidate.rating.count,
            image_url=candidate.image_url,
        )
