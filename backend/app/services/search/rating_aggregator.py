# backend/app/services/search/rating_aggregator.py
"""
Per-sitter rating summaries.

Two modes:
- cached: summaries come from an immutable, time-stamped snapshot that a
  background loop recomputes every `rating_refresh_interval_seconds`. Readers
  never wait on a refresh and see either the old or the new snapshot. A new
  review shows up at the latest one interval after it is written.
- live: a grouped query over the requested ids on every call.
"""
from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime, timezone
import logging
import threading
from types import MappingProxyType
from typing import Callable, Dict, Iterable, Iterator, Mapping, Optional

from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.metrics import RATING_SNAPSHOT_REFRESH_TOTAL, RATING_SNAPSHOT_TAKEN_AT
from app.core.exceptions import RepositoryException
from app.repositories.review_repository import ReviewRepository, SitterAggregate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RatingSummary:
    """Mean rating and review count; a sitter without reviews is (0.0, 0)."""

    average: float = 0.0
    count: int = 0


NO_REVIEWS = RatingSummary()


@dataclass(frozen=True)
class RatingSnapshot:
    taken_at: datetime
    summaries: Mapping[str, RatingSummary] = field(default_factory=lambda: MappingProxyType({}))

    def get(self, sitter_id: str) -> RatingSummary:
        return self.summaries.get(sitter_id, NO_REVIEWS)


def summarize(aggregates: Mapping[str, SitterAggregate]) -> Dict[str, RatingSummary]:
    summaries: Dict[str, RatingSummary] = {}
    for sitter_id, aggregate in aggregates.items():
        count = aggregate["review_count"]
        if count <= 0:
            continue
        summaries[sitter_id] = RatingSummary(average=float(aggregate["raw_average"]), count=count)
    return summaries


class RatingAggregator:
    """
    Owns the rating snapshot and its refresh.

    `session_factory` opens the session used for refreshes and for live reads
    when the caller does not pass one in.
    """

    def __init__(
        self,
        session_factory: Callable[[], Session],
        *,
        cached: Optional[bool] = None,
        refresh_interval_seconds: Optional[float] = None,
    ) -> None:
        self._session_factory = session_factory
        self.cached = settings.rating_cache_enabled if cached is None else cached
        self.refresh_interval_seconds = (
            settings.rating_refresh_interval_seconds
            if refresh_interval_seconds is None
            else refresh_interval_seconds
        )
        self._snapshot: Optional[RatingSnapshot] = None
        self._refresh_lock = threading.Lock()

    @property
    def snapshot(self) -> Optional[RatingSnapshot]:
        return self._snapshot

    @contextmanager
    def _session(self, db: Optional[Session]) -> Iterator[Session]:
        if db is not None:
            yield db
            return
        session = self._session_factory()
        try:
            yield session
        finally:
            session.close()

    def summary_for(self, sitter_id: str, db: Optional[Session] = None) -> RatingSummary:
        return self.summaries_for([sitter_id], db=db).get(sitter_id, NO_REVIEWS)

    def summaries_for(
        self, sitter_ids: Iterable[str], db: Optional[Session] = None
    ) -> Dict[str, RatingSummary]:
        """
        Summary for every requested id, defaulting to no reviews.

        Before the first snapshot exists the cached mode answers with a live
        read for just these ids.
        """
        ids = list(sitter_ids)
        snapshot = self._snapshot
        if self.cached and snapshot is not None:
            return {sitter_id: snapshot.get(sitter_id) for sitter_id in ids}

        if not ids:
            return {}
        with self._session(db) as session:
            live = summarize(ReviewRepository(session).aggregate_for(ids))
        return {sitter_id: live.get(sitter_id, NO_REVIEWS) for sitter_id in ids}

    def refresh(self) -> RatingSnapshot:
        """
        Recompute every summary and swap in the new snapshot.

        Concurrent callers are serialized; on failure the previous snapshot
        stays in place and RepositoryException propagates.
        """
        with self._refresh_lock:
            try:
                with self._session(None) as session:
                    aggregates = ReviewRepository(session).aggregate_all()
            except RepositoryException:
                RATING_SNAPSHOT_REFRESH_TOTAL.labels(status="error").inc()
                raise

            snapshot = RatingSnapshot(
                taken_at=datetime.now(timezone.utc),
                summaries=MappingProxyType(summarize(aggregates)),
            )
            self._snapshot = snapshot

        RATING_SNAPSHOT_REFRESH_TOTAL.labels(status="ok").inc()
        RATING_SNAPSHOT_TAKEN_AT.set(snapshot.taken_at.timestamp())
        logger.info(
            "Rating snapshot refreshed: %d sitters with reviews", len(snapshot.summaries)
        )
        return snapshot

    def run_refresh_loop(self, shutdown_event: threading.Event) -> None:
        """Refresh immediately, then every interval until shutdown_event is set."""
        if not self.cached:
            return

        while not shutdown_event.is_set():
            try:
                self.refresh()
            except RepositoryException as e:
                logger.error(f"Rating snapshot refresh failed, keeping previous snapshot: {e}")
            except Exception as e:
                RATING_SNAPSHOT_REFRESH_TOTAL.labels(status="error").inc()
                logger.error(
                    f"Unexpected error refreshing rating snapshot, keeping previous snapshot: {e}",
                    exc_info=True,
                )
            if shutdown_event.wait(self.refresh_interval_seconds):
                break
        logger.info("Rating snapshot refresh loop stopped")
