# backend/app/repositories/review_repository.py
"""
Repository for reviews.

Follows repository pattern: no business logic, DB-only operations.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional, TypedDict

from sqlalchemy import func
from sqlalchemy.orm import Query, Session, joinedload

from ..models.review import Review
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class SitterAggregate(TypedDict):
    review_count: int
    raw_average: float


class ReviewRepository(BaseRepository[Review]):
    """Data access for `Review`."""

    def __init__(self, db: Session):
        super().__init__(db, Review)

    def _aggregate_query(self) -> Query:
        return self.db.query(
            Review.sitter_id,
            func.count(Review.id).label("review_count"),
            func.avg(Review.rating * 1.0).label("raw_average"),
        ).group_by(Review.sitter_id)

    @staticmethod
    def _rows_to_aggregates(rows: List[Any]) -> Dict[str, SitterAggregate]:
        return {
            row.sitter_id: {
                "review_count": int(row.review_count or 0),
                "raw_average": float(row.raw_average or 0.0),
            }
            for row in rows
        }

    def aggregate_all(self) -> Dict[str, SitterAggregate]:
        """Count and mean rating for every sitter that has at least one review."""
        return self._rows_to_aggregates(self._execute_query(self._aggregate_query()))

    def aggregate_for(self, sitter_ids: Iterable[str]) -> Dict[str, SitterAggregate]:
        ids = list(sitter_ids)
        if not ids:
            return {}
        query = self._aggregate_query().filter(Review.sitter_id.in_(ids))
        return self._rows_to_aggregates(self._execute_query(query))

    def aggregate_for_sitter(self, sitter_id: str) -> Optional[SitterAggregate]:
        return self.aggregate_for([sitter_id]).get(sitter_id)

    def recent_for_sitter(self, sitter_id: str, limit: int) -> List[Review]:
        """Newest reviews first, id descending as the tie-break."""
        query = (
            self.db.query(Review)
            .options(joinedload(Review.owner))
            .filter(Review.sitter_id == sitter_id)
            .order_by(Review.created_at.desc(), Review.id.desc())
            .limit(limit)
        )
        return self._execute_query(query)
