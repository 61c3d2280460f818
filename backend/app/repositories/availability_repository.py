from __future__ import annotations

from datetime import date
from typing import Dict, Iterable, List

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.models import Availability

from .base_repository import BaseRepository


class AvailabilityRepository(BaseRepository[Availability]):
    def __init__(self, db: Session):
        super().__init__(db, Availability)

    def available_day_counts(
        self, sitter_ids: Iterable[str], start_date: date, end_date: date
    ) -> Dict[str, int]:
        """Number of days in [start_date, end_date] each sitter is marked available."""
        ids = list(sitter_ids)
        if not ids:
            return {}
        rows = self._execute_query(
            self.db.query(Availability.sitter_id, func.count(Availability.date))
            .filter(
                Availability.sitter_id.in_(ids),
                Availability.date >= start_date,
                Availability.date <= end_date,
                Availability.is_available.is_(True),
            )
            .group_by(Availability.sitter_id)
        )
        return {sitter_id: int(count) for sitter_id, count in rows}

    def available_dates(self, sitter_id: str, start_date: date, end_date: date) -> List[date]:
        rows = self._execute_query(
            self.db.query(Availability.date)
            .filter(
                Availability.sitter_id == sitter_id,
                Availability.date >= start_date,
                Availability.date <= end_date,
                Availability.is_available.is_(True),
            )
            .order_by(Availability.date.asc())
        )
        return [row[0] for row in rows]
