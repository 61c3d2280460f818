# backend/app/services/search/availability_matcher.py
"""
Full-range availability matching.

A sitter matches a stay only when every calendar day of the inclusive range
has an availability row flagged available. Days without a row are
unavailable; there is no partial match.
"""
from __future__ import annotations

from datetime import date, timedelta
import logging
from typing import Iterable, List, Set

from app.core.exceptions import InvalidDateRangeException
from app.repositories.availability_repository import AvailabilityRepository

logger = logging.getLogger(__name__)


def expand_date_range(start_date: date, end_date: date) -> List[date]:
    """
    Every calendar date in [start_date, end_date], in order.

    A reversed range is rejected rather than swapped.
    """
    if end_date < start_date:
        raise InvalidDateRangeException(start_date.isoformat(), end_date.isoformat())
    return [start_date + timedelta(days=offset) for offset in range((end_date - start_date).days + 1)]


class AvailabilityMatcher:
    """Answers full-range availability questions from the availability table."""

    def __init__(self, repository: AvailabilityRepository) -> None:
        self.repository = repository

    def is_fully_available(self, sitter_id: str, start_date: date, end_date: date) -> bool:
        return sitter_id in self.fully_available_ids([sitter_id], start_date, end_date)

    def fully_available_ids(
        self, sitter_ids: Iterable[str], start_date: date, end_date: date
    ) -> Set[str]:
        """
        Subset of sitter_ids available on every day of the range.

        One row per (sitter, date) is guaranteed by the primary key, so a
        sitter is fully available exactly when its count of available days in
        the range equals the number of days in the range.
        """
        required_days = len(expand_date_range(start_date, end_date))
        ids = list(sitter_ids)
        if not ids:
            return set()

        counts = self.repository.available_day_counts(ids, start_date, end_date)
        matched = {sitter_id for sitter_id, days in counts.items() if days == required_days}
        logger.debug(
            "Availability matched %d/%d sitters for %s..%s (%d days)",
            len(matched),
            len(ids),
            start_date,
            end_date,
            required_days,
        )
        return matched
