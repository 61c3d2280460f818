# backend/app/services/search/query.py
"""
Typed search query handed to the sitter search pipeline.

Raw query strings are parsed into this value object by the request schema;
the pipeline re-checks the invariants it relies on before doing any work.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import FrozenSet, Optional, Tuple

from app.core.constants import MAX_PAGE_SIZE, MIN_PAGE_SIZE
from app.core.enums import PetSize, SortPolicy
from app.core.exceptions import InvalidDateRangeException, ValidationException


@dataclass(frozen=True)
class SearchQuery:
    """Origin, inclusive stay range, paging and optional filters."""

    lat: float
    lng: float
    start_date: date
    end_date: date
    page: int = 1
    page_size: int = 50
    pet_size: Optional[PetSize] = None
    needs: FrozenSet[str] = field(default_factory=frozenset)
    sort: SortPolicy = SortPolicy.DISTANCE

    @property
    def origin(self) -> Tuple[float, float]:
        return (self.lat, self.lng)

    @property
    def stay_days(self) -> int:
        return (self.end_date - self.start_date).days + 1

    def validate(self) -> None:
        """Raise ValidationException if the query cannot be executed as given."""
        if not -90.0 <= self.lat <= 90.0:
            raise ValidationException(
                "Latitude must be between -90 and 90",
                code="INVALID_LATITUDE",
                details={"lat": self.lat},
            )
        if not -180.0 <= self.lng <= 180.0:
            raise ValidationException(
                "Longitude must be between -180 and 180",
                code="INVALID_LONGITUDE",
                details={"lng": self.lng},
            )
        if self.end_date < self.start_date:
            raise InvalidDateRangeException(self.start_date.isoformat(), self.end_date.isoformat())
        if self.page < 1:
            raise ValidationException(
                "Page must be at least 1", code="INVALID_PAGE", details={"page": self.page}
            )
        if not MIN_PAGE_SIZE <= self.page_size <= MAX_PAGE_SIZE:
            raise ValidationException(
                f"Page size must be between {MIN_PAGE_SIZE} and {MAX_PAGE_SIZE}",
                code="INVALID_PAGE_SIZE",
                details={"page_size": self.page_size},
            )
