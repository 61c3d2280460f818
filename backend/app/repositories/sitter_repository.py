# backend/app/repositories/sitter_repository.py
"""
Sitter repository.

Follows repository pattern: no business logic, DB-only operations.
"""

from collections import defaultdict
import logging
from typing import Dict, Iterable, List, Set

from sqlalchemy import func
from sqlalchemy.orm import Query, Session, joinedload

from ..core.constants import KM_PER_DEGREE_LAT
from ..models.sitter import Sitter, SitterService
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class SitterRepository(BaseRepository[Sitter]):
    """Data access for `Sitter` and its service offerings."""

    def __init__(self, db: Session):
        super().__init__(db, Sitter)

    def _apply_eager_loading(self, query: Query) -> Query:
        return query.options(joinedload(Sitter.user))

    def find_in_latitude_band(self, lat: float) -> List[Sitter]:
        """
        First-pass geo envelope for a search origin.

        Keeps sitters whose latitude gap to the origin does not exceed their
        own service radius. The gap is a lower bound on great-circle distance,
        so every sitter that can reach the origin is returned; the caller
        decides inclusion on the exact distance.
        """
        query = (
            self.db.query(Sitter)
            .options(joinedload(Sitter.user))
            .filter(func.abs(Sitter.lat - lat) * KM_PER_DEGREE_LAT <= Sitter.radius_km)
        )
        return self._execute_query(query)

    def service_kinds_for(self, sitter_ids: Iterable[str]) -> Dict[str, Set[str]]:
        """Map sitter id -> set of offered service kinds (absent ids offer none)."""
        ids = list(sitter_ids)
        if not ids:
            return {}
        rows = self._execute_query(
            self.db.query(SitterService.sitter_id, SitterService.service).filter(
                SitterService.sitter_id.in_(ids)
            )
        )
        kinds: Dict[str, Set[str]] = defaultdict(set)
        for sitter_id, service in rows:
            kinds[sitter_id].add(service)
        return dict(kinds)

    def services_for(self, sitter_id: str) -> List[SitterService]:
        query = (
            self.db.query(SitterService)
            .filter(SitterService.sitter_id == sitter_id)
            .order_by(SitterService.service.asc())
        )
        return self._execute_query(query)
