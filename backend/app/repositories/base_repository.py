# backend/app/repositories/base_repository.py
"""
Base repository for the PetBnB search backend.

Repositories here are read-only. Every query runs through `_execute_query`
or `_first`, which turn driver failures into RepositoryException so
services deal with a single failure type.
"""

import logging
from typing import Any, Generic, List, Optional, Type, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Query, Session

from ..core.exceptions import RepositoryException

T = TypeVar("T")

logger = logging.getLogger(__name__)


class BaseRepository(Generic[T]):
    """
    Shared read plumbing for one mapped model.

    Attributes:
        db: Request-scoped session owned by the caller
        model: Mapped class the repository reads
    """

    def __init__(self, db: Session, model: Type[T]):
        self.db = db
        self.model = model
        self.logger = logging.getLogger(f"{__name__}.{model.__name__}")

    def get_by_id(self, id: str, load_relationships: bool = True) -> Optional[T]:
        """Row with primary key `id`, or None."""
        query = self.db.query(self.model).filter(self.model.id == id)
        if load_relationships:
            query = self._apply_eager_loading(query)
        return self._first(query)

    def _apply_eager_loading(self, query: Query) -> Query:
        """Hook for subclasses that always want related rows loaded."""
        return query

    def _execute_query(self, query: Query) -> List[Any]:
        try:
            return query.all()
        except SQLAlchemyError as e:
            self.logger.error(f"{self.model.__name__} query failed: {e}")
            raise RepositoryException(f"Failed to read {self.model.__name__}: {e}") from e

    def _first(self, query: Query) -> Optional[Any]:
        try:
            return query.first()
        except SQLAlchemyError as e:
            self.logger.error(f"{self.model.__name__} lookup failed: {e}")
            raise RepositoryException(f"Failed to read {self.model.__name__}: {e}") from e
