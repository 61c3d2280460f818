# backend/app/services/search/ranker.py
"""
Deterministic ordering of search candidates.

Sort keys per policy:
    distance: distance asc -> id asc
    rating:   average desc -> distance asc -> id asc
    price:    lower rate asc (unpriced last) -> distance asc -> id asc

Every key ends on the sitter id, so two runs over the same candidates always
produce the same order.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Sequence, Tuple

from app.core.enums import SortPolicy
from app.core.exceptions import InternalInvariantException
from app.services.search.candidate_filter import Candidate

logger = logging.getLogger(__name__)

SortKey = Tuple[Any, ...]


def _distance_key(candidate: Candidate) -> SortKey:
    return (candidate.distance_m, candidate.id)


def _rating_key(candidate: Candidate) -> SortKey:
    return (-candidate.rating.average, candidate.distance_m, candidate.id)


def _price_key(candidate: Candidate) -> SortKey:
    rate = candidate.min_rate_cents
    return (rate is None, rate if rate is not None else 0, candidate.distance_m, candidate.id)


SORT_KEYS: Dict[SortPolicy, Callable[[Candidate], SortKey]] = {
    SortPolicy.DISTANCE: _distance_key,
    SortPolicy.RATING: _rating_key,
    SortPolicy.PRICE: _price_key,
}


def rank(candidates: Sequence[Candidate], sort: SortPolicy = SortPolicy.DISTANCE) -> List[Candidate]:
    """
    Order candidates under `sort`.

    Raises:
        InternalInvariantException: the same sitter appears twice, so the id
            tie-break cannot give a total order
    """
    ids = [c.id for c in candidates]
    if len(set(ids)) != len(ids):
        raise InternalInvariantException(
            "Duplicate sitter in candidate set; ranking would not be deterministic",
            code="DUPLICATE_CANDIDATE",
            details={"candidates": len(ids), "unique": len(set(ids))},
        )

    key = SORT_KEYS[SortPolicy(sort)]
    return sorted(candidates, key=key)
