# backend/app/services/search/paginator.py
"""Offset pagination over an already ranked sequence."""
from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Generic, List, Sequence, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Page(Generic[T]):
    items: List[T]
    page: int
    page_size: int
    total: int
    total_pages: int


def paginate(ordered: Sequence[T], page: int, page_size: int) -> Page[T]:
    """
    Slice out one page.

    No candidates means zero pages. A page past the last one is empty, not an
    error. `page` and `page_size` are expected to be validated already.
    """
    total = len(ordered)
    total_pages = math.ceil(total / page_size) if total else 0
    offset = (page - 1) * page_size
    return Page(
        items=list(ordered[offset : offset + page_size]),
        page=page,
        page_size=page_size,
        total=total,
        total_pages=total_pages,
    )
