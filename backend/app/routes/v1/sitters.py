# backend/app/routes/v1/sitters.py
"""
Sitter routes - API v1

Versioned sitter endpoints under /api/v1/sitters.
All business logic delegated to SitterSearchService / SitterProfileService.

Endpoints:
    GET /search       → Ranked, paginated sitter search with map geometry
    GET /{sitter_id}  → Sitter profile
"""

import asyncio
from datetime import date
import logging
import threading
from typing import List, NoReturn, Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Query, Request, status

from ...api.dependencies.services import get_sitter_profile_service, get_sitter_search_service
from ...core.config import settings
from ...core.constants import DISCONNECT_POLL_SECONDS, MAX_PAGE_SIZE, MIN_PAGE_SIZE
from ...core.enums import PetSize, SortPolicy
from ...core.exceptions import DomainException
from ...schemas.search import SitterSearchResponse
from ...schemas.sitter_profile import SitterProfileResponse
from ...services.search.query import SearchQuery
from ...services.sitter_profile_service import SitterProfileService
from ...services.sitter_search_service import SitterSearchService

logger = logging.getLogger(__name__)

# V1 router - no prefix here, will be added when mounting in main.py
router = APIRouter(tags=["sitters-v1"])

ULID_PATH_PATTERN = r"^[0-9A-HJKMNP-TV-Z]{26}$"


def handle_domain_exception(exc: DomainException) -> NoReturn:
    """Convert domain exceptions to HTTP exceptions."""
    if hasattr(exc, "to_http_exception"):
        raise exc.to_http_exception()
    raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc))


async def _cancel_on_disconnect(request: Request, cancel_event: threading.Event) -> None:
    """Set `cancel_event` once the client has gone away."""
    while not cancel_event.is_set():
        if await request.is_disconnected():
            logger.info("Client disconnected, cancelling search")
            cancel_event.set()
            return
        await asyncio.sleep(DISCONNECT_POLL_SECONDS)


# =============================================================================
# Static routes first (before dynamic routes with path parameters)
# =============================================================================


@router.get("/search", response_model=SitterSearchResponse)
async def search_sitters(
    request: Request,
    lat: float = Query(..., ge=-90, le=90, description="Latitude of the search location"),
    lng: float = Query(..., ge=-180, le=180, description="Longitude of the search location"),
    start: date = Query(..., description="First day of the stay (inclusive)"),
    end: date = Query(..., description="Last day of the stay (inclusive)"),
    page: int = Query(1, ge=1, description="Page number"),
    page_size: Optional[int] = Query(
        None,
        alias="pageSize",
        ge=MIN_PAGE_SIZE,
        le=MAX_PAGE_SIZE,
        description="Results per page",
    ),
    pet_size: Optional[PetSize] = Query(None, alias="petSize", description="Size of the pet"),
    needs: Optional[List[str]] = Query(None, description="Special needs of the pet"),
    sort: SortPolicy = Query(SortPolicy.DISTANCE, description="Sorting criteria"),
    service: SitterSearchService = Depends(get_sitter_search_service),
) -> SitterSearchResponse:
    """
    Search sitters who can reach the location and are free every day of the stay.

    Public endpoint - no authentication required.
    An empty result set is a 200 with `total = 0`.
    """
    query = SearchQuery(
        lat=lat,
        lng=lng,
        start_date=start,
        end_date=end,
        page=page,
        page_size=page_size or settings.default_page_size,
        pet_size=pet_size,
        needs=frozenset(n.strip() for n in needs or [] if n.strip()),
        sort=sort,
    )

    cancel_event = threading.Event()
    worker = asyncio.ensure_future(asyncio.to_thread(service.search, query, cancel_event))
    watcher = asyncio.create_task(_cancel_on_disconnect(request, cancel_event))
    try:
        result = await asyncio.shield(worker)
    except asyncio.CancelledError:
        # The worker still holds the request session; wait for it to stop at
        # its next stage boundary before the session is torn down.
        cancel_event.set()
        try:
            await worker
        except Exception as worker_exc:
            logger.debug(f"Search worker stopped after cancellation: {worker_exc}")
        raise
    except DomainException as exc:
        handle_domain_exception(exc)
    finally:
        watcher.cancel()

    return SitterSearchResponse.from_result(result)


# =============================================================================
# Dynamic routes with path parameters
# =============================================================================


@router.get("/{sitter_id}", response_model=SitterProfileResponse)
def get_sitter_profile(
    sitter_id: str = Path(
        ...,
        description="Sitter ULID",
        pattern=ULID_PATH_PATTERN,
        examples=["01HF4G12ABCDEF3456789XYZAB"],
    ),
    service: SitterProfileService = Depends(get_sitter_profile_service),
) -> SitterProfileResponse:
    """
    Get a sitter's full profile.

    Public endpoint - no authentication required.
    Returns 404 when the sitter does not exist.
    """
    try:
        return SitterProfileResponse.from_profile(service.get_profile(sitter_id))
    except DomainException as exc:
        handle_domain_exception(exc)
