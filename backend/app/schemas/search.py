"""
Response models for sitter search.

Field names are snake_case in Python and camelCase on the wire.
"""

from typing import Any, Dict, List, Optional, Tuple

from pydantic import Field

from ..core.enums import DistanceUnit
from ..services.sitter_search_service import SearchResult, SitterSummary
from ._strict_base import CamelResponseModel


class SitterSummaryResponse(CamelResponseModel):
    id: str = Field(description="Sitter ULID")
    name: str = Field(description="Display name")
    bio: Optional[str] = None
    distance: float = Field(description="Distance from the search origin, one decimal")
    distance_unit: DistanceUnit = Field(description="Unit of `distance` (mi or km)")
    rate_boarding: Optional[float] = Field(None, description="Nightly boarding rate in dollars")
    rate_daycare: Optional[float] = Field(None, description="Daily daycare rate in dollars")
    response_time: Optional[int] = Field(None, description="Typical response time in minutes")
    repeat_client: Optional[int] = Field(None, description="Repeat client percentage")
    avg_rating: float = Field(description="Mean review rating, 0 without reviews")
    review_count: int
    image_url: str

    @classmethod
    def from_summary(cls, summary: SitterSummary) -> "SitterSummaryResponse":
        return cls(
            id=summary.id,
            name=summary.name,
            bio=summary.bio,
            distance=summary.distance,
            distance_unit=summary.distance_unit,
            rate_boarding=summary.rate_boarding,
            rate_daycare=summary.rate_daycare,
            response_time=summary.response_time,
            repeat_client=summary.repeat_client,
            avg_rating=summary.avg_rating,
            review_count=summary.review_count,
            image_url=summary.image_url,
        )


class PagingResponse(CamelResponseModel):
    page: int
    page_size: int
    total_pages: int


class SitterSearchResponse(CamelResponseModel):
    results: List[SitterSummaryResponse]
    geojson: Dict[str, Any] = Field(description="GeoJSON FeatureCollection of the page")
    total: int = Field(description="Number of matching sitters across all pages")
    paging: PagingResponse
    bbox: Optional[Tuple[float, float, float, float]] = Field(
        None, description="[minLng, minLat, maxLng, maxLat] of the page, null when empty"
    )

    @classmethod
    def from_result(cls, result: SearchResult) -> "SitterSearchResponse":
        return cls(
            results=[SitterSummaryResponse.from_summary(s) for s in result.results],
            geojson=result.geojson,
            total=result.total,
            paging=PagingResponse(
                page=result.page,
                page_size=result.page_size,
                total_pages=result.total_pages,
            ),
            bbox=result.bbox,
        )
