# backend/app/services/search/geometry.py
"""
Map payloads for a page of search results.

Both the bounding box and the GeoJSON FeatureCollection describe only the
candidates on the page being returned.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple

from app.services.search.candidate_filter import Candidate
from app.utils.money import cents_to_dollars

BBox = Tuple[float, float, float, float]


@dataclass(frozen=True)
class Projection:
    bbox: Optional[BBox]
    feature_collection: Dict[str, Any]


def bounding_box(points: Sequence[Tuple[float, float]]) -> Optional[BBox]:
    """[minLng, minLat, maxLng, maxLat] over (lng, lat) points; None when empty."""
    if not points:
        return None
    lngs = [lng for lng, _ in points]
    lats = [lat for _, lat in points]
    return (min(lngs), min(lats), max(lngs), max(lats))


def to_feature(candidate: Candidate) -> Dict[str, Any]:
    return {
        "type": "Feature",
        "geometry": {"type": "Point", "coordinates": [candidate.lng, candidate.lat]},
        "properties": {
            "id": candidate.id,
            "name": candidate.name,
            "rateBoarding": cents_to_dollars(candidate.rate_boarding_cents),
            "rateDaycare": cents_to_dollars(candidate.rate_daycare_cents),
            "avgRating": candidate.rating.average,
            "reviewCount": candidate.rating.count,
            "imageUrl": candidate.image_url,
        },
    }


def project(candidates: Sequence[Candidate]) -> Projection:
    features: List[Dict[str, Any]] = [to_feature(c) for c in candidates]
    return Projection(
        bbox=bounding_box([(c.lng, c.lat) for c in candidates]),
        feature_collection={"type": "FeatureCollection", "features": features},
    )
