"""Response models for the sitter profile endpoint."""

from datetime import date, datetime
from typing import List, Optional

from ..services.sitter_profile_service import SitterProfile
from ._strict_base import CamelResponseModel


class ReviewOwnerResponse(CamelResponseModel):
    id: str
    name: str


class ProfileReviewResponse(CamelResponseModel):
    id: str
    rating: int
    comment: Optional[str] = None
    date: datetime
    owner: ReviewOwnerResponse


class ServiceOfferingResponse(CamelResponseModel):
    type: str
    price_dollars: float


class LocationResponse(CamelResponseModel):
    lat: float
    lng: float
    radius_km: float


class RatingResponse(CamelResponseModel):
    average: float
    count: int


class SitterProfileResponse(CamelResponseModel):
    id: str
    name: str
    bio: Optional[str] = None
    response_time: Optional[int] = None
    repeat_client: Optional[int] = None
    image_url: str
    location: LocationResponse
    rating: RatingResponse
    services: List[ServiceOfferingResponse]
    reviews: List[ProfileReviewResponse]
    availability: List[date]

    @classmethod
    def from_profile(cls, profile: SitterProfile) -> "SitterProfileResponse":
        return cls(
            id=profile.id,
            name=profile.name,
            bio=profile.bio,
            response_time=profile.response_time,
            repeat_client=profile.repeat_client,
            image_url=profile.image_url,
            location=LocationResponse(
                lat=profile.location.lat,
                lng=profile.location.lng,
                radius_km=profile.location.radius_km,
            ),
            rating=RatingResponse(average=profile.rating.average, count=profile.rating.count),
            services=[
                ServiceOfferingResponse(type=s.type, price_dollars=s.price_dollars)
                for s in profile.services
            ],
            reviews=[
                ProfileReviewResponse(
                    id=r.id,
                    rating=r.rating,
                    comment=r.comment,
                    date=r.date,
                    owner=ReviewOwnerResponse(id=r.owner.id, name=r.owner.name),
                )
                for r in profile.reviews
            ],
            availability=profile.availability,
        )
