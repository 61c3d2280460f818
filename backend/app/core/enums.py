# backend/app/core/enums.py
"""
Core enums for the PetBnB search backend.

String-valued so they round-trip through query strings, JSON and the
database without translation tables.
"""

from enum import Enum


class PetSize(str, Enum):
    """Pet size buckets accepted by the search filter."""

    XS = "XS"
    S = "S"
    M = "M"
    L = "L"
    XL = "XL"


class SortPolicy(str, Enum):
    """Result ordering policies for sitter search."""

    DISTANCE = "distance"
    RATING = "rating"
    PRICE = "price"


class ServiceKind(str, Enum):
    """Kinds of service a sitter can offer."""

    BOARDING = "boarding"
    DAYCARE = "daycare"
    WALKING = "walking"
    DROP_IN = "drop_in"
    HOUSE_SITTING = "house_sitting"


class DistanceUnit(str, Enum):
    MILES = "mi"
    KILOMETERS = "km"


class SearchStage(str, Enum):
    """
    Pipeline states of a single search invocation.

    received -> filtering -> ranking -> paginating -> projecting -> responded,
    or any stage -> failed / cancelled.
    """

    RECEIVED = "received"
    FILTERING = "filtering"
    RANKING = "ranking"
    PAGINATING = "paginating"
    PROJECTING = "projecting"
    RESPONDED = "responded"
    FAILED = "failed"
    CANCELLED = "cancelled"
