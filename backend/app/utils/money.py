"""Unit conversions applied at the response boundary."""

from __future__ import annotations

from typing import Optional

from ..core.constants import METERS_PER_KM, METERS_PER_MILE, MINOR_UNITS_PER_MAJOR
from ..core.enums import DistanceUnit


def cents_to_dollars(cents: Optional[int]) -> Optional[float]:
    """Convert integer cents to dollars; a missing or zero rate means "not offered"."""
    if not cents:
        return None
    return cents / MINOR_UNITS_PER_MAJOR


def format_distance(meters: float, unit: DistanceUnit | str = DistanceUnit.MILES) -> float:
    """Distance in the caller's unit, one decimal place."""
    divisor = METERS_PER_KM if DistanceUnit(unit) == DistanceUnit.KILOMETERS else METERS_PER_MILE
    return round(meters / divisor, 1)
