"""Application-wide constants for the PetBnB search backend."""

from __future__ import annotations

from .enums import ServiceKind

# Geo
EARTH_RADIUS_METERS = 6_371_008.8  # IUGG mean radius
KM_PER_DEGREE_LAT = 111.19  # just under 2 * pi * R / 360 so latitude envelopes never over-trim
METERS_PER_MILE = 1609.34
METERS_PER_KM = 1000.0

# Currency: rates and prices are stored as integer cents
MINOR_UNITS_PER_MAJOR = 100

# Search paging
MIN_PAGE_SIZE = 1
MAX_PAGE_SIZE = 100

# How often an in-flight search checks whether its client is still connected
DISCONNECT_POLL_SECONDS = 0.1

# Ratings
MIN_RATING = 1
MAX_RATING = 5

# Pet-size screening: sitters offering one of these service kinds are
# considered compatible with any pet size.
PET_SIZE_COMPATIBLE_SERVICES = (ServiceKind.BOARDING.value, ServiceKind.DAYCARE.value)

# Error messages
ERROR_SITTER_NOT_FOUND = "Sitter not found"
ERROR_INVALID_DATE_RANGE = "End date must be on or after start date"
ERROR_SEARCH_FAILED = "Error searching for sitters"
ERROR_PROFILE_FAILED = "Error fetching sitter profile"

# API Documentation
BRAND_NAME = "PetBnB"
API_TITLE = f"{BRAND_NAME} API"
API_DESCRIPTION = f"Backend API for {BRAND_NAME} - find pet sitters near you for your dates"
API_VERSION = "1.0.0"
