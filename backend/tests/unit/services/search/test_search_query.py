"""Tests for SearchQuery invariants."""

from datetime import date

import pytest

from app.core.enums import SortPolicy
from app.core.exceptions import InvalidDateRangeException, ValidationException
from app.services.search.query import SearchQuery


def _query(**overrides) -> SearchQuery:
    params = dict(lat=40.0, lng=-74.0, start_date=date(2030, 6, 1), end_date=date(2030, 6, 3))
    params.update(overrides)
    return SearchQuery(**params)


def test_defaults():
    query = _query()
    assert query.page == 1
    assert query.page_size == 50
    assert query.sort is SortPolicy.DISTANCE
    assert query.pet_size is None
    assert query.needs == frozenset()
    assert query.origin == (40.0, -74.0)
    assert query.stay_days == 3


def test_single_day_stay_is_valid():
    query = _query(end_date=date(2030, 6, 1))
    query.validate()
    assert query.stay_days == 1


def test_reversed_range_is_rejected():
    with pytest.raises(InvalidDateRangeException) as exc_info:
        _query(start_date=date(2030, 6, 5), end_date=date(2030, 6, 1)).validate()
    assert exc_info.value.status_code == 400
    assert exc_info.value.details == {"start": "2030-06-05", "end": "2030-06-01"}


@pytest.mark.parametrize(
    "overrides, code",
    [
        ({"lat": 90.5}, "INVALID_LATITUDE"),
        ({"lng": -180.5}, "INVALID_LONGITUDE"),
        ({"page": 0}, "INVALID_PAGE"),
        ({"page_size": 0}, "INVALID_PAGE_SIZE"),
        ({"page_size": 101}, "INVALID_PAGE_SIZE"),
    ],
)
def test_out_of_range_values_are_rejected(overrides, code):
    with pytest.raises(ValidationException) as exc_info:
        _query(**overrides).validate()
    assert exc_info.value.code == code


def test_boundary_values_are_accepted():
    _query(lat=-90.0, lng=180.0, page_size=100).validate()
    _query(lat=90.0, lng=-180.0, page_size=1).validate()
