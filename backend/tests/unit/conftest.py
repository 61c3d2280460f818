from datetime import date, timedelta

import pytest

from app.services.search.rating_aggregator import RatingAggregator

STAY_START = date(2030, 6, 1)


@pytest.fixture
def stay():
    """A three-night stay: (start, end) inclusive."""
    return STAY_START, STAY_START + timedelta(days=2)


@pytest.fixture
def live_aggregator(session_factory) -> RatingAggregator:
    return RatingAggregator(session_factory, cached=False)
