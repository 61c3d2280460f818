import pytest
from fastapi.testclient import TestClient

from app.api.dependencies.database import get_db
from app.api.dependencies.services import get_rating_aggregator
from app.main import app
from app.services.search.rating_aggregator import RatingAggregator


@pytest.fixture
def client(unit_db, session_factory):
    """TestClient wired to the test transaction; lifespan tasks are not started."""

    def _get_db():
        yield unit_db

    aggregator = RatingAggregator(session_factory, cached=False)
    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_rating_aggregator] = lambda: aggregator
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
