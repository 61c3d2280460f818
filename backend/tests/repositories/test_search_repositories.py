"""Tests for the sitter, availability and review repositories."""

from datetime import date, datetime, timedelta, timezone
from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from app.core.constants import MAX_RATING, MIN_RATING
from app.core.exceptions import RepositoryException
from app.models import Review
from app.repositories import AvailabilityRepository, ReviewRepository, SitterRepository


class TestSitterRepository:
    def test_latitude_band_uses_each_sitters_radius(self, unit_db, seed, origin):
        inside = seed.sitter(km_away=8, radius_km=10)
        outside = seed.sitter(km_away=15, radius_km=10)
        wide = seed.sitter(km_away=15, radius_km=20)

        found = {s.id for s in SitterRepository(unit_db).find_in_latitude_band(origin[0])}

        assert inside.id in found
        assert wide.id in found
        assert outside.id not in found

    def test_latitude_band_ignores_longitude(self, unit_db, seed, origin):
        """Longitude is left to the exact distance check."""
        east = seed.sitter(lat=origin[0], lng=origin[1] + 5, radius_km=1)

        found = {s.id for s in SitterRepository(unit_db).find_in_latitude_band(origin[0])}

        assert east.id in found

    def test_latitude_band_loads_the_owner(self, unit_db, seed, origin):
        seed.sitter(email="owner@example.com")

        (sitter,) = SitterRepository(unit_db).find_in_latitude_band(origin[0])

        assert sitter.user.email == "owner@example.com"

    def test_get_by_id(self, unit_db, seed):
        sitter = seed.sitter()
        repository = SitterRepository(unit_db)

        assert repository.get_by_id(sitter.id).id == sitter.id
        assert repository.get_by_id("01ABCDEFGHJKMNPQRSTVWXYZ99") is None
        assert repository.get_by_id(sitter.id, load_relationships=False) is not None

    def test_service_kinds(self, unit_db, seed):
        walker = seed.sitter(services=[("walking", 1500), ("drop_in", 1200)])
        none = seed.sitter()

        kinds = SitterRepository(unit_db).service_kinds_for([walker.id, none.id])

        assert kinds == {walker.id: {"walking", "drop_in"}}

    def test_service_kinds_empty_input(self, unit_db):
        assert SitterRepository(unit_db).service_kinds_for([]) == {}

    def test_database_errors_are_wrapped(self):
        db = MagicMock()
        db.query.return_value.options.return_value.filter.return_value.all.side_effect = OperationalError(
            "SELECT", {}, Exception("gone")
        )

        with pytest.raises(RepositoryException):
            SitterRepository(db).find_in_latitude_band(40.0)


class TestAvailabilityRepository:
    def test_counts_only_available_days_in_range(self, unit_db, seed):
        start = date(2030, 6, 1)
        sitter = seed.sitter()
        seed.availability(sitter, start - timedelta(days=2), 6)
        seed.on_dates(sitter, [start + timedelta(days=4)], available=False)

        counts = AvailabilityRepository(unit_db).available_day_counts(
            [sitter.id], start, start + timedelta(days=4)
        )

        assert counts == {sitter.id: 4}

    def test_sitters_without_rows_are_absent(self, unit_db, seed):
        sitter = seed.sitter()
        assert AvailabilityRepository(unit_db).available_day_counts([sitter.id], date(2030, 6, 1), date(2030, 6, 3)) == {}

    def test_available_dates_are_sorted(self, unit_db, seed):
        sitter = seed.sitter()
        days = [date(2030, 6, 5), date(2030, 6, 1), date(2030, 6, 3)]
        seed.on_dates(sitter, days)

        result = AvailabilityRepository(unit_db).available_dates(sitter.id, date(2030, 6, 1), date(2030, 6, 30))

        assert result == sorted(days)


class TestReviewRepository:
    def test_aggregates(self, unit_db, seed):
        a = seed.sitter()
        b = seed.sitter()
        seed.review(a, 5)
        seed.review(a, 2)
        seed.review(b, 4)
        repository = ReviewRepository(unit_db)

        everything = repository.aggregate_all()
        just_a = repository.aggregate_for([a.id])

        assert everything[a.id] == {"review_count": 2, "raw_average": 3.5}
        assert everything[b.id] == {"review_count": 1, "raw_average": 4.0}
        assert set(just_a) == {a.id}
        assert repository.aggregate_for_sitter(seed.sitter().id) is None

    def test_recent_reviews_newest_first(self, unit_db, seed):
        sitter = seed.sitter()
        at = datetime(2030, 1, 1, tzinfo=timezone.utc)
        older = seed.review(sitter, 3, created_at=at)
        newer = seed.review(sitter, 4, created_at=at + timedelta(hours=1))
        newest = seed.review(sitter, 5, created_at=at + timedelta(days=1))

        recent = ReviewRepository(unit_db).recent_for_sitter(sitter.id, limit=2)

        assert [r.id for r in recent] == [newest.id, newer.id]
        assert older.id not in {r.id for r in recent}

    def test_same_timestamp_breaks_ties_by_id(self, unit_db, seed):
        sitter = seed.sitter()
        at = datetime(2030, 1, 1, tzinfo=timezone.utc)
        reviews = [seed.review(sitter, 4, created_at=at) for _ in range(3)]

        recent = ReviewRepository(unit_db).recent_for_sitter(sitter.id, limit=5)

        assert [r.id for r in recent] == sorted((r.id for r in reviews), reverse=True)


class TestReviewRatingBounds:
    def test_check_constraint_follows_rating_bounds(self):
        (check,) = [c for c in Review.__table__.constraints if c.name == "ck_reviews_rating_range"]

        assert str(check.sqltext) == f"rating >= {MIN_RATING} AND rating <= {MAX_RATING}"
