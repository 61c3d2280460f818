"""Tests for rating summaries and the snapshot refresh contract."""

import threading
from unittest.mock import MagicMock, patch

import pytest

from app.core.exceptions import RepositoryException
from app.monitoring.prometheus_metrics import REGISTRY
from app.services.search.rating_aggregator import (
    NO_REVIEWS,
    RatingAggregator,
    RatingSnapshot,
    RatingSummary,
    summarize,
)


def _refresh_errors() -> float:
    return REGISTRY.get_sample_value("petbnb_rating_snapshot_refresh_total", {"status": "error"}) or 0.0


class TestSummarize:
    def test_mean_and_count(self):
        summaries = summarize({"a": {"review_count": 3, "raw_average": 4.0}})
        assert summaries == {"a": RatingSummary(average=4.0, count=3)}

    def test_zero_counts_are_dropped(self):
        assert summarize({"a": {"review_count": 0, "raw_average": 0.0}}) == {}


class TestLiveAggregation:
    def test_no_reviews_is_zero_not_none(self, live_aggregator, seed):
        sitter = seed.sitter()

        summary = live_aggregator.summary_for(sitter.id)

        assert summary == RatingSummary(average=0.0, count=0)
        assert summary.average == 0.0
        assert summary.count == 0

    def test_arithmetic_mean(self, live_aggregator, seed):
        sitter = seed.sitter()
        for rating in (5, 4, 4, 2):
            seed.review(sitter, rating)

        summary = live_aggregator.summary_for(sitter.id)

        assert summary.count == 4
        assert summary.average == pytest.approx(3.75)

    def test_batch_covers_every_requested_id(self, live_aggregator, seed):
        reviewed = seed.sitter()
        unreviewed = seed.sitter()
        seed.review(reviewed, 5)

        summaries = live_aggregator.summaries_for([reviewed.id, unreviewed.id])

        assert summaries[reviewed.id] == RatingSummary(average=5.0, count=1)
        assert summaries[unreviewed.id] is NO_REVIEWS

    def test_uses_the_callers_session_when_given(self, seed, unit_db):
        factory = MagicMock()
        aggregator = RatingAggregator(factory, cached=False)
        sitter = seed.sitter()
        seed.review(sitter, 3)

        assert aggregator.summary_for(sitter.id, db=unit_db).count == 1
        factory.assert_not_called()

    def test_new_reviews_are_visible_immediately(self, live_aggregator, seed):
        sitter = seed.sitter()
        seed.review(sitter, 5)
        assert live_aggregator.summary_for(sitter.id).count == 1

        seed.review(sitter, 1)

        assert live_aggregator.summary_for(sitter.id) == RatingSummary(average=3.0, count=2)


class TestSnapshot:
    @pytest.fixture
    def aggregator(self, session_factory):
        return RatingAggregator(session_factory, cached=True, refresh_interval_seconds=60)

    def test_refresh_swaps_in_a_snapshot(self, aggregator, seed):
        sitter = seed.sitter()
        seed.review(sitter, 4)
        assert aggregator.snapshot is None

        snapshot = aggregator.refresh()

        assert aggregator.snapshot is snapshot
        assert snapshot.taken_at.tzinfo is not None
        assert snapshot.get(sitter.id) == RatingSummary(average=4.0, count=1)

    def test_cached_reads_lag_until_next_refresh(self, aggregator, seed):
        sitter = seed.sitter()
        seed.review(sitter, 5)
        aggregator.refresh()

        seed.review(sitter, 1)
        assert aggregator.summary_for(sitter.id) == RatingSummary(average=5.0, count=1)

        aggregator.refresh()
        assert aggregator.summary_for(sitter.id) == RatingSummary(average=3.0, count=2)

    def test_sitter_missing_from_snapshot_reads_as_no_reviews(self, aggregator, seed):
        aggregator.refresh()
        sitter = seed.sitter()
        seed.review(sitter, 5)

        assert aggregator.summary_for(sitter.id) is NO_REVIEWS

    def test_cold_cache_answers_with_a_live_read(self, aggregator, seed):
        sitter = seed.sitter()
        seed.review(sitter, 2)

        assert aggregator.snapshot is None
        assert aggregator.summary_for(sitter.id) == RatingSummary(average=2.0, count=1)

    def test_snapshot_summaries_are_read_only(self, aggregator, seed):
        seed.review(seed.sitter(), 5)
        snapshot = aggregator.refresh()

        with pytest.raises(TypeError):
            snapshot.summaries["new"] = RatingSummary(1.0, 1)

    def test_failed_refresh_keeps_previous_snapshot(self, aggregator, seed):
        seed.review(seed.sitter(), 5)
        previous = aggregator.refresh()

        with patch(
            "app.services.search.rating_aggregator.ReviewRepository.aggregate_all",
            side_effect=RepositoryException("boom"),
        ):
            with pytest.raises(RepositoryException):
                aggregator.refresh()

        assert aggregator.snapshot is previous


class TestRefreshLoop:
    def test_loop_refreshes_until_shutdown(self, session_factory):
        aggregator = RatingAggregator(session_factory, cached=True, refresh_interval_seconds=60)
        shutdown = threading.Event()

        def refresh_then_stop():
            shutdown.set()
            return RatingSnapshot(taken_at=MagicMock())

        with patch.object(aggregator, "refresh", side_effect=refresh_then_stop) as refresh:
            aggregator.run_refresh_loop(shutdown)

        refresh.assert_called_once()

    def test_loop_survives_refresh_failures(self, session_factory):
        aggregator = RatingAggregator(session_factory, cached=True, refresh_interval_seconds=0.01)
        shutdown = threading.Event()
        calls = []

        def failing_refresh():
            calls.append(1)
            if len(calls) >= 3:
                shutdown.set()
            raise RepositoryException("database down")

        with patch.object(aggregator, "refresh", side_effect=failing_refresh):
            aggregator.run_refresh_loop(shutdown)

        assert len(calls) == 3

    def test_loop_keeps_running_after_unexpected_errors(self, session_factory):
        aggregator = RatingAggregator(session_factory, cached=True, refresh_interval_seconds=0.01)
        shutdown = threading.Event()
        calls = []

        def flaky_refresh():
            calls.append(1)
            if len(calls) == 1:
                raise RuntimeError("transient bug")
            shutdown.set()
            return RatingSnapshot(taken_at=MagicMock())

        before = _refresh_errors()
        with patch.object(aggregator, "refresh", side_effect=flaky_refresh):
            aggregator.run_refresh_loop(shutdown)

        assert len(calls) == 2
        assert _refresh_errors() == before + 1

    def test_live_mode_has_no_loop(self, session_factory):
        aggregator = RatingAggregator(session_factory, cached=False)
        with patch.object(aggregator, "refresh") as refresh:
            aggregator.run_refresh_loop(threading.Event())
        refresh.assert_not_called()
