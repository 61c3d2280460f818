"""Prometheus counters, gauges and histograms for sitter search."""

from __future__ import annotations

from prometheus_client import Counter, Gauge, Histogram

from ..monitoring.prometheus_metrics import REGISTRY

# Search invocations by terminal outcome: ok | empty | failed | cancelled
SEARCH_REQUESTS_TOTAL = Counter(
    "petbnb_search_requests_total",
    "Sitter searches by outcome",
    ["outcome"],
    registry=REGISTRY,
)

SEARCH_STAGE_DURATION_SECONDS = Histogram(
    "petbnb_search_stage_duration_seconds",
    "Time spent in each search pipeline stage",
    ["stage"],
    registry=REGISTRY,
    buckets=(0.0005, 0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5),
)

SEARCH_CANDIDATES = Histogram(
    "petbnb_search_candidates",
    "Number of candidates that passed filtering per search",
    registry=REGISTRY,
    buckets=(0, 1, 5, 10, 25, 50, 100, 250, 500, 1000, 5000),
)

# Rating snapshot refreshes: ok | error
RATING_SNAPSHOT_REFRESH_TOTAL = Counter(
    "petbnb_rating_snapshot_refresh_total",
    "Rating snapshot refresh attempts by status",
    ["status"],
    registry=REGISTRY,
)

RATING_SNAPSHOT_TAKEN_AT = Gauge(
    "petbnb_rating_snapshot_taken_at_seconds",
    "Unix time at which the current rating snapshot was computed",
    registry=REGISTRY,
)
