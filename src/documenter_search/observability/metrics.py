"""Prometheus metrics for index builds and query latency."""

from __future__ import annotations

from collections.abc import Generator
from contextlib import contextmanager
import time

from prometheus_client import CONTENT_TYPE_LATEST, Counter, Gauge, Histogram, generate_latest


SEARCH_LATENCY = Histogram(
    "search_latency_seconds",
    "Search query latency",
    buckets=(0.0005, 0.001, 0.0025, 0.005, 0.01, 0.025, 0.05, 0.1),
)

SEARCH_QUERIES = Counter(
    "search_queries_total",
    "Total search queries",
    ["outcome"],
)

INDEX_BUILDS = Counter(
    "index_builds_total",
    "Total search index builds",
    ["outcome"],
)

INDEX_RECORD_COUNT = Gauge(
    "index_record_count",
    "Records in the most recently built index",
)


@contextmanager
def track_latency(histogram: Histogram) -> Generator[None, None, None]:
    """Context manager to track operation latency."""
    start = time.perf_counter()
    try:
        yield
    finally:
        histogram.observe(time.perf_counter() - start)


def get_metrics() -> bytes:
    """Generate Prometheus metrics output."""
    return generate_latest()


def get_metrics_content_type() -> str:
    """Get content type for a metrics endpoint."""
    return CONTENT_TYPE_LATEST
