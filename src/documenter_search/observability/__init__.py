"""Observability helpers: structured logging, tracing and metrics."""

from documenter_search.observability.context import get_trace_context, set_trace_context, trace_context
from documenter_search.observability.logging import JsonFormatter, configure_logging
from documenter_search.observability.metrics import (
    INDEX_BUILDS,
    INDEX_RECORD_COUNT,
    SEARCH_LATENCY,
    SEARCH_QUERIES,
    get_metrics,
    get_metrics_content_type,
    track_latency,
)
from documenter_search.observability.tracing import create_span, get_tracer, init_tracing


__all__ = [
    "INDEX_BUILDS",
    "INDEX_RECORD_COUNT",
    "SEARCH_LATENCY",
    "SEARCH_QUERIES",
    "JsonFormatter",
    "configure_logging",
    "create_span",
    "get_metrics",
    "get_metrics_content_type",
    "get_trace_context",
    "get_tracer",
    "init_tracing",
    "set_trace_context",
    "trace_context",
    "track_latency",
]
