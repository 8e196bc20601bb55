"""Search index facade with atomic rebuilds.

Hides the analyzer, builder, engine and snippet layers behind ``search()``.
The current ``InvertedIndex`` is immutable; a rebuild produces a new one and
replaces the reference in a single assignment, so readers never lock and a
failed rebuild leaves the previous index serving queries.
"""

from __future__ import annotations

from collections.abc import Collection, Iterable, Mapping
import logging
import threading
import time
from typing import Any

from documenter_search.config import Settings, get_settings
from documenter_search.domain.record import Category, Record
from documenter_search.domain.search import SearchResponse, SearchStats
from documenter_search.search.analyzers import configured_analyzer
from documenter_search.search.engine import QueryEngine, tokenize_query
from documenter_search.search.indexer import InvertedIndex, build_index


logger = logging.getLogger(__name__)

RawRecord = Record | Mapping[str, Any]


class SearchIndex:
    """Process-lifetime search over one documentation build."""

    def __init__(self, records: Iterable[RawRecord] = (), *, settings: Settings | None = None) -> None:
        self.settings = settings or get_settings()
        self._engine = QueryEngine(self.settings)
        self._write_lock = threading.Lock()
        self._index = self._build(records)

    def _build(self, records: Iterable[RawRecord]) -> InvertedIndex:
        return build_index(records, analyzer=configured_analyzer(self.settings.stemming))

    @property
    def index(self) -> InvertedIndex:
        """The index currently serving queries."""
        return self._index

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._index.warnings

    def __len__(self) -> int:
        return len(self._index)

    def rebuild(self, records: Iterable[RawRecord]) -> InvertedIndex:
        """Build a fresh index and swap it in.

        Raises:
            DuplicateLocationError: The new records repeat a location; the
                previous index stays active.
        """
        with self._write_lock:
            fresh = self._build(records)
            previous = self._index
            self._index = fresh
        logger.info("Swapped search index: %d -> %d records", len(previous), len(fresh))
        return fresh

    def search(
        self,
        query: str,
        limit: int | None = None,
        *,
        categories: Collection[Category | str] | None = None,
    ) -> SearchResponse:
        """Search the current index.

        Args:
            query: Free-text query.
            limit: Maximum results; defaults to ``settings.default_limit``.
            categories: Restrict results to these record categories.

        Raises:
            InvalidLimitError: ``limit`` is not positive.
        """
        index = self._index
        effective_limit = self.settings.default_limit if limit is None else limit
        started = time.perf_counter()
        results = self._engine.search(index, query, effective_limit, categories=categories)
        stats = SearchStats(
            query_terms=list(tokenize_query(index, query)),
            result_count=len(results),
            search_time=time.perf_counter() - started,
        )
        return SearchResponse(query=query, results=results, stats=stats)


_index_holder: dict[str, SearchIndex | None] = {"index": None}


def init_search_index(records: Iterable[RawRecord], *, settings: Settings | None = None) -> SearchIndex:
    """Build the process-wide search index, or rebuild it if one exists."""
    current = _index_holder["index"]
    if current is not None and settings is None:
        current.rebuild(records)
        return current
    created = SearchIndex(records, settings=settings)
    _index_holder["index"] = created
    return created


def get_search_index() -> SearchIndex:
    """Return the process-wide search index.

    Raises:
        RuntimeError: ``init_search_index`` has not been called.
    """
    current = _index_holder["index"]
    if current is None:
        raise RuntimeError("Search index is not initialized; call init_search_index() first")
    return current


def reset_search_index() -> None:
    """Drop the process-wide index (used by tests and hot reload tooling)."""
    _index_holder["index"] = None
