"""Inverted index construction.

Building is one-shot and non-incremental: any change to the record set means a
full rebuild. The index is only handed out once every record is processed, so
queries never observe a partial build.
"""

from __future__ import annotations

from bisect import bisect_left
from collections import defaultdict
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
import logging
from types import MappingProxyType
from typing import Any

from documenter_search.domain.record import Record
from documenter_search.errors import DuplicateLocationError
from documenter_search.observability.metrics import INDEX_BUILDS, INDEX_RECORD_COUNT
from documenter_search.observability.tracing import create_span
from documenter_search.search.analyzers import Analyzer, configured_analyzer
from documenter_search.search.models import IndexField, Posting
from documenter_search.search.store import RecordStore


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InvertedIndex:
    """Read-only term -> postings mapping over a record store."""

    store: RecordStore
    postings: Mapping[str, tuple[Posting, ...]]
    vocabulary: tuple[str, ...]
    analyzer: Analyzer = field(compare=False)

    @property
    def records(self) -> tuple[Record, ...]:
        return self.store.records

    @property
    def warnings(self) -> tuple[str, ...]:
        return self.store.warnings

    def __len__(self) -> int:
        return len(self.store)

    def lookup(self, term: str) -> tuple[Posting, ...]:
        """Return postings for an exact term."""
        return self.postings.get(term, ())

    def prefix_terms(self, prefix: str) -> Iterator[str]:
        """Yield indexed terms that start with ``prefix`` but differ from it."""
        start = bisect_left(self.vocabulary, prefix)
        for term in self.vocabulary[start:]:
            if not term.startswith(prefix):
                break
            if term != prefix:
                yield term

    def record(self, record_id: int) -> Record:
        return self.store[record_id]


def _index_field(
    record_id: int,
    index_field: IndexField,
    value: str,
    analyzer: Analyzer,
    sink: dict[str, list[Posting]],
) -> None:
    offsets: dict[str, list[int]] = defaultdict(list)
    for token in analyzer(value):
        offsets[token.text].append(token.start_char)
    for term, positions in offsets.items():
        sink[term].append(Posting(record_id=record_id, field=index_field, positions=tuple(positions)))


def build_index(
    records: Iterable[Record | Mapping[str, Any]],
    *,
    analyzer: Analyzer | None = None,
) -> InvertedIndex:
    """Build an inverted index over ``records``.

    Malformed records are skipped and reported through ``index.warnings``.
    Without an explicit ``analyzer`` the one selected by ``SEARCH_STEMMING`` is used.

    Raises:
        DuplicateLocationError: Two records share a location; no index is produced.
    """
    active_analyzer = analyzer or configured_analyzer()

    with create_span("index.build") as span:
        try:
            store = RecordStore.ingest(records)
        except DuplicateLocationError:
            INDEX_BUILDS.labels(outcome="duplicate").inc()
            raise

        sink: dict[str, list[Posting]] = defaultdict(list)
        for record_id, record in enumerate(store):
            _index_field(record_id, IndexField.TITLE, record.title, active_analyzer, sink)
            _index_field(record_id, IndexField.TEXT, record.text, active_analyzer, sink)

        postings = MappingProxyType({term: tuple(entries) for term, entries in sink.items()})
        index = InvertedIndex(
            store=store,
            postings=postings,
            vocabulary=tuple(sorted(postings)),
            analyzer=active_analyzer,
        )
        span.set_attribute("index.records", len(store))
        span.set_attribute("index.terms", len(index.vocabulary))
        span.set_attribute("index.skipped", len(store.warnings))

    INDEX_BUILDS.labels(outcome="ok").inc()
    INDEX_RECORD_COUNT.set(len(store))
    logger.info(
        "Built search index: %d records, %d terms, %d skipped",
        len(store),
        len(index.vocabulary),
        len(store.warnings),
    )
    return index
