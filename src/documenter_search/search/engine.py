"""Ranked query evaluation over an inverted index.

Scoring is OR-semantics with a coverage preference: every distinct query term
a record matches adds a large fixed bonus, so records covering more of the
query rank first, and the weighted occurrence sum orders records within the
same coverage level.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Collection
from dataclasses import dataclass, field
import logging

from documenter_search.config import Settings, get_settings
from documenter_search.domain.record import Category
from documenter_search.domain.search import ScoredResult
from documenter_search.errors import InvalidLimitError
from documenter_search.observability.metrics import SEARCH_LATENCY, SEARCH_QUERIES, track_latency
from documenter_search.observability.tracing import create_span
from documenter_search.search.indexer import InvertedIndex
from documenter_search.search.snippet import extract


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RankedRecord:
    """Represents a scored record before snippet extraction."""

    record_id: int
    location: str
    score: float
    matched_terms: frozenset[str]


@dataclass
class _Accumulator:
    weighted: float = 0.0
    query_terms: set[str] = field(default_factory=set)
    index_terms: set[str] = field(default_factory=set)


def tokenize_query(index: InvertedIndex, query: str) -> tuple[str, ...]:
    """Return distinct query terms in first-seen order."""
    seen: dict[str, None] = {}
    for token in index.analyzer(query.strip()):
        seen.setdefault(token.text, None)
    return tuple(seen)


class QueryEngine:
    """Scores records against a tokenized query."""

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or get_settings()

    def _accumulate(self, index: InvertedIndex, terms: tuple[str, ...]) -> dict[int, _Accumulator]:
        scores: dict[int, _Accumulator] = defaultdict(_Accumulator)
        for query_term in terms:
            matches = [(query_term, self.settings.exact_weight)]
            matches.extend((term, self.settings.prefix_weight) for term in index.prefix_terms(query_term))
            for index_term, match_weight in matches:
                for posting in index.lookup(index_term):
                    entry = scores[posting.record_id]
                    entry.weighted += match_weight * self.settings.field_weight(posting.field.value) * posting.frequency
                    entry.query_terms.add(query_term)
                    entry.index_terms.add(index_term)
        return scores

    def rank(
        self,
        index: InvertedIndex,
        query: str,
        limit: int,
        *,
        categories: Collection[Category | str] | None = None,
    ) -> list[RankedRecord]:
        """Return up to ``limit`` records ordered by score, then location.

        Raises:
            InvalidLimitError: ``limit`` is not positive.
        """
        if limit <= 0:
            raise InvalidLimitError(limit)

        terms = tokenize_query(index, query)
        if not terms:
            return []

        allowed = {Category(category) for category in categories} if categories else None
        ranked: list[RankedRecord] = []
        for record_id, entry in self._accumulate(index, terms).items():
            record = index.record(record_id)
            if allowed is not None and record.category not in allowed:
                continue
            score = self.settings.coverage_bonus * len(entry.query_terms) + entry.weighted
            ranked.append(
                RankedRecord(
                    record_id=record_id,
                    location=record.location,
                    score=score,
                    matched_terms=frozenset(entry.index_terms),
                )
            )

        ranked.sort(key=lambda item: (-item.score, item.location))
        return ranked[:limit]

    def search(
        self,
        index: InvertedIndex,
        query: str,
        limit: int,
        *,
        categories: Collection[Category | str] | None = None,
        snippet_length: int | None = None,
    ) -> list[ScoredResult]:
        """Rank records for ``query`` and attach highlighted snippets."""
        max_length = snippet_length or self.settings.snippet_max_length
        with create_span("search.query", attributes={"search.limit": limit}) as span, track_latency(SEARCH_LATENCY):
            try:
                ranked = self.rank(index, query, limit, categories=categories)
            except InvalidLimitError:
                SEARCH_QUERIES.labels(outcome="invalid").inc()
                raise

            results = []
            for item in ranked:
                record = index.record(item.record_id)
                results.append(
                    ScoredResult(
                        location=record.location,
                        page=record.page,
                        title=record.title,
                        category=record.category,
                        score=item.score,
                        snippet=extract(
                            record,
                            item.matched_terms,
                            max_length,
                            highlight=self.settings.highlight,
                            analyzer=index.analyzer,
                        ),
                    )
                )
            span.set_attribute("search.results", len(results))

        SEARCH_QUERIES.labels(outcome="hit" if results else "miss").inc()
        logger.debug("Query %r returned %d results", query, len(results))
        return results


def search(
    index: InvertedIndex,
    query: str,
    limit: int = 20,
    *,
    categories: Collection[Category | str] | None = None,
    settings: Settings | None = None,
) -> list[ScoredResult]:
    """Search ``index`` for ``query`` and return at most ``limit`` ranked results.

    Raises:
        InvalidLimitError: ``limit`` is not positive.
    """
    return QueryEngine(settings).search(index, query, limit, categories=categories)
