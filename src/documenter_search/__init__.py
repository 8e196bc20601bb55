"""In-memory full-text search over Documenter search index records."""

from documenter_search.domain.record import Category, Record
from documenter_search.domain.search import ScoredResult, SearchResponse
from documenter_search.errors import (
    DuplicateLocationError,
    InvalidLimitError,
    MalformedRecordError,
    SearchIndexError,
    SearchIndexFormatError,
)
from documenter_search.search.engine import search
from documenter_search.search.indexer import InvertedIndex, build_index
from documenter_search.search.search_index import SearchIndex, get_search_index, init_search_index


__all__ = [
    "Category",
    "DuplicateLocationError",
    "InvalidLimitError",
    "InvertedIndex",
    "MalformedRecordError",
    "Record",
    "ScoredResult",
    "SearchIndex",
    "SearchIndexError",
    "SearchIndexFormatError",
    "SearchResponse",
    "build_index",
    "get_search_index",
    "init_search_index",
    "search",
]
