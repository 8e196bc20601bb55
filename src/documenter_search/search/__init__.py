"""
Search indexing and query engine package.

This package provides a pure-Python in-memory search stack:
- analyzers: Tokenizer and filters (lowercase, length, stopwords, plural folding)
- store: Validated record store with stable ids
- indexer: Inverted index construction
- engine: Query scoring and ranking
- snippet: Highlighted excerpt extraction
- search_index: Facade with atomic rebuilds
"""
