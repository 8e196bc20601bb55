"""Snippet extraction with match-density windows.

The record text is re-tokenized on demand instead of storing substrings in the
index. The extractor picks the first window of at most ``max_length``
characters holding the most matched-term occurrences, cuts the text around it
and wraps every matched occurrence in highlight markers.
"""

from __future__ import annotations

from collections.abc import Collection, Sequence

from documenter_search.domain.record import Record
from documenter_search.search.analyzers import Analyzer, Token, configured_analyzer


DEFAULT_HIGHLIGHT = ("<mark>", "</mark>")
DEFAULT_MAX_LENGTH = 160


def find_densest_window(hits: Sequence[Token], max_length: int) -> tuple[int, int]:
    """Return ``(start, end)`` character bounds of the densest run of hits.

    A window starts at a hit and extends over every following hit that ends
    within ``max_length`` characters. Ties keep the earliest window.

    Args:
        hits: Matched tokens ordered by offset (must not be empty).
        max_length: Maximum window width in characters.
    """
    best_start = 0
    best_count = 0
    best_end_idx = 0
    end_idx = 0
    for start_idx, first in enumerate(hits):
        end_idx = max(end_idx, start_idx + 1)
        while end_idx < len(hits) and hits[end_idx].end_char - first.start_char <= max_length:
            end_idx += 1
        count = end_idx - start_idx
        if count > best_count:
            best_start, best_end_idx, best_count = start_idx, end_idx, count

    window_start = hits[best_start].start_char
    window_end = min(hits[best_end_idx - 1].end_char, window_start + max_length)
    return window_start, window_end


def center_cut(text_length: int, window_start: int, window_end: int, max_length: int) -> tuple[int, int]:
    """Return bounds of a ``max_length`` cut centered on the window, clamped to the text."""
    if text_length <= max_length:
        return 0, text_length
    center = (window_start + window_end) // 2
    start = max(0, min(center - max_length // 2, text_length - max_length))
    return start, start + max_length


def trim_to_words(text: str, start: int, end: int) -> tuple[int, int]:
    """Shrink ``[start, end)`` so it neither starts nor ends inside a word.

    Bounds are left alone when trimming would leave nothing.
    """
    trimmed_start = start
    if 0 < start < end and text[start - 1].isalnum() and text[start].isalnum():
        while trimmed_start < end and text[trimmed_start].isalnum():
            trimmed_start += 1
    trimmed_end = end
    if trimmed_start < end < len(text) and text[end - 1].isalnum() and text[end].isalnum():
        while trimmed_end > trimmed_start and text[trimmed_end - 1].isalnum():
            trimmed_end -= 1
    if trimmed_end <= trimmed_start:
        return start, end

    while trimmed_start < trimmed_end and text[trimmed_start].isspace():
        trimmed_start += 1
    while trimmed_end > trimmed_start and text[trimmed_end - 1].isspace():
        trimmed_end -= 1
    return trimmed_start, trimmed_end


def highlight_spans(
    text: str,
    start: int,
    end: int,
    hits: Sequence[Token],
    highlight: tuple[str, str] = DEFAULT_HIGHLIGHT,
) -> str:
    """Return ``text[start:end]`` with every hit inside it wrapped in markers."""
    open_mark, close_mark = highlight
    pieces: list[str] = []
    cursor = start
    for hit in hits:
        if hit.start_char < start or hit.end_char > end:
            continue
        pieces.append(text[cursor : hit.start_char])
        pieces.append(open_mark)
        pieces.append(text[hit.start_char : hit.end_char])
        pieces.append(close_mark)
        cursor = hit.end_char
    pieces.append(text[cursor:end])
    return "".join(pieces)


def extract(
    record: Record,
    matched_terms: Collection[str],
    max_length: int = DEFAULT_MAX_LENGTH,
    *,
    highlight: tuple[str, str] = DEFAULT_HIGHLIGHT,
    analyzer: Analyzer | None = None,
) -> str:
    """Build a highlighted excerpt of ``record.text``.

    Args:
        record: Record whose body text is excerpted.
        matched_terms: Index terms that matched the query.
        max_length: Maximum excerpt length in characters, excluding markers.
        highlight: Opening and closing highlight markers.
        analyzer: Analyzer used to build the index; defaults to the configured one.

    Returns:
        The excerpt, or the untouched title when the body text is blank.
    """
    if max_length <= 0:
        raise ValueError(f"max_length must be positive, got {max_length}")

    text = record.text
    if not text.strip():
        return record.title

    active = analyzer or configured_analyzer()
    hits = [token for token in active(text) if token.text in matched_terms]
    if not hits:
        start, end = trim_to_words(text, 0, min(len(text), max_length))
        return text[start:end]

    window_start, window_end = find_densest_window(hits, max_length)
    cut_start, cut_end = center_cut(len(text), window_start, window_end, max_length)
    start, end = trim_to_words(text, cut_start, cut_end)
    return highlight_spans(text, start, end, hits, highlight)
