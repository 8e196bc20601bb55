"""Analyzer utilities for documentation search.

Follows Whoosh's composable tokenizer/filter design: a tokenizer emits
tokens carrying character offsets into the source text and filters reshape the
stream. The same analyzer is applied to record fields at build time and to
query text at search time so both sides normalize identically.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Sequence
from dataclasses import dataclass
import re
from typing import Protocol

from documenter_search.config import get_settings


@dataclass(frozen=True)
class Token:
    """Represents a token emitted by analyzers."""

    text: str
    position: int
    start_char: int
    end_char: int

    def copy_with(self, **updates: object) -> Token:
        data = {
            "text": self.text,
            "position": self.position,
            "start_char": self.start_char,
            "end_char": self.end_char,
        }
        data.update(updates)
        return Token(**data)  # type: ignore[arg-type]


class Analyzer(Protocol):
    """Protocol implemented by analyzers."""

    def __call__(self, text: str) -> list[Token]:  # pragma: no cover - interface definition
        ...


class TokenFilter(Protocol):
    """Protocol implemented by token filters."""

    def __call__(self, tokens: Iterable[Token]) -> Iterator[Token]:  # pragma: no cover - interface definition
        ...


class AlphanumericTokenizer:
    """Splits text on non-alphanumeric boundaries.

    Underscores count as separators, so ``parse_file`` yields two tokens.
    """

    _PATTERN = re.compile(r"[^\W_]+", re.UNICODE)

    def __call__(self, text: str) -> Iterator[Token]:
        for position, match in enumerate(self._PATTERN.finditer(text)):
            yield Token(
                text=match.group(0),
                position=position,
                start_char=match.start(),
                end_char=match.end(),
            )


class LowercaseFilter:
    """Filter that lowercases token text."""

    def __call__(self, tokens: Iterable[Token]) -> Iterator[Token]:
        for token in tokens:
            if token.text.islower():
                yield token
            else:
                yield token.copy_with(text=token.text.lower())


class MinLengthFilter:
    """Drops tokens shorter than ``min_length`` characters."""

    def __init__(self, min_length: int = 2) -> None:
        self.min_length = min_length

    def __call__(self, tokens: Iterable[Token]) -> Iterator[Token]:
        for token in tokens:
            if len(token.text) >= self.min_length:
                yield token


DEFAULT_STOPWORDS = ("the", "and", "of", "a", "is", "to", "in", "for", "or")


class StopFilter:
    """Removes stopwords from the stream."""

    def __init__(self, stopwords: Sequence[str] | None = None) -> None:
        vocab = stopwords if stopwords is not None else DEFAULT_STOPWORDS
        self.stopwords = frozenset(word.lower() for word in vocab)

    def __call__(self, tokens: Iterable[Token]) -> Iterator[Token]:
        for token in tokens:
            if token.text not in self.stopwords:
                yield token


class PluralStemFilter:
    """Folds plural and third-person suffixes (Harman's S-stemmer).

    Only plural endings are folded: ``machines`` and ``machine`` share a term while
    ``compile`` and ``compiler`` stay distinct.
    """

    def __init__(self) -> None:
        self._stem = _build_plural_stemmer()

    def __call__(self, tokens: Iterable[Token]) -> Iterator[Token]:
        for token in tokens:
            stemmed = self._stem(token.text)
            yield token if stemmed == token.text else token.copy_with(text=stemmed)


def _build_plural_stemmer() -> Callable[[str], str]:
    def stem(word: str) -> str:
        if len(word) <= 3:
            return word
        if word.endswith("ies") and not word.endswith(("eies", "aies")):
            return word[:-3] + "y"
        if word.endswith("es") and not word.endswith(("aes", "ees", "oes")):
            return word[:-1]
        if word.endswith("s") and not word.endswith(("us", "ss")):
            return word[:-1]
        return word

    return stem


class AnalyzerPipeline:
    """Composable analyzer pipeline (tokenizer + filters)."""

    def __init__(
        self,
        tokenizer: Callable[[str], Iterator[Token]],
        filters: Sequence[TokenFilter] | None = None,
    ) -> None:
        self.tokenizer = tokenizer
        self.filters = list(filters or [])

    def __call__(self, text: str) -> list[Token]:
        stream: Iterable[Token] = self.tokenizer(text)
        for token_filter in self.filters:
            stream = token_filter(stream)
        # renumber positions after filtering
        return [token.copy_with(position=idx) for idx, token in enumerate(stream)]


class StandardAnalyzer:
    """Default analyzer for record titles, body text and queries."""

    def __init__(
        self,
        *,
        stopwords: Sequence[str] | None = None,
        min_length: int = 2,
        apply_stemming: bool = True,
    ) -> None:
        filters: list[TokenFilter] = [LowercaseFilter(), MinLengthFilter(min_length), StopFilter(stopwords)]
        if apply_stemming:
            filters.append(PluralStemFilter())
        self.apply_stemming = apply_stemming
        self.pipeline = AnalyzerPipeline(AlphanumericTokenizer(), filters)

    def __call__(self, text: str) -> list[Token]:
        if not text:
            return []
        return self.pipeline(text)


_ANALYZER_FACTORIES: dict[str, Callable[[], Analyzer]] = {
    "default": lambda: StandardAnalyzer(),
    "nostem": lambda: StandardAnalyzer(apply_stemming=False),
}


def get_analyzer(name: str | None) -> Analyzer:
    """Return analyzer by name, defaulting to the standard analyzer."""

    if name is None:
        return _ANALYZER_FACTORIES["default"]()
    normalized = name.lower()
    if normalized not in _ANALYZER_FACTORIES:
        msg = f"Unknown analyzer '{name}'. Available: {sorted(_ANALYZER_FACTORIES)}"
        raise ValueError(msg)
    return _ANALYZER_FACTORIES[normalized]()


def configured_analyzer(stemming: bool | None = None) -> Analyzer:
    """Return the analyzer selected by ``SEARCH_STEMMING``.

    Pass ``stemming`` to override the configured value.
    """
    if stemming is None:
        stemming = get_settings().stemming
    return get_analyzer("default" if stemming else "nostem")


def tokenize(text: str, analyzer: Analyzer | None = None) -> list[tuple[str, int]]:
    """Return ``(term, offset)`` pairs for ``text``.

    Offsets are character indices into ``text``; the snippet extractor relies
    on them to locate matches without storing substrings in the index.
    """
    active = analyzer or configured_analyzer()
    return [(token.text, token.start_char) for token in active(text)]
