"""Search data models."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class IndexField(str, Enum):
    """Record fields that are tokenized into the inverted index."""

    TITLE = "title"
    TEXT = "text"


@dataclass(frozen=True, slots=True)
class Posting:
    """A posting links a term to one field of one record.

    ``positions`` holds the ordered character offsets of every occurrence of
    the term in that field; frequency is derived from it.
    """

    record_id: int
    field: IndexField
    positions: tuple[int, ...]

    @property
    def frequency(self) -> int:
        return len(self.positions)
