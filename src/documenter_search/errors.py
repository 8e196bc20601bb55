"""Error types raised by the search core."""


class SearchIndexError(Exception):
    """Base error for documentation search."""


class DuplicateLocationError(SearchIndexError, ValueError):
    """Raised when two records share the same location anchor."""

    def __init__(self, location: str, first_id: int, second_index: int) -> None:
        self.location = location
        self.first_id = first_id
        self.second_index = second_index
        super().__init__(
            f"Duplicate location '{location}': record #{second_index} repeats the anchor of record id {first_id}"
        )


class InvalidLimitError(SearchIndexError, ValueError):
    """Raised when a query asks for a non-positive number of results."""

    def __init__(self, limit: int) -> None:
        self.limit = limit
        super().__init__(f"limit must be a positive integer, got {limit!r}")


class MalformedRecordError(SearchIndexError, ValueError):
    """Raised when a raw record is missing a field or has the wrong type."""

    def __init__(self, position: int, reason: str) -> None:
        self.position = position
        self.reason = reason
        super().__init__(f"Malformed record #{position}: {reason}")


class SearchIndexFormatError(SearchIndexError, ValueError):
    """Raised when a search_index.js payload cannot be decoded."""
