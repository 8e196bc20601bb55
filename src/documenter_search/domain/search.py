"""Domain models for search results.

Following Cosmic Python principles:
- Value Objects are immutable (frozen=True)
- No infrastructure dependencies
"""

from pydantic import BaseModel, ConfigDict, Field

from documenter_search.domain.record import Category


class ScoredResult(BaseModel):
    """Value object for a single ranked search result."""

    model_config = ConfigDict(frozen=True)

    location: str
    page: str
    title: str
    category: Category
    score: float
    snippet: str


class SearchStats(BaseModel):
    """Performance and debug information for a search operation."""

    model_config = ConfigDict(frozen=True)

    query_terms: list[str] = Field(default_factory=list)
    result_count: int = 0
    search_time: float = 0.0


class SearchResponse(BaseModel):
    """Value object for a complete search response."""

    model_config = ConfigDict(frozen=True)

    query: str
    results: list[ScoredResult]
    stats: SearchStats | None = None

    @property
    def locations(self) -> list[str]:
        return [result.location for result in self.results]
