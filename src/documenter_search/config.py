"""Centralized configuration for documenter-search using Pydantic Settings."""

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Strictly typed search configuration loaded from ``SEARCH_*`` environment variables.

    Scoring weights, snippet shape and logging switches live here so hosts can
    tune ranking without touching code. Values are validated at construction.
    """

    model_config = SettingsConfigDict(
        env_prefix="SEARCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        validate_default=True,
        extra="ignore",
    )

    # Query settings
    default_limit: int = Field(default=20, ge=1, description="Results returned when the caller gives no limit")

    # Scoring weights
    title_weight: float = Field(default=3.0, gt=0, description="Multiplier for matches in the record title")
    text_weight: float = Field(default=1.0, gt=0, description="Multiplier for matches in the record body text")
    exact_weight: float = Field(default=1.0, gt=0, description="Weight of an exact term match")
    prefix_weight: float = Field(default=0.5, gt=0, description="Weight of a prefix (partial typing) match")
    coverage_bonus: float = Field(
        default=100.0,
        ge=0,
        description="Bonus added per distinct query term a record matches",
    )

    # Analysis
    stemming: bool = Field(default=True, description="Fold plural suffixes when building terms")

    # Snippet settings
    snippet_max_length: int = Field(default=160, ge=10, description="Maximum snippet length in characters")
    highlight_open: str = Field(default="<mark>", description="Marker inserted before a highlighted term")
    highlight_close: str = Field(default="</mark>", description="Marker inserted after a highlighted term")

    # Logging
    log_level: str = Field(default="info", description="Logging level")
    log_json: bool = Field(default=False, description="Emit structured JSON logs")

    @model_validator(mode="after")
    def _check_highlight(self) -> "Settings":
        if not self.highlight_open or not self.highlight_close:
            raise ValueError("SEARCH_HIGHLIGHT_OPEN and SEARCH_HIGHLIGHT_CLOSE must both be non-empty")
        return self

    @property
    def highlight(self) -> tuple[str, str]:
        """Return the highlight delimiter pair."""
        return self.highlight_open, self.highlight_close

    def field_weight(self, field_name: str) -> float:
        """Return the scoring multiplier for an indexed field."""
        if field_name == "title":
            return self.title_weight
        return self.text_weight


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()
