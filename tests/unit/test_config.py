"""Unit tests for environment-driven settings."""

from pydantic import ValidationError
import pytest

from documenter_search.config import Settings, get_settings


class TestSettings:
    """Settings load from SEARCH_* variables and validate values."""

    def test_defaults(self):
        settings = Settings()

        assert settings.default_limit == 20
        assert settings.field_weight("title") == 3.0
        assert settings.field_weight("text") == 1.0
        assert settings.exact_weight == 1.0
        assert settings.prefix_weight == 0.5
        assert settings.coverage_bonus == 100.0
        assert settings.highlight == ("<mark>", "</mark>")

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("SEARCH_TITLE_WEIGHT", "5")
        monkeypatch.setenv("SEARCH_HIGHLIGHT_OPEN", "<em>")
        monkeypatch.setenv("SEARCH_HIGHLIGHT_CLOSE", "</em>")

        settings = Settings()

        assert settings.title_weight == 5.0
        assert settings.highlight == ("<em>", "</em>")

    @pytest.mark.parametrize(
        ("name", "value"),
        [
            ("SEARCH_DEFAULT_LIMIT", "0"),
            ("SEARCH_PREFIX_WEIGHT", "0"),
            ("SEARCH_SNIPPET_MAX_LENGTH", "5"),
            ("SEARCH_HIGHLIGHT_OPEN", ""),
        ],
    )
    def test_invalid_values_rejected(self, monkeypatch, name, value):
        monkeypatch.setenv(name, value)

        with pytest.raises(ValidationError):
            Settings()

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()
