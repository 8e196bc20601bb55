"""Shared test fixtures and configuration."""

import os
from pathlib import Path

import pytest


FIXTURES_DIR = Path(__file__).resolve().parent / "fixtures"

# Pin every setting so a developer's environment or .env cannot leak into tests
TEST_ENV = {
    "SEARCH_DEFAULT_LIMIT": "20",
    "SEARCH_TITLE_WEIGHT": "3.0",
    "SEARCH_TEXT_WEIGHT": "1.0",
    "SEARCH_EXACT_WEIGHT": "1.0",
    "SEARCH_PREFIX_WEIGHT": "0.5",
    "SEARCH_COVERAGE_BONUS": "100.0",
    "SEARCH_STEMMING": "true",
    "SEARCH_SNIPPET_MAX_LENGTH": "160",
    "SEARCH_HIGHLIGHT_OPEN": "<mark>",
    "SEARCH_HIGHLIGHT_CLOSE": "</mark>",
    "SEARCH_LOG_LEVEL": "info",
    "SEARCH_LOG_JSON": "false",
}

for key, value in TEST_ENV.items():
    os.environ[key] = value

from documenter_search.config import get_settings
from documenter_search.search.search_index import reset_search_index


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Reset settings and the process-wide index around each test."""
    for key, value in TEST_ENV.items():
        monkeypatch.setenv(key, value)
    get_settings.cache_clear()
    reset_search_index()
    yield
    get_settings.cache_clear()
    reset_search_index()


@pytest.fixture
def stemming_disabled(monkeypatch):
    """Turn plural folding off through the environment."""
    monkeypatch.setenv("SEARCH_STEMMING", "false")
    get_settings.cache_clear()


@pytest.fixture
def automa_records():
    """The two-record corpus used throughout the ranking examples."""
    return [
        {
            "location": "a#1",
            "page": "Home",
            "title": "Overview",
            "category": "section",
            "text": "Automa.jl is a package for generating finite-state machines",
        },
        {
            "location": "a#2",
            "page": "Home",
            "title": "Compilers",
            "category": "section",
            "text": "compile a regular expression into a machine",
        },
    ]


@pytest.fixture
def reference_records():
    """A small corpus mixing every record category."""
    return [
        {"location": "index.html#", "page": "Home", "title": "Home", "category": "page", "text": ""},
        {
            "location": "index.html#Overview-1",
            "page": "Home",
            "title": "Overview",
            "category": "section",
            "text": "Automa.jl is a package for generating finite-state machines (FSMs) and tokenizers in Julia.",
        },
        {
            "location": "references.html#Automa.compile",
            "page": "References",
            "title": "Automa.compile",
            "category": "function",
            "text": (
                "compile(re::RegExp; optimize::Bool=true)::Machine\n\n"
                "Compile a finite state machine (FSM) from re."
            ),
        },
        {
            "location": "references.html#Automa.Machine",
            "page": "References",
            "title": "Automa.Machine",
            "category": "type",
            "text": "A state machine representing a regular expression.",
        },
    ]


@pytest.fixture
def search_index_js() -> Path:
    return FIXTURES_DIR / "search_index.js"
