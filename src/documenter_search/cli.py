"""CLI for querying a Documenter ``search_index.js`` from the terminal."""

from __future__ import annotations

import argparse
from collections.abc import Sequence
import logging
from pathlib import Path
import sys

import orjson

from documenter_search.config import get_settings
from documenter_search.domain.record import Category
from documenter_search.domain.search import SearchResponse
from documenter_search.errors import SearchIndexError
from documenter_search.loader import load_search_index_js
from documenter_search.observability.logging import configure_logging
from documenter_search.observability.tracing import init_tracing
from documenter_search.search.search_index import SearchIndex


logger = logging.getLogger(__name__)


def build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="documenter-search",
        description="Build an in-memory index from a Documenter search_index.js and run a query.",
    )
    parser.add_argument("index_file", type=Path, help="Path to search_index.js")
    parser.add_argument("query", help="Free-text query")
    parser.add_argument(
        "--limit",
        type=int,
        default=None,
        help="Maximum number of results (default: SEARCH_DEFAULT_LIMIT)",
    )
    parser.add_argument(
        "--category",
        action="append",
        choices=[category.value for category in Category],
        help="Only return records of this category (repeatable)",
    )
    parser.add_argument("--json", action="store_true", help="Emit results as JSON")
    return parser


def _print_text(response: SearchResponse) -> None:
    if not response.results:
        print("No results.")
        return
    for rank, result in enumerate(response.results, start=1):
        print(f"{rank:>2}. [{result.score:.1f}] {result.page} > {result.title} ({result.category.value})")
        print(f"    {result.location}")
        if result.snippet:
            print(f"    {result.snippet}")


def main(argv: Sequence[str] | None = None) -> int:
    settings = get_settings()
    configure_logging(settings.log_level, json_output=settings.log_json)
    init_tracing()
    parser = build_argument_parser()
    args = parser.parse_args(argv)

    try:
        records = load_search_index_js(args.index_file)
        index = SearchIndex(records, settings=settings)
        response = index.search(args.query, args.limit, categories=args.category)
    except OSError as exc:
        logger.error("Cannot read %s: %s", args.index_file, exc)
        return 2
    except SearchIndexError as exc:
        logger.error("%s", exc)
        return 1

    for warning in index.warnings:
        print(f"warning: {warning}", file=sys.stderr)

    if args.json:
        print(orjson.dumps(response.model_dump(mode="json"), option=orjson.OPT_INDENT_2).decode("utf-8"))
    else:
        _print_text(response)
    return 0


if __name__ == "__main__":
    sys.exit(main())
