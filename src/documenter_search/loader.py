"""Loader for Documenter's ``search_index.js`` transport format.

The generator writes a JavaScript assignment::

    var documenterSearchIndex = {"docs": [
    {"location": "index.html#", "page": "Home", ...},
    ]}

Older releases leave a trailing comma after the last record, which strict JSON
parsers reject, so it is removed before decoding.
"""

from __future__ import annotations

import logging
from pathlib import Path
import re
from typing import Any

import orjson

from documenter_search.errors import SearchIndexFormatError


logger = logging.getLogger(__name__)

_ASSIGNMENT_PATTERN = re.compile(r"^\s*(?:var|let|const)\s+documenterSearchIndex\s*=\s*", re.MULTILINE)
_TRAILING_COMMA_PATTERN = re.compile(r",\s*(\]\s*\}\s*;?\s*)$")


def _extract_payload(source: str) -> str:
    match = _ASSIGNMENT_PATTERN.search(source)
    payload = source[match.end() :] if match else source
    payload = payload.strip()
    if payload.endswith(";"):
        payload = payload[:-1].rstrip()
    return _TRAILING_COMMA_PATTERN.sub(r"\1", payload)


def parse_search_index(source: str | bytes) -> list[dict[str, Any]]:
    """Decode raw record mappings from ``search_index.js`` content.

    Plain JSON (an object with a ``docs`` list, or a bare list) is accepted too.

    Raises:
        SearchIndexFormatError: The payload is not valid JSON or has no record list.
    """
    text = source.decode("utf-8") if isinstance(source, bytes) else source
    payload = _extract_payload(text)
    try:
        data = orjson.loads(payload)
    except orjson.JSONDecodeError as exc:
        raise SearchIndexFormatError(f"search index payload is not valid JSON: {exc}") from exc

    docs = data.get("docs") if isinstance(data, dict) else data
    if not isinstance(docs, list):
        raise SearchIndexFormatError("search index payload has no 'docs' list")
    return docs


def load_search_index_js(path: Path | str) -> list[dict[str, Any]]:
    """Read and decode a ``search_index.js`` file."""
    file_path = Path(path)
    docs = parse_search_index(file_path.read_bytes())
    logger.info("Loaded %d records from %s", len(docs), file_path)
    return docs
