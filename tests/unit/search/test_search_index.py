"""Unit tests for the search index facade and process-wide index."""

from concurrent.futures import ThreadPoolExecutor

import pytest

from documenter_search.config import Settings
from documenter_search.errors import DuplicateLocationError, InvalidLimitError
from documenter_search.search.search_index import SearchIndex, get_search_index, init_search_index


def _record(location, title="Untitled", text=""):
    return {"location": location, "page": "Home", "title": title, "category": "section", "text": text}


class TestSearchIndex:
    """SearchIndex hides build and query layers behind search()."""

    def test_search_response(self, automa_records):
        index = SearchIndex(automa_records)

        response = index.search("Machines", 10)

        assert response.query == "Machines"
        assert response.locations == ["a#1", "a#2"]
        assert response.stats.query_terms == ["machine"]
        assert response.stats.result_count == 2
        assert response.stats.search_time >= 0

    def test_default_limit_from_settings(self, automa_records):
        index = SearchIndex(automa_records, settings=Settings(default_limit=1))

        assert index.search("machine").locations == ["a#1"]

    def test_invalid_limit(self, automa_records):
        index = SearchIndex(automa_records)

        with pytest.raises(InvalidLimitError):
            index.search("machine", 0)

        assert len(index) == 2

    def test_stemming_can_be_disabled(self, automa_records):
        index = SearchIndex(automa_records, settings=Settings(stemming=False))

        # "machines" is only reachable through the prefix scan
        results = index.search("machine", 10).results
        assert [r.location for r in results] == ["a#2", "a#1"]

    def test_rebuild_swaps_index(self, automa_records):
        index = SearchIndex(automa_records)
        previous = index.index

        fresh = index.rebuild([_record("b#1", title="Tokenizers")])

        assert index.index is fresh
        assert index.index is not previous
        assert index.search("machine", 10).results == []
        assert index.search("tokenizer", 10).locations == ["b#1"]

    def test_failed_rebuild_keeps_previous_index(self, automa_records):
        index = SearchIndex(automa_records)
        previous = index.index

        with pytest.raises(DuplicateLocationError):
            index.rebuild([_record("b#1"), _record("b#1")])

        assert index.index is previous
        assert index.search("machine", 10).locations == ["a#1", "a#2"]

    def test_warnings_exposed(self, automa_records):
        index = SearchIndex([*automa_records, {"location": "a#3"}])

        assert len(index) == 2
        assert len(index.warnings) == 1

    def test_concurrent_readers_during_rebuild(self, automa_records):
        index = SearchIndex(automa_records)
        replacement = [_record("c#1", text="machine"), _record("c#2", text="machine")]

        def query(_):
            return tuple(index.search("machine", 10).locations)

        with ThreadPoolExecutor(max_workers=4) as pool:
            pending = pool.map(query, range(50))
            index.rebuild(replacement)
            seen = set(pending)

        assert seen <= {("a#1", "a#2"), ("c#1", "c#2")}
        assert query(0) == ("c#1", "c#2")


class TestProcessWideIndex:
    """init/get manage the shared index."""

    def test_get_before_init_raises(self):
        with pytest.raises(RuntimeError, match="not initialized"):
            get_search_index()

    def test_init_then_get(self, automa_records):
        created = init_search_index(automa_records)

        assert get_search_index() is created
        assert get_search_index().search("compilers", 5).locations == ["a#2"]

    def test_reinit_rebuilds_in_place(self, automa_records):
        created = init_search_index(automa_records)

        again = init_search_index([_record("z#1", title="Zebra")])

        assert again is created
        assert get_search_index().search("zebra", 5).locations == ["z#1"]
