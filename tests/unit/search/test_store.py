"""Unit tests for record validation and the record store."""

from pydantic import ValidationError
import pytest

from documenter_search.domain.record import Category, Record
from documenter_search.errors import DuplicateLocationError, MalformedRecordError
from documenter_search.search.store import RecordStore, coerce_record


def _raw(location="x#1", **overrides):
    data = {"location": location, "page": "Home", "title": "Title", "category": "section", "text": "body"}
    data.update(overrides)
    return data


class TestCoerceRecord:
    """Raw mappings become frozen Record values or MalformedRecordError."""

    def test_valid_mapping(self):
        record = coerce_record(_raw(), 0)

        assert record == Record(location="x#1", page="Home", title="Title", category=Category.SECTION, text="body")

    def test_record_instance_passes_through(self):
        record = Record(location="x#1", page="p", title="t", category=Category.PAGE, text="")

        assert coerce_record(record, 3) is record

    def test_records_are_frozen(self):
        record = coerce_record(_raw(), 0)

        with pytest.raises(ValidationError):
            record.title = "changed"

    def test_missing_field(self):
        raw = _raw()
        del raw["text"]

        with pytest.raises(MalformedRecordError, match="text") as excinfo:
            coerce_record(raw, 4)

        assert excinfo.value.position == 4

    @pytest.mark.parametrize(
        "overrides",
        [
            {"title": 5},
            {"text": None},
            {"category": "module"},
            {"location": ""},
        ],
    )
    def test_invalid_values(self, overrides):
        with pytest.raises(MalformedRecordError):
            coerce_record(_raw(**overrides), 0)

    def test_non_mapping(self):
        with pytest.raises(MalformedRecordError, match="expected a mapping"):
            coerce_record("index.html#", 0)


class TestRecordStore:
    """Ingestion assigns ids, collects warnings and rejects duplicates."""

    def test_ids_follow_input_order(self):
        store = RecordStore.ingest([_raw("a"), _raw("b"), _raw("c")])

        assert [record.location for record in store] == ["a", "b", "c"]
        assert store[1].location == "b"
        assert len(store) == 3

    def test_malformed_records_are_skipped_with_warnings(self, caplog):
        store = RecordStore.ingest([_raw("a"), _raw("b", category="module"), _raw("c")])

        assert [record.location for record in store] == ["a", "c"]
        assert store[1].location == "c"
        assert len(store.warnings) == 1
        assert "#1" in store.warnings[0]
        assert "Skipping record" in caplog.text

    def test_duplicate_location_aborts(self):
        with pytest.raises(DuplicateLocationError) as excinfo:
            RecordStore.ingest([_raw("a"), _raw("b"), _raw("a")])

        assert excinfo.value.location == "a"
        assert excinfo.value.first_id == 0
        assert excinfo.value.second_index == 2

    def test_skipped_record_does_not_count_as_duplicate(self):
        store = RecordStore.ingest([_raw("a", title=None), _raw("a")])

        assert [record.location for record in store] == ["a"]

    def test_empty_input(self):
        store = RecordStore.ingest([])

        assert len(store) == 0
        assert store.warnings == ()
