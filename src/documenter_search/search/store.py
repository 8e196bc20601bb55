"""Record store: validated, immutable records with stable integer ids."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
import logging
from typing import Any

from pydantic import ValidationError

from documenter_search.domain.record import Record
from documenter_search.errors import DuplicateLocationError, MalformedRecordError


logger = logging.getLogger(__name__)


def coerce_record(raw: Record | Mapping[str, Any], position: int) -> Record:
    """Validate one raw record.

    Raises:
        MalformedRecordError: A required field is missing or has the wrong type.
    """
    if isinstance(raw, Record):
        return raw
    if not isinstance(raw, Mapping):
        raise MalformedRecordError(position, f"expected a mapping, got {type(raw).__name__}")
    try:
        return Record.model_validate(raw)
    except ValidationError as exc:
        reasons = "; ".join(
            f"{'.'.join(str(part) for part in error['loc']) or 'record'}: {error['msg']}" for error in exc.errors()
        )
        raise MalformedRecordError(position, reasons) from exc


@dataclass(frozen=True)
class RecordStore:
    """Immutable ordered set of records; a record's id is its index."""

    records: tuple[Record, ...]
    warnings: tuple[str, ...] = ()

    @classmethod
    def ingest(cls, raw_records: Iterable[Record | Mapping[str, Any]]) -> RecordStore:
        """Validate records, skipping malformed ones and rejecting duplicate locations.

        Raises:
            DuplicateLocationError: Two valid records share a location.
        """
        records: list[Record] = []
        warnings: list[str] = []
        seen: dict[str, int] = {}

        for position, raw in enumerate(raw_records):
            try:
                record = coerce_record(raw, position)
            except MalformedRecordError as exc:
                logger.warning("Skipping record: %s", exc)
                warnings.append(str(exc))
                continue

            if record.location in seen:
                raise DuplicateLocationError(record.location, seen[record.location], position)
            seen[record.location] = len(records)
            records.append(record)

        return cls(records=tuple(records), warnings=tuple(warnings))

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[Record]:
        return iter(self.records)

    def __getitem__(self, record_id: int) -> Record:
        return self.records[record_id]
