"""Coercion of raw store rows into validated records."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Iterable, Mapping

from vaketracker.common.coordinates import is_valid_lat_lon, parse_coordinate
from vaketracker.common.errors import InvalidCoordinateError
from vaketracker.common.models import LocatedRecord, optional_label

MAX_INVALID_SAMPLES = 20


@dataclass
class RecordBatch:
    records: list[LocatedRecord] = field(default_factory=list)
    skipped: int = 0
    invalid_samples: list[dict[str, Any]] = field(default_factory=list)


def coerce_record(item: LocatedRecord | Mapping[str, Any]) -> LocatedRecord:
    if isinstance(item, LocatedRecord):
        lat = parse_coordinate(item.latitude)
        lng = parse_coordinate(item.longitude)
        if not is_valid_lat_lon(lat, lng):
            raise InvalidCoordinateError(f"Invalid coordinate latitude={item.latitude!r} longitude={item.longitude!r}")
        return replace(
            item,
            latitude=lat,
            longitude=lng,
            country=optional_label(item.country),
            region=optional_label(item.region),
        )
    if isinstance(item, Mapping):
        return LocatedRecord.from_row(item)
    raise InvalidCoordinateError(f"Unsupported record type: {type(item).__name__}")


def coerce_records(items: Iterable[LocatedRecord | Mapping[str, Any]]) -> RecordBatch:
    batch = RecordBatch()
    for item in items:
        try:
            batch.records.append(coerce_record(item))
        except InvalidCoordinateError as exc:
            batch.skipped += 1
            if len(batch.invalid_samples) < MAX_INVALID_SAMPLES:
                batch.invalid_samples.append({"index": batch.skipped + len(batch.records) - 1, "reason": str(exc)})
    return batch
