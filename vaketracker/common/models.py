"""Data models shared by the classifier and the aggregators."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Mapping

from vaketracker.common.coordinates import is_valid_lat_lon, parse_coordinate
from vaketracker.common.errors import InvalidCoordinateError

# Store column names that map onto record fields rather than passthrough data.
_COORDINATE_KEYS = ("latitude", "longitude")
_LABEL_KEYS = ("country", "state", "region")


def optional_label(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


@dataclass(frozen=True)
class LocatedRecord:
    latitude: float
    longitude: float
    country: str | None = None
    region: str | None = None
    extra: dict[str, Any] = field(default_factory=dict, compare=False)

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "LocatedRecord":
        lat = parse_coordinate(row.get("latitude"))
        lng = parse_coordinate(row.get("longitude"))
        if not is_valid_lat_lon(lat, lng):
            raise InvalidCoordinateError(
                f"Invalid coordinate latitude={row.get('latitude')!r} longitude={row.get('longitude')!r}"
            )
        region = optional_label(row.get("state"))
        if region is None:
            region = optional_label(row.get("region"))
        extra = {key: value for key, value in row.items() if key not in _COORDINATE_KEYS + _LABEL_KEYS}
        return cls(
            latitude=lat,
            longitude=lng,
            country=optional_label(row.get("country")),
            region=region,
            extra=extra,
        )

    @property
    def user_id(self) -> str | None:
        return self.extra.get("user_id")


@dataclass(frozen=True)
class RegionBucket:
    region: str
    count: int
    intensity: float

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class HeatmapResult:
    country: str
    buckets: list[RegionBucket]
    total_records: int
    matched_records: int
    skipped_records: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "country": self.country,
            "buckets": [bucket.to_dict() for bucket in self.buckets],
            "total_records": self.total_records,
            "matched_records": self.matched_records,
            "skipped_records": self.skipped_records,
        }
