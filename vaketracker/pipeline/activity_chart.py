"""Activities per region for the dashboard bar chart."""

from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone
from typing import Any, Iterable, Mapping

from vaketracker.common.models import LocatedRecord
from vaketracker.common.time_utils import parse_timestamp
from vaketracker.geo.classifier import DEFAULT_CLASSIFIER, RegionClassifier
from vaketracker.geo.rules import REGION_CATALOG
from vaketracker.pipeline.records import coerce_records

# Countries whose chart also counts regions outside the catalogue.
OPEN_CATALOG_COUNTRIES = frozenset({"México"})


def _day_start(value: date) -> datetime:
    return datetime.combine(value, time.min, tzinfo=timezone.utc)


def _within_dates(record: LocatedRecord, start: datetime | None, end: datetime | None) -> bool:
    if start is None and end is None:
        return True
    created_at = parse_timestamp(record.extra.get("created_at"))
    if created_at is None:
        return False
    if start is not None and created_at < start:
        return False
    if end is not None and created_at >= end:
        return False
    return True


def build_activity_chart(
    records: Iterable[LocatedRecord | Mapping[str, Any]],
    selected_country: str,
    *,
    user_id: str | None = None,
    date_from: date | None = None,
    date_to: date | None = None,
    classifier: RegionClassifier | None = None,
) -> dict:
    classifier = classifier or DEFAULT_CLASSIFIER
    target = classifier.canonical_country(selected_country)
    start = _day_start(date_from) if date_from else None
    end = _day_start(date_to + timedelta(days=1)) if date_to else None

    catalog = REGION_CATALOG.get(target, ())
    counts: dict[str, int] = {region: 0 for region in catalog}
    batch = coerce_records(records)

    for record in batch.records:
        if user_id is not None and record.user_id != user_id:
            continue
        if not _within_dates(record, start, end):
            continue
        country = classifier.resolve_country(record)
        if not target or country != target:
            continue
        region = classifier.resolve_region(record, country)
        if region in counts or target in OPEN_CATALOG_COUNTRIES:
            counts[region] = counts.get(region, 0) + 1

    rows = [{"state": region, "activities": count} for region, count in counts.items()]
    rows.sort(key=lambda row: -row["activities"])
    return {
        "country": target,
        "rows": rows,
        "skipped_records": batch.skipped,
    }
