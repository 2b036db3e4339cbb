"""Per-region heat map aggregation for one selected country."""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping

from vaketracker.common.logging import log_event
from vaketracker.common.models import HeatmapResult, LocatedRecord, RegionBucket
from vaketracker.geo.classifier import DEFAULT_CLASSIFIER, RegionClassifier
from vaketracker.pipeline.records import coerce_records

# Lower bounds of the five colour bands used by the dashboard legend.
INTENSITY_BAND_THRESHOLDS = (80.0, 60.0, 40.0, 20.0)


def aggregate(
    records: Iterable[LocatedRecord | Mapping[str, Any]],
    selected_country: str,
    *,
    classifier: RegionClassifier | None = None,
    logger: logging.Logger | None = None,
) -> HeatmapResult:
    """Count records per region of ``selected_country`` and normalise to 0-100.

    Records with unusable coordinates are skipped and reported in
    ``skipped_records``; they never abort the aggregation. Buckets are
    ordered by count descending, ties in first-seen order.
    """
    classifier = classifier or DEFAULT_CLASSIFIER
    target = classifier.canonical_country(selected_country)
    batch = coerce_records(records)

    if logger is not None:
        for sample in batch.invalid_samples:
            log_event(
                logger,
                f"skipped record: {sample['reason']}",
                level=logging.DEBUG,
                event="RECORD_SKIPPED",
                status="warning",
                country=target,
                error_code="INVALID_COORDINATE",
            )

    counts: dict[str, int] = {}
    if target:
        for record in batch.records:
            country = classifier.resolve_country(record)
            if country != target:
                continue
            region = classifier.resolve_region(record, country)
            counts[region] = counts.get(region, 0) + 1

    max_count = max(counts.values(), default=0)
    buckets = [
        RegionBucket(
            region=region,
            count=count,
            intensity=(count / max_count * 100) if max_count > 0 else 0.0,
        )
        for region, count in counts.items()
    ]
    buckets.sort(key=lambda bucket: -bucket.count)

    result = HeatmapResult(
        country=target,
        buckets=buckets,
        total_records=len(batch.records) + batch.skipped,
        matched_records=sum(counts.values()),
        skipped_records=batch.skipped,
    )

    if logger is not None:
        log_event(
            logger,
            "heat map built",
            event="HEATMAP_BUILT",
            status="ok" if batch.skipped == 0 else "partial",
            country=target,
            records_in=result.total_records,
            records_out=len(buckets),
            skipped=batch.skipped,
        )
    return result


def intensity_band(intensity: float) -> int:
    """Map an intensity to the legend band: 0 for no data, 1 (lightest) to 5."""
    if intensity <= 0:
        return 0
    for band, threshold in zip((5, 4, 3, 2), INTENSITY_BAND_THRESHOLDS):
        if intensity >= threshold:
            return band
    return 1
