"""Build a ``locations`` row from a captured GPS fix."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any, Protocol

from vaketracker.common.constants import COORDINATE_DECIMALS
from vaketracker.common.coordinates import sanitize_coordinates
from vaketracker.common.errors import ValidationError
from vaketracker.common.http import HttpRequestError
from vaketracker.common.logging import log_event
from vaketracker.geo.classifier import DEFAULT_CLASSIFIER, RegionClassifier
from vaketracker.sources.geocode import GeocodeResult

SCHEDULED_VISIT = "Visita programada"
_UNSAFE_CHARS_RE = re.compile(r"[<>'\"]")


class Geocoder(Protocol):
    def reverse(self, lat: float, lng: float) -> GeocodeResult | None: ...


@dataclass(frozen=True)
class CaptureLimits:
    notes_max_length: int = 500
    text_max_length: int = 100


@dataclass(frozen=True)
class GpsFix:
    latitude: Any
    longitude: Any
    accuracy: float | None = None


def validate_text(value: str | None, max_length: int = 1000) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValidationError("Input must be a string")
    if len(value) > max_length:
        raise ValidationError(f"Input exceeds maximum length of {max_length} characters")
    return _UNSAFE_CHARS_RE.sub("", value)


def compose_visit_type(activity_type: str, sub_activity: str | None = None) -> str:
    if activity_type == SCHEDULED_VISIT and sub_activity:
        return f"{activity_type} - {sub_activity}"
    return activity_type


def _fallback_location(lat: float, lng: float, classifier: RegionClassifier) -> GeocodeResult:
    country = classifier.classify_country(lat, lng)
    state = classifier.classify_region(lat, lng, country) if country else ""
    return GeocodeResult(
        address=f"{lat:.{COORDINATE_DECIMALS}f}, {lng:.{COORDINATE_DECIMALS}f}",
        country=country,
        state=state,
    )


def resolve_place(
    lat: float,
    lng: float,
    *,
    geocoder: Geocoder | None = None,
    classifier: RegionClassifier | None = None,
    logger: logging.Logger | None = None,
) -> GeocodeResult:
    """Reverse geocode a point, falling back to the bounding-box classifier.

    The fallback applies when no geocoder is configured, when it fails, or
    when it answers without a country.
    """
    classifier = classifier or DEFAULT_CLASSIFIER
    if geocoder is not None:
        try:
            result = geocoder.reverse(lat, lng)
        except HttpRequestError as exc:
            if logger is not None:
                log_event(
                    logger,
                    f"geocoder failed, using bounding boxes: {exc}",
                    level=logging.WARNING,
                    event="GEOCODE_FALLBACK",
                    status="warning",
                    source="geocoder",
                    error_code=exc.error_code,
                )
            result = None
        if result is not None and result.country:
            return result
    return _fallback_location(lat, lng, classifier)


def build_location_row(
    fix: GpsFix,
    *,
    user_id: str,
    activity_type: str,
    sub_activity: str | None = None,
    notes: str | None = None,
    geocoder: Geocoder | None = None,
    classifier: RegionClassifier | None = None,
    limits: CaptureLimits | None = None,
    logger: logging.Logger | None = None,
) -> dict[str, Any]:
    limits = limits or CaptureLimits()
    lat, lng = sanitize_coordinates(fix.latitude, fix.longitude)
    clean_notes = validate_text(notes.strip(), limits.notes_max_length) if notes and notes.strip() else ""
    if not activity_type:
        raise ValidationError("Activity type is required")

    place = resolve_place(lat, lng, geocoder=geocoder, classifier=classifier, logger=logger)
    return {
        "user_id": user_id,
        "latitude": lat,
        "longitude": lng,
        "accuracy": fix.accuracy,
        "address": place.address,
        "notes": clean_notes or None,
        "visit_type": compose_visit_type(
            validate_text(activity_type, limits.text_max_length),
            validate_text(sub_activity, limits.text_max_length) if sub_activity else None,
        ),
        "country": place.country or None,
        "state": place.state or None,
    }
