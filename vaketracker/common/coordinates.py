"""Coordinate parsing and range validation."""

from __future__ import annotations

import math
from typing import Any

from vaketracker.common.constants import COORDINATE_DECIMALS
from vaketracker.common.errors import InvalidCoordinateError


def parse_coordinate(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        parsed = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(parsed):
        return None
    return parsed


def is_valid_lat_lon(lat: float | None, lng: float | None) -> bool:
    if lat is None or lng is None:
        return False
    return -90 <= lat <= 90 and -180 <= lng <= 180


def sanitize_coordinates(lat: Any, lng: Any) -> tuple[float, float]:
    parsed_lat = parse_coordinate(lat)
    parsed_lng = parse_coordinate(lng)
    if parsed_lat is None or not -90 <= parsed_lat <= 90:
        raise InvalidCoordinateError(f"Invalid latitude: must be a number between -90 and 90, got {lat!r}")
    if parsed_lng is None or not -180 <= parsed_lng <= 180:
        raise InvalidCoordinateError(f"Invalid longitude: must be a number between -180 and 180, got {lng!r}")
    return round(parsed_lat, COORDINATE_DECIMALS), round(parsed_lng, COORDINATE_DECIMALS)
