"""Statistics over the automatic location tracking table."""

from __future__ import annotations

from collections import defaultdict
from datetime import datetime, timezone
from typing import Any, Iterable, Mapping

from pyproj import Geod

from vaketracker.common.constants import AUTO_LOCATION_ADDRESS
from vaketracker.common.coordinates import is_valid_lat_lon, parse_coordinate
from vaketracker.common.time_utils import parse_timestamp

_GEOD = Geod(ellps="WGS84")
_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def user_label(user_id: str | None, users: Mapping[str, str] | None = None) -> str:
    if not user_id:
        return ""
    if users and users.get(user_id):
        return users[user_id]
    return f"User {user_id[:8]}"


def path_length_m(points: list[tuple[float, float]]) -> float:
    """Geodesic length in metres of a ``(lat, lng)`` polyline on WGS84."""
    if len(points) < 2:
        return 0.0
    lats = [lat for lat, _lng in points]
    lngs = [lng for _lat, lng in points]
    return float(_GEOD.line_length(lngs, lats))


def summarise_tracking(
    rows: Iterable[Mapping[str, Any]],
    *,
    users: Mapping[str, str] | None = None,
) -> dict:
    rows = list(rows)
    with_address = sum(
        1 for row in rows if row.get("address") and row.get("address") != AUTO_LOCATION_ADDRESS
    )
    countries = sorted({row["country"] for row in rows if row.get("country")})
    labels = sorted({user_label(row.get("user_id"), users) for row in rows if row.get("user_id")})

    points_by_user: dict[str, list[tuple[datetime, float, float]]] = defaultdict(list)
    invalid_points = 0
    for row in rows:
        lat = parse_coordinate(row.get("latitude"))
        lng = parse_coordinate(row.get("longitude"))
        if not is_valid_lat_lon(lat, lng):
            invalid_points += 1
            continue
        created_at = parse_timestamp(row.get("created_at")) or _EPOCH
        points_by_user[user_label(row.get("user_id"), users)].append((created_at, lat, lng))

    path_lengths = {}
    for label, points in sorted(points_by_user.items()):
        ordered = sorted(points, key=lambda point: point[0])
        path_lengths[label] = round(path_length_m([(lat, lng) for _ts, lat, lng in ordered]), 1)

    return {
        "total": len(rows),
        "with_address": with_address,
        "auto_location": len(rows) - with_address,
        "countries": countries,
        "users": labels,
        "path_length_m": path_lengths,
        "invalid_points": invalid_points,
    }
