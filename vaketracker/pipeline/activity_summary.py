"""Per-user activity totals broken down by visit type."""

from __future__ import annotations

from typing import Any, Iterable, Mapping

# Counter column -> lowercase fragment searched for in ``visit_type``.
# The first matching fragment wins.
VISIT_TYPE_COUNTERS = (
    ("visita_en_frio", "visita en frío"),
    ("negociacion_en_curso", "negociación en curso"),
    ("visita_pre_entrega", "visita pre-entrega"),
    ("visita_tecnica", "visita técnica"),
    ("visita_cortesia", "visita de cortesía"),
)


def _empty_summary(profile: Mapping[str, Any]) -> dict:
    summary = {
        "user_email": profile.get("email") or "",
        "first_name": profile.get("first_name") or "",
        "last_name": profile.get("last_name") or "",
        "total_activities": 0,
    }
    for column, _fragment in VISIT_TYPE_COUNTERS:
        summary[column] = 0
    return summary


def summarise_activities(
    profiles: Iterable[Mapping[str, Any]],
    locations: Iterable[Mapping[str, Any]],
) -> list[dict]:
    summaries: dict[str, dict] = {}
    for profile in profiles:
        user_id = profile.get("user_id")
        if user_id:
            summaries[user_id] = _empty_summary(profile)

    for location in locations:
        summary = summaries.get(location.get("user_id"))
        if summary is None:
            continue
        summary["total_activities"] += 1
        visit_type = (location.get("visit_type") or "").lower()
        for column, fragment in VISIT_TYPE_COUNTERS:
            if fragment in visit_type:
                summary[column] += 1
                break

    return list(summaries.values())
