"""Role and permission checks for dashboard visibility."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, Mapping, TypeVar

from vaketracker.common.models import LocatedRecord

T = TypeVar("T", LocatedRecord, Mapping[str, Any])

PERMISSION_NAMES = (
    "view_team_locations",
    "view_team_activities",
    "access_admin_panel",
    "manage_users",
    "view_analytics",
)


class Role(str, Enum):
    ADMIN = "admin"
    SALESMAN = "salesman"

    @classmethod
    def parse(cls, value: str | None) -> "Role":
        if value == cls.ADMIN.value:
            return cls.ADMIN
        return cls.SALESMAN


@dataclass(frozen=True)
class Viewer:
    user_id: str
    role: Role = Role.SALESMAN
    permissions: Mapping[str, bool] = field(default_factory=dict)


def has_permission(viewer: Viewer, permission_name: str) -> bool:
    if viewer.role is Role.ADMIN:
        return True
    return bool(viewer.permissions.get(permission_name, False))


def _owner(record: LocatedRecord | Mapping[str, Any]) -> str | None:
    if isinstance(record, LocatedRecord):
        return record.user_id
    return record.get("user_id")


def visible_records(records: Iterable[T], viewer: Viewer) -> list[T]:
    records = list(records)
    if has_permission(viewer, "view_team_locations"):
        return records
    return [record for record in records if _owner(record) == viewer.user_id]


def permissions_from_rows(rows: Iterable[Mapping[str, Any]]) -> dict[str, bool]:
    return {row["permission_name"]: bool(row.get("enabled")) for row in rows if row.get("permission_name")}
