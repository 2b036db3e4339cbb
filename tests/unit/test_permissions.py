from vaketracker.common.models import LocatedRecord
from vaketracker.common.permissions import Role, Viewer, has_permission, permissions_from_rows, visible_records

ROWS = [
    {"user_id": "u1", "latitude": 14.6, "longitude": -90.5},
    {"user_id": "u2", "latitude": 15.6, "longitude": -91.0},
]


def test_role_parse_defaults_to_salesman():
    assert Role.parse("admin") is Role.ADMIN
    assert Role.parse("salesman") is Role.SALESMAN
    assert Role.parse(None) is Role.SALESMAN


def test_admin_has_every_permission():
    admin = Viewer(user_id="a1", role=Role.ADMIN)
    assert has_permission(admin, "manage_users")
    assert visible_records(ROWS, admin) == ROWS


def test_salesman_sees_only_own_rows_without_team_permission():
    viewer = Viewer(user_id="u1")
    assert visible_records(ROWS, viewer) == [ROWS[0]]

    records = [LocatedRecord.from_row(row) for row in ROWS]
    assert visible_records(records, viewer) == [records[0]]


def test_team_permission_grants_all_rows():
    viewer = Viewer(user_id="u1", permissions={"view_team_locations": True})
    assert visible_records(ROWS, viewer) == ROWS


def test_permissions_from_rows():
    rows = [
        {"permission_name": "view_team_locations", "enabled": True},
        {"permission_name": "manage_users", "enabled": False},
        {"enabled": True},
    ]
    assert permissions_from_rows(rows) == {"view_team_locations": True, "manage_users": False}
