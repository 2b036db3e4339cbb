"""Read/write access to the hosted Supabase (PostgREST) tables."""

from __future__ import annotations

from typing import Any

from vaketracker.common.http import HttpClient, HttpRequestError
from vaketracker.common.permissions import Role, permissions_from_rows

DEFAULT_TABLES = {
    "locations": "locations",
    "tracking": "location_tracking",
    "profiles": "profiles",
    "user_roles": "user_roles",
    "permissions": "user_permissions",
}

LOCATION_COLUMNS = "id,user_id,latitude,longitude,country,state,visit_type,address,created_at"
TRACKING_COLUMNS = "id,user_id,latitude,longitude,country,state,address,created_at"
PROFILE_COLUMNS = "user_id,email,first_name,last_name,country"


class SupabaseSource:
    def __init__(
        self,
        url: str,
        api_key: str,
        *,
        access_token: str | None = None,
        http_client: HttpClient | None = None,
        tables: dict[str, str] | None = None,
    ) -> None:
        self.base_url = url.rstrip("/")
        self.api_key = api_key
        self.access_token = access_token or api_key
        self.http_client = http_client or HttpClient()
        self.tables = {**DEFAULT_TABLES, **(tables or {})}

    def _url(self, table_key: str) -> str:
        return f"{self.base_url}/rest/v1/{self.tables[table_key]}"

    def _headers(self) -> dict[str, str]:
        return {
            "apikey": self.api_key,
            "Authorization": f"Bearer {self.access_token}",
        }

    def _select(self, table_key: str, params: dict[str, Any]) -> list[dict]:
        payload = self.http_client.get_json(
            self._url(table_key),
            source_type="supabase",
            params=params,
            headers=self._headers(),
        )
        if not isinstance(payload, list):
            raise HttpRequestError(f"Unexpected payload shape from table {self.tables[table_key]}")
        return payload

    def fetch_locations(self) -> list[dict]:
        return self._select("locations", {"select": LOCATION_COLUMNS, "order": "created_at.desc"})

    def fetch_tracking(self, user_id: str | None = None) -> list[dict]:
        params = {"select": TRACKING_COLUMNS, "order": "created_at.desc"}
        if user_id is not None:
            params["user_id"] = f"eq.{user_id}"
        return self._select("tracking", params)

    def fetch_profiles(self) -> list[dict]:
        return self._select("profiles", {"select": PROFILE_COLUMNS})

    def current_user_role(self, user_id: str) -> Role:
        rows = self._select("user_roles", {"select": "role", "user_id": f"eq.{user_id}"})
        roles = {row.get("role") for row in rows}
        if Role.ADMIN.value in roles:
            return Role.ADMIN
        return Role.SALESMAN

    def fetch_permissions(self, user_id: str) -> dict[str, bool]:
        rows = self._select(
            "permissions",
            {"select": "permission_name,enabled", "user_id": f"eq.{user_id}"},
        )
        return permissions_from_rows(rows)

    def insert_location(self, row: dict[str, Any]) -> None:
        headers = self._headers()
        headers["Prefer"] = "return=minimal"
        self.http_client.post_json(
            self._url("locations"),
            source_type="supabase",
            body=row,
            headers=headers,
        )
