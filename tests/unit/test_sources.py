import pytest

from vaketracker.common.http import HttpRequestError
from vaketracker.common.permissions import Role
from vaketracker.sources.geocode import OpenCageGeocoder
from vaketracker.sources.supabase import LOCATION_COLUMNS, SupabaseSource


class FakeHttpClient:
    def __init__(self, responses=None):
        self.responses = list(responses or [])
        self.calls = []

    def get_json(self, url, **kwargs):
        self.calls.append(("GET", url, kwargs))
        return self.responses.pop(0)

    def post_json(self, url, **kwargs):
        self.calls.append(("POST", url, kwargs))
        return None


def test_fetch_locations_queries_postgrest_with_auth_headers():
    client = FakeHttpClient([[{"id": 1}]])
    source = SupabaseSource("https://demo.supabase.co/", "anon", access_token="jwt", http_client=client)

    assert source.fetch_locations() == [{"id": 1}]
    method, url, kwargs = client.calls[0]
    assert method == "GET"
    assert url == "https://demo.supabase.co/rest/v1/locations"
    assert kwargs["source_type"] == "supabase"
    assert kwargs["params"]["select"] == LOCATION_COLUMNS
    assert kwargs["headers"] == {"apikey": "anon", "Authorization": "Bearer jwt"}


def test_fetch_tracking_filters_by_user_and_honours_table_overrides():
    client = FakeHttpClient([[]])
    source = SupabaseSource("https://demo.supabase.co", "anon", http_client=client, tables={"tracking": "gps_points"})

    source.fetch_tracking(user_id="u1")
    _method, url, kwargs = client.calls[0]
    assert url.endswith("/rest/v1/gps_points")
    assert kwargs["params"]["user_id"] == "eq.u1"
    assert kwargs["headers"]["Authorization"] == "Bearer anon"


def test_select_rejects_non_list_payload():
    source = SupabaseSource("https://demo.supabase.co", "anon", http_client=FakeHttpClient([{"message": "oops"}]))
    with pytest.raises(HttpRequestError):
        source.fetch_profiles()


def test_role_and_permissions_lookup():
    client = FakeHttpClient(
        [
            [{"role": "salesman"}, {"role": "admin"}],
            [{"permission_name": "view_analytics", "enabled": True}],
        ]
    )
    source = SupabaseSource("https://demo.supabase.co", "anon", http_client=client)

    assert source.current_user_role("u1") is Role.ADMIN
    assert source.fetch_permissions("u1") == {"view_analytics": True}


def test_insert_location_posts_minimal_return():
    client = FakeHttpClient()
    source = SupabaseSource("https://demo.supabase.co", "anon", http_client=client)
    source.insert_location({"user_id": "u1"})

    method, url, kwargs = client.calls[0]
    assert method == "POST"
    assert url.endswith("/rest/v1/locations")
    assert kwargs["body"] == {"user_id": "u1"}
    assert kwargs["headers"]["Prefer"] == "return=minimal"


def test_reverse_geocode_reads_first_result():
    client = FakeHttpClient(
        [
            {
                "results": [
                    {"formatted": "Antigua Guatemala", "components": {"country": "Guatemala", "province": "Sacatepéquez"}},
                    {"formatted": "ignored", "components": {}},
                ]
            }
        ]
    )
    geocoder = OpenCageGeocoder("key", http_client=client)
    result = geocoder.reverse(14.56, -90.73)

    assert result.address == "Antigua Guatemala"
    assert result.country == "Guatemala"
    assert result.state == "Sacatepéquez"
    _method, _url, kwargs = client.calls[0]
    assert kwargs["source_type"] == "geocoder"
    assert kwargs["params"] == {"q": "14.56,-90.73", "key": "key", "limit": 1}


def test_reverse_geocode_without_results():
    geocoder = OpenCageGeocoder("key", http_client=FakeHttpClient([{"results": []}]))
    assert geocoder.reverse(0.0, 0.0) is None


def test_reverse_geocode_rejects_non_object_payload():
    geocoder = OpenCageGeocoder("key", http_client=FakeHttpClient([[{"formatted": "x"}]]))
    with pytest.raises(HttpRequestError):
        geocoder.reverse(14.6, -90.5)
