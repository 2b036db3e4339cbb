"""Reverse geocoding through the OpenCage API."""

from __future__ import annotations

from dataclasses import dataclass

from vaketracker.common.http import HttpClient, HttpRequestError, TimeoutConfig

DEFAULT_ENDPOINT = "https://api.opencagedata.com/geocode/v1/json"


@dataclass(frozen=True)
class GeocodeResult:
    address: str
    country: str
    state: str


class OpenCageGeocoder:
    def __init__(
        self,
        api_key: str,
        *,
        endpoint: str = DEFAULT_ENDPOINT,
        http_client: HttpClient | None = None,
        timeout_seconds: float = 20.0,
    ) -> None:
        self.api_key = api_key
        self.endpoint = endpoint
        self.http_client = http_client or HttpClient()
        self.timeout = TimeoutConfig(connect=timeout_seconds, read=timeout_seconds)

    def reverse(self, lat: float, lng: float) -> GeocodeResult | None:
        """Return the first match for the point, or None when OpenCage has no result.

        Transport and HTTP failures, and non-object payloads, raise ``HttpRequestError``.
        """
        payload = self.http_client.get_json(
            self.endpoint,
            source_type="geocoder",
            params={"q": f"{lat},{lng}", "key": self.api_key, "limit": 1},
            timeout=self.timeout,
        )
        if not isinstance(payload, dict):
            raise HttpRequestError("Unexpected payload shape from geocoder")
        results = payload.get("results") or []
        if not results:
            return None
        first = results[0]
        components = first.get("components") or {}
        return GeocodeResult(
            address=first.get("formatted") or "",
            country=components.get("country") or "",
            state=components.get("state") or components.get("province") or "",
        )
