import json
from http import HTTPStatus
from typing import Any

import httpx

from ipgeolocate.transport import FetchResponse

IP_API_PAYLOAD: dict[str, Any] = {
    "status": "success",
    "country": "Australia",
    "countryCode": "AU",
    "region": "NSW",
    "regionName": "New South Wales",
    "city": "Sydney",
    "zip": "1001",
    "lat": -33.8688,
    "lon": 151.209,
    "timezone": "Australia/Sydney",
    "isp": "Cloudflare, Inc",
    "org": "APNIC and Cloudflare DNS Resolver project",
    "as": "AS13335 Cloudflare, Inc.",
    "query": "1.1.1.1",
}

IPWHOIS_PAYLOAD: dict[str, Any] = {
    "ip": "1.1.1.1",
    "success": True,
    "type": "IPv4",
    "continent": "Oceania",
    "country": "Australia",
    "country_code": "AU",
    "region": "New South Wales",
    "city": "Sydney",
    "latitude": "-33.8688197",
    "longitude": "151.2092955",
    "isp": "Cloudflare, Inc.",
    "timezone": "Australia/Sydney",
    "timezone_gmt": "GMT +10:00",
}

IPAPI_CO_PAYLOAD: dict[str, Any] = {
    "ip": "8.8.8.8",
    "city": "Mountain View",
    "region": "California",
    "region_code": "CA",
    "country": "US",
    "country_name": "United States",
    "postal": "94043",
    "latitude": 37.42301,
    "longitude": -122.083352,
    "timezone": "America/Los_Angeles",
    "org": "GOOGLE",
}

FREEGEOIP_PAYLOAD: dict[str, Any] = {
    "ip": "8.8.8.8",
    "country_code": "US",
    "country_name": "United States",
    "region_code": "CA",
    "region_name": "California",
    "city": "Mountain View",
    "zip_code": "94043",
    "time_zone": "America/Los_Angeles",
    "latitude": 37.4223,
    "longitude": -122.085,
    "metro_code": 807,
}


def body_of(payload: dict[str, Any], **overrides: Any) -> str:
    """Serialize a payload, replacing keys from `overrides` (None removes the key)."""
    data = dict(payload)
    for key, value in overrides.items():
        if value is None:
            data.pop(key, None)
        else:
            data[key] = value
    return json.dumps(data)


def without(payload: dict[str, Any], *keys: str) -> str:
    return json.dumps({k: v for k, v in payload.items() if k not in keys})


class StubTransport:
    """Blocking transport double that returns a fixed response and records URLs."""

    def __init__(self, body: str = "{}", status_code: int = HTTPStatus.OK) -> None:
        self._response = FetchResponse(status_code=status_code, body=body)
        self.urls: list[str] = []

    def fetch(self, url: str) -> FetchResponse:
        self.urls.append(url)
        return self._response


class AsyncStubTransport(StubTransport):
    """Async variant of StubTransport."""

    async def fetch(self, url: str) -> FetchResponse:
        self.urls.append(url)
        return self._response


class MockResponse:
    def __init__(self, status_code: int, text: str = "") -> None:
        self.status_code = status_code
        self.text = text


class MockClient:
    """Minimal context-manager mock for httpx.Client."""

    def __init__(self, response: MockResponse) -> None:
        self._response = response
        self.requested: list[str] = []

    def __enter__(self) -> "MockClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        return None

    def get(self, url: str) -> MockResponse:
        self.requested.append(url)
        return self._response


class MockAsyncClient:
    """Minimal async context-manager mock for httpx.AsyncClient."""

    def __init__(self, response: MockResponse) -> None:
        self._response = response
        self.requested: list[str] = []

    async def __aenter__(self) -> "MockAsyncClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        return None

    async def get(self, url: str) -> MockResponse:
        self.requested.append(url)
        return self._response


class FailingClient:
    """Client that raises a RequestError on enter to simulate network failure."""

    def __init__(self, url: str, *args: Any, **kwargs: Any) -> None:
        self._url = url

    def __enter__(self) -> "FailingClient":
        request = httpx.Request("GET", self._url)
        raise httpx.ConnectError("Network failure", request=request)

    def __exit__(self, exc_type, exc, tb) -> None:
        return None


class FailingAsyncClient:
    """Async client that raises a RequestError on enter to simulate network failure.

    The target URL is provided at construction time, so tests for different backends
    can reuse this implementation with different base URLs.
    """

    def __init__(self, url: str, *args: Any, **kwargs: Any) -> None:
        self._url = url

    async def __aenter__(self) -> "FailingAsyncClient":
        request = httpx.Request("GET", self._url)
        raise httpx.ConnectError("Network failure", request=request)

    async def __aexit__(self, exc_type, exc, tb) -> None:
        return None
