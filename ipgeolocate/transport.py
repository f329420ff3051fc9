from http import HTTPStatus
from typing import Protocol

import httpx
from pydantic import BaseModel

from ipgeolocate.config import TIMEOUT_SECONDS
from ipgeolocate.errors import TransportError
from ipgeolocate.logger import logger


class FetchResponse(BaseModel):
    """Status and body of one completed GET request."""

    status_code: int
    body: str

    @property
    def status_ok(self) -> bool:
        return HTTPStatus.OK <= self.status_code < HTTPStatus.MULTIPLE_CHOICES


class Transport(Protocol):
    def fetch(self, url: str) -> FetchResponse: ...


class AsyncTransport(Protocol):
    async def fetch(self, url: str) -> FetchResponse: ...


def host_of(url: str) -> str:
    return httpx.URL(url).host


class HttpxTransport:
    """Blocking transport backed by httpx.Client.

    A new client is opened per request, so instances can be shared between
    threads. Network failures are raised as TransportError; HTTP error statuses
    are returned to the caller unchanged.
    """

    def __init__(self, timeout_seconds: float = TIMEOUT_SECONDS) -> None:
        self._timeout_seconds = timeout_seconds

    def fetch(self, url: str) -> FetchResponse:
        logger.debug(f"GET url={url} timeout={self._timeout_seconds}")
        try:
            with httpx.Client(timeout=self._timeout_seconds) as client:
                response = client.get(url)
        except httpx.RequestError as exc:
            raise TransportError(host_of(url), f"request failed: {repr(exc)}") from exc
        return FetchResponse(status_code=response.status_code, body=response.text)


class AsyncHttpxTransport:
    """Asynchronous twin of HttpxTransport backed by httpx.AsyncClient."""

    def __init__(self, timeout_seconds: float = TIMEOUT_SECONDS) -> None:
        self._timeout_seconds = timeout_seconds

    async def fetch(self, url: str) -> FetchResponse:
        logger.debug(f"GET url={url} timeout={self._timeout_seconds}")
        try:
            async with httpx.AsyncClient(timeout=self._timeout_seconds) as client:
                response = await client.get(url)
        except httpx.RequestError as exc:
            raise TransportError(host_of(url), f"request failed: {repr(exc)}") from exc
        return FetchResponse(status_code=response.status_code, body=response.text)
