"""Public lookup entry points.

A lookup resolves the service, builds the backend URL, performs exactly one
GET through the transport and normalizes the body with the backend's adapter.
Failures are raised as GeoError subclasses; nothing is retried and no other
backend is tried.

`Locator` and `AsyncLocator` are the blocking and awaitable bindings of the
same flow. The module-level functions use a default instance of each.
"""

from http import HTTPStatus
from ipaddress import IPv4Address, IPv6Address, ip_address

from ipgeolocate.adapters.base import ServiceAdapter
from ipgeolocate.errors import InvalidAddressError, TransportError
from ipgeolocate.factory import ServiceAdapterFactory
from ipgeolocate.logger import logger
from ipgeolocate.models.common import NormalizedLocation
from ipgeolocate.models.request_models import Service
from ipgeolocate.transport import AsyncHttpxTransport, AsyncTransport, FetchResponse, HttpxTransport, Transport

IPAddressLike = IPv4Address | IPv6Address | str


def check_ipv4(addr: IPv4Address | str) -> IPv4Address:
    """Parse an IPv4 address and reject private ranges."""
    try:
        address = IPv4Address(addr)
    except ValueError as exc:
        raise InvalidAddressError(str(addr), "not a valid IPv4 address") from exc
    if address.is_private:
        raise InvalidAddressError(str(address), "IP can't be private")
    return address


def check_ipv6(addr: IPv6Address | str) -> IPv6Address:
    """Parse an IPv6 address and reject anything that is not globally routable."""
    try:
        address = IPv6Address(addr)
    except ValueError as exc:
        raise InvalidAddressError(str(addr), "not a valid IPv6 address") from exc
    if not address.is_global:
        raise InvalidAddressError(str(address), "IP must be globally routable")
    return address


def check_ip_addr(addr: IPAddressLike) -> IPv4Address | IPv6Address:
    """Apply the IPv4 or IPv6 check matching the address family."""
    if not isinstance(addr, (IPv4Address, IPv6Address)):
        try:
            addr = ip_address(str(addr).strip())
        except ValueError as exc:
            raise InvalidAddressError(str(addr), "not a valid IPv4 or IPv6 address") from exc
    if isinstance(addr, IPv4Address):
        return check_ipv4(addr)
    return check_ipv6(addr)


def check_status(adapter: ServiceAdapter, response: FetchResponse) -> None:
    """Map a non-success HTTP status from the backend to TransportError."""
    status_code = response.status_code
    if response.status_ok:
        return

    if status_code == HTTPStatus.TOO_MANY_REQUESTS:
        raise TransportError(adapter.host, "rate limit or quota exceeded (HTTP 429)", status_code)
    raise TransportError(adapter.host, f"returned HTTP {status_code}", status_code)


class Locator:
    """Blocking geolocation client."""

    def __init__(
        self,
        transport: Transport | None = None,
        adapter_factory: ServiceAdapterFactory | None = None,
    ) -> None:
        self._transport = transport or HttpxTransport()
        self._adapter_factory = adapter_factory or ServiceAdapterFactory()

    def locate(self, ip: str, service: Service | str = Service.ipapi) -> NormalizedLocation:
        """Look up `ip` with the given backend; the address itself is not validated."""
        adapter = self._adapter_factory(service)
        logger.info(f"Performing lookup ip={ip} service={adapter.service.value} host={adapter.host}")
        response = self._transport.fetch(adapter.build_url(ip))
        check_status(adapter, response)
        return adapter.adapt(ip, response.body)

    def locate_ipv4(self, addr: IPv4Address | str, service: Service | str = Service.ipapi) -> NormalizedLocation:
        return self.locate(str(check_ipv4(addr)), service)

    def locate_ipv6(self, addr: IPv6Address | str, service: Service | str = Service.ipapi) -> NormalizedLocation:
        return self.locate(str(check_ipv6(addr)), service)

    def locate_ip_addr(self, addr: IPAddressLike, service: Service | str = Service.ipapi) -> NormalizedLocation:
        return self.locate(str(check_ip_addr(addr)), service)


class AsyncLocator:
    """Awaitable geolocation client; same semantics as Locator."""

    def __init__(
        self,
        transport: AsyncTransport | None = None,
        adapter_factory: ServiceAdapterFactory | None = None,
    ) -> None:
        self._transport = transport or AsyncHttpxTransport()
        self._adapter_factory = adapter_factory or ServiceAdapterFactory()

    async def locate(self, ip: str, service: Service | str = Service.ipapi) -> NormalizedLocation:
        adapter = self._adapter_factory(service)
        logger.info(f"Performing lookup ip={ip} service={adapter.service.value} host={adapter.host}")
        response = await self._transport.fetch(adapter.build_url(ip))
        check_status(adapter, response)
        return adapter.adapt(ip, response.body)

    async def locate_ipv4(
        self, addr: IPv4Address | str, service: Service | str = Service.ipapi
    ) -> NormalizedLocation:
        return await self.locate(str(check_ipv4(addr)), service)

    async def locate_ipv6(
        self, addr: IPv6Address | str, service: Service | str = Service.ipapi
    ) -> NormalizedLocation:
        return await self.locate(str(check_ipv6(addr)), service)

    async def locate_ip_addr(
        self, addr: IPAddressLike, service: Service | str = Service.ipapi
    ) -> NormalizedLocation:
        return await self.locate(str(check_ip_addr(addr)), service)


_locator = Locator()
_async_locator = AsyncLocator()


def locate(ip: str, service: Service | str = Service.ipapi) -> NormalizedLocation:
    return _locator.locate(ip, service)


def locate_ipv4(addr: IPv4Address | str, service: Service | str = Service.ipapi) -> NormalizedLocation:
    return _locator.locate_ipv4(addr, service)


def locate_ipv6(addr: IPv6Address | str, service: Service | str = Service.ipapi) -> NormalizedLocation:
    return _locator.locate_ipv6(addr, service)


def locate_ip_addr(addr: IPAddressLike, service: Service | str = Service.ipapi) -> NormalizedLocation:
    return _locator.locate_ip_addr(addr, service)


async def alocate(ip: str, service: Service | str = Service.ipapi) -> NormalizedLocation:
    return await _async_locator.locate(ip, service)


async def alocate_ipv4(addr: IPv4Address | str, service: Service | str = Service.ipapi) -> NormalizedLocation:
    return await _async_locator.locate_ipv4(addr, service)


async def alocate_ipv6(addr: IPv6Address | str, service: Service | str = Service.ipapi) -> NormalizedLocation:
    return await _async_locator.locate_ipv6(addr, service)


async def alocate_ip_addr(addr: IPAddressLike, service: Service | str = Service.ipapi) -> NormalizedLocation:
    return await _async_locator.locate_ip_addr(addr, service)
