from enum import Enum
from ipaddress import ip_address

from pydantic import BaseModel, Field, field_validator

from ipgeolocate.config import DEFAULT_SERVICE
from ipgeolocate.errors import UnknownServiceError


class Service(str, Enum):
    """Supported IP geolocation backends."""

    ipwhois = "ipwhois"
    ipapi = "ipapi"
    ipapico = "ipapico"
    freegeoip = "freegeoip"


def resolve_service(service: Service | str) -> Service:
    """Turn a service selector or its exact (case-sensitive) name into a Service."""
    if isinstance(service, Service):
        return service
    try:
        return Service(service)
    except ValueError as exc:
        raise UnknownServiceError(str(service)) from exc


class LocateRequest(BaseModel):
    """Query parameters of the lookup endpoint.

    `service` selects the upstream backend; it defaults to the configured
    IPGEOLOCATE_DEFAULT_SERVICE.
    """

    ip: str = Field(
        description="IPv4 or IPv6 address to look up.",
        examples=["1.1.1.1", "2606:4700:4700::1111"],
    )
    service: Service = Field(
        default=DEFAULT_SERVICE,
        description="Backend service to query.",
        examples=[s.value for s in Service],
    )

    @field_validator("ip", mode="before")
    @classmethod
    def _validate_ip(cls, value: str) -> str:
        """Require a syntactically valid IPv4 or IPv6 literal."""
        value_str = str(value).strip()
        try:
            ip_address(value_str)
        except ValueError as exc:
            raise ValueError("ip must be a valid IPv4 or IPv6 address") from exc
        return value_str
