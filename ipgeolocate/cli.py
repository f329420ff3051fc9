# Command-line lookup: ipgeolocate [ADDRESS] [--service SERVICE]
import argparse
import sys

from ipgeolocate.config import DEFAULT_SERVICE, PUBLIC_IP_URL, TIMEOUT_SECONDS
from ipgeolocate.errors import GeoError, TransportError
from ipgeolocate.locator import Locator
from ipgeolocate.logger import configure_logging, logger
from ipgeolocate.models.common import NormalizedLocation
from ipgeolocate.models.request_models import Service
from ipgeolocate.transport import HttpxTransport, Transport, host_of

FIELD_LABELS = (
    ("ip", "IP"),
    ("latitude", "Latitude"),
    ("longitude", "Longitude"),
    ("city", "City"),
    ("region", "Region"),
    ("country_code", "Country Code"),
    ("country", "Country"),
    ("timezone_gmt", "Timezone (GMT)"),
    ("timezone", "Timezone"),
    ("isp", "ISP"),
    ("ip_type", "IP type"),
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="ipgeolocate", description="Finds IP locations")
    parser.add_argument(
        "address",
        nargs="?",
        metavar="ADDRESS",
        help="IP address to look up; if omitted your public IP address is used",
    )
    parser.add_argument(
        "-s",
        "--service",
        choices=[s.value for s in Service],
        default=DEFAULT_SERVICE,
        help="geolocation API to query (default: %(default)s)",
    )
    parser.add_argument("--timeout", type=float, default=TIMEOUT_SECONDS, help="request timeout in seconds")
    parser.add_argument("--all", action="store_true", help="print every field the service returned")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
        default=None,
        help="logging verbosity (default: WARNING)",
    )
    return parser


def get_public_ip(transport: Transport) -> str:
    """Ask PUBLIC_IP_URL for the address this machine is seen from."""
    response = transport.fetch(PUBLIC_IP_URL)
    if not response.status_ok:
        raise TransportError(host_of(PUBLIC_IP_URL), f"returned HTTP {response.status_code}", response.status_code)
    return response.body.strip()


def format_location(service: str, location: NormalizedLocation, show_all: bool = False) -> str:
    if not show_all:
        return f"{service}: {location.ip} - {location.city} ({location.country})"

    values = location.model_dump()
    values["latitude"] = location.latitude_text
    values["longitude"] = location.longitude_text
    return "\n".join(f"{label}: {values[name]}" for name, label in FIELD_LABELS if values[name] is not None)


def main(argv: list[str] | None = None, transport: Transport | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level or "WARNING")

    transport = transport or HttpxTransport(timeout_seconds=args.timeout)
    locator = Locator(transport=transport)

    try:
        ip = args.address
        if not ip:
            ip = get_public_ip(transport)
            print(f"No IP address set, using network IP address {ip}")
        location = locator.locate(ip, args.service)
    except GeoError as exc:
        logger.debug(f"Lookup failed service={args.service} error={repr(exc)}")
        print(f"Error getting data: {exc}", file=sys.stderr)
        return 1

    print(format_location(args.service, location, show_all=args.all))
    return 0


if __name__ == "__main__":
    sys.exit(main())
