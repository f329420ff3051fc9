class GeoError(Exception):
    """Base error for IP geolocation lookups."""


class InvalidAddressError(GeoError):
    """Raised when an address is malformed or has no public geolocation (private/non-global)."""

    def __init__(self, address: str, reason: str = "address is not globally routable") -> None:
        self.address = address
        self.reason = reason
        super().__init__(f"Invalid address {address!r}: {reason}")


class UnknownServiceError(GeoError):
    """Raised when a free-text service name does not match any known backend."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown geolocation service: {name!r}")


class TransportError(GeoError):
    """Raised when the request to the backend failed or returned a non-success status."""

    def __init__(self, host: str, message: str, status_code: int | None = None) -> None:
        self.host = host
        self.status_code = status_code
        super().__init__(f"Couldn't connect to {host}: {message}")


class ParseError(GeoError):
    """Raised when the backend response body is not a JSON object."""

    def __init__(self, service: str, message: str) -> None:
        self.service = service
        super().__init__(f"Couldn't parse {service} response as JSON: {message}")


class ExtractError(GeoError):
    """Base error for a required field that could not be read from a response."""

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        super().__init__(message)


class MissingFieldError(ExtractError):
    """Raised when a required key is absent from the parsed document."""

    def __init__(self, field: str) -> None:
        super().__init__(field, f"Unable to find {field} in parsed JSON")


class TypeMismatchError(ExtractError):
    """Raised when a required key is present but holds the wrong JSON kind."""

    def __init__(self, field: str, expected: str, actual: str) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(field, f"Field {field} in parsed JSON is {actual}, expected {expected}")


class QuotaExceededError(GeoError):
    """Raised when a backend reports, via its success flag, that the lookup was refused."""

    def __init__(self, service: str, message: str | None = None) -> None:
        self.service = service
        self.message = message
        detail = message or "request limit reached"
        super().__init__(f"{service} refused the lookup: {detail}")
