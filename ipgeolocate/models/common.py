from pydantic import BaseModel, ConfigDict


def format_coordinate(value: float) -> str:
    """Render a coordinate as the shortest decimal string that round-trips."""
    return repr(value)


class NormalizedLocation(BaseModel):
    """Normalized geolocation data returned by any backend service.

    `ip` is the address the caller asked about, copied through unchanged; it is
    never re-read from the backend's response. Fields a backend does not provide
    stay None.
    """

    model_config = ConfigDict(frozen=True)

    ip: str
    latitude: float
    longitude: float
    city: str
    region: str | None = None
    country: str
    country_code: str | None = None
    timezone: str | None = None
    timezone_gmt: str | None = None
    isp: str | None = None
    ip_type: str | None = None

    @property
    def latitude_text(self) -> str:
        return format_coordinate(self.latitude)

    @property
    def longitude_text(self) -> str:
        return format_coordinate(self.longitude)
