from pydantic import BaseModel

from ipgeolocate.models.request_models import Service


class HealthResponse(BaseModel):
    """Response model for the health check endpoint."""

    status: str


class LocateResponse(BaseModel):
    """Response model for IP geolocation lookup."""

    service: Service
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
