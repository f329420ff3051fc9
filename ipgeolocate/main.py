from typing import Annotated

from fastapi import Depends, FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError

from ipgeolocate.errors import (
    ExtractError,
    InvalidAddressError,
    ParseError,
    QuotaExceededError,
    TransportError,
    UnknownServiceError,
)
from ipgeolocate.exception_handlers import (
    pydantic_validation_exception_handler,
    request_validation_exception_handler,
    unhandled_exception_handler,
)
from ipgeolocate.locator import AsyncLocator
from ipgeolocate.logger import configure_logging, logger
from ipgeolocate.models.common import NormalizedLocation
from ipgeolocate.models.request_models import LocateRequest
from ipgeolocate.models.response_models import HealthResponse, LocateResponse

configure_logging()

app = FastAPI(
    title="IP Geolocation Service",
    version="0.1.0",
    description="Looks up an IP address with one of several public geolocation backends.",
)
logger.info("Started IP Geolocation Service")


def get_locator() -> AsyncLocator:
    """Dependency to provide an AsyncLocator instance."""
    return AsyncLocator()


# Register global exception handlers using the shared handlers module.
app.add_exception_handler(ValidationError, pydantic_validation_exception_handler)
app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)


def _error(status_code: int, code: str, exc: Exception, service: str) -> HTTPException:
    return HTTPException(
        status_code=status_code,
        detail={
            "code": code,
            "message": str(exc),
            "service": service,
        },
    )


@app.get(
    "/health",
    tags=["health"],
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    summary="Health check",
)
async def health() -> HealthResponse:
    """Basic health check endpoint."""
    return HealthResponse(status="ok")


@app.get(
    "/v1/ip/lookup",
    response_model=LocateResponse,
    status_code=status.HTTP_200_OK,
    tags=["ip"],
    summary="Look up geolocation information for an IP address.",
)
async def ip_lookup(
    request: Request,
    query: Annotated[LocateRequest, Depends()],
    locator: Annotated[AsyncLocator, Depends(get_locator)],
) -> LocateResponse:
    """Look up geolocation information for `query.ip` using `query.service`.

    Private IPv4 and non-global IPv6 addresses are rejected before any backend is called.
    """
    ip = query.ip
    service = query.service.value
    context = f"path={request.url.path} method={request.method} ip={ip} service={service}"

    try:
        logger.info(f"Performing IP lookup {context}")
        data: NormalizedLocation = await locator.locate_ip_addr(ip, service)
    except InvalidAddressError as exc:
        logger.error(f"Address rejected before lookup {context} error={exc}")
        raise _error(status.HTTP_400_BAD_REQUEST, "invalid_ip", exc, service) from exc
    except UnknownServiceError as exc:
        logger.error(f"Unknown service requested {context} error={exc}")
        raise _error(status.HTTP_400_BAD_REQUEST, "unknown_service", exc, service) from exc
    except QuotaExceededError as exc:
        logger.error(f"Backend quota exceeded {context} error={exc}")
        raise _error(status.HTTP_429_TOO_MANY_REQUESTS, "quota_exceeded", exc, service) from exc
    except TransportError as exc:
        logger.exception(f"Backend request failed {context} host={exc.host} error={exc}")
        raise _error(status.HTTP_502_BAD_GATEWAY, "upstream_error", exc, service) from exc
    except (ParseError, ExtractError) as exc:
        logger.exception(f"Backend returned an unusable payload {context} error={exc}")
        raise _error(status.HTTP_502_BAD_GATEWAY, "upstream_payload_error", exc, service) from exc

    return LocateResponse(service=service, **data.model_dump())
