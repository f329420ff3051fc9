from typing import Any

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from ipgeolocate.logger import logger


def _get_service_from_request(request: Request) -> str | None:
    """Best-effort extraction of the `service` query parameter used by /v1/ip/lookup."""
    return request.query_params.get("service")


def _normalize_pydantic_errors(errors: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Make sure Pydantic error dicts are JSON-serializable."""
    normalized: list[dict[str, Any]] = []
    for error in errors:
        e = dict(error)
        ctx = e.get("ctx")
        if isinstance(ctx, dict):
            e["ctx"] = {k: str(v) for k, v in ctx.items()}
        normalized.append(e)
    return normalized


def _build_validation_error_payload(exc: ValidationError | RequestValidationError) -> dict:
    """Reduce validation errors to a `code`/`message` pair.

    Raw validation details are logged, not returned.
    """
    code = "invalid_request"
    message = "Invalid request parameters"

    for error in _normalize_pydantic_errors(exc.errors()):
        loc = error.get("loc", ())
        if not loc:
            continue
        if loc[-1] == "ip":
            code = "invalid_ip"
            message = "The supplied IP address is not a valid IPv4 or IPv6 address."
            break
        if loc[-1] == "service":
            code = "unknown_service"
            message = "The supplied service is not a known geolocation backend."
            break

    return {
        "code": code,
        "message": message,
    }


async def pydantic_validation_exception_handler(request: Request, exc: ValidationError) -> JSONResponse:
    """Handle Pydantic validation errors raised during dependency resolution."""
    service = _get_service_from_request(request)
    logger.info(
        "Pydantic validation error during request handling "
        f"path={request.url.path} method={request.method} service={service} errors={exc.errors()}"
    )
    payload = _build_validation_error_payload(exc)
    payload["service"] = service
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=payload)


async def request_validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle FastAPI query parameter validation errors (missing ip, unknown service)."""
    service = _get_service_from_request(request)
    logger.info(
        "Request validation error during request handling "
        f"path={request.url.path} method={request.method} service={service} errors={exc.errors()}"
    )
    payload = _build_validation_error_payload(exc)
    payload["service"] = service
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=payload)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all handler for unexpected errors to return a structured 500 response."""
    service = _get_service_from_request(request)
    logger.exception(
        "Unhandled exception while processing request: "
        f"{repr(exc)} path={request.url.path} method={request.method} service={service}"
    )
    content: dict[str, Any] = {
        "code": "internal_error",
        "message": "An unexpected error occurred while processing the request.",
        "service": service,
    }
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=content,
    )
