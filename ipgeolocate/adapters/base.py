import json
import math
import re
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

from ipgeolocate.errors import ExtractError, ParseError, QuotaExceededError, TypeMismatchError
from ipgeolocate.extractor import FieldKind, extract, extract_optional
from ipgeolocate.logger import logger
from ipgeolocate.models.common import NormalizedLocation
from ipgeolocate.models.request_models import Service

COORDINATE_FIELDS = frozenset({"latitude", "longitude"})
DECIMAL_PATTERN = re.compile(r"-?\d+(\.\d+)?([eE][+-]?\d+)?")


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


class FieldMapping(BaseModel):
    """Maps one backend JSON key onto a NormalizedLocation field."""

    model_config = ConfigDict(frozen=True)

    key: str
    target: str
    kind: FieldKind = FieldKind.string
    required: bool = True

    @field_validator("target")
    @classmethod
    def _validate_target(cls, value: str) -> str:
        if value == "ip" or value not in NormalizedLocation.model_fields:
            raise ValueError(f"{value!r} is not a mappable NormalizedLocation field")
        return value

    def read(self, doc: dict[str, Any]) -> str | None:
        if self.required:
            return extract(doc, self.key, self.kind)
        return extract_optional(doc, self.key, self.kind)


class SuccessGate(BaseModel):
    """Boolean flag a backend uses to signal that it refused to answer."""

    model_config = ConfigDict(frozen=True)

    key: str
    expected: bool = True
    # Key holding the backend's human-readable explanation, if it sends one.
    message_key: str | None = None


class ServiceAdapter(BaseModel):
    """Declarative description of one backend plus the generic normalization over it.

    Every backend is handled by the same `adapt` code path; what differs is the
    URL template, the field table and the optional success gate.
    """

    model_config = ConfigDict(frozen=True)

    service: Service
    host: str
    url_template: str
    field_map: tuple[FieldMapping, ...]
    success_gate: SuccessGate | None = None

    def build_url(self, ip: str) -> str:
        """Substitute the raw address into the backend's URL template."""
        return self.url_template.format(ip=ip)

    def adapt(self, ip: str, raw_body: str | bytes) -> NormalizedLocation:
        """Normalize one response body into a NormalizedLocation.

        The success gate is checked before any geolocation field: a refused
        request usually carries no location data at all. Field extraction stops
        at the first missing or mistyped field.
        """
        logger.debug(f"Normalizing response service={self.service.value} ip={ip}")
        doc = self._parse_json(raw_body)
        self._check_success_gate(doc)

        values: dict[str, Any] = {"ip": ip}
        try:
            for mapping in self.field_map:
                value = mapping.read(doc)
                if value is not None and mapping.target in COORDINATE_FIELDS:
                    value = self._parse_coordinate(mapping.key, value)
                values[mapping.target] = value
        except ExtractError as exc:
            logger.warning(
                f"Failed to normalize response service={self.service.value} ip={ip} "
                f"field={exc.field} error={type(exc).__name__}"
            )
            raise

        return NormalizedLocation(**values)

    def _parse_json(self, raw_body: str | bytes) -> dict[str, Any]:
        try:
            doc = json.loads(raw_body, parse_constant=_reject_constant)
        except ValueError as exc:
            raise ParseError(self.service.value, str(exc)) from exc
        if not isinstance(doc, dict):
            raise ParseError(self.service.value, f"expected a JSON object, got {type(doc).__name__}")
        return doc

    def _check_success_gate(self, doc: dict[str, Any]) -> None:
        gate = self.success_gate
        if gate is None:
            return

        flag = extract(doc, gate.key, FieldKind.boolean) == "true"
        if flag == gate.expected:
            return

        message = doc.get(gate.message_key) if gate.message_key else None
        if not isinstance(message, str):
            message = None
        logger.warning(f"Backend refused lookup service={self.service.value} message={message}")
        raise QuotaExceededError(self.service.value, message)

    @staticmethod
    def _parse_coordinate(key: str, text: str) -> float:
        """Convert coordinate text to a finite float; only plain decimal notation is accepted."""
        if DECIMAL_PATTERN.fullmatch(text) is None:
            raise TypeMismatchError(key, expected="numeric string", actual="string")
        value = float(text)
        if not math.isfinite(value):
            raise TypeMismatchError(key, expected="numeric string", actual="string")
        return value
