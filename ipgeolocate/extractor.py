from enum import Enum
from typing import Any

from ipgeolocate.errors import MissingFieldError, TypeMismatchError


class FieldKind(str, Enum):
    """JSON primitive kinds a mapped field may be declared as."""

    string = "string"
    number = "number"
    boolean = "boolean"


_MISSING = object()


def describe_kind(value: Any) -> str:
    """Name the JSON kind of a value produced by json.loads."""
    if value is None:
        return "null"
    # bool is a subclass of int, so it has to be checked first.
    if isinstance(value, bool):
        return FieldKind.boolean.value
    if isinstance(value, (int, float)):
        return FieldKind.number.value
    if isinstance(value, str):
        return FieldKind.string.value
    if isinstance(value, dict):
        return "object"
    if isinstance(value, list):
        return "array"
    return type(value).__name__


def _lookup(doc: Any, key: str) -> Any:
    node = doc
    for part in key.split("."):
        if not isinstance(node, dict) or part not in node:
            return _MISSING
        node = node[part]
    return node


def _render(value: Any, kind: FieldKind) -> str:
    if kind is FieldKind.boolean:
        return "true" if value else "false"
    if kind is FieldKind.number:
        return repr(value)
    return value


def extract(doc: Any, key: str, kind: FieldKind) -> str:
    """Read a leaf value from a parsed JSON document and return it as text.

    `key` is a top-level key or a dotted path into nested objects. Strings are
    returned verbatim, numbers in canonical decimal form and booleans as
    "true"/"false". A value of any other kind than `kind` is a TypeMismatchError;
    nothing is coerced.
    """
    value = _lookup(doc, key)
    if value is _MISSING:
        raise MissingFieldError(key)

    actual = describe_kind(value)
    if actual != kind.value:
        raise TypeMismatchError(key, expected=kind.value, actual=actual)
    return _render(value, kind)


def extract_optional(doc: Any, key: str, kind: FieldKind) -> str | None:
    """Like extract(), but an absent key yields None instead of an error."""
    if _lookup(doc, key) is _MISSING:
        return None
    return extract(doc, key, kind)
