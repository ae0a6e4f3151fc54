"""Decoding of an attribute's declared type and constraint fields."""

from __future__ import annotations

import re
from collections.abc import Callable

from firmconfig.core.errors import FilesystemError, MalformedAttributeError
from firmconfig.core.model import AttributeType, EnumerationType, IntegerType, StringType

_INT_RE = re.compile(r"^[+-]?[0-9]{1,20}$")
INT_MIN = -(2**63)
INT_MAX = 2**63 - 1
_VALUE_SEPARATOR_RE = re.compile(r"[;\n]")

INTEGER_TOKEN = "integer"
STRING_TOKEN = "string"
ENUMERATION_TOKEN = "enumeration"

FieldReader = Callable[[str], str]


def parse_int(text: str, *, context: str) -> int:
    normalized = text.strip()
    if not _INT_RE.match(normalized):
        raise MalformedAttributeError(f"{context} must be an integer, got {text!r}")
    try:
        value = int(normalized)
    except ValueError as exc:
        raise MalformedAttributeError(f"{context} must be an integer, got {text!r}") from exc
    if not INT_MIN <= value <= INT_MAX:
        raise MalformedAttributeError(f"{context} {value} is outside the signed 64-bit range")
    return value


def parse_possible_values(text: str) -> tuple[str, ...]:
    values = (value.strip() for value in _VALUE_SEPARATOR_RE.split(text))
    return tuple(value for value in values if value)


def _required(read_field: FieldReader, field: str) -> str:
    try:
        return read_field(field)
    except FilesystemError as exc:
        raise MalformedAttributeError(f"Missing or unreadable constraint field '{field}': {exc}") from exc


def decode_type(type_text: str, read_field: FieldReader) -> AttributeType:
    """Decode the type indicator and the constraint fields it requires.

    `read_field` is called with a constraint file name such as ``min_value``
    and returns its text, raising a `FilesystemError` when it cannot.
    """
    token = type_text.strip().lower()

    if token == INTEGER_TOKEN:
        minimum = parse_int(_required(read_field, "min_value"), context="min_value")
        maximum = parse_int(_required(read_field, "max_value"), context="max_value")
        step = parse_int(_required(read_field, "scalar_increment"), context="scalar_increment")
        if minimum > maximum:
            raise MalformedAttributeError(f"min_value {minimum} exceeds max_value {maximum}")
        return IntegerType(min=minimum, max=maximum, step=step)

    if token == STRING_TOKEN:
        min_length = parse_int(_required(read_field, "min_length"), context="min_length")
        max_length = parse_int(_required(read_field, "max_length"), context="max_length")
        if min_length < 0 or max_length < 0:
            raise MalformedAttributeError("String length bounds must not be negative")
        if min_length > max_length:
            raise MalformedAttributeError(f"min_length {min_length} exceeds max_length {max_length}")
        return StringType(min_length=min_length, max_length=max_length)

    if token == ENUMERATION_TOKEN:
        return EnumerationType(possible_values=parse_possible_values(_required(read_field, "possible_values")))

    raise MalformedAttributeError(f"Unsupported attribute type '{type_text.strip()}'")
