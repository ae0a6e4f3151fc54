"""Assembly of one attribute directory into an `Attribute`."""

from __future__ import annotations

import os

from firmconfig.core.errors import FilesystemError, MalformedAttributeError, NotFoundError
from firmconfig.core.model import AccessDenied, Attribute, ValueOutcome
from firmconfig.core.type_decoder import decode_type
from firmconfig.sysfs.reader import SysfsReader


def _describe(path: bytes) -> str:
    return os.fsdecode(path)


def _read_required(reader: SysfsReader, directory: bytes, field: str) -> str:
    path = os.path.join(directory, os.fsencode(field))
    try:
        return reader.read_text(path)
    except FilesystemError as exc:
        raise MalformedAttributeError(f"Attribute {_describe(directory)}: {exc}") from exc


def _read_outcome(reader: SysfsReader, directory: bytes, field: str) -> ValueOutcome:
    path = os.path.join(directory, os.fsencode(field))
    try:
        return reader.read_value(path)
    except NotFoundError as exc:
        raise MalformedAttributeError(f"Attribute {_describe(directory)} has no {field}") from exc


def read_attribute(directory: bytes, reader: SysfsReader | None = None) -> Attribute:
    """Build an `Attribute` from ``<device>/attributes/<name>``.

    Permission-denied reads of current_value or default_value become an
    `AccessDenied` outcome for that field only; every other failure raises.
    """
    reader = reader or SysfsReader()
    display_name = _read_required(reader, directory, "display_name")
    type_text = _read_required(reader, directory, "type")

    def read_field(field: str) -> str:
        return reader.read_text(os.path.join(directory, os.fsencode(field)))

    try:
        tpe = decode_type(type_text, read_field)
    except MalformedAttributeError as exc:
        raise MalformedAttributeError(f"Attribute {_describe(directory)}: {exc}") from exc

    current_value = _read_outcome(reader, directory, "current_value")
    default_value = _read_outcome(reader, directory, "default_value")

    return Attribute(
        name=os.path.basename(directory),
        display_name=display_name,
        tpe=tpe,
        current_value=current_value,
        default_value=default_value,
    )


def is_access_denied(value: ValueOutcome) -> bool:
    return isinstance(value, AccessDenied)
