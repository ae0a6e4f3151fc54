"""Assembly of one authentication-method directory into an `Authentication`."""

from __future__ import annotations

import os

from firmconfig.core.errors import FilesystemError, MalformedAttributeError, NotFoundError
from firmconfig.core.model import AuthRole, Authentication
from firmconfig.sysfs.reader import SysfsReader

_ENABLED_VALUES = {"1": True, "0": False}


def parse_enabled(text: str, *, context: str) -> bool:
    enabled = _ENABLED_VALUES.get(text.strip())
    if enabled is None:
        raise MalformedAttributeError(f"{context} must be 0 or 1, got {text!r}")
    return enabled


def read_authentication(directory: bytes, reader: SysfsReader | None = None) -> Authentication:
    reader = reader or SysfsReader()
    shown = os.fsdecode(directory)

    try:
        role_code = reader.read_text(os.path.join(directory, b"role"))
        enabled_text = reader.read_text(os.path.join(directory, b"is_enabled"))
    except FilesystemError as exc:
        raise MalformedAttributeError(f"Authentication {shown}: {exc}") from exc

    try:
        mechanism: str | None = reader.read_text(os.path.join(directory, b"mechanism"))
    except NotFoundError:
        mechanism = None
    except FilesystemError as exc:
        raise MalformedAttributeError(f"Authentication {shown}: {exc}") from exc

    return Authentication(
        name=os.path.basename(directory),
        role=AuthRole.parse(role_code),
        is_enabled=parse_enabled(enabled_text, context=f"{shown}/is_enabled"),
        mechanism=mechanism,
    )
