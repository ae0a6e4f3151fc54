"""Filesystem reader for the firmware-attributes sysfs class."""

from __future__ import annotations

import logging
import os

from firmconfig.core.errors import (
    FilesystemError,
    FilesystemIOError,
    MalformedAttributeError,
    NotFoundError,
    PermissionDeniedError,
)
from firmconfig.core.model import ACCESS_DENIED, ValueOutcome

LOGGER = logging.getLogger(__name__)


def _translate(exc: OSError, path: bytes, action: str) -> FilesystemError:
    shown = os.fsdecode(path)
    if isinstance(exc, (FileNotFoundError, NotADirectoryError)):
        return NotFoundError(path, f"{shown} does not exist")
    if isinstance(exc, PermissionError):
        return PermissionDeniedError(path, f"Permission denied to {action} {shown}")
    return FilesystemIOError(path, f"Could not {action} {shown}: {exc}")


class SysfsReader:
    """Lists sysfs directories and reads attribute files.

    Paths and entry names are raw bytes; nothing here assumes they are valid
    UTF-8. Only file contents are decoded.
    """

    def list_entries(self, path: bytes) -> list[bytes]:
        try:
            return sorted(self._listdir(path))
        except OSError as exc:
            raise _translate(exc, path, "list") from exc

    def list_subdirectories(self, path: bytes) -> list[bytes]:
        return [
            entry
            for entry in self.list_entries(path)
            if self._isdir(os.path.join(path, entry))
        ]

    def read_text(self, path: bytes) -> str:
        try:
            raw = self._read_bytes(path)
        except OSError as exc:
            raise _translate(exc, path, "read") from exc

        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise MalformedAttributeError(f"{os.fsdecode(path)} is not valid UTF-8 text") from exc

        if text.endswith("\r\n"):
            return text[:-2]
        if text.endswith("\n"):
            return text[:-1]
        return text

    def read_value(self, path: bytes) -> ValueOutcome:
        try:
            return self.read_text(path)
        except PermissionDeniedError:
            LOGGER.debug("Access denied reading %s", os.fsdecode(path))
            return ACCESS_DENIED

    def _listdir(self, path: bytes) -> list[bytes]:
        return os.listdir(path)

    def _isdir(self, path: bytes) -> bool:
        return os.path.isdir(path)

    def _read_bytes(self, path: bytes) -> bytes:
        with open(path, "rb") as stream:
            return stream.read()
