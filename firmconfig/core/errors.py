"""Domain-specific errors for firmconfig."""

from __future__ import annotations


class FirmconfigError(Exception):
    """Base error for firmconfig."""


class FilesystemError(FirmconfigError):
    """Base error for a failed filesystem read or listing."""

    def __init__(self, path: bytes, message: str) -> None:
        super().__init__(message)
        self.path = path


class NotFoundError(FilesystemError):
    """Raised when a device, attribute or file does not exist."""


class PermissionDeniedError(FilesystemError):
    """Raised when the caller may not read a file or list a directory."""


class FilesystemIOError(FilesystemError):
    """Raised on any other I/O failure while reading sysfs."""


class MalformedAttributeError(FirmconfigError):
    """Raised when an attribute or authentication entry cannot be parsed."""


class NoSuchAttributeError(FirmconfigError):
    """Raised when a name lookup finds no matching attribute on a device."""

    def __init__(self, name: bytes) -> None:
        super().__init__(f"no attribute with name {name.decode('utf-8', errors='replace')}")
        self.name = name


class ConfigLoadError(FirmconfigError):
    """Raised when the configuration file cannot be read."""


class ConfigValidationError(FirmconfigError):
    """Raised when the configuration file does not conform to schema."""
