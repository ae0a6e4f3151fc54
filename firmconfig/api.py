"""Stable public API for building tooling on top of firmconfig.

This module is the supported integration surface for third-party callers.
Avoid importing from private/internal modules unless intentionally depending on
non-stable internals.
"""

from __future__ import annotations

from dataclasses import dataclass

from firmconfig.core.config import Config
from firmconfig.core.errors import (
    ConfigLoadError,
    ConfigValidationError,
    FilesystemError,
    FilesystemIOError,
    FirmconfigError,
    MalformedAttributeError,
    NoSuchAttributeError,
    NotFoundError,
    PermissionDeniedError,
)
from firmconfig.core.model import (
    ACCESS_DENIED,
    AccessDenied,
    Attribute,
    AttributeType,
    AuthRole,
    Authentication,
    EnumerationType,
    IntegerType,
    RoleKind,
    StringType,
    ValueOutcome,
)
from firmconfig.core.service import FirmwareService
from firmconfig.sysfs.reader import SysfsReader

__all__ = [
    "FirmconfigError",
    "FilesystemError",
    "NotFoundError",
    "PermissionDeniedError",
    "FilesystemIOError",
    "MalformedAttributeError",
    "NoSuchAttributeError",
    "ConfigLoadError",
    "ConfigValidationError",
    "ACCESS_DENIED",
    "AccessDenied",
    "Attribute",
    "AttributeType",
    "AuthRole",
    "Authentication",
    "EnumerationType",
    "IntegerType",
    "RoleKind",
    "StringType",
    "ValueOutcome",
    "SysfsReader",
    "DeviceReport",
    "Client",
]


@dataclass(frozen=True)
class DeviceReport:
    """Attributes and authentication methods of one device."""

    device: bytes
    attributes: tuple[Attribute, ...]
    authentications: tuple[Authentication, ...]
    warnings: tuple[str, ...] = ()


class Client:
    """Public client for inspecting firmware attributes.

    A `Client` instance wraps device enumeration and attribute parsing behind a
    stable API intended for third-party tools (GUI/TUI/services/scripts).
    """

    def __init__(
        self,
        *,
        root: str | bytes | None = None,
        best_effort: bool | None = None,
        reader: SysfsReader | None = None,
        config: Config | None = None,
    ) -> None:
        self._service = FirmwareService(
            root=root,
            best_effort=best_effort,
            reader=reader,
            config=config,
        )

    def list_devices(self) -> list[bytes]:
        return self._service.list_devices()

    def list_attributes(self, device: bytes) -> list[Attribute]:
        return self._service.attributes(device)

    def list_authentications(self, device: bytes) -> list[Authentication]:
        return self._service.authentications(device)

    def get_attribute(self, device: bytes, name: bytes) -> Attribute:
        return self._service.get_attribute(device, name)

    def describe_device(self, device: bytes) -> DeviceReport:
        attributes = self._service.attribute_listing(device)
        authentications = self._service.authentication_listing(device)
        return DeviceReport(
            device=device,
            attributes=attributes.items,
            authentications=authentications.items,
            warnings=attributes.warnings + authentications.warnings,
        )
