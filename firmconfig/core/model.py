"""Core data models used across assemblers, service, and CLI."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Union


@dataclass(frozen=True)
class IntegerType:
    min: int
    max: int
    step: int


@dataclass(frozen=True)
class StringType:
    min_length: int
    max_length: int


@dataclass(frozen=True)
class EnumerationType:
    possible_values: tuple[str, ...]


AttributeType = Union[IntegerType, StringType, EnumerationType]


@dataclass(frozen=True)
class AccessDenied:
    """Outcome of a value read the caller is not permitted to perform."""

    def __str__(self) -> str:
        return "<Access Denied>"


ACCESS_DENIED = AccessDenied()

ValueOutcome = Union[str, AccessDenied]


@dataclass(frozen=True)
class Attribute:
    name: bytes
    display_name: str
    tpe: AttributeType
    current_value: ValueOutcome
    default_value: ValueOutcome


class RoleKind(enum.Enum):
    BIOS_ADMIN = "bios-admin"
    POWER_ON = "power-on"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class AuthRole:
    """Authentication role; unrecognised codes are kept in an UNKNOWN role."""

    kind: RoleKind
    code: str

    @classmethod
    def parse(cls, code: str) -> AuthRole:
        for kind in (RoleKind.BIOS_ADMIN, RoleKind.POWER_ON):
            if code == kind.value:
                return cls(kind=kind, code=code)
        return cls(kind=RoleKind.UNKNOWN, code=code)

    def __str__(self) -> str:
        if self.kind is RoleKind.BIOS_ADMIN:
            return "BiosAdmin"
        if self.kind is RoleKind.POWER_ON:
            return "PowerOn"
        return f"Unknown({self.code})"


@dataclass(frozen=True)
class Authentication:
    name: bytes
    role: AuthRole
    is_enabled: bool
    mechanism: str | None = None


@dataclass(frozen=True)
class DeviceOutcome:
    """Result of running one action against one device."""

    device: bytes
    result: Any = None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None
