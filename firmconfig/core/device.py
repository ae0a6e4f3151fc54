"""Enumeration of a device's attributes and authentication methods."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

from firmconfig.core.attribute import read_attribute
from firmconfig.core.authentication import read_authentication
from firmconfig.core.errors import MalformedAttributeError, NoSuchAttributeError
from firmconfig.core.model import Attribute, Authentication
from firmconfig.sysfs.reader import SysfsReader

ATTRIBUTES_DIR = b"attributes"
AUTHENTICATION_DIR = b"authentication"
LOGGER = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class Listing(Generic[T]):
    items: tuple[T, ...]
    warnings: tuple[str, ...] = ()


def _collect(
    parent: bytes,
    reader: SysfsReader,
    build: Callable[[bytes, SysfsReader], T],
    *,
    best_effort: bool,
) -> Listing[T]:
    items: list[T] = []
    warnings: list[str] = []
    for entry in reader.list_subdirectories(parent):
        path = os.path.join(parent, entry)
        LOGGER.debug("Reading %s", os.fsdecode(path))
        try:
            items.append(build(path, reader))
        except MalformedAttributeError as exc:
            if not best_effort:
                raise
            warning = f"Skipping malformed entry: {exc}"
            LOGGER.warning(warning)
            warnings.append(warning)
    return Listing(items=tuple(items), warnings=tuple(warnings))


def list_attributes(
    device_dir: bytes,
    reader: SysfsReader | None = None,
    *,
    best_effort: bool = False,
) -> Listing[Attribute]:
    """Read every attribute subdirectory of a device in sorted name order."""
    reader = reader or SysfsReader()
    return _collect(os.path.join(device_dir, ATTRIBUTES_DIR), reader, read_attribute, best_effort=best_effort)


def list_authentications(
    device_dir: bytes,
    reader: SysfsReader | None = None,
    *,
    best_effort: bool = False,
) -> Listing[Authentication]:
    """Read every authentication method; a device without any yields nothing."""
    reader = reader or SysfsReader()
    if AUTHENTICATION_DIR not in reader.list_entries(device_dir):
        LOGGER.debug("%s publishes no authentication methods", os.fsdecode(device_dir))
        return Listing(items=())
    return _collect(
        os.path.join(device_dir, AUTHENTICATION_DIR),
        reader,
        read_authentication,
        best_effort=best_effort,
    )


def find_attribute(attributes: Sequence[Attribute], name: bytes) -> Attribute:
    for attribute in attributes:
        if attribute.name == name:
            return attribute
    raise NoSuchAttributeError(name)
