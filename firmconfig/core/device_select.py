"""Resolution of device names to sysfs directories."""

from __future__ import annotations

import os

from firmconfig.sysfs.reader import SysfsReader


def device_dir(root: bytes, name: bytes) -> bytes:
    return os.path.join(root, name)


def device_names(root: bytes, reader: SysfsReader) -> list[bytes]:
    """All device directories under the firmware-attributes class root."""
    return reader.list_subdirectories(root)


def select_devices(root: bytes, name: bytes | None, reader: SysfsReader) -> list[bytes]:
    if name is not None:
        return [name]
    return device_names(root, reader)
