"""Service layer used by CLI and the public API."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from typing import Any, TypeVar

from firmconfig.core.config import Config, load_config
from firmconfig.core.device import Listing, find_attribute, list_attributes, list_authentications
from firmconfig.core.device_select import device_dir, device_names, select_devices
from firmconfig.core.errors import FirmconfigError
from firmconfig.core.model import Attribute, Authentication, DeviceOutcome
from firmconfig.sysfs.reader import SysfsReader

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")


class FirmwareService:
    def __init__(
        self,
        *,
        root: str | bytes | None = None,
        best_effort: bool | None = None,
        reader: SysfsReader | None = None,
        config: Config | None = None,
    ) -> None:
        self.config = config or load_config()
        self.root = os.fsencode(root if root is not None else self.config.sysfs_root)
        self.best_effort = self.config.best_effort if best_effort is None else best_effort
        self.reader = reader or SysfsReader()

    def list_devices(self) -> list[bytes]:
        return device_names(self.root, self.reader)

    def attribute_listing(self, device: bytes) -> Listing[Attribute]:
        return list_attributes(
            device_dir(self.root, device),
            self.reader,
            best_effort=self.best_effort,
        )

    def authentication_listing(self, device: bytes) -> Listing[Authentication]:
        return list_authentications(
            device_dir(self.root, device),
            self.reader,
            best_effort=self.best_effort,
        )

    def attributes(self, device: bytes) -> list[Attribute]:
        return list(self.attribute_listing(device).items)

    def authentications(self, device: bytes) -> list[Authentication]:
        return list(self.authentication_listing(device).items)

    def get_attribute(self, device: bytes, name: bytes) -> Attribute:
        return find_attribute(self.attributes(device), name)

    def run_for_devices(
        self,
        action: Callable[[bytes], T],
        device: bytes | None = None,
    ) -> list[DeviceOutcome]:
        """Run `action` for one device, or for every device in turn.

        A failing device is recorded in its `DeviceOutcome` and does not stop
        the remaining devices from being processed.
        """
        outcomes: list[DeviceOutcome] = []
        for name in select_devices(self.root, device, self.reader):
            try:
                outcomes.append(DeviceOutcome(device=name, result=action(name)))
            except FirmconfigError as exc:
                LOGGER.debug("Device %s failed: %s", os.fsdecode(name), exc)
                outcomes.append(DeviceOutcome(device=name, error=exc))
        return outcomes


def last_success(outcomes: list[DeviceOutcome]) -> Any:
    """Result of the last device that succeeded.

    Raises the first device's error when none succeeded and returns None
    when there were no devices at all.
    """
    successes = [outcome for outcome in outcomes if outcome.ok]
    if successes:
        return successes[-1].result
    if outcomes:
        raise outcomes[0].error
    return None
