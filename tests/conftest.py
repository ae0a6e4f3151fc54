from __future__ import annotations

import errno
import os
from pathlib import Path

import pytest

from firmconfig.sysfs.reader import SysfsReader


class FakeSysfs:
    """Builds a firmware-attributes class tree under a temporary directory."""

    def __init__(self, root: Path) -> None:
        self.root = root

    @property
    def raw_root(self) -> bytes:
        return os.fsencode(self.root)

    def device(self, name: str) -> Path:
        path = self.root / name
        (path / "attributes").mkdir(parents=True, exist_ok=True)
        return path

    def attribute(self, device: str, name: str, **files: str) -> Path:
        path = self.device(device) / "attributes" / name
        path.mkdir(parents=True, exist_ok=True)
        for field, content in files.items():
            (path / field).write_text(content, encoding="utf-8")
        return path

    def enumeration(self, device: str, name: str, values: list[str], current: str, default: str) -> Path:
        return self.attribute(
            device,
            name,
            display_name=f"{name} setting\n",
            type="enumeration\n",
            possible_values=";".join(values) + ";\n",
            current_value=current + "\n",
            default_value=default + "\n",
        )

    def integer(self, device: str, name: str, minimum: int, maximum: int, step: int, current: int) -> Path:
        return self.attribute(
            device,
            name,
            display_name=f"{name} setting\n",
            type="integer\n",
            min_value=f"{minimum}\n",
            max_value=f"{maximum}\n",
            scalar_increment=f"{step}\n",
            current_value=f"{current}\n",
            default_value=f"{minimum}\n",
        )

    def authentication(self, device: str, name: str, **files: str) -> Path:
        path = self.device(device) / "authentication" / name
        path.mkdir(parents=True, exist_ok=True)
        for field, content in files.items():
            (path / field).write_text(content, encoding="utf-8")
        return path


class DenyingReader(SysfsReader):
    """Reader that refuses to read the named files, as sysfs does for non-root users."""

    def __init__(self, denied: set[str] | None = None, failing: set[str] | None = None) -> None:
        self.denied = {os.fsencode(name) for name in denied or ()}
        self.failing = {os.fsencode(name) for name in failing or ()}

    def _read_bytes(self, path: bytes) -> bytes:
        base = os.path.basename(path)
        if not os.path.exists(path):
            return super()._read_bytes(path)
        if base in self.denied:
            raise PermissionError(errno.EACCES, "Permission denied", path)
        if base in self.failing:
            raise OSError(errno.EIO, "Input/output error", path)
        return super()._read_bytes(path)


@pytest.fixture
def sysfs(tmp_path: Path) -> FakeSysfs:
    root = tmp_path / "firmware-attributes"
    root.mkdir()
    return FakeSysfs(root)


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    config_home = tmp_path / "cfg"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    monkeypatch.delenv("FIRMCONFIG_SYSFS_ROOT", raising=False)
    return config_home


@pytest.fixture
def denying_reader() -> type[DenyingReader]:
    return DenyingReader
