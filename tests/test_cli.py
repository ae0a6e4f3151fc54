from __future__ import annotations

import errno
import os

import pytest
from typer.testing import CliRunner

from firmconfig import cli
from firmconfig.sysfs.reader import SysfsReader

runner = CliRunner()


@pytest.fixture
def populated(sysfs):
    sysfs.enumeration("TestFW", "wifi_boot", ["enabled", "disabled"], current="enabled", default="disabled")
    sysfs.integer("TestFW", "max_perf", 0, 100, 5, current=50)
    sysfs.authentication("TestFW", "Admin", role="bios-admin\n", is_enabled="1\n", mechanism="password\n")
    sysfs.authentication("TestFW", "Owner", role="owner-code\n", is_enabled="0\n")
    return sysfs


@pytest.fixture
def deny_default_value(monkeypatch: pytest.MonkeyPatch) -> None:
    original = SysfsReader._read_bytes

    def fake_read_bytes(self, path: bytes) -> bytes:
        if os.path.basename(path) == b"default_value":
            raise PermissionError(errno.EACCES, "Permission denied", path)
        return original(self, path)

    monkeypatch.setattr(SysfsReader, "_read_bytes", fake_read_bytes)


def _invoke(sysfs, *args: str):
    return runner.invoke(cli.app, ["--root", str(sysfs.root), *args])


def test_devices_command(populated):
    populated.device("OtherFW")
    result = _invoke(populated, "devices")
    assert result.exit_code == 0
    assert result.stdout.splitlines() == ["OtherFW", "TestFW"]


def test_list_command(populated):
    result = _invoke(populated, "list", "--device", "TestFW")
    assert result.exit_code == 0
    assert "Device: TestFW" in result.stdout
    assert "max_perf: max_perf setting" in result.stdout
    assert "wifi_boot: wifi_boot setting" in result.stdout


def test_print_command_shows_types_and_denied_values(populated, deny_default_value):
    result = _invoke(populated, "print", "--device", "TestFW")
    assert result.exit_code == 0
    assert "    Type: Integer" in result.stdout
    assert "        Step: 5" in result.stdout
    assert "    Type: Enumeration" in result.stdout
    assert "            disabled" in result.stdout
    assert "    Current value: enabled" in result.stdout
    assert "    Default value: <Access Denied>" in result.stdout


def test_print_single_attribute(populated):
    result = _invoke(populated, "print", "max_perf", "--device", "TestFW")
    assert result.exit_code == 0
    assert "max_perf" in result.stdout
    assert "wifi_boot" not in result.stdout


def test_print_unknown_attribute_is_clean_error(populated):
    result = _invoke(populated, "print", "nope", "--device", "TestFW")
    assert result.exit_code == 1
    assert "Error: no attribute with name nope" in result.stderr
    assert "Traceback" not in result.stderr


def test_get_current_default_and_name(populated, deny_default_value):
    current = _invoke(populated, "get", "max_perf")
    default = _invoke(populated, "get", "wifi_boot", "--default")
    name = _invoke(populated, "get", "wifi_boot", "--name")

    assert current.exit_code == 0
    assert current.stdout.strip() == "50"
    assert default.stdout.strip() == "<Access Denied>"
    assert name.stdout.strip() == "wifi_boot setting"


def test_get_uses_last_device_with_attribute(populated):
    populated.integer("ZetaFW", "max_perf", 0, 10, 1, current=7)
    populated.device("AlphaFW")

    result = _invoke(populated, "get", "max_perf")
    assert result.exit_code == 0
    assert result.stdout.strip() == "7"


def test_get_missing_attribute_fails(populated):
    result = _invoke(populated, "get", "nope")
    assert result.exit_code == 1
    assert "Error: no attribute with name nope" in result.stderr


def test_missing_device_fails(populated):
    result = _invoke(populated, "list", "--device", "Nope")
    assert result.exit_code == 1
    assert "Error:" in result.stderr


def test_broken_device_reported_without_hiding_others(populated):
    populated.attribute("BrokenFW", "bad", display_name="Bad\n", type="bogus\n")

    result = _invoke(populated, "list")
    assert result.exit_code == 0
    assert "Device: TestFW" in result.stdout
    assert "Error: BrokenFW:" in result.stderr


def test_best_effort_flag_prints_warning(populated):
    populated.attribute("TestFW", "bad", display_name="Bad\n", type="bogus\n")

    strict = _invoke(populated, "list", "--device", "TestFW")
    relaxed = runner.invoke(cli.app, ["--root", str(populated.root), "--best-effort", "list", "--device", "TestFW"])

    assert strict.exit_code == 1
    assert relaxed.exit_code == 0
    assert "max_perf" in relaxed.stdout
    assert "Warning: Skipping" in relaxed.stderr


def test_auth_command(populated):
    result = _invoke(populated, "auth", "--device", "TestFW")
    assert result.exit_code == 0
    assert "Admin: BiosAdmin (enabled) [password]" in result.stdout
    assert "Owner: Unknown(owner-code) (disabled)" in result.stdout


def test_no_devices(sysfs):
    result = _invoke(sysfs, "list")
    assert result.exit_code == 0
    assert "No firmware-attributes devices found" in result.stdout


def test_oversized_integer_is_skipped_in_best_effort_mode(populated):
    populated.attribute(
        "TestFW",
        "huge",
        display_name="Huge\n",
        type="integer\n",
        min_value="0\n",
        max_value="9" * 5000 + "\n",
        scalar_increment="1\n",
        current_value="0\n",
        default_value="0\n",
    )

    strict = _invoke(populated, "list", "--device", "TestFW")
    relaxed = runner.invoke(cli.app, ["--root", str(populated.root), "--best-effort", "list", "--device", "TestFW"])

    assert strict.exit_code == 1
    assert "Error:" in strict.stderr
    assert not isinstance(strict.exception, ValueError)
    assert relaxed.exit_code == 0
    assert "max_perf: max_perf setting" in relaxed.stdout
    assert "huge" not in relaxed.stdout
