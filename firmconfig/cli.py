"""Typer CLI entrypoint."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

import typer

from firmconfig.core.attribute import is_access_denied
from firmconfig.core.config import load_config
from firmconfig.core.device import Listing, find_attribute
from firmconfig.core.errors import FirmconfigError
from firmconfig.core.model import Attribute, Authentication, EnumerationType, IntegerType, StringType, ValueOutcome
from firmconfig.core.service import FirmwareService, last_success

app = typer.Typer(help="Inspect firmware settings exposed under /sys/class/firmware-attributes")


@dataclass
class _Options:
    root: str | None = None
    best_effort: bool = False
    verbose: bool = False


@app.callback()
def main(
    ctx: typer.Context,
    root: str | None = typer.Option(None, "--root", help="firmware-attributes class directory"),
    best_effort: bool = typer.Option(False, "--best-effort", help="Skip malformed attributes instead of failing"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    ctx.obj = _Options(root=root, best_effort=best_effort, verbose=verbose)


def _text(name: bytes) -> str:
    return name.decode("utf-8", errors="replace")


def _raw(name: str | None) -> bytes | None:
    return os.fsencode(name) if name is not None else None


def _build_service(ctx: typer.Context) -> FirmwareService:
    options: _Options = ctx.obj or _Options()
    config = load_config()
    logging.basicConfig(level=logging.DEBUG if options.verbose else config.log_level)
    return FirmwareService(
        root=options.root,
        best_effort=True if options.best_effort else None,
        config=config,
    )


def _print_warnings(listing: Listing) -> None:
    for warning in listing.warnings:
        typer.echo(f"Warning: {warning}", err=True)


def _for_each_device(
    service: FirmwareService,
    device: str | None,
    action: Callable[[bytes], Any],
    show: Callable[[bytes, Any], None],
) -> None:
    outcomes = service.run_for_devices(action, _raw(device))
    if not outcomes:
        typer.echo("No firmware-attributes devices found")
        return

    if device is not None and not outcomes[0].ok:
        raise outcomes[0].error

    for outcome in outcomes:
        if outcome.ok:
            show(outcome.device, outcome.result)
        else:
            typer.echo(f"Error: {_text(outcome.device)}: {outcome.error}", err=True)

    if not any(outcome.ok for outcome in outcomes):
        raise typer.Exit(code=1)


def _value(value: ValueOutcome) -> str:
    return "<Access Denied>" if is_access_denied(value) else str(value)


def _print_attribute(attribute: Attribute) -> None:
    typer.echo(_text(attribute.name))
    typer.echo(f"    Name: {attribute.display_name}")
    tpe = attribute.tpe
    if isinstance(tpe, IntegerType):
        typer.echo("    Type: Integer")
        typer.echo(f"        Min: {tpe.min}")
        typer.echo(f"        Max: {tpe.max}")
        typer.echo(f"        Step: {tpe.step}")
    elif isinstance(tpe, StringType):
        typer.echo("    Type: String")
        typer.echo(f"        Min: {tpe.min_length}")
        typer.echo(f"        Max: {tpe.max_length}")
    elif isinstance(tpe, EnumerationType):
        typer.echo("    Type: Enumeration")
        typer.echo("        Possible Values:")
        for possible in tpe.possible_values:
            typer.echo(f"            {possible}")
    typer.echo(f"    Current value: {_value(attribute.current_value)}")
    typer.echo(f"    Default value: {_value(attribute.default_value)}")


@app.command("devices")
def list_devices(ctx: typer.Context) -> None:
    """List firmware-attributes devices."""
    try:
        service = _build_service(ctx)
        devices = service.list_devices()
        if not devices:
            typer.echo("No firmware-attributes devices found")
            return
        for name in devices:
            typer.echo(_text(name))
    except FirmconfigError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None


@app.command("list")
def list_attributes(
    ctx: typer.Context,
    device: str | None = typer.Option(None, "--device", help="Device name (default: all devices)"),
) -> None:
    """List attribute names and display names."""

    def show(name: bytes, listing: Listing[Attribute]) -> None:
        typer.echo(f"Device: {_text(name)}\n")
        for attribute in listing.items:
            typer.echo(f"{_text(attribute.name)}: {attribute.display_name}")
        _print_warnings(listing)

    try:
        service = _build_service(ctx)
        _for_each_device(service, device, service.attribute_listing, show)
    except FirmconfigError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None


@app.command("print")
def print_attributes(
    ctx: typer.Context,
    attribute: str | None = typer.Argument(None, help="Only print this attribute"),
    device: str | None = typer.Option(None, "--device", help="Device name (default: all devices)"),
) -> None:
    """Print attributes with their type, constraints and values."""
    wanted = _raw(attribute)

    def collect(name: bytes) -> Listing[Attribute]:
        listing = service.attribute_listing(name)
        if wanted is not None:
            return Listing(items=(find_attribute(listing.items, wanted),), warnings=listing.warnings)
        return listing

    def show(name: bytes, listing: Listing[Attribute]) -> None:
        typer.echo(f"Device: {_text(name)}\n")
        for item in listing.items:
            _print_attribute(item)
        _print_warnings(listing)

    try:
        service = _build_service(ctx)
        _for_each_device(service, device, collect, show)
    except FirmconfigError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None


@app.command("get")
def get_value(
    ctx: typer.Context,
    attribute: str,
    device: str | None = typer.Option(None, "--device", help="Device name (default: all devices)"),
    default: bool = typer.Option(False, "--default", help="Print the default value"),
    name: bool = typer.Option(False, "--name", help="Print the display name"),
) -> None:
    """Print the current value of ATTRIBUTE.

    Without --device the last device that has ATTRIBUTE wins.
    """
    try:
        service = _build_service(ctx)
        outcomes = service.run_for_devices(
            lambda dev: service.get_attribute(dev, os.fsencode(attribute)),
            _raw(device),
        )
        found: Attribute | None = last_success(outcomes)
        if found is None:
            typer.echo("No firmware-attributes devices found")
            return
        if default:
            typer.echo(_value(found.default_value))
        elif name:
            typer.echo(found.display_name)
        else:
            typer.echo(_value(found.current_value))
    except FirmconfigError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None


@app.command("auth")
def list_authentications(
    ctx: typer.Context,
    device: str | None = typer.Option(None, "--device", help="Device name (default: all devices)"),
) -> None:
    """List authentication methods guarding attribute changes."""

    def show(name: bytes, listing: Listing[Authentication]) -> None:
        typer.echo(f"Device: {_text(name)}\n")
        if not listing.items:
            typer.echo("No authentication methods")
        for auth in listing.items:
            state = "enabled" if auth.is_enabled else "disabled"
            mechanism = f" [{auth.mechanism}]" if auth.mechanism else ""
            typer.echo(f"{_text(auth.name)}: {auth.role} ({state}){mechanism}")
        _print_warnings(listing)

    try:
        service = _build_service(ctx)
        _for_each_device(service, device, service.authentication_listing, show)
    except FirmconfigError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None


def run() -> None:
    app()


if __name__ == "__main__":
    run()
