"""Typer CLI entrypoint."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import typer

from domoctl.core.controller import Controller
from domoctl.core.device import DeviceState, snapshot_to_dict
from domoctl.core.errors import DomoctlError
from domoctl.core.payload import parse_payload
from domoctl.core.settings import Settings, default_settings_path

app = typer.Typer(help="Home automation controller: settings, devices and state requests")


@app.callback()
def main(
    ctx: typer.Context,
    settings: Path | None = typer.Option(None, "--settings", help="Settings XML file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = settings or default_settings_path()


def _build_controller(ctx: typer.Context) -> Controller:
    controller = Controller(Settings(ctx.obj))
    for warning in getattr(controller, "load_warnings", ()):
        typer.echo(f"Warning: {warning}", err=True)
    return controller


def _to_json(value: Any) -> str:
    return json.dumps(_jsonable(value), indent=2, sort_keys=True)


def _jsonable(value: Any) -> Any:
    if isinstance(value, DeviceState):
        return snapshot_to_dict(value)
    if isinstance(value, (list, tuple)):
        return [_jsonable(item) for item in value]
    return value


@app.command("config")
def show_config(ctx: typer.Context) -> None:
    """Print the flat config section as key=value lines."""
    try:
        controller = _build_controller(ctx)
        for key, value in sorted(controller.config.items()):
            typer.echo(f"{key}={value}")
    except DomoctlError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None


@app.command("devices")
def list_devices(ctx: typer.Context) -> None:
    """Print all device snapshots."""
    try:
        controller = _build_controller(ctx)
        typer.echo(_to_json(controller.devices.snapshots()))
    except DomoctlError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None


@app.command("routes")
def list_routes(ctx: typer.Context) -> None:
    """Print the routes every loaded service exposes."""
    try:
        controller = _build_controller(ctx)
        for service in controller.services.services():
            for route in service.routes.routes():
                path = f"{service.name}/{route.template}".rstrip("/")
                typer.echo(f"{route.verb.value} {path}")
    except DomoctlError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None


@app.command("request")
def send_request(
    ctx: typer.Context,
    verb: str,
    path: str,
    payload: str | None = typer.Option(None, "--payload", help="JSON or YAML mapping body"),
) -> None:
    """Dispatch one request, e.g. `request write device/status/lamp --payload '{level: 0.5}'`."""
    try:
        controller = _build_controller(ctx)
        response = controller.request(verb, path, parse_payload(payload))
        if response.error is not None:
            raise response.error
        if response.value is not None:
            typer.echo(_to_json(response.value))
    except DomoctlError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None


def run() -> None:
    app()


if __name__ == "__main__":
    run()
