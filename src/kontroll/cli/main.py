"""kontroll command-line interface (Typer).

One subcommand per intent. Each invocation builds one Intent, runs it
through the `CommandResolver` against the controller daemon and prints the
Outcome. Failures are printed on stderr and the process still exits 0.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console

from kontroll import __version__
from kontroll.adapters.daemon_client import DaemonClient
from kontroll.cli import doctor
from kontroll.cli.ui_components import print_outcome
from kontroll.core.config import AppSettings
from kontroll.core.domain.models import (
    AdjustBrightness,
    Connect,
    ConnectAny,
    Disconnect,
    Intent,
    ListKeyboards,
    Outcome,
    SetLayer,
    SetRgbAll,
    SetRgbLed,
    SetStatusLed,
)
from kontroll.core.logging_setup import configure_logging
from kontroll.core.services.resolver import CommandResolver

app = typer.Typer(
    no_args_is_help=True,
    add_completion=False,
    help=(
        "Kontroll controls your keyboard from the command line and scripts, "
        "through the keyboard controller daemon."
    ),
)
app.add_typer(doctor.app, name="doctor")

_err_console = Console(stderr=True)


def build_controller(settings: AppSettings) -> DaemonClient:
    return DaemonClient(settings)


async def _execute(settings: AppSettings, intent: Intent) -> Outcome:
    async with build_controller(settings) as controller:
        return await CommandResolver(controller).execute(intent)


def _run(ctx: typer.Context, intent: Intent) -> None:
    settings = ctx.obj if isinstance(ctx.obj, AppSettings) else AppSettings()
    outcome = asyncio.run(_execute(settings, intent))
    print_outcome(outcome, _err_console)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"Kontroll {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    socket: Path | None = typer.Option(
        None,
        "--socket",
        help="Path to the controller daemon socket (overrides KONTROLL_SOCKET_PATH).",
    ),
    timeout: float | None = typer.Option(
        None,
        "--timeout",
        min=0.001,
        help="Request timeout in seconds (overrides KONTROLL_TIMEOUT_SECONDS).",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log daemon traffic to stderr."),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit.",
    ),
) -> None:
    overrides: dict[str, object] = {}
    if socket is not None:
        overrides["socket_path"] = socket.expanduser()
    if timeout is not None:
        overrides["timeout_seconds"] = timeout

    try:
        settings = AppSettings(**overrides)
    except ValidationError as exc:
        raise typer.BadParameter(str(exc)) from exc

    configure_logging("DEBUG" if verbose else settings.log_level)
    ctx.obj = settings


@app.command(name="list")
def list_keyboards(ctx: typer.Context) -> None:
    """List all available keyboards."""

    _run(ctx, ListKeyboards())


@app.command()
def connect(
    ctx: typer.Context,
    index: int = typer.Option(..., "--index", "-i", min=0, help="Keyboard index returned by `list`."),
) -> None:
    """Connect to a keyboard given the index returned by the list command."""

    _run(ctx, Connect(index=index))


@app.command(name="connect-any")
def connect_any(ctx: typer.Context) -> None:
    """Connect to the first keyboard detected by the daemon."""

    _run(ctx, ConnectAny())


@app.command()
def disconnect(ctx: typer.Context) -> None:
    """Disconnect from the currently connected keyboard."""

    _run(ctx, Disconnect())


@app.command(name="set-layer")
def set_layer(
    ctx: typer.Context,
    index: int = typer.Option(..., "--index", "-i", min=0, help="Layer index."),
) -> None:
    """Set the layer of the currently connected keyboard."""

    _run(ctx, SetLayer(index=index))


@app.command(name="set-rgb")
def set_rgb(
    ctx: typer.Context,
    led: int = typer.Option(..., "--led", "-l", min=0, help="LED index."),
    color: str = typer.Option(..., "--color", "-c", help="Hex color, RRGGBB or #RRGGBB."),
    sustain: int = typer.Option(0, "--sustain", "-s", help="Milliseconds before reverting (0 = keep)."),
) -> None:
    """Set the RGB color of a LED."""

    _run(ctx, SetRgbLed(led=led, color=color, sustain=sustain))


@app.command(name="set-rgb-all")
def set_rgb_all(
    ctx: typer.Context,
    color: str = typer.Option(..., "--color", "-c", help="Hex color, RRGGBB or #RRGGBB."),
    sustain: int = typer.Option(0, "--sustain", "-s", help="Milliseconds before reverting (0 = keep)."),
) -> None:
    """Set the RGB color of all LEDs."""

    _run(ctx, SetRgbAll(color=color, sustain=sustain))


@app.command(name="set-status-led")
def set_status_led(
    ctx: typer.Context,
    led: int = typer.Option(..., "--led", "-l", min=0, help="Status LED index."),
    off: bool = typer.Option(False, "--off", "-o", help="Turn the LED off instead of on."),
    sustain: int = typer.Option(0, "--sustain", "-s", help="Milliseconds before reverting (0 = keep)."),
) -> None:
    """Set / unset a status LED."""

    _run(ctx, SetStatusLed.from_off_flag(led=led, off=off, sustain=sustain))


@app.command(name="increase-brightness")
def increase_brightness(ctx: typer.Context) -> None:
    """Increase the brightness of the keyboard's LEDs."""

    _run(ctx, AdjustBrightness(increase=True))


@app.command(name="decrease-brightness")
def decrease_brightness(ctx: typer.Context) -> None:
    """Decrease the brightness of the keyboard's LEDs."""

    _run(ctx, AdjustBrightness(increase=False))


def run() -> None:
    app()
