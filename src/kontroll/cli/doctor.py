"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from kontroll.cli.ui_components import build_doctor_table
from kontroll.core.config import AppSettings, get_user_env_file, write_user_env_vars
from kontroll.core.domain.models import KeyboardDescriptor
from kontroll.core.errors import KontrollError

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_daemon(settings: AppSettings) -> tuple[bool, str, list[KeyboardDescriptor]]:
    # cli.main imports this module.
    from kontroll.cli.main import build_controller  # noqa: PLC0415

    try:
        async with build_controller(settings) as controller:
            keyboards = await controller.discover()
    except KontrollError as exc:
        return False, exc.message, []
    return True, f"{len(keyboards)} keyboard(s) discovered", keyboards


def _settings_from(ctx: typer.Context) -> AppSettings:
    if isinstance(ctx.obj, AppSettings):
        return ctx.obj
    return AppSettings()


@app.command()
def run(ctx: typer.Context) -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = _settings_from(ctx)
    table = build_doctor_table()

    # Config
    env_file = get_user_env_file()
    table.add_row("User config", "OK" if env_file.exists() else "OPTIONAL", escape(str(env_file)))
    table.add_row("Timeout", "OK", f"{settings.timeout_seconds:g}s")

    # Socket
    socket_ok = settings.socket_path.exists()
    table.add_row("Daemon socket", "OK" if socket_ok else "FAIL", escape(str(settings.socket_path)))

    # Daemon
    ok_daemon, detail, keyboards = asyncio.run(_check_daemon(settings))
    table.add_row("Daemon", "OK" if ok_daemon else "FAIL", escape(detail))
    for keyboard in keyboards:
        state = "connected" if keyboard.is_connected else "available"
        table.add_row(f"Keyboard {keyboard.id}", state, escape(keyboard.friendly_name))

    _console.print(table)

    if not socket_ok:
        _console.print(
            "\n[yellow]Note:[/yellow] start the controller daemon, or point kontroll at its socket "
            "with `--socket` or `kontroll doctor setup`."
        )


@app.command()
def setup(ctx: typer.Context) -> None:
    """Interactive setup (stores config in the user config .env)."""

    settings = _settings_from(ctx)

    socket_path = typer.prompt(
        "Daemon socket path",
        default=str(settings.socket_path),
        show_default=True,
    ).strip()
    timeout_text = typer.prompt(
        "Request timeout (seconds)",
        default=f"{settings.timeout_seconds:g}",
        show_default=True,
    ).strip()

    if not socket_path:
        raise typer.BadParameter("socket path is required")
    try:
        timeout = float(timeout_text)
    except ValueError:
        raise typer.BadParameter(f"invalid timeout: {timeout_text}") from None
    if timeout <= 0:
        raise typer.BadParameter("timeout must be greater than 0")

    env_path = write_user_env_vars(
        {
            "KONTROLL_SOCKET_PATH": str(Path(socket_path).expanduser()),
            "KONTROLL_TIMEOUT_SECONDS": f"{timeout:g}",
        }
    )

    _console.print(f"[green]Saved config to:[/green] {escape(str(env_path))}")
