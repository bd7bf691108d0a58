"""Core configuration.

Why here:
- Centralizes environment variables (pydantic-settings) away from the CLI.
- Adapters (daemon client) and `doctor` read the same settings object.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _config_home() -> Path:
    if sys.platform.startswith("win"):
        return Path(os.environ.get("APPDATA", str(Path.home())))
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg)
    return Path.home() / ".config"


def get_user_config_dir() -> Path:
    """Per-user configuration directory for kontroll (cross-platform)."""

    return _config_home() / "kontroll"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def default_socket_path() -> Path:
    """Where the controller daemon listens by default."""

    return _config_home() / ".keymapp" / "keymapp.sock"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str | None], env_path: Path | None = None) -> Path:
    """Write/update variables in the user's global .env."""

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# kontroll user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Central application settings.

    Precedence, highest first: explicit arguments, `KONTROLL_*` environment
    variables, the user `.env`, then the project `.env`.
    """

    model_config = SettingsConfigDict(
        env_prefix="KONTROLL_",
        extra="ignore",
        case_sensitive=False,
        # Project first (dev), then the user config; later files win.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    socket_path: Path = Field(
        default_factory=default_socket_path,
        description="Unix domain socket of the controller daemon.",
    )
    timeout_seconds: float = Field(
        default=5.0,
        gt=0,
        description="Timeout per daemon request (seconds).",
    )
    log_level: str = Field(
        default="WARNING",
        description="Log level for stderr diagnostics (DEBUG, INFO, WARNING, ...).",
    )

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}:
            raise ValueError(f"unknown log level: {value}")
        return level
