"""Domain models (Pydantic v2).

Why pydantic in the domain:
- Intents and descriptors are validated once, at the edge, and stay frozen.
- The domain knows nothing about HTTP or the CLI: only keyboards, LEDs and
  colors.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field, NonNegativeInt
from pydantic.config import ConfigDict


class FailureKind(str, Enum):
    """Typed failure categories reported to the user."""

    INVALID_COLOR = "invalid_color"
    DAEMON_UNREACHABLE = "daemon_unreachable"
    NO_ACTIVE_BINDING = "no_active_binding"
    UNKNOWN_DEVICE = "unknown_device"
    DAEMON_REJECTED = "daemon_rejected"


class KeyboardDescriptor(BaseModel):
    """One keyboard as reported by the daemon's discovery query."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: NonNegativeInt = Field(
        ...,
        description="Stable handle assigned by the daemon.",
    )
    friendly_name: str = Field(
        ...,
        description="Display name of the keyboard.",
    )
    is_connected: bool = Field(
        default=False,
        description="True if a session currently holds a binding to it.",
    )


class Color(BaseModel):
    """An RGB triple. Build it with `decode_hex_color`, not directly."""

    model_config = ConfigDict(frozen=True)

    red: int = Field(..., ge=0, le=255)
    green: int = Field(..., ge=0, le=255)
    blue: int = Field(..., ge=0, le=255)

    def as_tuple(self) -> tuple[int, int, int]:
        return (self.red, self.green, self.blue)


class _Intent(BaseModel):
    model_config = ConfigDict(frozen=True)


class ListKeyboards(_Intent):
    kind: Literal["list"] = "list"


class Connect(_Intent):
    kind: Literal["connect"] = "connect"
    index: NonNegativeInt


class ConnectAny(_Intent):
    kind: Literal["connect_any"] = "connect_any"


class Disconnect(_Intent):
    kind: Literal["disconnect"] = "disconnect"


class SetLayer(_Intent):
    kind: Literal["set_layer"] = "set_layer"
    index: NonNegativeInt


class SetRgbLed(_Intent):
    kind: Literal["set_rgb_led"] = "set_rgb_led"
    led: NonNegativeInt
    color: str = Field(..., description="Hex color exactly as the user typed it.")
    sustain: int = Field(default=0, description="0 = until next change, else milliseconds.")


class SetRgbAll(_Intent):
    kind: Literal["set_rgb_all"] = "set_rgb_all"
    color: str
    sustain: int = 0


class SetStatusLed(_Intent):
    kind: Literal["set_status_led"] = "set_status_led"
    led: NonNegativeInt
    on: bool
    sustain: int = 0

    @classmethod
    def from_off_flag(cls, *, led: int, off: bool, sustain: int = 0) -> "SetStatusLed":
        """Build the intent from the user-facing `--off` flag."""

        return cls(led=led, on=not off, sustain=sustain)


class AdjustBrightness(_Intent):
    kind: Literal["adjust_brightness"] = "adjust_brightness"
    increase: bool


Intent = Annotated[
    Union[
        ListKeyboards,
        Connect,
        ConnectAny,
        Disconnect,
        SetLayer,
        SetRgbLed,
        SetRgbAll,
        SetStatusLed,
        AdjustBrightness,
    ],
    Field(discriminator="kind"),
]


class Outcome(BaseModel):
    """Result of executing one Intent.

    A success carries the lines to print (possibly none); a failure carries
    one displayable message and its kind.
    """

    model_config = ConfigDict(frozen=True)

    success: bool
    lines: list[str] = Field(default_factory=list)
    failure: FailureKind | None = None
    message: str | None = None

    @classmethod
    def ok(cls, *lines: str) -> "Outcome":
        return cls(success=True, lines=list(lines))

    @classmethod
    def failed(cls, kind: FailureKind, message: str) -> "Outcome":
        return cls(success=False, failure=kind, message=message)
