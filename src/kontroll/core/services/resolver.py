"""Command resolver: one Intent in, one daemon request, one Outcome out.

Design rules:
- Colors are decoded before the daemon is touched; an invalid color never
  produces a request.
- Binding state is never cached here. The daemon is the authority on which
  keyboard is bound, which ids exist and how many layers a keyboard has.
- Daemon failures become failure Outcomes with the daemon's message as-is.
"""

from __future__ import annotations

import logging

from kontroll.core.domain.color import decode_hex_color
from kontroll.core.domain.models import (
    AdjustBrightness,
    Connect,
    ConnectAny,
    Disconnect,
    Intent,
    KeyboardDescriptor,
    ListKeyboards,
    Outcome,
    SetLayer,
    SetRgbAll,
    SetRgbLed,
    SetStatusLed,
)
from kontroll.core.errors import KontrollError
from kontroll.core.interfaces.controller import KeyboardController

logger = logging.getLogger(__name__)


def format_keyboard_line(keyboard: KeyboardDescriptor) -> str:
    """`"{id}: {name} (connected)"`, or `"{id}: {name} "` when not connected."""

    connected = "(connected)" if keyboard.is_connected else ""
    return f"{keyboard.id}: {keyboard.friendly_name} {connected}"


class CommandResolver:
    """Executes Intents against a `KeyboardController`."""

    def __init__(self, controller: KeyboardController) -> None:
        self._controller = controller

    async def execute(self, intent: Intent) -> Outcome:
        logger.debug("executing %r", intent)
        try:
            return await self._dispatch(intent)
        except KontrollError as exc:
            return Outcome.failed(exc.kind, exc.message)

    async def _dispatch(self, intent: Intent) -> Outcome:
        controller = self._controller

        if isinstance(intent, ListKeyboards):
            keyboards = await controller.discover()
            return Outcome.ok(*(format_keyboard_line(k) for k in keyboards))

        if isinstance(intent, Connect):
            await controller.bind(intent.index)
            return Outcome.ok(f"Connected to keyboard {intent.index}")

        if isinstance(intent, ConnectAny):
            await controller.bind_any()
            return Outcome.ok("Connected to the first keyboard detected by the daemon")

        if isinstance(intent, Disconnect):
            await controller.unbind()
            return Outcome.ok("Disconnected from the currently connected keyboard")

        if isinstance(intent, SetLayer):
            await controller.set_layer(intent.index)
            return Outcome.ok(f"Layer set to {intent.index}")

        if isinstance(intent, SetRgbLed):
            color = decode_hex_color(intent.color)
            await controller.set_led_color(intent.led, *color.as_tuple(), intent.sustain)
            return Outcome.ok(f"LED {intent.led} set to color {intent.color}")

        if isinstance(intent, SetRgbAll):
            color = decode_hex_color(intent.color)
            await controller.set_all_led_color(*color.as_tuple(), intent.sustain)
            return Outcome.ok(f"All LEDs set to color {intent.color}")

        if isinstance(intent, SetStatusLed):
            await controller.set_status_led(intent.led, intent.on, intent.sustain)
            state = "on" if intent.on else "off"
            return Outcome.ok(f"Status LED {intent.led} turned {state}")

        if isinstance(intent, AdjustBrightness):
            await controller.step_brightness(intent.increase)
            return Outcome.ok("Brightness increased" if intent.increase else "Brightness decreased")

        raise TypeError(f"unsupported intent: {intent!r}")
