"""Shared fixtures: an in-memory controller that records every daemon call."""

from __future__ import annotations

import pytest

from kontroll.core.domain.models import KeyboardDescriptor
from kontroll.core.errors import KontrollError, NoActiveBinding, UnknownDevice


class FakeController:
    """Stands in for the daemon. Mirrors its validation of ids and bindings."""

    def __init__(self, keyboards: list[KeyboardDescriptor] | None = None) -> None:
        self.keyboards = keyboards or []
        self.calls: list[tuple] = []
        self.bound = False
        self.fail_with: KontrollError | None = None
        self.entered = False
        self.exited = False

    async def __aenter__(self) -> "FakeController":
        self.entered = True
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        self.exited = True

    def _record(self, *call: object) -> None:
        self.calls.append(tuple(call))
        if self.fail_with is not None:
            raise self.fail_with

    def _require_binding(self) -> None:
        if not self.bound:
            raise NoActiveBinding("No keyboard connected")

    async def discover(self) -> list[KeyboardDescriptor]:
        self._record("discover")
        return list(self.keyboards)

    async def bind(self, keyboard_id: int) -> None:
        self._record("bind", keyboard_id)
        if keyboard_id not in {k.id for k in self.keyboards}:
            raise UnknownDevice(f"Keyboard {keyboard_id} not found")
        self.bound = True

    async def bind_any(self) -> None:
        self._record("bind_any")
        if not self.keyboards:
            raise UnknownDevice("No keyboard detected")
        self.bound = True

    async def unbind(self) -> None:
        self._record("unbind")
        self.bound = False

    async def set_layer(self, index: int) -> None:
        self._record("set_layer", index)
        self._require_binding()

    async def set_led_color(self, led: int, red: int, green: int, blue: int, sustain: int) -> None:
        self._record("set_led_color", led, red, green, blue, sustain)
        self._require_binding()

    async def set_all_led_color(self, red: int, green: int, blue: int, sustain: int) -> None:
        self._record("set_all_led_color", red, green, blue, sustain)
        self._require_binding()

    async def set_status_led(self, led: int, on: bool, sustain: int) -> None:
        self._record("set_status_led", led, on, sustain)
        self._require_binding()

    async def step_brightness(self, increase: bool) -> None:
        self._record("step_brightness", increase)
        self._require_binding()


@pytest.fixture
def keyboards() -> list[KeyboardDescriptor]:
    return [
        KeyboardDescriptor(id=0, friendly_name="Voyager", is_connected=False),
        KeyboardDescriptor(id=1, friendly_name="Moonlander", is_connected=False),
        KeyboardDescriptor(id=2, friendly_name="Ergodox EZ", is_connected=False),
    ]


@pytest.fixture
def controller(keyboards: list[KeyboardDescriptor]) -> FakeController:
    return FakeController(keyboards)


@pytest.fixture
def bound_controller(controller: FakeController) -> FakeController:
    controller.bound = True
    return controller
