"""Controller daemon contract.

Why Protocol:
- Structural contract without inheritance, so the HTTP client and test
  fakes are interchangeable.
- Every method is one daemon request; failures are raised as
  `kontroll.core.errors.KontrollError` subclasses.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from kontroll.core.domain.models import KeyboardDescriptor


@runtime_checkable
class KeyboardController(Protocol):
    """Minimal contract the command resolver needs from the daemon.

    Design rules:
    - Methods are async because they wait on daemon I/O.
    - No session object is passed: the daemon tracks the current binding.
    - Nothing is retried.
    """

    async def discover(self) -> list[KeyboardDescriptor]:
        """Return the keyboards the daemon can see, in the daemon's order."""

        ...

    async def bind(self, keyboard_id: int) -> None: ...

    async def bind_any(self) -> None: ...

    async def unbind(self) -> None: ...

    async def set_layer(self, index: int) -> None: ...

    async def set_led_color(self, led: int, red: int, green: int, blue: int, sustain: int) -> None: ...

    async def set_all_led_color(self, red: int, green: int, blue: int, sustain: int) -> None: ...

    async def set_status_led(self, led: int, on: bool, sustain: int) -> None: ...

    async def step_brightness(self, increase: bool) -> None: ...
