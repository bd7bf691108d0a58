"""Controller daemon client (JSON over HTTP on a Unix socket).

Each public method is exactly one `POST /v1/...` request. The daemon answers
`{"success": true, ...}` or `{"success": false, "error": {"code", "message"}}`;
failures are raised as `KontrollError` subclasses and never retried.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import TypeAdapter, ValidationError

from kontroll.adapters.http_client import build_async_client
from kontroll.core.config import AppSettings
from kontroll.core.domain.models import KeyboardDescriptor
from kontroll.core.errors import DaemonRejected, DaemonUnreachable, error_for_code
from kontroll.core.interfaces.controller import KeyboardController

logger = logging.getLogger(__name__)

_KEYBOARD_LIST = TypeAdapter(list[KeyboardDescriptor])


class DaemonClient(KeyboardController):
    """Talks to the controller daemon. Use as an async context manager."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "DaemonClient":
        self._client = build_async_client(self._settings, transport=self._transport)
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def _call(self, path: str, payload: dict[str, Any] | None = None) -> dict[str, Any]:
        if self._client is None:
            raise RuntimeError("DaemonClient used outside of 'async with'")

        if self._transport is None and not self._settings.socket_path.exists():
            raise DaemonUnreachable(
                f"Controller daemon socket not found at {self._settings.socket_path}. Is the daemon running?"
            )

        logger.debug("POST %s %s", path, payload or {})
        try:
            response = await self._client.post(path, json=payload or {})
        except httpx.TimeoutException as exc:
            logger.info("daemon request %s timed out", path)
            raise DaemonUnreachable(f"Timed out waiting for the controller daemon: {exc}") from exc
        except httpx.TransportError as exc:
            logger.info("daemon request %s failed: %s", path, exc)
            raise DaemonUnreachable(f"Cannot reach the controller daemon: {exc}") from exc

        try:
            body = response.json()
        except ValueError:
            body = None

        if not isinstance(body, dict):
            raise DaemonRejected(
                f"Unexpected response from the controller daemon (HTTP {response.status_code})"
            )

        if response.is_success and body.get("success", False):
            return body

        error = body.get("error") or {}
        if not isinstance(error, dict):
            error = {"message": str(error)}
        message = error.get("message") or f"Controller daemon refused the request (HTTP {response.status_code})"
        logger.info("daemon rejected %s: %s", path, message)
        raise error_for_code(error.get("code"), str(message))

    async def discover(self) -> list[KeyboardDescriptor]:
        body = await self._call("/v1/keyboards/list")
        try:
            return _KEYBOARD_LIST.validate_python(body.get("keyboards", []))
        except ValidationError as exc:
            raise DaemonRejected(f"Malformed keyboard list from the controller daemon: {exc}") from exc

    async def bind(self, keyboard_id: int) -> None:
        await self._call("/v1/keyboards/connect", {"id": keyboard_id})

    async def bind_any(self) -> None:
        await self._call("/v1/keyboards/connect-any")

    async def unbind(self) -> None:
        await self._call("/v1/keyboards/disconnect")

    async def set_layer(self, index: int) -> None:
        await self._call("/v1/layer", {"layer": index})

    async def set_led_color(self, led: int, red: int, green: int, blue: int, sustain: int) -> None:
        await self._call(
            "/v1/leds/rgb",
            {"led": led, "red": red, "green": green, "blue": blue, "sustain": sustain},
        )

    async def set_all_led_color(self, red: int, green: int, blue: int, sustain: int) -> None:
        await self._call(
            "/v1/leds/rgb-all",
            {"red": red, "green": green, "blue": blue, "sustain": sustain},
        )

    async def set_status_led(self, led: int, on: bool, sustain: int) -> None:
        await self._call("/v1/leds/status", {"led": led, "on": on, "sustain": sustain})

    async def step_brightness(self, increase: bool) -> None:
        await self._call("/v1/brightness/increase" if increase else "/v1/brightness/decrease")
