"""Hex color codec.

Accepted form: exactly six hexadecimal digits, case-insensitive, optionally
preceded by a single `#`. Nothing else (no whitespace, no 3-digit shorthand,
no `0x` prefix) is accepted.
"""

from __future__ import annotations

import re

from kontroll.core.domain.models import Color
from kontroll.core.errors import InvalidColor

_HEX_COLOR = re.compile(r"#?([0-9a-fA-F]{2})([0-9a-fA-F]{2})([0-9a-fA-F]{2})")


def decode_hex_color(text: str) -> Color:
    """Parse `RRGGBB` / `#RRGGBB` into a `Color`, or raise `InvalidColor`."""

    match = _HEX_COLOR.fullmatch(text) if isinstance(text, str) else None
    if match is None:
        raise InvalidColor(str(text))
    red, green, blue = (int(group, 16) for group in match.groups())
    return Color(red=red, green=green, blue=blue)


def encode_hex_color(color: Color) -> str:
    """Render a `Color` as upper-case `RRGGBB` (no `#`)."""

    return f"{color.red:02X}{color.green:02X}{color.blue:02X}"
