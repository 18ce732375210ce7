"""
Hex color parsing for canvas and palette overrides.
"""

from __future__ import annotations

import re
from typing import NamedTuple

from .errors import ColorParseError

_HEX_RE = re.compile(r"#([A-Fa-f0-9]{3}){1,2}")


class RGBA(NamedTuple):
    r: int
    g: int
    b: int
    alpha: float = 1.0

    def to_pil(self) -> tuple[int, int, int, int]:
        """Pillow wants alpha as a 0-255 channel value."""
        return (self.r, self.g, self.b, round(self.alpha * 255))


def hex_to_rgba(hex_color: str, alpha: float = 1.0) -> RGBA:
    """
    Parse ``#rgb`` or ``#rrggbb`` into an :class:`RGBA`.

    Three-digit shorthand is expanded by doubling each digit, so ``#fff`` and
    ``#ffffff`` are the same color. Anything else raises ``ColorParseError``.
    """
    if not isinstance(hex_color, str) or not _HEX_RE.fullmatch(hex_color):
        raise ColorParseError(f"Bad Hex: {hex_color!r}")
    if not 0.0 <= alpha <= 1.0:
        raise ColorParseError(f"Alpha must be within [0, 1], got {alpha}")

    digits = hex_color[1:]
    if len(digits) == 3:
        digits = "".join(c * 2 for c in digits)
    value = int(digits, 16)
    return RGBA(
        r=(value >> 16) & 255,
        g=(value >> 8) & 255,
        b=value & 255,
        alpha=alpha,
    )
