"""CSS colour parsing for server-provided point colours.

The compute service labels each point with a CSS colour string, usually
"hsla(H, 100%, 60%, 0.8)". parse_css_color turns such strings into RGBA
byte tuples that the canvases can hand to QColor. Unrecognised strings
return None and the canvas falls back to QColor's own name parsing.
"""

from __future__ import annotations

import colorsys
import re
from functools import lru_cache

RGBA = tuple[int, int, int, int]

_FUNC_RE = re.compile(r"^\s*(hsla?|rgba?)\s*\((.*)\)\s*$", re.IGNORECASE)
_HEX_RE = re.compile(r"^\s*#([0-9a-f]{3}|[0-9a-f]{6}|[0-9a-f]{8})\s*$", re.IGNORECASE)


def _clamp_byte(value: float) -> int:
    return max(0, min(255, int(round(value))))


def _parse_alpha(token: str) -> int:
    token = token.strip()
    if token.endswith("%"):
        return _clamp_byte(float(token[:-1]) * 2.55)
    return _clamp_byte(float(token) * 255)


def _parse_percent(token: str) -> float:
    token = token.strip()
    if not token.endswith("%"):
        raise ValueError(f"expected a percentage, got {token!r}")
    return max(0.0, min(100.0, float(token[:-1]))) / 100.0


def _parse_channel(token: str) -> int:
    token = token.strip()
    if token.endswith("%"):
        return _clamp_byte(float(token[:-1]) * 2.55)
    return _clamp_byte(float(token))


@lru_cache(maxsize=4096)
def parse_css_color(text: str) -> RGBA | None:
    """Parse hsl(a), rgb(a) and #hex colours into (r, g, b, a) bytes."""
    match = _HEX_RE.match(text)
    if match:
        digits = match.group(1)
        if len(digits) == 3:
            digits = "".join(ch * 2 for ch in digits)
        if len(digits) == 6:
            digits += "ff"
        r, g, b, a = (int(digits[i:i + 2], 16) for i in range(0, 8, 2))
        return r, g, b, a

    match = _FUNC_RE.match(text)
    if match is None:
        return None
    func = match.group(1).lower()
    args = [a for a in re.split(r"[,\s/]+", match.group(2).strip()) if a]

    try:
        if func.startswith("hsl"):
            if len(args) not in (3, 4):
                return None
            hue = (float(args[0].rstrip("deg")) % 360.0) / 360.0
            sat = _parse_percent(args[1])
            light = _parse_percent(args[2])
            red, green, blue = colorsys.hls_to_rgb(hue, light, sat)
            alpha = _parse_alpha(args[3]) if len(args) == 4 else 255
            return (
                _clamp_byte(red * 255), _clamp_byte(green * 255),
                _clamp_byte(blue * 255), alpha,
            )

        if len(args) not in (3, 4):
            return None
        alpha = _parse_alpha(args[3]) if len(args) == 4 else 255
        return (
            _parse_channel(args[0]), _parse_channel(args[1]),
            _parse_channel(args[2]), alpha,
        )
    except ValueError:
        return None
