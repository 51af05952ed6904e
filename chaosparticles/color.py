"""Conversions between 8-bit RGB and HSV colour spaces."""

from __future__ import annotations

import math
from typing import Tuple


def rgb_to_hsv(r: int, g: int, b: int) -> Tuple[float, float, float]:
    """Convert 8-bit RGB to (hue in degrees [0, 360), saturation, value)."""
    rf = r / 255.0
    gf = g / 255.0
    bf = b / 255.0

    cmax = max(rf, gf, bf)
    cmin = min(rf, gf, bf)
    delta = cmax - cmin

    if delta == 0:
        h = 0.0
    elif cmax == rf:
        h = math.fmod((gf - bf) / delta, 6.0) * 60.0
    elif cmax == gf:
        h = ((bf - rf) / delta + 2.0) * 60.0
    else:
        h = ((rf - gf) / delta + 4.0) * 60.0

    if h < 0:
        h += 360.0
    s = 0.0 if cmax == 0 else delta / cmax
    return h, s, cmax


def hsv_to_rgb(h: float, s: float, v: float) -> Tuple[int, int, int]:
    """Convert (hue in degrees, saturation, value) to 8-bit RGB, truncating."""
    c = v * s
    x = c * (1 - abs(math.fmod(h / 60.0, 2) - 1))
    m = v - c

    if 0 <= h < 60:
        rf, gf, bf = c, x, 0.0
    elif 60 <= h < 120:
        rf, gf, bf = x, c, 0.0
    elif 120 <= h < 180:
        rf, gf, bf = 0.0, c, x
    elif 180 <= h < 240:
        rf, gf, bf = 0.0, x, c
    elif 240 <= h < 300:
        rf, gf, bf = x, 0.0, c
    else:
        rf, gf, bf = c, 0.0, x

    return (
        _to_byte(rf + m),
        _to_byte(gf + m),
        _to_byte(bf + m),
    )


def _to_byte(component: float) -> int:
    return int(component * 255) & 0xFF