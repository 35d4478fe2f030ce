"""
Iteration-count palette.

Entry i of the palette is the colour used for a pixel whose orbit escaped
after i iterations. Hue sweeps from 175/255 towards 255/255 while saturation
and brightness fall to zero, so the last entry (points that never escaped)
is always black.
"""

from __future__ import annotations

import colorsys
import math
from typing import Tuple

import numpy as np

from mandelreel.errors import InvalidParameter

HUE_MAX = 175
HUE_MIN = 255


def hsb_to_rgb(hue: float, saturation: float, brightness: float) -> Tuple[int, int, int]:
    """HSB (all in 0..1, hue wraps) to 8-bit RGB, rounding each channel half up."""
    r, g, b = colorsys.hsv_to_rgb(hue - math.floor(hue), saturation, brightness)
    return int(r * 255 + 0.5), int(g * 255 + 0.5), int(b * 255 + 0.5)


def build_palette(max_iterations: int) -> np.ndarray:
    """
    Build the colour table for a given iteration budget.

    Args:
        max_iterations: The iteration budget the palette is indexed by.

    Returns:
        Read-only uint8 array of shape (max_iterations + 1, 3).
    """
    if max_iterations < 0:
        raise InvalidParameter(f"max_iterations must be >= 0, got {max_iterations!r}")

    hue_range = HUE_MAX - HUE_MIN
    colors = np.zeros((max_iterations + 1, 3), dtype=np.uint8)
    for i in range(max_iterations + 1):
        quotient = i / max_iterations if max_iterations else 1.0
        hue = (HUE_MAX - hue_range * quotient) / 255
        colors[i] = hsb_to_rgb(hue, 1 - quotient, 1 - quotient)

    colors.flags.writeable = False
    return colors
