from __future__ import annotations

import math

from numba import njit

from mandelreel.complexmath import abs_squared, add, square
from mandelreel.errors import InvalidParameter

ESCAPE_VALUE = 4.0


@njit(cache=True, nogil=True)
def iterate(real, imag, max_iterations):
    """
    Escape-time count for c = real + imag*i.

    Starts from z = c and applies z <- z^2 + c until |z|^2 reaches the escape
    value or the count reaches max_iterations. A result equal to
    max_iterations means the point is assumed to be inside the set.
    """
    cr = float(real)
    ci = float(imag)
    zr = cr
    zi = ci
    iterations = 0
    while abs_squared(zr, zi) < ESCAPE_VALUE and iterations < max_iterations:
        iterations += 1
        zr, zi = square(zr, zi)
        zr, zi = add(zr, zi, cr, ci)
    return iterations


def budget_for(magnification: float) -> int:
    """
    Maximum iteration count to use at a given magnification.

    Empirically tuned so the budget grows sub-linearly with magnification:
    floor(sqrt(|2 * sqrt(|1 - sqrt(5m)|)|) * 66.5).
    """
    if not magnification > 0:
        raise InvalidParameter(f"magnification must be > 0, got {magnification!r}")
    return int(math.sqrt(abs(2 * math.sqrt(abs(1 - math.sqrt(5 * magnification))))) * 66.5)
