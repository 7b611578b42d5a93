"""Scalar helpers shared by the JIT-compiled kernels.

The functions operate on plain floats so Numba can inline them straight into
the per-pixel loops of :mod:`iRetouch.core.filters.jit_executor`.
"""

from __future__ import annotations

from numba import jit


@jit(nopython=True, inline="always")
def _clamp(value: float, minimum: float, maximum: float) -> float:
    if value < minimum:
        return minimum
    if value > maximum:
        return maximum
    return value


@jit(nopython=True, inline="always")
def _vignette_factor(distance: float, max_distance: float, strength: float) -> float:
    """Return the brightness multiplier for a pixel *distance* away from the centre.

    ``strength`` lies in ``(0, 1]``.  The radial falloff ``base ** (2 * strength)``
    is lifted by ``1 - strength`` so weak vignettes only shade the outermost
    corners, while full strength lets the corners reach black.
    """

    base = (max_distance - distance) / max_distance
    if base < 0.0:
        base = 0.0
    return _clamp(base ** (strength * 2.0) + (1.0 - strength), 0.0, 1.0)
