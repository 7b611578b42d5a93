"""JIT-accelerated radial vignette using Numba.

The vignette is the only adjustment whose response depends on the pixel
position, so it cannot be expressed as a per-channel curve.  Walking the
working array in a compiled loop keeps it as cheap as the vectorised stages.
"""

from __future__ import annotations

import math

import numpy as np
from numba import jit

from .algorithms import _vignette_factor


def apply_vignette(rgb: np.ndarray, value: float) -> None:
    """Darken *rgb* towards its edges in place.

    ``value`` runs from 0 (off) to 100 (corners fade to black).  A value of 0
    skips the pass entirely, as do empty and single-pixel buffers whose
    centre-to-corner distance offers no usable falloff.
    """

    if value == 0:
        return
    if rgb.ndim != 3 or rgb.shape[2] != 3:
        raise ValueError(f"Expected a (height, width, 3) working array, got {rgb.shape}")
    if rgb.dtype != np.float64 or not rgb.flags.c_contiguous:
        raise BufferError("Vignette requires a contiguous float64 working array")

    height, width = int(rgb.shape[0]), int(rgb.shape[1])
    if width * height <= 1:
        return

    center_x = width / 2.0
    center_y = height / 2.0
    max_distance = math.hypot(center_x, center_y)
    if max_distance == 0.0:
        return

    _apply_vignette_kernel(rgb, width, height, center_x, center_y, max_distance, float(value) / 100.0)


@jit(nopython=True, cache=True)
def _apply_vignette_kernel(
    rgb: np.ndarray,
    width: int,
    height: int,
    center_x: float,
    center_y: float,
    max_distance: float,
    strength: float,
) -> None:
    """JIT-compiled per-pixel vignette loop."""

    for y in range(height):
        dy = center_y - y
        for x in range(width):
            dx = center_x - x
            factor = _vignette_factor(math.sqrt(dx * dx + dy * dy), max_distance, strength)
            rgb[y, x, 0] *= factor
            rgb[y, x, 1] *= factor
            rgb[y, x, 2] *= factor


__all__ = ["apply_vignette"]
