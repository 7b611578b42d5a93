"""NumPy vectorised implementations of the per-channel adjustments.

Every function mutates a ``float64`` working array shaped ``(height, width, 3)``
in place.  None of them clamp: intermediate values may leave ``[0, 255]`` and
are only folded back by :func:`clamp_channels` once the whole chain has run.
"""

from __future__ import annotations

import numpy as np

from ...config import LUMA_WEIGHTS, SEPIA_DEPTH, SEPIA_INTENSITY


def _luminance(rgb: np.ndarray) -> np.ndarray:
    r_weight, g_weight, b_weight = LUMA_WEIGHTS
    return r_weight * rgb[..., 0] + g_weight * rgb[..., 1] + b_weight * rgb[..., 2]


def apply_brightness(rgb: np.ndarray, value: float) -> None:
    """Shift every channel by ``value - 100``."""

    rgb += float(value) - 100.0


def apply_contrast(rgb: np.ndarray, value: float) -> None:
    """Scale channels around mid-gray (128) by ``value / 100``."""

    factor = float(value) / 100.0
    rgb -= 128.0
    rgb *= factor
    rgb += 128.0


def apply_saturation(rgb: np.ndarray, value: float) -> None:
    """Interpolate (or extrapolate past) each pixel's luminance-weighted gray."""

    amount = float(value) / 100.0
    gray = _luminance(rgb)[..., None]
    rgb -= gray
    rgb *= amount
    rgb += gray


def apply_exposure(rgb: np.ndarray, value: float) -> None:
    """Multiply channels by ``2 ** ((value - 100) / 100)``, one stop per 100 units."""

    rgb *= 2.0 ** ((float(value) - 100.0) / 100.0)


def apply_temperature(rgb: np.ndarray, value: float) -> None:
    """Warm (positive) or cool (negative) by trading red against blue."""

    shift = float(value)
    rgb[..., 0] += shift
    rgb[..., 2] -= shift


def apply_gamma(rgb: np.ndarray, value: float) -> None:
    """Apply ``255 * (c / 255) ** (1 / gamma)`` with ``gamma = value / 100``.

    Earlier stages may push channels below zero; the power is taken on the
    magnitude and the sign restored so such values stay finite instead of
    turning into NaN.
    """

    gamma = float(value) / 100.0
    if gamma == 0.0:
        return
    correction = 1.0 / gamma
    normalised = rgb / 255.0
    curved = np.power(np.abs(normalised), correction)
    np.copysign(curved, normalised, out=curved)
    rgb[...] = curved * 255.0


def apply_clarity(rgb: np.ndarray, value: float) -> None:
    """Global mid-gray contrast boost of ``1 + value / 200``; no-op for ``value <= 0``."""

    if value <= 0:
        return
    factor = 1.0 + float(value) / 200.0
    rgb -= 128.0
    rgb *= factor
    rgb += 128.0


def apply_monochrome(rgb: np.ndarray, r_weight: float, g_weight: float, b_weight: float) -> None:
    """Replace every channel with the weighted gray ``r*rw + g*gw + b*bw``."""

    gray = r_weight * rgb[..., 0] + g_weight * rgb[..., 1] + b_weight * rgb[..., 2]
    rgb[...] = gray[..., None]


def apply_sepia_tone(
    rgb: np.ndarray,
    depth: float = SEPIA_DEPTH,
    intensity: float = SEPIA_INTENSITY,
) -> None:
    """Tint the luminance towards brown, red twice as strongly as green."""

    gray = _luminance(rgb)
    offset = float(depth) * float(intensity)
    rgb[..., 0] = np.minimum(255.0, gray + 2.0 * offset)
    rgb[..., 1] = np.minimum(255.0, gray + offset)
    rgb[..., 2] = np.minimum(255.0, gray)


def apply_color_tint(rgb: np.ndarray, red: float, green: float, blue: float) -> None:
    """Add a per-channel tint, capping only the high side at 255."""

    for channel, delta in enumerate((red, green, blue)):
        if delta:
            np.minimum(rgb[..., channel] + float(delta), 255.0, out=rgb[..., channel])


def clamp_channels(rgb: np.ndarray) -> np.ndarray:
    """Round to the nearest integer and clip into ``[0, 255]`` as ``uint8``."""

    rounded = np.rint(rgb)
    np.clip(rounded, 0.0, 255.0, out=rounded)
    return rounded.astype(np.uint8)


__all__ = [
    "apply_brightness",
    "apply_clarity",
    "apply_color_tint",
    "apply_contrast",
    "apply_exposure",
    "apply_gamma",
    "apply_monochrome",
    "apply_saturation",
    "apply_sepia_tone",
    "apply_temperature",
    "clamp_channels",
]
