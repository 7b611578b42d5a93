"""Entry point running the preset and fine-tune stages over a source buffer."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

import numpy as np

from ..adjustments import ADJUSTMENT_KEYS, NEUTRAL_VALUES, AdjustmentState
from ..buffer import PixelBuffer
from .jit_executor import apply_vignette
from .numpy_executor import (
    apply_brightness,
    apply_clarity,
    apply_contrast,
    apply_exposure,
    apply_gamma,
    apply_saturation,
    apply_temperature,
    clamp_channels,
)
from .presets import FilterPreset, apply_preset, resolve_preset

# Several stages do not commute (brightness before contrast differs from the
# reverse), so this order is part of the output contract.
_STAGES: tuple[tuple[str, Callable[[np.ndarray, float], None]], ...] = (
    ("brightness", apply_brightness),
    ("contrast", apply_contrast),
    ("saturation", apply_saturation),
    ("exposure", apply_exposure),
    ("temperature", apply_temperature),
    ("gamma", apply_gamma),
    ("clarity", apply_clarity),
    ("vignette", apply_vignette),
)
assert tuple(key for key, _ in _STAGES) == ADJUSTMENT_KEYS


def _coerce_state(state: AdjustmentState | Mapping[str, Any] | None) -> AdjustmentState:
    if state is None:
        return AdjustmentState()
    if isinstance(state, AdjustmentState):
        return state
    return AdjustmentState.from_mapping(state)


def run_pipeline(
    source: PixelBuffer,
    state: AdjustmentState | Mapping[str, Any] | None = None,
    active_filter: FilterPreset | str | None = FilterPreset.DEFAULT,
) -> PixelBuffer:
    """Return a new buffer holding *source* with *active_filter* and *state* applied.

    Parameters and the preset name are validated before any pixel work starts,
    so an :class:`~iRetouch.errors.InvalidParameterError` never leaves a
    half-processed result behind.  *source* is only read; its alpha channel is
    copied through untouched.
    """

    adjustments = _coerce_state(state)
    preset = resolve_preset(active_filter)

    if source.is_empty:
        return source.copy()

    working = np.ascontiguousarray(source.rgb, dtype=np.float64)
    apply_preset(working, preset)
    for key, operation in _STAGES:
        value = getattr(adjustments, key)
        if value == NEUTRAL_VALUES[key]:
            continue
        operation(working, value)

    pixels = np.empty(source.pixels.shape, dtype=np.uint8)
    pixels[..., :3] = clamp_channels(working)
    pixels[..., 3] = source.alpha
    return PixelBuffer(pixels)


__all__ = ["run_pipeline"]
