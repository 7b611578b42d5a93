"""Named looks built from the fine-tune primitives.

Each preset is a fixed sequence of primitive calls, so the same preset applied
to the same source always produces the same pixels regardless of what was
selected before.  Presets run ahead of the slider stage, which means slider
moves are always relative to the preset's output.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum

import numpy as np

from ...config import LUMA_WEIGHTS
from ...errors import InvalidParameterError
from .numpy_executor import (
    apply_brightness,
    apply_color_tint,
    apply_contrast,
    apply_monochrome,
    apply_saturation,
    apply_sepia_tone,
    apply_temperature,
)


class FilterPreset(str, Enum):
    """Closed set of preset names; ``DEFAULT`` applies nothing."""

    DEFAULT = "default"
    CLASSIC = "classic"
    CHROME = "chrome"
    FADE = "fade"
    COLD = "cold"
    WARM = "warm"
    PASTEL = "pastel"
    MONOCHROME = "monochrome"
    MONO = "mono"
    NOIR = "noir"
    STARK = "stark"
    WASH = "wash"
    SEPIA = "sepia"
    RUST = "rust"
    BLUES = "blues"
    COLOR = "color"


Step = tuple[Callable[..., None], tuple[float, ...]]

_EQUAL_WEIGHTS = (1.0 / 3.0, 1.0 / 3.0, 1.0 / 3.0)

PRESET_STEPS: dict[FilterPreset, tuple[Step, ...]] = {
    FilterPreset.DEFAULT: (),
    FilterPreset.CLASSIC: (
        (apply_saturation, (70,)),
        (apply_contrast, (110,)),
    ),
    FilterPreset.CHROME: (
        (apply_contrast, (150,)),
        (apply_saturation, (60,)),
        (apply_color_tint, (0, 0, 12)),
    ),
    FilterPreset.FADE: (
        (apply_contrast, (80,)),
        (apply_brightness, (110,)),
    ),
    FilterPreset.COLD: ((apply_temperature, (-30,)),),
    FilterPreset.WARM: ((apply_temperature, (30,)),),
    FilterPreset.PASTEL: (
        (apply_saturation, (60,)),
        (apply_contrast, (90,)),
        (apply_brightness, (105,)),
    ),
    FilterPreset.MONOCHROME: ((apply_monochrome, _EQUAL_WEIGHTS),),
    FilterPreset.MONO: (
        (apply_monochrome, LUMA_WEIGHTS),
        (apply_contrast, (120,)),
    ),
    FilterPreset.NOIR: (
        (apply_monochrome, LUMA_WEIGHTS),
        (apply_contrast, (150,)),
        (apply_brightness, (90,)),
    ),
    FilterPreset.STARK: (
        (apply_contrast, (180,)),
        (apply_saturation, (20,)),
    ),
    FilterPreset.WASH: (
        (apply_contrast, (70,)),
        (apply_saturation, (80,)),
        (apply_color_tint, (10, 8, 0)),
    ),
    FilterPreset.SEPIA: ((apply_sepia_tone, ()),),
    FilterPreset.RUST: (
        (apply_sepia_tone, (30, 0.9)),
        (apply_saturation, (120,)),
    ),
    FilterPreset.BLUES: (
        (apply_color_tint, (0, 0, 50)),
        (apply_contrast, (110,)),
    ),
    FilterPreset.COLOR: (
        (apply_saturation, (150,)),
        (apply_contrast, (110,)),
    ),
}


def resolve_preset(name: FilterPreset | str | None) -> FilterPreset:
    """Return the :class:`FilterPreset` for *name* (case-insensitive).

    ``None`` and the empty string both mean ``DEFAULT``.
    """

    if isinstance(name, FilterPreset):
        return name
    if name is None:
        return FilterPreset.DEFAULT
    if not isinstance(name, str):
        raise InvalidParameterError(f"Preset name must be a string, got {name!r}")
    key = name.strip().lower()
    if not key:
        return FilterPreset.DEFAULT
    try:
        return FilterPreset(key)
    except ValueError:
        raise InvalidParameterError(f"Unknown filter preset {name!r}") from None


def apply_preset(rgb: np.ndarray, preset: FilterPreset | str | None) -> None:
    """Replay the steps of *preset* on the float working array *rgb*."""

    for operation, args in PRESET_STEPS[resolve_preset(preset)]:
        operation(rgb, *args)


__all__ = ["FilterPreset", "PRESET_STEPS", "apply_preset", "resolve_preset"]
