"""Pure editing core: pixel buffers, adjustments, presets, geometry and crop."""

from __future__ import annotations

from .adjustments import ADJUSTMENT_KEYS, AdjustmentState
from .buffer import PixelBuffer
from .crop import DisplayCropRect, SourceCropRect, extract_region, resolve_crop
from .filters import FilterPreset, run_pipeline
from .geometry import Transform, compute_display_extents
from .session import EditSession

__all__ = [
    "ADJUSTMENT_KEYS",
    "AdjustmentState",
    "DisplayCropRect",
    "EditSession",
    "FilterPreset",
    "PixelBuffer",
    "SourceCropRect",
    "Transform",
    "compute_display_extents",
    "extract_region",
    "resolve_crop",
    "run_pipeline",
]
