"""iRetouch: non-destructive fine-tune, preset and crop editing for raster images."""

from __future__ import annotations

from .core import (
    ADJUSTMENT_KEYS,
    AdjustmentState,
    DisplayCropRect,
    EditSession,
    FilterPreset,
    PixelBuffer,
    SourceCropRect,
    Transform,
    compute_display_extents,
    extract_region,
    resolve_crop,
    run_pipeline,
)
from .errors import DegenerateCropError, InvalidParameterError, IRetouchError

__version__ = "0.1.0"

__all__ = [
    "ADJUSTMENT_KEYS",
    "AdjustmentState",
    "DegenerateCropError",
    "DisplayCropRect",
    "EditSession",
    "FilterPreset",
    "IRetouchError",
    "InvalidParameterError",
    "PixelBuffer",
    "SourceCropRect",
    "Transform",
    "compute_display_extents",
    "extract_region",
    "resolve_crop",
    "run_pipeline",
]
