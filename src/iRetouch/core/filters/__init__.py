"""Pixel adjustment package for the non-destructive edit pipeline.

- numpy_executor: vectorised per-channel adjustments and the final clamp
- jit_executor: Numba kernel for the position-dependent vignette
- algorithms: scalar helpers inlined into the JIT kernels
- presets: named looks composed from the primitives
- facade: ``run_pipeline`` tying the stages together in their fixed order
"""

from __future__ import annotations

from .facade import run_pipeline
from .presets import FilterPreset, PRESET_STEPS, apply_preset, resolve_preset

__all__ = ["FilterPreset", "PRESET_STEPS", "apply_preset", "resolve_preset", "run_pipeline"]
