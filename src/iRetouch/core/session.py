"""Editor state holder tying the pure pipeline and crop helpers together."""

from __future__ import annotations

from typing import Any

from ..errors import DegenerateCropError, IRetouchError
from ..utils.logging import get_logger
from .adjustments import AdjustmentState
from .buffer import PixelBuffer
from .crop import DisplayCropRect, SourceCropRect, extract_region, resolve_crop
from .filters import FilterPreset, resolve_preset, run_pipeline
from .geometry import Transform, compute_display_extents

_LOGGER = get_logger(__name__)


class EditSession:
    """Track the source image, the active edits and the derived preview.

    ``source`` is only replaced wholesale (on :meth:`load` or
    :meth:`commit_crop`).  ``derived`` is recomputed from ``source`` on every
    change and swapped in only once the render has finished, so readers never
    observe a half-processed buffer.
    """

    def __init__(self, source: PixelBuffer | None = None) -> None:
        self._source: PixelBuffer | None = None
        self._derived: PixelBuffer | None = None
        self._state = AdjustmentState()
        self._active_filter = FilterPreset.DEFAULT
        self._transform = Transform()
        if source is not None:
            self.load(source)

    # ------------------------------------------------------------------
    # Read-only state
    # ------------------------------------------------------------------
    @property
    def has_image(self) -> bool:
        return self._source is not None

    @property
    def source(self) -> PixelBuffer:
        return self._require_source()

    @property
    def derived(self) -> PixelBuffer:
        self._require_source()
        assert self._derived is not None
        return self._derived

    @property
    def state(self) -> AdjustmentState:
        return self._state

    @property
    def active_filter(self) -> FilterPreset:
        return self._active_filter

    @property
    def transform(self) -> Transform:
        return self._transform

    def display_extents(self) -> tuple[float, float]:
        """Return the size of the rotated, scaled presentation of ``derived``."""

        source = self._require_source()
        return compute_display_extents(source.width, source.height, self._transform)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------
    def load(self, buffer: PixelBuffer) -> None:
        """Adopt *buffer* as the new source and reset every edit."""

        if buffer.is_empty:
            raise IRetouchError("Cannot edit an empty image")
        self._source = buffer.copy()
        self._reset_edits()
        self._rerender()
        _LOGGER.info("Loaded %dx%d image", buffer.width, buffer.height)

    def update(self, **changes: Any) -> AdjustmentState:
        """Apply slider *changes*; invalid values leave the session untouched."""

        self._require_source()
        state = self._state.replace(**changes)
        self._rerender(state=state)
        self._state = state
        return state

    def set_adjustments(self, state: AdjustmentState) -> None:
        self._require_source()
        self._rerender(state=state)
        self._state = state

    def set_filter(self, name: FilterPreset | str | None) -> FilterPreset:
        self._require_source()
        preset = resolve_preset(name)
        self._rerender(active_filter=preset)
        self._active_filter = preset
        return preset

    def set_transform(
        self,
        rotation_degrees: float | None = None,
        scale: float | None = None,
    ) -> Transform:
        """Update the display rotation and/or scale.

        The transform only affects presentation and crop resolution, so the
        derived buffer is left as is.
        """

        transform = Transform(
            self._transform.rotation_degrees if rotation_degrees is None else rotation_degrees,
            self._transform.scale if scale is None else scale,
        )
        self._transform = transform
        return transform

    def resolve_crop(self, display_rect: DisplayCropRect) -> SourceCropRect:
        source = self._require_source()
        return resolve_crop(display_rect, self._transform, source.width, source.height)

    def commit_crop(self, display_rect: DisplayCropRect) -> SourceCropRect:
        """Cut the source down to *display_rect* and start over from the result.

        On :class:`~iRetouch.errors.DegenerateCropError` nothing changes.
        """

        source = self._require_source()
        try:
            rect = self.resolve_crop(display_rect)
            cropped = extract_region(source, rect)
        except DegenerateCropError:
            _LOGGER.warning("Rejected crop %s under %s", display_rect, self._transform)
            raise
        self._source = cropped
        self._reset_edits()
        self._rerender()
        _LOGGER.info(
            "Cropped source %dx%d -> %dx%d at (%d, %d)",
            source.width,
            source.height,
            rect.width,
            rect.height,
            rect.x,
            rect.y,
        )
        return rect

    def reset(self) -> None:
        """Return every slider, the preset and the transform to neutral."""

        self._require_source()
        self._reset_edits()
        self._rerender()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _require_source(self) -> PixelBuffer:
        if self._source is None:
            raise IRetouchError("No image loaded")
        return self._source

    def _reset_edits(self) -> None:
        self._state = AdjustmentState()
        self._active_filter = FilterPreset.DEFAULT
        self._transform = Transform()

    def _rerender(
        self,
        *,
        state: AdjustmentState | None = None,
        active_filter: FilterPreset | None = None,
    ) -> None:
        derived = run_pipeline(
            self._require_source(),
            self._state if state is None else state,
            self._active_filter if active_filter is None else active_filter,
        )
        self._derived = derived


__all__ = ["EditSession"]
