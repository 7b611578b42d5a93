"""Pure rotation/scale maths shared by the renderer and the crop resolver.

Two coordinate frames are involved:

**Source space**: the stored, untransformed pixel buffer, origin at its
top-left corner.

**Display space**: the rendered presentation, where the source is rotated by
``rotation_degrees`` (clockwise, y pointing down) and then uniformly scaled,
both about the centre.  The display surface is sized to the axis-aligned
bounding box of that rotated, scaled rectangle, so the source centre always
lands on the display centre.

Keeping the maths free of any drawing context lets the crop resolver and the
export path agree with the preview exactly, and keeps both unit-testable
without a display.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

import numpy as np

from ..errors import InvalidParameterError


@dataclass(frozen=True)
class Transform:
    """Rotation (degrees, normalised into ``[0, 360)``) and uniform scale."""

    rotation_degrees: float = 0.0
    scale: float = 1.0

    def __post_init__(self) -> None:
        rotation = float(self.rotation_degrees)
        scale = float(self.scale)
        if not math.isfinite(rotation):
            raise InvalidParameterError(f"Rotation must be finite, got {self.rotation_degrees!r}")
        if not math.isfinite(scale) or scale <= 0.0:
            raise InvalidParameterError(f"Scale must be a positive number, got {self.scale!r}")
        object.__setattr__(self, "rotation_degrees", rotation % 360.0)
        object.__setattr__(self, "scale", scale)

    @property
    def is_identity(self) -> bool:
        return self.rotation_degrees == 0.0 and self.scale == 1.0


# Exact values for quarter turns keep 90/180/270 degree crops pixel aligned.
_QUARTER_TURNS = {0.0: (1.0, 0.0), 90.0: (0.0, 1.0), 180.0: (-1.0, 0.0), 270.0: (0.0, -1.0)}


def _cos_sin(degrees: float) -> tuple[float, float]:
    degrees = degrees % 360.0
    if degrees in _QUARTER_TURNS:
        return _QUARTER_TURNS[degrees]
    radians = math.radians(degrees)
    return math.cos(radians), math.sin(radians)


def _rotation_matrix(degrees: float) -> np.ndarray:
    cos_t, sin_t = _cos_sin(degrees)
    return np.array([[cos_t, -sin_t], [sin_t, cos_t]], dtype=np.float64)


def forward_matrix(transform: Transform) -> np.ndarray:
    """Return the 2x2 matrix mapping centred source points to centred display points.

    Rotation is applied first and scale second, matching how the renderer
    composes them.
    """

    return transform.scale * _rotation_matrix(transform.rotation_degrees)


def inverse_matrix(transform: Transform) -> np.ndarray:
    """Return the matrix undoing :func:`forward_matrix`: un-scale, then rotate by ``-θ``."""

    return _rotation_matrix(-transform.rotation_degrees) / transform.scale


def compute_display_extents(
    source_width: float,
    source_height: float,
    transform: Transform,
) -> tuple[float, float]:
    """Return the ``(width, height)`` of the display surface for a source of the given size."""

    cos_t, sin_t = _cos_sin(transform.rotation_degrees)
    abs_cos = abs(cos_t)
    abs_sin = abs(sin_t)
    scaled_width = source_width * transform.scale
    scaled_height = source_height * transform.scale
    display_width = scaled_width * abs_cos + scaled_height * abs_sin
    display_height = scaled_width * abs_sin + scaled_height * abs_cos
    return (display_width, display_height)


def compute_surface_size(
    source_width: float,
    source_height: float,
    transform: Transform,
) -> tuple[int, int]:
    """Return the whole-pixel size of the rendered display surface.

    Display coordinates are measured on this surface, so the point mapping
    and the renderer both centre on it.
    """

    display_width, display_height = compute_display_extents(source_width, source_height, transform)
    return (max(1, int(round(display_width))), max(1, int(round(display_height))))


def _as_points(points: Iterable[Sequence[float]]) -> np.ndarray:
    array = np.asarray(list(points), dtype=np.float64)
    if array.ndim != 2 or array.shape[1] != 2:
        raise InvalidParameterError(f"Expected a sequence of (x, y) points, got shape {array.shape}")
    return array


def map_display_to_source(
    points: Iterable[Sequence[float]],
    source_width: float,
    source_height: float,
    transform: Transform,
) -> np.ndarray:
    """Map display-space *points* back into source space.

    Returns an ``(n, 2)`` array.  Points are centred on the rendered surface
    (:func:`compute_surface_size`), run through :func:`inverse_matrix` and
    re-anchored on the source centre.
    """

    array = _as_points(points)
    display_width, display_height = compute_surface_size(source_width, source_height, transform)
    centred = array - np.array([display_width / 2.0, display_height / 2.0])
    mapped = centred @ inverse_matrix(transform).T
    return mapped + np.array([source_width / 2.0, source_height / 2.0])


def map_source_to_display(
    points: Iterable[Sequence[float]],
    source_width: float,
    source_height: float,
    transform: Transform,
) -> np.ndarray:
    """Map source-space *points* onto the display surface (inverse of the above)."""

    array = _as_points(points)
    display_width, display_height = compute_surface_size(source_width, source_height, transform)
    centred = array - np.array([source_width / 2.0, source_height / 2.0])
    mapped = centred @ forward_matrix(transform).T
    return mapped + np.array([display_width / 2.0, display_height / 2.0])


def bounding_box(points: np.ndarray) -> tuple[float, float, float, float]:
    """Return ``(min_x, min_y, max_x, max_y)`` of an ``(n, 2)`` point array."""

    array = np.asarray(points, dtype=np.float64)
    if array.size == 0:
        raise InvalidParameterError("Cannot bound an empty point set")
    min_x, min_y = array.min(axis=0)
    max_x, max_y = array.max(axis=0)
    return (float(min_x), float(min_y), float(max_x), float(max_y))


__all__ = [
    "Transform",
    "bounding_box",
    "compute_display_extents",
    "compute_surface_size",
    "forward_matrix",
    "inverse_matrix",
    "map_display_to_source",
    "map_source_to_display",
]
