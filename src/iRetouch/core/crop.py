"""Resolve display-space crop selections against the source pixel buffer.

The user draws the crop box over the rotated, scaled preview.  Committing it
has to cut the *source* buffer, so the four corners are carried back through
the inverse display transform and the source-space bounding box is cut out.
For rotations other than multiples of 90 degrees the result is the smallest
axis-aligned source rectangle containing the selection.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from ..errors import DegenerateCropError
from .buffer import PixelBuffer
from .geometry import Transform, bounding_box, map_display_to_source


@dataclass(frozen=True)
class DisplayCropRect:
    """Crop selection in display coordinates (top-left origin)."""

    x: float
    y: float
    width: float
    height: float

    def corners(self) -> list[tuple[float, float]]:
        """Return the corners as top-left, top-right, bottom-left, bottom-right."""

        right = self.x + self.width
        bottom = self.y + self.height
        return [(self.x, self.y), (right, self.y), (self.x, bottom), (right, bottom)]


@dataclass(frozen=True)
class SourceCropRect:
    """Integer pixel rectangle inside the source buffer."""

    x: int
    y: int
    width: int
    height: int

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    def as_tuple(self) -> tuple[int, int, int, int]:
        return (self.x, self.y, self.width, self.height)


def resolve_crop(
    display_rect: DisplayCropRect,
    transform: Transform,
    source_width: int,
    source_height: int,
) -> SourceCropRect:
    """Return the source rectangle covered by *display_rect*.

    Raises
    ------
    DegenerateCropError
        When the selection has no area, has a non-finite coordinate or size,
        or misses the image so that no source pixel remains after clamping to
        the buffer bounds.
    """

    values = (display_rect.x, display_rect.y, display_rect.width, display_rect.height)
    if not all(math.isfinite(value) for value in values):
        raise DegenerateCropError(f"Crop selection must be finite, got {display_rect}")
    if not (display_rect.width > 0 and display_rect.height > 0):
        raise DegenerateCropError(
            f"Crop selection must have a positive size, got {display_rect.width}x{display_rect.height}"
        )
    if source_width <= 0 or source_height <= 0:
        raise DegenerateCropError(f"Cannot crop an empty {source_width}x{source_height} image")

    mapped = map_display_to_source(display_rect.corners(), source_width, source_height, transform)
    min_x, min_y, max_x, max_y = bounding_box(mapped)

    x = max(0, math.floor(min_x))
    y = max(0, math.floor(min_y))
    width = min(source_width, math.ceil(max_x - min_x))
    height = min(source_height, math.ceil(max_y - min_y))
    # A selection hanging off the image must not reach past the source edges.
    width = min(width, source_width - x, math.ceil(max_x) - x)
    height = min(height, source_height - y, math.ceil(max_y) - y)

    if width <= 0 or height <= 0:
        raise DegenerateCropError(
            f"Crop selection {display_rect} resolves to an empty source region "
            f"({width}x{height} at {x},{y})"
        )
    return SourceCropRect(int(x), int(y), int(width), int(height))


def extract_region(source: PixelBuffer, rect: SourceCropRect) -> PixelBuffer:
    """Copy the pixels under *rect* into a new, independently owned buffer."""

    if rect.width <= 0 or rect.height <= 0:
        raise DegenerateCropError(f"Cannot extract an empty region {rect.as_tuple()}")
    if rect.x < 0 or rect.y < 0 or rect.right > source.width or rect.bottom > source.height:
        raise DegenerateCropError(
            f"Region {rect.as_tuple()} exceeds the {source.width}x{source.height} source"
        )
    return PixelBuffer(source.pixels[rect.y : rect.bottom, rect.x : rect.right])


__all__ = ["DisplayCropRect", "SourceCropRect", "extract_region", "resolve_crop"]
