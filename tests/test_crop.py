"""Tests for resolving display-space crops against the source buffer."""

import math

import numpy as np
import pytest

from iRetouch.core.buffer import PixelBuffer
from iRetouch.core.crop import DisplayCropRect, SourceCropRect, extract_region, resolve_crop
from iRetouch.core.geometry import Transform, compute_display_extents
from iRetouch.errors import DegenerateCropError


def test_identity_transform_maps_rect_unchanged():
    rect = resolve_crop(DisplayCropRect(10, 10, 50, 40), Transform(0, 1), 200, 150)

    assert rect == SourceCropRect(10, 10, 50, 40)


def test_scale_is_undone():
    # 200x150 at scale 2 is displayed as 400x300.
    rect = resolve_crop(DisplayCropRect(20, 20, 100, 80), Transform(0, 2), 200, 150)

    assert rect == SourceCropRect(10, 10, 50, 40)


def test_full_frame_under_quarter_turn_covers_source():
    transform = Transform(90, 1)
    display_width, display_height = compute_display_extents(100, 60, transform)
    rect = resolve_crop(DisplayCropRect(0, 0, display_width, display_height), transform, 100, 60)

    assert abs(rect.x) <= 1 and abs(rect.y) <= 1
    assert abs(rect.width - 100) <= 1 and abs(rect.height - 60) <= 1
    assert rect.right <= 100 and rect.bottom <= 60


def test_quarter_turn_maps_display_top_right_to_source_top_left():
    # Clockwise rotation carries the source's top-left corner to the display's top-right.
    rect = resolve_crop(DisplayCropRect(40, 0, 20, 30), Transform(90, 1), 100, 60)

    assert rect == SourceCropRect(0, 0, 30, 20)


def test_diagonal_rotation_returns_enclosing_source_box():
    transform = Transform(45, 1)
    display_width, display_height = compute_display_extents(100, 100, transform)
    cx, cy = display_width / 2, display_height / 2
    rect = resolve_crop(DisplayCropRect(cx - 10, cy - 10, 20, 20), transform, 100, 100)

    # A 20x20 square turned by 45 degrees spans about 28.3 pixels on each axis.
    assert 28 <= rect.width <= 30
    assert 28 <= rect.height <= 30
    assert rect.x + rect.width / 2 == pytest.approx(50, abs=1)
    assert rect.y + rect.height / 2 == pytest.approx(50, abs=1)


def test_selection_hanging_off_the_image_is_clipped():
    rect = resolve_crop(DisplayCropRect(-20, -10, 50, 40), Transform(), 200, 150)

    assert rect == SourceCropRect(0, 0, 30, 30)


def test_oversized_selection_is_limited_to_source():
    rect = resolve_crop(DisplayCropRect(-50, -50, 400, 400), Transform(), 200, 150)

    assert rect == SourceCropRect(0, 0, 200, 150)


@pytest.mark.parametrize(
    "display_rect",
    [
        DisplayCropRect(500, 10, 50, 40),
        DisplayCropRect(10, 400, 50, 40),
        DisplayCropRect(-100, 10, 50, 40),
        DisplayCropRect(10, -90, 50, 40),
    ],
)
def test_selection_outside_the_image_is_degenerate(display_rect):
    with pytest.raises(DegenerateCropError):
        resolve_crop(display_rect, Transform(), 200, 150)


def test_selection_outside_rotated_extents_is_degenerate():
    transform = Transform(90, 0.5)
    display_width, display_height = compute_display_extents(100, 60, transform)

    with pytest.raises(DegenerateCropError):
        resolve_crop(DisplayCropRect(display_width + 5, display_height + 5, 10, 10), transform, 100, 60)


@pytest.mark.parametrize("width, height", [(0, 10), (10, 0), (-5, 10)])
def test_empty_selection_is_degenerate(width, height):
    with pytest.raises(DegenerateCropError):
        resolve_crop(DisplayCropRect(10, 10, width, height), Transform(), 200, 150)


@pytest.mark.parametrize(
    "display_rect",
    [
        DisplayCropRect(0, 0, math.inf, 10),
        DisplayCropRect(0, 0, 10, math.inf),
        DisplayCropRect(math.nan, 0, 10, 10),
        DisplayCropRect(0, -math.inf, 10, 10),
    ],
)
@pytest.mark.parametrize("rotation", [0, 90, 45])
def test_non_finite_selection_is_degenerate(display_rect, rotation):
    with pytest.raises(DegenerateCropError):
        resolve_crop(display_rect, Transform(rotation, 1), 100, 60)


def test_extract_region_copies_the_subgrid(gradient_buffer):
    region = extract_region(gradient_buffer, SourceCropRect(3, 2, 5, 4))

    assert region.size == (5, 4)
    np.testing.assert_array_equal(region.pixels, gradient_buffer.pixels[2:6, 3:8])
    assert not np.shares_memory(region.pixels, gradient_buffer.pixels)


@pytest.mark.parametrize(
    "rect",
    [SourceCropRect(0, 0, 0, 4), SourceCropRect(-1, 0, 4, 4), SourceCropRect(10, 0, 7, 4), SourceCropRect(0, 10, 4, 3)],
)
def test_extract_region_rejects_invalid_rects(gradient_buffer, rect):
    with pytest.raises(DegenerateCropError):
        extract_region(gradient_buffer, rect)


def test_resolved_rect_is_always_extractable():
    source = PixelBuffer.filled(37, 23, (1, 2, 3, 4))
    transform = Transform(200, 1.3)
    display_width, display_height = compute_display_extents(37, 23, transform)
    rect = resolve_crop(DisplayCropRect(-3, 4, display_width, display_height / 2), transform, 37, 23)

    region = extract_region(source, rect)
    assert region.size == (rect.width, rect.height)
