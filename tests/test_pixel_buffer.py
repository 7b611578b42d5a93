"""Tests for the RGBA PixelBuffer container."""

import numpy as np
import pytest

from iRetouch.core.buffer import PixelBuffer
from iRetouch.errors import InvalidParameterError


def test_from_samples_is_row_major():
    samples = [(1, 2, 3, 4), (5, 6, 7, 8), (9, 10, 11, 12), (13, 14, 15, 16), (17, 18, 19, 20), (21, 22, 23, 24)]
    buffer = PixelBuffer.from_samples(3, 2, samples)

    assert buffer.size == (3, 2)
    assert buffer.pixel(0, 0) == (1, 2, 3, 4)
    assert buffer.pixel(2, 0) == (9, 10, 11, 12)
    assert buffer.pixel(0, 1) == (13, 14, 15, 16)
    assert list(buffer.samples()) == samples


def test_from_samples_rejects_wrong_length():
    with pytest.raises(InvalidParameterError):
        PixelBuffer.from_samples(2, 2, [(0, 0, 0, 0)] * 3)


@pytest.mark.parametrize("width, height", [(0, 3), (3, 0), (-1, 2)])
def test_filled_rejects_non_positive_sizes(width, height):
    with pytest.raises(InvalidParameterError):
        PixelBuffer.filled(width, height, (0, 0, 0, 255))


def test_rejects_out_of_range_samples():
    pixels = np.full((2, 2, 4), 300, dtype=np.int32)
    with pytest.raises(InvalidParameterError):
        PixelBuffer(pixels)


def test_rejects_wrong_channel_count():
    with pytest.raises(InvalidParameterError):
        PixelBuffer(np.zeros((2, 2, 3), dtype=np.uint8))


def test_buffers_never_alias_their_input():
    pixels = np.zeros((2, 2, 4), dtype=np.uint8)
    buffer = PixelBuffer(pixels)
    pixels[0, 0] = (255, 255, 255, 255)

    assert buffer.pixel(0, 0) == (0, 0, 0, 0)

    clone = buffer.copy()
    assert clone == buffer
    assert clone is not buffer
    assert not np.shares_memory(clone.pixels, buffer.pixels)


def test_pixels_view_is_read_only(solid_buffer):
    buffer = solid_buffer()
    with pytest.raises(ValueError):
        buffer.pixels[0, 0, 0] = 1


def test_channel_views(solid_buffer):
    buffer = solid_buffer((10, 20, 30, 40), width=2, height=2)

    assert buffer.rgb.shape == (2, 2, 3)
    assert np.all(buffer.alpha == 40)
    assert np.all(buffer.rgb[..., 1] == 20)


def test_equality_compares_content(solid_buffer):
    assert solid_buffer((1, 2, 3, 4)) == solid_buffer((1, 2, 3, 4))
    assert solid_buffer((1, 2, 3, 4)) != solid_buffer((1, 2, 3, 5))
    assert solid_buffer(width=2) != solid_buffer(width=3)


def test_empty_buffer_flag():
    assert PixelBuffer(np.zeros((0, 0, 4), dtype=np.uint8)).is_empty
    assert not PixelBuffer.filled(1, 1, (0, 0, 0, 0)).is_empty
