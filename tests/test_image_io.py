"""Tests for the Pillow-backed image adapters."""

import io

import numpy as np
import pytest
from PIL import Image

from iRetouch.core.buffer import PixelBuffer
from iRetouch.core.geometry import Transform, compute_surface_size, map_source_to_display
from iRetouch.errors import ImageDecodeError
from iRetouch.io.image_io import decode_image, encode_image, export_image, render_transformed


@pytest.fixture
def marked_buffer():
    """100x60 grey buffer with a red block top-left and a blue block bottom-right."""

    pixels = np.full((60, 100, 4), 128, dtype=np.uint8)
    pixels[..., 3] = 255
    pixels[0:20, 0:20] = (255, 0, 0, 255)
    pixels[40:60, 80:100] = (0, 0, 255, 255)
    return PixelBuffer(pixels)


def test_png_round_trip_is_lossless(gradient_buffer):
    data = encode_image(gradient_buffer)

    assert data.startswith(b"\x89PNG")
    assert decode_image(data) == gradient_buffer


def test_decode_from_path_and_stream(tmp_path, gradient_buffer):
    path = tmp_path / "sample.png"
    path.write_bytes(encode_image(gradient_buffer))

    assert decode_image(path) == gradient_buffer
    with path.open("rb") as handle:
        assert decode_image(handle) == gradient_buffer


def test_decode_converts_to_rgba():
    output = io.BytesIO()
    Image.new("L", (3, 2), 77).save(output, format="PNG")

    buffer = decode_image(output.getvalue())

    assert buffer.size == (3, 2)
    assert buffer.pixel(2, 1) == (77, 77, 77, 255)


@pytest.mark.parametrize("payload", [b"", b"not an image", bytearray(b"\x89PNG\r\n\x1a\n broken")])
def test_undecodable_input_raises(payload):
    with pytest.raises(ImageDecodeError):
        decode_image(payload)


def test_missing_file_raises(tmp_path):
    with pytest.raises(ImageDecodeError):
        decode_image(tmp_path / "missing.png")


def test_jpeg_encoding_drops_alpha(gradient_buffer):
    data = encode_image(gradient_buffer, "jpeg")

    decoded = decode_image(data)
    assert data.startswith(b"\xff\xd8")
    assert decoded.size == gradient_buffer.size
    assert np.all(decoded.alpha == 255)


def test_identity_render_is_a_copy(gradient_buffer):
    rendered = render_transformed(gradient_buffer, Transform())

    assert rendered == gradient_buffer
    assert rendered is not gradient_buffer


def test_quarter_turn_render(marked_buffer):
    rendered = render_transformed(marked_buffer, Transform(90, 1))

    assert rendered.size == (60, 100)
    # The red source corner ends up top-right, the blue one bottom-left.
    assert rendered.pixel(50, 10) == (255, 0, 0, 255)
    assert rendered.pixel(10, 90) == (0, 0, 255, 255)


def test_render_and_crop_mapping_share_the_surface(marked_buffer):
    transform = Transform(33, 1.3)
    rendered = render_transformed(marked_buffer, transform)

    assert rendered.size == compute_surface_size(100, 60, transform)
    centre = map_source_to_display([(50, 30)], 100, 60, transform)
    np.testing.assert_allclose(centre[0], [rendered.width / 2, rendered.height / 2], atol=1e-9)


def test_scaled_render_size(marked_buffer):
    rendered = render_transformed(marked_buffer, Transform(0, 0.5))

    assert rendered.size == (50, 30)


def test_diagonal_render_leaves_transparent_corners(solid_buffer):
    rendered = render_transformed(solid_buffer(width=40, height=40), Transform(45, 1))

    assert rendered.size == (57, 57)
    assert rendered.pixel(0, 0)[3] == 0
    assert rendered.pixel(28, 28) == (128, 128, 128, 255)


def test_export_bakes_transform(tmp_path, marked_buffer):
    target = export_image(marked_buffer, tmp_path / "nested" / "out.png", Transform(90, 1))

    assert target.exists()
    assert decode_image(target).size == (60, 100)


def test_export_infers_format_from_suffix(tmp_path, gradient_buffer):
    target = export_image(gradient_buffer, tmp_path / "out.jpg")

    assert target.read_bytes().startswith(b"\xff\xd8")

