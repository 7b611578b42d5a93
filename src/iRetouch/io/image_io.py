"""Pillow-backed decoding, encoding and transform baking for pixel buffers."""

from __future__ import annotations

import io
from pathlib import Path
from typing import BinaryIO, Union

import numpy as np
from PIL import Image, UnidentifiedImageError

from ..config import DEFAULT_EXPORT_FORMAT, EXPORT_RESAMPLE
from ..core.buffer import PixelBuffer
from ..core.geometry import Transform, compute_surface_size, inverse_matrix
from ..errors import ImageDecodeError, InvalidParameterError
from ..utils.logging import get_logger

ImageSource = Union[bytes, bytearray, str, Path, BinaryIO]

_RESAMPLE_FILTERS = {
    "nearest": Image.Resampling.NEAREST,
    "bilinear": Image.Resampling.BILINEAR,
    "bicubic": Image.Resampling.BICUBIC,
}

# Formats that cannot store an alpha channel are flattened to RGB on encode.
_OPAQUE_FORMATS = {"JPEG", "JPG", "BMP"}

_LOGGER = get_logger(__name__)


def _to_pil(buffer: PixelBuffer) -> Image.Image:
    return Image.fromarray(np.array(buffer.pixels, dtype=np.uint8))


def _from_pil(image: Image.Image) -> PixelBuffer:
    if image.mode != "RGBA":
        image = image.convert("RGBA")
    return PixelBuffer(np.asarray(image, dtype=np.uint8))


def decode_image(source: ImageSource) -> PixelBuffer:
    """Decode *source* (raw bytes, a path or a binary stream) into an RGBA buffer."""

    if isinstance(source, (bytes, bytearray)):
        stream: Union[str, Path, BinaryIO] = io.BytesIO(bytes(source))
    else:
        stream = source
    try:
        with Image.open(stream) as image:
            image.load()
            buffer = _from_pil(image)
    except (UnidentifiedImageError, OSError) as exc:
        raise ImageDecodeError(f"Could not decode image: {exc}") from exc
    if buffer.is_empty:
        raise ImageDecodeError("Decoded image has no pixels")
    return buffer


def encode_image(buffer: PixelBuffer, format: str = DEFAULT_EXPORT_FORMAT) -> bytes:
    """Return *buffer* encoded as *format* (any format Pillow can write)."""

    image = _to_pil(buffer)
    if format.upper() in _OPAQUE_FORMATS:
        image = image.convert("RGB")
    output = io.BytesIO()
    image.save(output, format=format)
    return output.getvalue()


def render_transformed(buffer: PixelBuffer, transform: Transform) -> PixelBuffer:
    """Bake *transform* into a new buffer sized to the display extents.

    Every output pixel is pulled back through the inverse display mapping, the
    same one the crop resolver uses, so the baked raster lines up with the
    preview.  Areas outside the rotated source stay fully transparent.
    """

    if transform.is_identity:
        return buffer.copy()

    out_width, out_height = compute_surface_size(buffer.width, buffer.height, transform)

    inverse = inverse_matrix(transform)
    a, b = float(inverse[0, 0]), float(inverse[0, 1])
    d, e = float(inverse[1, 0]), float(inverse[1, 1])
    c = buffer.width / 2.0 - a * out_width / 2.0 - b * out_height / 2.0
    f = buffer.height / 2.0 - d * out_width / 2.0 - e * out_height / 2.0

    try:
        resample = _RESAMPLE_FILTERS[EXPORT_RESAMPLE]
    except KeyError:
        raise InvalidParameterError(f"Unsupported resample filter {EXPORT_RESAMPLE!r}") from None

    rendered = _to_pil(buffer).transform(
        (out_width, out_height),
        Image.Transform.AFFINE,
        (a, b, c, d, e, f),
        resample=resample,
        fillcolor=(0, 0, 0, 0),
    )
    return _from_pil(rendered)


def export_image(
    buffer: PixelBuffer,
    path: Union[str, Path],
    transform: Transform | None = None,
    format: str | None = None,
) -> Path:
    """Write *buffer* to *path*, baking *transform* in when given.

    The format defaults to the one implied by the file suffix, falling back to
    :data:`~iRetouch.config.DEFAULT_EXPORT_FORMAT` when the suffix is unknown.
    """

    target = Path(path)
    if format is None:
        format = Image.registered_extensions().get(target.suffix.lower(), DEFAULT_EXPORT_FORMAT)
    if transform is not None:
        buffer = render_transformed(buffer, transform)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_bytes(encode_image(buffer, format))
    _LOGGER.info("Exported %dx%d %s image to %s", buffer.width, buffer.height, format, target)
    return target


__all__ = ["decode_image", "encode_image", "export_image", "render_transformed"]
