"""Conversion between :class:`PixelBuffer` and Qt's ``QImage``.

The Qt surface is the presentation collaborator: previews are pushed to it as
``QImage`` objects and captured frames come back the same way.  Both
directions use ``Format_RGBA8888`` so the byte order matches the buffer's
RGBA layout and no channel swizzling is needed.
"""

from __future__ import annotations

import numpy as np
from PySide6.QtGui import QImage

from ..core.buffer import PixelBuffer


def _resolve_pixel_buffer(image: QImage) -> tuple[memoryview, object]:
    """Return a 1-D byte :class:`memoryview` over *image*'s pixels plus its owner.

    PySide hands out a ready ``memoryview`` while PyQt returns a ``sip.voidptr``
    needing ``setsize`` first.  The second tuple element keeps the binding's
    wrapper alive for as long as the view is used.
    """

    bytes_per_line = image.bytesPerLine()
    expected_size = bytes_per_line * image.height()
    buffer = image.constBits()
    guard: object = buffer

    if isinstance(buffer, memoryview):
        view = buffer
    else:
        try:
            view = memoryview(buffer)
        except TypeError:
            if not hasattr(buffer, "setsize"):
                raise RuntimeError("Unsupported QImage.constBits() buffer wrapper") from None
            buffer.setsize(expected_size)
            view = memoryview(buffer)

    try:
        view = view.cast("B")
    except TypeError:
        view = view.cast("B", (view.nbytes,))

    if len(view) > expected_size:
        view = view[:expected_size]
    return view, guard


def buffer_to_qimage(buffer: PixelBuffer) -> QImage:
    """Return a detached ``QImage`` copy of *buffer*."""

    if buffer.is_empty:
        return QImage()
    data = np.ascontiguousarray(buffer.pixels).tobytes()
    image = QImage(data, buffer.width, buffer.height, buffer.width * 4, QImage.Format.Format_RGBA8888)
    # ``copy`` detaches the image from ``data``, which is released on return.
    return image.copy()


def qimage_to_buffer(image: QImage) -> PixelBuffer:
    """Capture *image* into a new :class:`PixelBuffer`."""

    if image.isNull():
        return PixelBuffer(np.zeros((0, 0, 4), dtype=np.uint8))
    if image.format() != QImage.Format.Format_RGBA8888:
        image = image.convertToFormat(QImage.Format.Format_RGBA8888)

    width = image.width()
    height = image.height()
    bytes_per_line = image.bytesPerLine()
    view, guard = _resolve_pixel_buffer(image)
    _ = guard

    raw = np.frombuffer(view, dtype=np.uint8, count=bytes_per_line * height)
    # Rows may carry padding past ``width * 4`` bytes.
    rows = raw.reshape((height, bytes_per_line))[:, : width * 4]
    return PixelBuffer(rows.reshape((height, width, 4)))


__all__ = ["buffer_to_qimage", "qimage_to_buffer"]
