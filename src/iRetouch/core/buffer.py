"""RGBA pixel storage shared by every stage of the edit pipeline."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence

import numpy as np

from ..errors import InvalidParameterError


class PixelBuffer:
    """Rectangular grid of 8-bit RGBA samples.

    Pixels live in a ``(height, width, 4)`` ``uint8`` array, row-major with the
    origin at the top-left corner.  The buffer owns its array outright: every
    constructor copies its input so two buffers never alias the same memory.
    """

    __slots__ = ("_pixels",)

    def __init__(self, pixels: np.ndarray) -> None:
        array = np.asarray(pixels)
        if array.ndim != 3 or array.shape[2] != 4:
            raise InvalidParameterError(
                f"Expected an array shaped (height, width, 4), got {array.shape}"
            )
        if array.dtype != np.uint8:
            if array.size and (array.min() < 0 or array.max() > 255):
                raise InvalidParameterError("Pixel samples must lie within [0, 255]")
            array = array.astype(np.uint8)
        self._pixels = np.array(array, dtype=np.uint8, copy=True, order="C")

    @classmethod
    def from_samples(
        cls,
        width: int,
        height: int,
        samples: Iterable[Sequence[int]],
    ) -> "PixelBuffer":
        """Build a buffer from ``width * height`` ``(r, g, b, a)`` tuples."""

        if width <= 0 or height <= 0:
            raise InvalidParameterError(f"Invalid buffer size {width}x{height}")
        flat = np.array(list(samples), dtype=np.int64)
        if flat.shape != (width * height, 4):
            raise InvalidParameterError(
                f"Expected {width * height} RGBA samples, got shape {flat.shape}"
            )
        return cls(flat.reshape((height, width, 4)))

    @classmethod
    def filled(cls, width: int, height: int, rgba: Sequence[int]) -> "PixelBuffer":
        """Return a ``width`` x ``height`` buffer painted with a single colour."""

        if width <= 0 or height <= 0:
            raise InvalidParameterError(f"Invalid buffer size {width}x{height}")
        pixels = np.empty((height, width, 4), dtype=np.int64)
        pixels[...] = np.asarray(rgba, dtype=np.int64)
        return cls(pixels)

    @property
    def width(self) -> int:
        return int(self._pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self._pixels.shape[0])

    @property
    def size(self) -> tuple[int, int]:
        return (self.width, self.height)

    @property
    def is_empty(self) -> bool:
        """``True`` for transient zero-area buffers."""

        return self.width == 0 or self.height == 0

    @property
    def pixels(self) -> np.ndarray:
        """Read-only view over the RGBA array."""

        view = self._pixels.view()
        view.flags.writeable = False
        return view

    @property
    def rgb(self) -> np.ndarray:
        return self.pixels[..., :3]

    @property
    def alpha(self) -> np.ndarray:
        return self.pixels[..., 3]

    def pixel(self, x: int, y: int) -> tuple[int, int, int, int]:
        r, g, b, a = self._pixels[y, x]
        return (int(r), int(g), int(b), int(a))

    def samples(self) -> Iterator[tuple[int, int, int, int]]:
        """Yield every pixel as an ``(r, g, b, a)`` tuple in row-major order."""

        for r, g, b, a in self._pixels.reshape((-1, 4)).tolist():
            yield (r, g, b, a)

    def copy(self) -> "PixelBuffer":
        return PixelBuffer(self._pixels)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PixelBuffer):
            return NotImplemented
        return self._pixels.shape == other._pixels.shape and bool(
            np.array_equal(self._pixels, other._pixels)
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"PixelBuffer({self.width}x{self.height})"
