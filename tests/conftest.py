import sys
from pathlib import Path

import numpy as np
import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"

# Allow running the suite from a checkout without installing the package.
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from iRetouch.core.buffer import PixelBuffer  # noqa: E402


@pytest.fixture
def solid_buffer():
    """Factory returning a single-colour buffer."""

    def _make(rgba=(128, 128, 128, 255), width=4, height=3):
        return PixelBuffer.filled(width, height, rgba)

    return _make


@pytest.fixture
def gradient_buffer():
    """A 16x12 buffer with distinct values in every channel and a varying alpha."""

    height, width = 12, 16
    ys, xs = np.mgrid[0:height, 0:width]
    pixels = np.empty((height, width, 4), dtype=np.uint8)
    pixels[..., 0] = (xs * 16) % 256
    pixels[..., 1] = (ys * 21) % 256
    pixels[..., 2] = ((xs + ys) * 9) % 256
    pixels[..., 3] = 200 + (xs % 5) * 10
    return PixelBuffer(pixels)
