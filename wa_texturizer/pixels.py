"""RGBA pixel buffers with checked per-pixel and per-row access.

Pixels live in a (height, width, 4) uint8 numpy array, row-major, so
``data[y, x]`` is the pixel at column x of row y. Every accessor copies
values in and out; a ``Color`` is never a view into the live buffer.
"""

from typing import NamedTuple

import numpy as np
from PIL import Image

from .errors import InvalidInputError, PixelIndexError


class Color(NamedTuple):
    r: int
    g: int
    b: int
    a: int = 255

    @property
    def rgb(self):
        return (self.r, self.g, self.b)


TRANSPARENT = Color(0, 0, 0, 0)


def colors_equal(c1, c2):
    # Alpha is ignored, both for masking and for palette dedupe
    return c1[0] == c2[0] and c1[1] == c2[1] and c1[2] == c2[2]


class PixelBuffer:
    def __init__(self, data):
        data = np.asarray(data, dtype=np.uint8)
        if data.ndim != 3 or data.shape[2] != 4:
            raise InvalidInputError(f"Expected (height, width, 4) pixel data, got shape {data.shape}")
        self.data = data

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------
    @classmethod
    def new(cls, width, height, fill=TRANSPARENT):
        data = np.empty((height, width, 4), dtype=np.uint8)
        data[:, :] = tuple(fill)
        return cls(data)

    @classmethod
    def from_image(cls, img: Image.Image) -> "PixelBuffer":
        return cls(np.array(img.convert("RGBA"), dtype=np.uint8))

    def to_image(self) -> Image.Image:
        return Image.fromarray(self.data)

    def copy(self):
        return PixelBuffer(self.data.copy())

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------
    @property
    def width(self):
        return self.data.shape[1]

    @property
    def height(self):
        return self.data.shape[0]

    @property
    def size(self):
        return (self.width, self.height)

    def is_empty(self):
        return self.width == 0 or self.height == 0

    def _check(self, x, y):
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise PixelIndexError(f"Pixel ({x}, {y}) outside {self.width}x{self.height} buffer")

    def _check_row(self, y):
        if not 0 <= y < self.height:
            raise PixelIndexError(f"Row {y} outside buffer of height {self.height}")

    # ------------------------------------------------------------------
    # Pixel / row access
    # ------------------------------------------------------------------
    def get_pixel(self, x, y) -> Color:
        self._check(x, y)
        r, g, b, a = self.data[y, x]
        return Color(int(r), int(g), int(b), int(a))

    def set_pixel(self, x, y, color):
        self._check(x, y)
        self.data[y, x] = tuple(color)

    def get_row(self, y) -> np.ndarray:
        """Returns a copy of scanline y as a (width, 4) array."""
        self._check_row(y)
        return self.data[y].copy()

    def set_row(self, y, row, repeat=1):
        """Writes row into scanlines y .. y + repeat - 1."""
        row = np.asarray(row, dtype=np.uint8)
        if row.shape != (self.width, 4):
            raise InvalidInputError(f"Row of shape {row.shape} does not fit width {self.width}")
        self._check_row(y)
        self._check_row(y + repeat - 1)
        self.data[y:y + repeat] = row

    # ------------------------------------------------------------------
    # Rectangles
    # ------------------------------------------------------------------
    def region(self, x, y, width, height):
        """Copy of the width x height rectangle whose top-left pixel is (x, y)."""
        if width <= 0 or height <= 0:
            raise InvalidInputError(f"Empty region {width}x{height}")
        self._check(x, y)
        self._check(x + width - 1, y + height - 1)
        return PixelBuffer(self.data[y:y + height, x:x + width].copy())

    def paste(self, other, x, y):
        """Draws other with its top-left pixel at (x, y)."""
        self._check(x, y)
        self._check(x + other.width - 1, y + other.height - 1)
        self.data[y:y + other.height, x:x + other.width] = other.data

    def __eq__(self, other):
        if not isinstance(other, PixelBuffer):
            return NotImplemented
        return self.data.shape == other.data.shape and bool(np.array_equal(self.data, other.data))

    def __repr__(self):
        return f"PixelBuffer({self.width}x{self.height})"
