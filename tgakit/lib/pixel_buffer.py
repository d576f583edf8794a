"""In-memory 24-bit pixel buffer with a bottom-left origin."""

from dataclasses import dataclass

import numpy as np

from tgakit.lib.errors import OutOfBounds

MAX_DIMENSION = 0xFFFF
PIXEL_SIZE = 3  # BGR, no alpha.


@dataclass(eq=False)
class PixelBuffer:
    """
    A width x height grid of BGR triplets.

    ``data`` has shape (height, width, 3) and dtype uint8. Row 0 is the
    bottom row of the image, so logical pixel (x, y) is ``data[y, x]``.
    """
    width: int
    height: int
    data: np.ndarray

    def __post_init__(self):
        for name, value in (("width", self.width), ("height", self.height)):
            if not 0 <= value <= MAX_DIMENSION:
                raise ValueError(f"{name} must be in [0, {MAX_DIMENSION}], got {value}")
        expected = (self.height, self.width, PIXEL_SIZE)
        if self.data.shape != expected:
            raise ValueError(f"pixel data has shape {self.data.shape}, expected {expected}")
        if self.data.dtype != np.uint8:
            raise ValueError(f"pixel data must be uint8, got {self.data.dtype}")

    @classmethod
    def create(cls, width, height):
        """Allocate a buffer with every channel set to zero."""
        return cls(width, height, np.zeros((height, width, PIXEL_SIZE), dtype=np.uint8))

    @property
    def size(self):
        return f"{self.width}x{self.height}"

    def _check(self, x, y):
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise OutOfBounds(f"pixel ({x}, {y}) is outside {self.size} buffer")

    def get(self, x, y):
        """Return the (b, g, r) triplet at logical pixel (x, y)."""
        self._check(x, y)
        b, g, r = self.data[y, x]
        return (int(b), int(g), int(r))

    def set(self, x, y, triplet):
        """Store a (b, g, r) triplet at logical pixel (x, y)."""
        self._check(x, y)
        values = tuple(triplet)
        if len(values) != PIXEL_SIZE or not all(0 <= int(v) <= 255 for v in values):
            raise ValueError(f"triplet must be three values in [0, 255], got {values}")
        self.data[y, x] = values

    def copy(self):
        return PixelBuffer(self.width, self.height, self.data.copy())

    def __eq__(self, other):
        if not isinstance(other, PixelBuffer):
            return NotImplemented
        return (self.width == other.width and self.height == other.height
                and np.array_equal(self.data, other.data))

    def __repr__(self):
        return f"PixelBuffer({self.size})"
