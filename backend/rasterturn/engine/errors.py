"""Engine error kinds. All failures are deterministic and surface to the caller."""

from __future__ import annotations


class TransformError(Exception):
    """Base class for raster transform failures."""


class ShapeMismatchError(TransformError, ValueError):
    """Pixel data is not a rectangular grid of RGBA values."""


class OutOfBoundsError(TransformError, IndexError):
    """Pixel access outside the buffer extent."""

    def __init__(self, x: int, y: int, width: int, height: int) -> None:
        super().__init__(f"Pixel ({x}, {y}) outside {width}x{height} buffer")
        self.x = x
        self.y = y
        self.width = width
        self.height = height


class DegenerateTransformError(TransformError, ValueError):
    """Matrix cannot be inverted, so inverse sampling is impossible."""

    def __init__(self, determinant: float) -> None:
        super().__init__(f"Affine matrix is not invertible (determinant={determinant:g})")
        self.determinant = determinant
