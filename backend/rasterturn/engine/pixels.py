"""PixelBuffer — an owned, row-major grid of RGBA pixels.

Storage is a numpy ``uint8`` array of shape ``(height, width, 4)``. Every
constructor copies its input, so a buffer never aliases caller data or
another buffer.
"""

from __future__ import annotations

import operator
from collections.abc import Iterable, Sequence
from typing import NamedTuple

import numpy as np
from numpy.typing import ArrayLike, NDArray

from rasterturn.engine.errors import OutOfBoundsError, ShapeMismatchError

_CHANNELS = 4
_CHANNEL_MAX = 255


class Pixel(NamedTuple):
    r: int
    g: int
    b: int
    a: int

    @property
    def is_transparent(self) -> bool:
        return self.a == 0


TRANSPARENT = Pixel(0, 0, 0, 0)


def _as_channels(value: Sequence[int]) -> NDArray[np.uint8]:
    if len(value) != _CHANNELS:
        raise ShapeMismatchError(f"Pixel needs {_CHANNELS} channels, got {len(value)}")
    channels = np.asarray(value, dtype=np.int64)
    if np.any(channels < 0) or np.any(channels > _CHANNEL_MAX):
        raise ShapeMismatchError(f"Channel values must be 0-{_CHANNEL_MAX}: {tuple(value)}")
    return channels.astype(np.uint8)


class PixelBuffer:
    """Fixed-size RGBA grid with bounds-checked pixel access."""

    __slots__ = ("_data",)

    def __init__(self, width: int, height: int, fill: Sequence[int] = TRANSPARENT) -> None:
        width = operator.index(width)
        height = operator.index(height)
        if width < 0 or height < 0:
            raise ShapeMismatchError(f"Negative buffer size {width}x{height}")
        self._data = np.empty((height, width, _CHANNELS), dtype=np.uint8)
        self._data[...] = _as_channels(fill)

    # ── Construction ──

    @classmethod
    def from_array(cls, array: ArrayLike) -> PixelBuffer:
        """Build from an ``(height, width, 4)`` array of 0-255 values."""
        arr = np.asarray(array)
        if arr.ndim != 3 or arr.shape[2] != _CHANNELS:
            raise ShapeMismatchError(f"Expected (height, width, {_CHANNELS}) array, got shape {arr.shape}")
        if arr.dtype != np.uint8:
            if arr.dtype.kind not in "biuf":
                raise ShapeMismatchError(f"Unsupported pixel dtype {arr.dtype}")
            if arr.dtype.kind == "f" and not (np.all(np.isfinite(arr)) and np.all(arr == np.floor(arr))):
                raise ShapeMismatchError("Channel values must be whole numbers")
            if arr.size and (arr.min() < 0 or arr.max() > _CHANNEL_MAX):
                raise ShapeMismatchError(f"Channel values must be 0-{_CHANNEL_MAX}")
            arr = arr.astype(np.uint8)
        buf = cls.__new__(cls)
        buf._data = np.array(arr, dtype=np.uint8, copy=True)
        return buf

    @classmethod
    def from_rows(cls, rows: Iterable[Sequence[Sequence[int]]]) -> PixelBuffer:
        """Build from a list of rows of pixels. Ragged rows are rejected up front."""
        rows = [list(row) for row in rows]
        if not rows:
            return cls(0, 0)
        width = len(rows[0])
        for y, row in enumerate(rows):
            if len(row) != width:
                raise ShapeMismatchError(f"Row {y} has {len(row)} pixels, expected {width}")
        buf = cls(width, len(rows))
        for y, row in enumerate(rows):
            for x, pixel in enumerate(row):
                buf._data[y, x] = _as_channels(pixel)
        return buf

    # ── Geometry ──

    @property
    def width(self) -> int:
        return int(self._data.shape[1])

    @property
    def height(self) -> int:
        return int(self._data.shape[0])

    @property
    def size(self) -> tuple[int, int]:
        return (self.width, self.height)

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    # ── Pixel access ──

    def _check(self, x: int, y: int) -> tuple[int, int]:
        x = operator.index(x)
        y = operator.index(y)
        if not self.in_bounds(x, y):
            raise OutOfBoundsError(x, y, self.width, self.height)
        return x, y

    def get_pixel(self, x: int, y: int) -> Pixel:
        x, y = self._check(x, y)
        r, g, b, a = (int(v) for v in self._data[y, x])
        return Pixel(r, g, b, a)

    def set_pixel(self, x: int, y: int, pixel: Sequence[int]) -> None:
        x, y = self._check(x, y)
        self._data[y, x] = _as_channels(pixel)

    # ── Export ──

    def to_array(self) -> NDArray[np.uint8]:
        """Copy of the pixel data as ``(height, width, 4)`` uint8."""
        return self._data.copy()

    def rows(self) -> list[list[Pixel]]:
        return [[Pixel(*(int(v) for v in px)) for px in row] for row in self._data]

    def copy(self) -> PixelBuffer:
        return PixelBuffer.from_array(self._data)

    def count_opaque(self) -> int:
        """Number of pixels with non-zero alpha."""
        return int(np.count_nonzero(self._data[:, :, 3]))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PixelBuffer):
            return NotImplemented
        return self._data.shape == other._data.shape and bool(np.array_equal(self._data, other._data))

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"PixelBuffer({self.width}x{self.height})"
