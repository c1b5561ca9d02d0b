"""Shared test fixtures."""

from __future__ import annotations

import pytest

from rasterturn.engine.pixels import PixelBuffer
from rasterturn.utils.ascii_grid import parse_ascii

# 10×5 fixture: a few red/green/blue pixels on a transparent grid
BASIC_ROWS = [
    "..........",
    "..RRGGB...",
    "...R..B...",
    "...RGGBB..",
    "..........",
]

# BASIC_ROWS rotated one quarter turn counter-clockwise onto a 5×10 canvas
BASIC_ROTATED_ROWS = [
    ".....",
    ".....",
    "...B.",
    ".BBB.",
    ".G.G.",
    ".G.G.",
    ".RRR.",
    ".R...",
    ".....",
    ".....",
]


@pytest.fixture
def basic_image() -> PixelBuffer:
    return parse_ascii(BASIC_ROWS)


@pytest.fixture
def gradient_image() -> PixelBuffer:
    """7×4 buffer where every pixel has a distinct opaque colour."""
    buf = PixelBuffer(7, 4)
    for y in range(4):
        for x in range(7):
            buf.set_pixel(x, y, (x * 30, y * 60, 200 - x * 10, 255))
    return buf
