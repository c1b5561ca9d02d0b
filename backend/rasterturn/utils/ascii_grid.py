"""ASCII grids — small pixel buffers as text, for fixtures and debug output.

    .RRG.
    ..B..

One character per pixel; the palette maps characters to colours.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from rasterturn.engine.errors import ShapeMismatchError
from rasterturn.engine.pixels import TRANSPARENT, Pixel, PixelBuffer

RED = Pixel(255, 0, 0, 255)
GREEN = Pixel(0, 255, 0, 255)
BLUE = Pixel(0, 0, 255, 255)

DEFAULT_PALETTE: dict[str, Pixel] = {
    ".": TRANSPARENT,
    "R": RED,
    "G": GREEN,
    "B": BLUE,
}

# Shown for colours the palette has no character for
UNKNOWN_CHAR = "?"


def parse_ascii(rows: Iterable[str], palette: Mapping[str, Pixel] = DEFAULT_PALETTE) -> PixelBuffer:
    pixels: list[list[Pixel]] = []
    for y, row in enumerate(rows):
        try:
            pixels.append([palette[ch] for ch in row])
        except KeyError as e:
            raise ShapeMismatchError(f"Row {y}: no palette entry for {e.args[0]!r}") from None
    return PixelBuffer.from_rows(pixels)


def render_ascii(buffer: PixelBuffer, palette: Mapping[str, Pixel] = DEFAULT_PALETTE) -> list[str]:
    """Inverse of parse_ascii. Any fully transparent pixel renders as its
    transparent character, whatever its colour channels hold."""
    reverse = {tuple(px): ch for ch, px in palette.items()}
    clear = next((ch for ch, px in palette.items() if px.a == 0), UNKNOWN_CHAR)

    lines = []
    for row in buffer.rows():
        chars = []
        for px in row:
            if px.is_transparent:
                chars.append(clear)
            else:
                chars.append(reverse.get(tuple(px), UNKNOWN_CHAR))
        lines.append("".join(chars))
    return lines
