"""Raster codec — Pillow-backed decode/encode between image bytes and PixelBuffer.

The engine only ever sees in-memory buffers; files and bytes stop here.
"""

from __future__ import annotations

import io
import logging
from pathlib import Path

import numpy as np
from PIL import Image, UnidentifiedImageError

from rasterturn.engine.pixels import PixelBuffer

logger = logging.getLogger(__name__)


class ImageDecodeError(ValueError):
    """Bytes could not be decoded as an image."""


def decode_image(data: bytes) -> PixelBuffer:
    """Decode any Pillow-readable image (PNG, GIF, JPEG, ...) to RGBA."""
    try:
        with Image.open(io.BytesIO(data)) as img:
            rgba = img.convert("RGBA")
    except (UnidentifiedImageError, OSError) as e:
        logger.warning("Image decode failed: %s", e)
        raise ImageDecodeError(f"Cannot decode image: {e}") from e
    return PixelBuffer.from_array(np.array(rgba))


def encode_png(buffer: PixelBuffer) -> bytes:
    img = Image.fromarray(buffer.to_array())
    out = io.BytesIO()
    img.save(out, format="PNG")
    return out.getvalue()


def load_image(path: str | Path) -> PixelBuffer:
    return decode_image(Path(path).read_bytes())


def save_image(buffer: PixelBuffer, path: str | Path) -> None:
    Path(path).write_bytes(encode_png(buffer))
