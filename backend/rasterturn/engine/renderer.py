"""Renderer — applies an AffineMatrix to a PixelBuffer.

Two strategies, chosen explicitly by the caller:

1. Forward remap: push every source pixel through the matrix and drop it in
   the destination cell it lands in. Cheap and exact for quarter turns and
   reflections, but lossy in general: collisions keep the last pixel and
   cells nobody lands in stay transparent.
2. Inverse sampling: pull every destination pixel back through the inverse
   matrix and bilinearly interpolate the source. Always covers the whole
   destination canvas, which makes it the right choice when the canvas size
   changes. Requires an invertible matrix.

Pixels are addressed by their centers: pixel (x, y) covers
[x, x+1) × [y, y+1) and is sampled at (x + 0.5, y + 0.5).
"""

from __future__ import annotations

import enum
import logging

import numpy as np
from numpy.typing import NDArray

from rasterturn.engine.config import DEFAULT_RENDER_CONFIG, RenderConfig
from rasterturn.engine.matrix import AffineMatrix
from rasterturn.engine.pixels import PixelBuffer

logger = logging.getLogger(__name__)

_PIXEL_CENTER = 0.5
_CHANNEL_MAX = 255.0


class RenderStrategy(str, enum.Enum):
    FORWARD_REMAP = "forward"
    INVERSE_SAMPLED = "inverse"


def _pixel_centers(width: int, height: int) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
    ys, xs = np.mgrid[0:height, 0:width]
    return xs.astype(np.float64) + _PIXEL_CENTER, ys.astype(np.float64) + _PIXEL_CENTER


def forward_remap(
    source: PixelBuffer,
    matrix: AffineMatrix,
    width: int,
    height: int,
    config: RenderConfig = DEFAULT_RENDER_CONFIG,
) -> PixelBuffer:
    """Copy each source pixel to the cell its mapped center falls in.

    Any matrix is accepted. A degenerate one simply collapses the image onto
    a line or a single cell. Pixels landing outside ``width × height`` are
    discarded.
    """
    src = source.to_array()
    dst = np.zeros((height, width, 4), dtype=np.uint8)
    if source.width == 0 or source.height == 0 or width == 0 or height == 0:
        return PixelBuffer.from_array(dst)

    px, py = _pixel_centers(source.width, source.height)
    tx, ty = matrix.apply_arrays(px, py)
    dx = np.floor(tx + config.coordinate_epsilon)
    dy = np.floor(ty + config.coordinate_epsilon)

    inside = (dx >= 0) & (dx < width) & (dy >= 0) & (dy < height)
    cells = dy[inside].astype(np.intp) * width + dx[inside].astype(np.intp)
    colors = src[inside]

    # On collisions the later source pixel (row-major) wins: keep the last
    # occurrence of each destination cell.
    _, last_rev = np.unique(cells[::-1], return_index=True)
    keep = cells.size - 1 - last_rev
    dst.reshape(-1, 4)[cells[keep]] = colors[keep]

    dropped = int(inside.size - np.count_nonzero(inside))
    if dropped:
        logger.debug("Forward remap dropped %d of %d source pixels", dropped, inside.size)
    return PixelBuffer.from_array(dst)


def _premultiply(src: NDArray[np.uint8]) -> NDArray[np.float64]:
    out = src.astype(np.float64)
    out[..., :3] *= out[..., 3:4] / _CHANNEL_MAX
    return out


def _unpremultiply(values: NDArray[np.float64]) -> NDArray[np.uint8]:
    alpha = values[..., 3:4]
    rgb = np.zeros_like(values[..., :3])
    np.divide(values[..., :3] * _CHANNEL_MAX, alpha, out=rgb, where=alpha > 0)
    out = np.concatenate([rgb, alpha], axis=-1)
    # Round half up, then clamp to the 8-bit range
    return np.clip(np.floor(out + 0.5), 0, _CHANNEL_MAX).astype(np.uint8)


def inverse_sample(
    source: PixelBuffer,
    matrix: AffineMatrix,
    width: int,
    height: int,
    config: RenderConfig = DEFAULT_RENDER_CONFIG,
) -> PixelBuffer:
    """Fill every destination pixel by bilinear sampling at ``M⁻¹(center)``.

    Sample points outside the source extent resolve to transparent. Inside
    points blend the four nearest source pixel centers, with neighbours
    clamped to the source edge, in premultiplied-alpha space.

    Raises DegenerateTransformError for a non-invertible matrix, before the
    destination is allocated.
    """
    inv = matrix.inverse(config.determinant_epsilon)

    dst = np.zeros((height, width, 4), dtype=np.uint8)
    sw, sh = source.width, source.height
    if sw == 0 or sh == 0 or width == 0 or height == 0:
        return PixelBuffer.from_array(dst)

    px, py = _pixel_centers(width, height)
    sx, sy = inv.apply_arrays(px, py)
    inside = (sx >= 0) & (sx < sw) & (sy >= 0) & (sy < sh)
    if not np.any(inside):
        return PixelBuffer.from_array(dst)

    # Continuous coordinates relative to source pixel centers
    u = sx[inside] - _PIXEL_CENTER
    v = sy[inside] - _PIXEL_CENTER
    x0 = np.floor(u)
    y0 = np.floor(v)
    fx = (u - x0)[:, None]
    fy = (v - y0)[:, None]

    x0i = np.clip(x0, 0, sw - 1).astype(np.intp)
    x1i = np.clip(x0 + 1, 0, sw - 1).astype(np.intp)
    y0i = np.clip(y0, 0, sh - 1).astype(np.intp)
    y1i = np.clip(y0 + 1, 0, sh - 1).astype(np.intp)

    pre = _premultiply(source.to_array())
    top = pre[y0i, x0i] * (1.0 - fx) + pre[y0i, x1i] * fx
    bottom = pre[y1i, x0i] * (1.0 - fx) + pre[y1i, x1i] * fx
    blended = top * (1.0 - fy) + bottom * fy

    dst[inside] = _unpremultiply(blended)
    return PixelBuffer.from_array(dst)


def render(
    source: PixelBuffer,
    matrix: AffineMatrix,
    width: int,
    height: int,
    strategy: RenderStrategy | str,
    config: RenderConfig = DEFAULT_RENDER_CONFIG,
) -> PixelBuffer:
    """Dispatch to the named strategy. There is no default strategy."""
    try:
        strategy = RenderStrategy(strategy)
    except ValueError:
        raise ValueError(f"Unknown render strategy: {strategy!r}") from None

    if strategy is RenderStrategy.FORWARD_REMAP:
        return forward_remap(source, matrix, width, height, config)
    return inverse_sample(source, matrix, width, height, config)
