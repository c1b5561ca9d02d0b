"""RasterTurn affine transform engine."""

from rasterturn.engine.chain import TransformChain
from rasterturn.engine.errors import (
    DegenerateTransformError,
    OutOfBoundsError,
    ShapeMismatchError,
    TransformError,
)
from rasterturn.engine.matrix import AffineMatrix
from rasterturn.engine.operations import (
    Operation,
    ReflectHorizontal,
    ReflectVertical,
    RotateQuarterTurns,
    Translate,
    matrix_for,
)
from rasterturn.engine.pixels import TRANSPARENT, Pixel, PixelBuffer
from rasterturn.engine.renderer import RenderStrategy, forward_remap, inverse_sample, render

__all__ = [
    "AffineMatrix",
    "DegenerateTransformError",
    "Operation",
    "OutOfBoundsError",
    "Pixel",
    "PixelBuffer",
    "ReflectHorizontal",
    "ReflectVertical",
    "RenderStrategy",
    "RotateQuarterTurns",
    "ShapeMismatchError",
    "TRANSPARENT",
    "TransformChain",
    "TransformError",
    "Translate",
    "forward_remap",
    "inverse_sample",
    "matrix_for",
    "render",
]
