"""Geometric operations — the closed set of steps a TransformChain can hold.

Each operation turns the bounds of the canvas it acts on into its own
AffineMatrix, and reports the canvas size it leaves behind.
"""

from __future__ import annotations

import math
import operator
from dataclasses import dataclass
from typing import Union

from rasterturn.engine.matrix import AffineMatrix

# (cos θ, sin θ) for θ = k·90°, k = turns % 4. Exact values, no float drift.
_QUARTER_TURNS: dict[int, tuple[int, int]] = {
    0: (1, 0),
    1: (0, 1),
    2: (-1, 0),
    3: (0, -1),
}


@dataclass(frozen=True)
class Translate:
    dx: float = 0.0
    dy: float = 0.0

    name = "translate"

    def __post_init__(self) -> None:
        if not (math.isfinite(self.dx) and math.isfinite(self.dy)):
            raise ValueError(f"Translation must be finite: ({self.dx}, {self.dy})")

    def matrix_for(self, width: int, height: int) -> AffineMatrix:
        return AffineMatrix.translation(self.dx, self.dy)

    def output_size(self, width: int, height: int) -> tuple[int, int]:
        return (width, height)


@dataclass(frozen=True)
class ReflectHorizontal:
    """Mirror x about the vertical centerline: x' = width - x."""

    name = "reflect_horizontal"

    def matrix_for(self, width: int, height: int) -> AffineMatrix:
        return AffineMatrix(-1.0, 0.0, float(width), 0.0, 1.0, 0.0)

    def output_size(self, width: int, height: int) -> tuple[int, int]:
        return (width, height)


@dataclass(frozen=True)
class ReflectVertical:
    """Mirror y about the horizontal centerline: y' = height - y."""

    name = "reflect_vertical"

    def matrix_for(self, width: int, height: int) -> AffineMatrix:
        return AffineMatrix(1.0, 0.0, 0.0, 0.0, -1.0, float(height))

    def output_size(self, width: int, height: int) -> tuple[int, int]:
        return (width, height)


@dataclass(frozen=True)
class RotateQuarterTurns:
    """Rotate by ``turns × 90°`` about the canvas center.

    Positive turns rotate counter-clockwise as displayed (y axis down).
    With ``expand_canvas`` an odd turn count swaps width and height, and the
    rotated center is placed at the center of the swapped canvas. Parity of
    ``turns`` decides the swap, so -1 and 3 behave the same.
    """

    turns: int = 1
    expand_canvas: bool = False

    name = "rotate"

    def __post_init__(self) -> None:
        object.__setattr__(self, "turns", operator.index(self.turns))

    @property
    def swaps_canvas(self) -> bool:
        return self.expand_canvas and self.turns % 2 == 1

    def matrix_for(self, width: int, height: int) -> AffineMatrix:
        cos, sin = _QUARTER_TURNS[self.turns % 4]
        if cos == 1:
            return AffineMatrix.identity()

        cx, cy = width / 2, height / 2
        ox, oy = (cy, cx) if self.swaps_canvas else (cx, cy)
        return AffineMatrix(
            a=float(cos),
            b=float(sin),
            c=ox - cos * cx - sin * cy,
            d=float(-sin),
            e=float(cos),
            f=oy + sin * cx - cos * cy,
        )

    def output_size(self, width: int, height: int) -> tuple[int, int]:
        if self.swaps_canvas:
            return (height, width)
        return (width, height)


Operation = Union[Translate, ReflectHorizontal, ReflectVertical, RotateQuarterTurns]

OPERATION_TYPES: tuple[type, ...] = (Translate, ReflectHorizontal, ReflectVertical, RotateQuarterTurns)


def is_operation(value: object) -> bool:
    return isinstance(value, OPERATION_TYPES)


def matrix_for(op: Operation, width: int, height: int) -> AffineMatrix:
    """Matrix of a single operation acting on a ``width × height`` canvas."""
    if not is_operation(op):
        raise TypeError(f"Not an operation: {op!r}")
    return op.matrix_for(width, height)
