"""TransformChain — ordered, append-only list of operations.

Usage:
    chain = TransformChain()
    chain.rotate(1, expand_canvas=True)
    chain.reflect_horizontal()
    result = chain.apply(image, RenderStrategy.INVERSE_SAMPLED)

Composition is left to right: for [op1, op2, op3] the composed matrix M
satisfies M(p) == op3(op2(op1(p))).
"""

from __future__ import annotations

import logging
import time
from collections.abc import Iterator

from rasterturn.engine.config import DEFAULT_RENDER_CONFIG, RenderConfig
from rasterturn.engine.matrix import AffineMatrix
from rasterturn.engine.operations import (
    Operation,
    ReflectHorizontal,
    ReflectVertical,
    RotateQuarterTurns,
    Translate,
    is_operation,
)
from rasterturn.engine.pixels import PixelBuffer
from rasterturn.engine.renderer import RenderStrategy, render

logger = logging.getLogger(__name__)


class TransformChain:
    def __init__(self, config: RenderConfig | None = None) -> None:
        self._ops: list[Operation] = []
        self.config = config or DEFAULT_RENDER_CONFIG

    def append(self, op: Operation) -> TransformChain:
        if not is_operation(op):
            raise TypeError(f"Not an operation: {op!r}")
        self._ops.append(op)
        return self

    # Convenience appenders

    def translate(self, dx: float, dy: float) -> TransformChain:
        return self.append(Translate(dx, dy))

    def reflect_horizontal(self) -> TransformChain:
        return self.append(ReflectHorizontal())

    def reflect_vertical(self) -> TransformChain:
        return self.append(ReflectVertical())

    def rotate(self, turns: int, expand_canvas: bool = False) -> TransformChain:
        return self.append(RotateQuarterTurns(turns, expand_canvas))

    @property
    def operations(self) -> tuple[Operation, ...]:
        return tuple(self._ops)

    def __len__(self) -> int:
        return len(self._ops)

    def __iter__(self) -> Iterator[Operation]:
        return iter(tuple(self._ops))

    def __repr__(self) -> str:
        return f"TransformChain({list(self._ops)!r})"

    # ── Composition ──

    def compose(self, width: int, height: int) -> AffineMatrix:
        """Fold every operation into one matrix for a ``width × height`` source.

        Each operation sees the canvas it acts on, which differs from the
        source only after an expanding odd-turn rotation.
        """
        m = AffineMatrix.identity()
        for op in self._ops:
            m = op.matrix_for(width, height) @ m
            width, height = op.output_size(width, height)
        return m

    def output_size(self, width: int, height: int) -> tuple[int, int]:
        for op in self._ops:
            width, height = op.output_size(width, height)
        return (width, height)

    def apply(self, source: PixelBuffer, strategy: RenderStrategy | str) -> PixelBuffer:
        """Render ``source`` through the composed chain into a new buffer."""
        start = time.perf_counter()
        matrix = self.compose(source.width, source.height)
        out_w, out_h = self.output_size(source.width, source.height)
        result = render(source, matrix, out_w, out_h, strategy, self.config)
        elapsed = (time.perf_counter() - start) * 1000
        logger.debug(
            "Applied %d ops (%s) %dx%d -> %dx%d in %.1fms",
            len(self._ops),
            RenderStrategy(strategy).value,
            source.width,
            source.height,
            out_w,
            out_h,
            elapsed,
        )
        return result
