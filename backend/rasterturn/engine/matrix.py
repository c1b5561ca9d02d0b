"""AffineMatrix — six coefficients of a 2-D affine map.

    x' = a·x + b·y + c
    y' = d·x + e·y + f

``m2 @ m1`` is the map "apply m1, then m2", the usual product of the
3×3 homogeneous matrices with an implicit ``[0, 0, 1]`` bottom row.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from rasterturn.engine.errors import DegenerateTransformError

# Matches the default tolerance of math.isclose for absolute comparisons
_DEFAULT_TOLERANCE = 1e-9


@dataclass(frozen=True)
class AffineMatrix:
    a: float = 1.0
    b: float = 0.0
    c: float = 0.0
    d: float = 0.0
    e: float = 1.0
    f: float = 0.0

    @classmethod
    def identity(cls) -> AffineMatrix:
        return cls()

    @classmethod
    def translation(cls, dx: float, dy: float) -> AffineMatrix:
        return cls(1.0, 0.0, float(dx), 0.0, 1.0, float(dy))

    # ── Composition ──

    def __matmul__(self, other: AffineMatrix) -> AffineMatrix:
        if not isinstance(other, AffineMatrix):
            return NotImplemented
        return AffineMatrix(
            a=self.a * other.a + self.b * other.d,
            b=self.a * other.b + self.b * other.e,
            c=self.a * other.c + self.b * other.f + self.c,
            d=self.d * other.a + self.e * other.d,
            e=self.d * other.b + self.e * other.e,
            f=self.d * other.c + self.e * other.f + self.f,
        )

    def then(self, other: AffineMatrix) -> AffineMatrix:
        """Matrix that applies ``self`` first and ``other`` second."""
        return other @ self

    # ── Evaluation ──

    def apply(self, x: float, y: float) -> tuple[float, float]:
        return (
            self.a * x + self.b * y + self.c,
            self.d * x + self.e * y + self.f,
        )

    def apply_arrays(
        self, xs: NDArray[np.float64], ys: NDArray[np.float64]
    ) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
        """Vectorised ``apply`` over coordinate arrays of equal shape."""
        return (
            self.a * xs + self.b * ys + self.c,
            self.d * xs + self.e * ys + self.f,
        )

    @property
    def determinant(self) -> float:
        return self.a * self.e - self.b * self.d

    def is_invertible(self, epsilon: float = 1e-12) -> bool:
        return abs(self.determinant) > epsilon

    def inverse(self, epsilon: float = 1e-12) -> AffineMatrix:
        det = self.determinant
        if abs(det) <= epsilon:
            raise DegenerateTransformError(det)
        ia = self.e / det
        ib = -self.b / det
        id_ = -self.d / det
        ie = self.a / det
        return AffineMatrix(
            a=ia,
            b=ib,
            c=-(ia * self.c + ib * self.f),
            d=id_,
            e=ie,
            f=-(id_ * self.c + ie * self.f),
        )

    # ── Comparison / export ──

    def is_close(self, other: AffineMatrix, tolerance: float = _DEFAULT_TOLERANCE) -> bool:
        return all(
            math.isclose(x, y, rel_tol=0.0, abs_tol=tolerance)
            for x, y in zip(self.as_tuple(), other.as_tuple())
        )

    @property
    def is_identity(self) -> bool:
        return self == AffineMatrix.identity()

    def as_tuple(self) -> tuple[float, float, float, float, float, float]:
        return (self.a, self.b, self.c, self.d, self.e, self.f)

    def as_array(self) -> NDArray[np.float64]:
        """3×3 homogeneous form."""
        return np.array(
            [[self.a, self.b, self.c], [self.d, self.e, self.f], [0.0, 0.0, 1.0]],
            dtype=np.float64,
        )
