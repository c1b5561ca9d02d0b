"""Tests for AffineMatrix composition and inversion."""

from __future__ import annotations

import numpy as np
import pytest

from rasterturn.engine.errors import DegenerateTransformError
from rasterturn.engine.matrix import AffineMatrix


def test_identity():
    m = AffineMatrix.identity()
    assert m.is_identity
    assert m.apply(3.5, -2.0) == (3.5, -2.0)


def test_translation():
    m = AffineMatrix.translation(2, -1)
    assert m.apply(0, 0) == (2.0, -1.0)


def test_matmul_applies_right_operand_first():
    scale = AffineMatrix(2, 0, 0, 0, 2, 0)
    shift = AffineMatrix.translation(1, 0)
    # shift, then scale
    assert (scale @ shift).apply(1, 0) == (4.0, 0.0)
    # scale, then shift
    assert (shift @ scale).apply(1, 0) == (3.0, 0.0)
    assert shift.then(scale) == scale @ shift


def test_matmul_matches_homogeneous_product():
    m1 = AffineMatrix(0.5, -1.0, 3.0, 2.0, 0.25, -4.0)
    m2 = AffineMatrix(-1.0, 0.0, 10.0, 0.0, 1.0, 2.0)
    expected = m1.as_array() @ m2.as_array()
    assert np.allclose((m1 @ m2).as_array(), expected)


def test_inverse_round_trip():
    m = AffineMatrix(0.0, 1.0, 2.5, -1.0, 0.0, 7.5)
    inv = m.inverse()
    assert (inv @ m).is_close(AffineMatrix.identity())
    assert (m @ inv).is_close(AffineMatrix.identity())
    x, y = inv.apply(*m.apply(3.0, 4.0))
    assert x == pytest.approx(3.0)
    assert y == pytest.approx(4.0)


def test_degenerate_inverse():
    m = AffineMatrix(1.0, 2.0, 0.0, 2.0, 4.0, 0.0)
    assert m.determinant == 0.0
    assert not m.is_invertible()
    with pytest.raises(DegenerateTransformError) as exc:
        m.inverse()
    assert exc.value.determinant == 0.0


def test_apply_arrays_matches_apply():
    m = AffineMatrix(0.0, 1.0, 2.0, -1.0, 0.0, 3.0)
    xs = np.array([0.5, 1.5, 2.5])
    ys = np.array([0.5, 0.5, 4.5])
    tx, ty = m.apply_arrays(xs, ys)
    for i in range(3):
        assert (tx[i], ty[i]) == m.apply(xs[i], ys[i])


def test_matrices_are_immutable():
    m = AffineMatrix.identity()
    with pytest.raises(AttributeError):
        m.a = 2.0  # type: ignore[misc]
