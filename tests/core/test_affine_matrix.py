from __future__ import annotations

import math

import numpy as np
import pytest

from engine.core.affine_matrix import AffineMatrix
from engine.core.vector2 import Vector2


def test_identity_components() -> None:
    m = AffineMatrix.identity()
    assert m.rows() == ((1.0, 0.0, 0.0), (0.0, 1.0, 0.0))
    assert m.to_css_matrix() == (1.0, 0.0, 0.0, 1.0, 0.0, 0.0)


def test_translation() -> None:
    m = AffineMatrix.translation(12.5, -3.0)
    assert (m.a, m.b, m.c, m.d) == (1.0, 0.0, 0.0, 1.0)
    assert (m.tx, m.ty) == (12.5, -3.0)


def test_homothety_keeps_pivot_fixed() -> None:
    pivot = Vector2(10.0, 20.0)
    m = AffineMatrix.homothety(2.0, 3.0, pivot)
    assert (m.a, m.d) == (2.0, 3.0)
    assert (m.tx, m.ty) == (-10.0, -40.0)
    p = m.apply(pivot)
    assert (p.x, p.y) == pytest.approx((10.0, 20.0))


def test_rotation_quarter_turn_about_origin() -> None:
    # (1, 0) を 90° 回転すると (0, 1)
    p = AffineMatrix.rotation(90.0).apply(Vector2(1.0, 0.0))
    assert (p.x, p.y) == pytest.approx((0.0, 1.0), abs=1e-12)


def test_rotation_translation_terms() -> None:
    pivot = Vector2(50.0, 20.0)
    m = AffineMatrix.rotation(30.0, pivot)
    cos_t, sin_t = math.cos(math.radians(30.0)), math.sin(math.radians(30.0))
    assert m.tx == pytest.approx((1 - cos_t) * 50.0 + sin_t * 20.0)
    assert m.ty == pytest.approx((1 - cos_t) * 20.0 - sin_t * 50.0)
    assert (m.a, m.b, m.c, m.d) == pytest.approx((cos_t, -sin_t, sin_t, cos_t))
    p = m.apply(pivot)
    assert (p.x, p.y) == pytest.approx((50.0, 20.0))


def test_circular_translation_has_identity_linear_part() -> None:
    pivot = Vector2(40.0, 40.0)
    rot = AffineMatrix.rotation(135.0, pivot)
    circ = AffineMatrix.circular_translation(135.0, pivot)
    assert (circ.a, circ.b, circ.c, circ.d) == (1.0, 0.0, 0.0, 1.0)
    assert (circ.tx, circ.ty) == (rot.tx, rot.ty)


def test_multiply_applies_right_operand_first() -> None:
    t = AffineMatrix.translation(10.0, 0.0)
    s = AffineMatrix.homothety(2.0, 2.0)
    p = Vector2(1.0, 1.0)
    # t∘s: 先に 2 倍 → 平行移動
    ts = t.multiply(s).apply(p)
    assert (ts.x, ts.y) == pytest.approx((12.0, 2.0))
    # s∘t: 先に平行移動 → 2 倍
    st = s.multiply(t).apply(p)
    assert (st.x, st.y) == pytest.approx((22.0, 2.0))
    assert not t.multiply(s).is_close(s.multiply(t))
    assert (t @ s) == t.multiply(s)


def test_multiply_composition_rule() -> None:
    m1 = AffineMatrix(1.0, 2.0, 3.0, 4.0, 5.0, 6.0)
    m2 = AffineMatrix(-1.0, 0.5, 2.0, 1.0, 7.0, -3.0)
    out = m1.multiply(m2).as_array()
    lin1 = np.array([[1.0, 2.0], [3.0, 4.0]])
    lin2 = np.array([[-1.0, 0.5], [2.0, 1.0]])
    np.testing.assert_allclose(out[:, :2], lin1 @ lin2)
    np.testing.assert_allclose(out[:, 2], lin1 @ np.array([7.0, -3.0]) + np.array([5.0, 6.0]))


def test_rotation_inverse_is_identity() -> None:
    pivot = Vector2(50.0, 50.0)
    m = AffineMatrix.rotation(73.0, pivot).multiply(AffineMatrix.rotation(-73.0, pivot))
    assert m.is_close(AffineMatrix.identity(), tol=1e-9)


def test_css_order_and_string() -> None:
    m = AffineMatrix(a=1.0, b=2.0, c=3.0, d=4.0, tx=5.0, ty=6.0)
    assert m.to_css_matrix() == (1.0, 3.0, 2.0, 4.0, 5.0, 6.0)
    assert m.to_css() == "matrix(1.0, 3.0, 2.0, 4.0, 5.0, 6.0)"


def test_immutable_storage() -> None:
    m = AffineMatrix.translation(1.0, 2.0)
    with pytest.raises(ValueError):
        m.as_array()[0, 2] = 99.0
    # 演算は新しいインスタンスを返し、元は変化しない
    m.multiply(AffineMatrix.translation(3.0, 4.0))
    assert (m.tx, m.ty) == (1.0, 2.0)


def test_as_array_is_read_only_copy() -> None:
    m = AffineMatrix(a=2.0, d=3.0, tx=4.0, ty=5.0)
    arr = m.as_array()
    assert arr.shape == (2, 3)
    assert not arr.flags.writeable
    assert not np.shares_memory(arr, m.as_array())
    np.testing.assert_array_equal(arr, [[2.0, 0.0, 4.0], [0.0, 3.0, 5.0]])


def test_linear_and_translation_parts() -> None:
    m = AffineMatrix.rotation(90.0, Vector2(1.0, 0.0))
    np.testing.assert_allclose(m.linear, [[0.0, -1.0], [1.0, 0.0]], atol=1e-12)
    np.testing.assert_allclose(m.translation_part, [1.0, -1.0], atol=1e-12)
    p = m.apply(Vector2(2.0, 0.0))
    np.testing.assert_allclose(m.linear @ [2.0, 0.0] + m.translation_part, [p.x, p.y])
