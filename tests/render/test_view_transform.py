from __future__ import annotations

import pytest

from engine.core.affine_matrix import AffineMatrix
from engine.core.vector2 import Vector2
from engine.render.transform import cell_origin, cell_view_matrix, to_mat4_values

CELL = (190, 190)


@pytest.mark.parametrize(
    "index, expected",
    [(0, (0, 0)), (3, (570, 0)), (4, (0, 190)), (5, (190, 190))],
)
def test_cell_origin_fills_rows_left_to_right(index: int, expected: tuple[int, int]) -> None:
    assert cell_origin(index, CELL, 760) == expected


def test_cell_origin_narrow_window_uses_single_column() -> None:
    assert cell_origin(2, CELL, 100) == (0, 380)


def _to_window(view: AffineMatrix, x: float, y: float) -> tuple[float, float]:
    p = view.apply(Vector2(x, y))
    return p.x, p.y


def test_identity_places_cell_at_top_left() -> None:
    view = cell_view_matrix(AffineMatrix.identity(), (0, 0), CELL, 400)
    assert view.is_close(AffineMatrix.translation(0, 210))


def test_downward_translation_moves_down_in_window() -> None:
    # セル内 y 下向きの +20 はウィンドウ座標で -20
    view = cell_view_matrix(AffineMatrix.translation(10, 20), (0, 0), CELL, 400)
    assert _to_window(view, 0, 0) == pytest.approx((10.0, 190.0))


def test_rotation_about_cell_center_keeps_center() -> None:
    m = AffineMatrix.rotation(90, Vector2(95, 95))
    view = cell_view_matrix(m, (190, 0), CELL, 400)
    assert _to_window(view, 95, 95) == pytest.approx((285.0, 305.0))


def test_to_mat4_values_is_column_major() -> None:
    m = AffineMatrix(a=1, b=2, c=3, d=4, tx=5, ty=6)
    values = to_mat4_values(m)
    assert len(values) == 16
    assert values[0:2] == (1.0, 3.0)
    assert values[4:6] == (2.0, 4.0)
    assert values[10] == 1.0 and values[15] == 1.0
    assert values[12:14] == (5.0, 6.0)
