"""
どこで: `engine.render` の座標変換ヘルパ（純関数）。
何を: 時計セル内の変換（y 下向き）を、ウィンドウ座標（y 上向き）用のビュー行列へ写す。
なぜ: 描画面へ渡す前の座標系の差を 1 か所に閉じ込め、ヘッドレスでも検証できるようにするため。

セル内ローカル座標 p（y 下向き、原点はセル左上）に時計の変換 M を掛け、ウィンドウ座標 w へ置く:

    view = T(left, H - top - cell_h) · F · M · F,   F = [[1, 0, 0], [0, -1, cell_h]]

F は自身の逆行列（y 反転）。ラベル等はセル内 y 上向き座標で配置する。
"""

from __future__ import annotations

from engine.core.affine_matrix import AffineMatrix


def cell_origin(index: int, cell_size: tuple[int, int], window_width: int) -> tuple[int, int]:
    """`index` 番目のセルの左上 (left, top)（y 下向き）を返す。左→右、上→下に敷き詰める。"""
    cw, ch = cell_size
    cols = max(1, int(window_width) // max(1, int(cw)))
    row, col = divmod(int(index), cols)
    return col * cw, row * ch


def cell_view_matrix(
    matrix: AffineMatrix,
    origin: tuple[float, float],
    cell_size: tuple[float, float],
    window_height: float,
) -> AffineMatrix:
    left, top = origin
    cell_h = float(cell_size[1])
    flip = AffineMatrix(d=-1.0, ty=cell_h)
    place = AffineMatrix.translation(left, float(window_height) - top - cell_h)
    return place.multiply(flip).multiply(matrix).multiply(flip)


def to_mat4_values(matrix: AffineMatrix) -> tuple[float, ...]:
    """列優先の 4x4 行列成分（16 要素）を返す。z は恒等。"""
    a, c, b, d, tx, ty = matrix.to_css_matrix()
    return (
        a, c, 0.0, 0.0,
        b, d, 0.0, 0.0,
        0.0, 0.0, 1.0, 0.0,
        tx, ty, 0.0, 1.0,
    )  # fmt: skip


__all__ = ["cell_origin", "cell_view_matrix", "to_mat4_values"]
