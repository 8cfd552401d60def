"""
どこで: `common` の型定義。
何を: Vec2/Mat2x3/CssMatrix などの軽量エイリアス（組込みジェネリックで記述）。
なぜ: 依存の少ない場所に配置して循環と分散定義を避けるため。
"""

Vec2 = tuple[float, float]

# 2x3 アフィン行列の行優先表現 ((a, b, tx), (c, d, ty))
Mat2x3 = tuple[tuple[float, float, float], tuple[float, float, float]]

# CSS `matrix(a, c, b, d, tx, ty)` の 6 成分
CssMatrix = tuple[float, float, float, float, float, float]

__all__ = ["Vec2", "Mat2x3", "CssMatrix"]
