"""
どこで: `engine.core` の 2D アフィン行列。
何を: 2x2 線形部 + 平行移動の不変値型 `AffineMatrix` と、平行移動/円周移動/拡大縮小/回転の構築・合成。
なぜ: アニメーション列を 1 つの変換に畳み込み、描画先へ 6 成分で渡すため。

データモデル（不変条件）:
- 内部は `float64 ndarray (2, 3)` の読み取り専用配列 `[[a, b, tx], [c, d, ty]]`。
- 点の写像は `p' = A·p + t`（A = [[a, b], [c, d]], t = (tx, ty)）。
- すべての演算は新しいインスタンスを返す（副作用ゼロ）。

合成規則:
- `m1.multiply(m2)` は「m2 を適用してから m1 を適用」する変換。
  `linear = A1·A2`, `t = A1·t2 + t1`。結合的だが可換ではない。

出力:
- `to_css_matrix()` は `(a, c, b, d, tx, ty)` の順（列優先の線形部→平行移動）。
  描画先の 2D 変換行列表現と一致させるため、この順序は変更しないこと。
"""

from __future__ import annotations

import math

import numpy as np

from common.diagnostics import DiagnosticSink
from common.types import CssMatrix, Mat2x3

from .vector2 import ORIGIN, Vector2


def _frozen(arr: np.ndarray) -> np.ndarray:
    arr.setflags(write=False)
    return arr


def _rotation_terms(theta_degrees: float, pivot: Vector2) -> tuple[float, float, float, float]:
    """回転角 [deg] とピボットから (cos, sin, tx, ty) を返す。"""
    rad = math.radians(float(theta_degrees))
    cos_t = math.cos(rad)
    sin_t = math.sin(rad)
    tx = (1.0 - cos_t) * pivot.x + sin_t * pivot.y
    ty = (1.0 - cos_t) * pivot.y - sin_t * pivot.x
    return cos_t, sin_t, tx, ty


class AffineMatrix:
    """2x3 のアフィン行列（不変）。"""

    __slots__ = ("_m",)

    def __init__(
        self,
        a: float = 1.0,
        b: float = 0.0,
        c: float = 0.0,
        d: float = 1.0,
        tx: float = 0.0,
        ty: float = 0.0,
    ) -> None:
        self._m = _frozen(
            np.array([[a, b, tx], [c, d, ty]], dtype=np.float64),
        )

    @classmethod
    def _from_array(cls, arr: np.ndarray) -> "AffineMatrix":
        obj = cls.__new__(cls)
        obj._m = _frozen(np.ascontiguousarray(arr, dtype=np.float64).reshape(2, 3))
        return obj

    # ---- 構築 -----------------------------------------------------------
    @classmethod
    def identity(cls) -> "AffineMatrix":
        return cls()

    @classmethod
    def translation(cls, dx: float, dy: float) -> "AffineMatrix":
        return cls(tx=float(dx), ty=float(dy))

    @classmethod
    def homothety(cls, sx: float, sy: float, pivot: Vector2 = ORIGIN) -> "AffineMatrix":
        """`pivot` を中心に `(sx, sy)` 倍する。"""
        sx, sy = float(sx), float(sy)
        return cls(a=sx, d=sy, tx=(1.0 - sx) * pivot.x, ty=(1.0 - sy) * pivot.y)

    @classmethod
    def rotation(cls, theta_degrees: float, pivot: Vector2 = ORIGIN) -> "AffineMatrix":
        """`pivot` 回りに `theta_degrees` [deg] 回転する。"""
        cos_t, sin_t, tx, ty = _rotation_terms(theta_degrees, pivot)
        return cls(a=cos_t, b=-sin_t, c=sin_t, d=cos_t, tx=tx, ty=ty)

    @classmethod
    def circular_translation(
        cls, theta_degrees: float, pivot: Vector2 = ORIGIN
    ) -> "AffineMatrix":
        """回転と同じ平行移動成分のみを持つ変換。

        内容物自体は回転させず、`pivot` 回りの円周上を移動させる。
        """
        _, _, tx, ty = _rotation_terms(theta_degrees, pivot)
        return cls(tx=tx, ty=ty)

    # ---- 成分 -----------------------------------------------------------
    @property
    def a(self) -> float:
        return float(self._m[0, 0])

    @property
    def b(self) -> float:
        return float(self._m[0, 1])

    @property
    def c(self) -> float:
        return float(self._m[1, 0])

    @property
    def d(self) -> float:
        return float(self._m[1, 1])

    @property
    def tx(self) -> float:
        return float(self._m[0, 2])

    @property
    def ty(self) -> float:
        return float(self._m[1, 2])

    @property
    def linear(self) -> np.ndarray:
        return self._m[:, :2]

    @property
    def translation_part(self) -> np.ndarray:
        return self._m[:, 2]

    def as_array(self) -> np.ndarray:
        """`(2, 3)` の読み取り専用コピーを返す。"""
        return _frozen(self._m.copy())

    def rows(self) -> Mat2x3:
        (a, b, tx), (c, d, ty) = self._m.tolist()
        return ((a, b, tx), (c, d, ty))

    # ---- 演算 -----------------------------------------------------------
    def multiply(self, other: "AffineMatrix") -> "AffineMatrix":
        """`self ∘ other`（other を先に適用）を返す。"""
        lin_s = self.linear
        out = np.empty((2, 3), dtype=np.float64)
        out[:, :2] = lin_s @ other.linear
        out[:, 2] = lin_s @ other.translation_part + self.translation_part
        return AffineMatrix._from_array(out)

    def __matmul__(self, other: "AffineMatrix") -> "AffineMatrix":
        if not isinstance(other, AffineMatrix):
            return NotImplemented
        return self.multiply(other)

    def apply(self, point: Vector2, *, sink: DiagnosticSink | None = None) -> Vector2:
        """点 `point` を写像する（`A·p + t`）。"""
        x, y = self.linear @ np.array([point.x, point.y]) + self.translation_part
        return Vector2(float(x), float(y), sink=sink)

    def is_close(self, other: "AffineMatrix", *, tol: float = 1e-9) -> bool:
        return bool(np.allclose(self._m, other._m, rtol=0.0, atol=tol))

    # ---- 出力 -----------------------------------------------------------
    def to_css_matrix(self) -> CssMatrix:
        """`(a, c, b, d, tx, ty)` の 6 成分を返す。"""
        m = self._m
        return (
            float(m[0, 0]),
            float(m[1, 0]),
            float(m[0, 1]),
            float(m[1, 1]),
            float(m[0, 2]),
            float(m[1, 2]),
        )

    def to_css(self) -> str:
        """CSS の `transform` 値（`matrix(a, c, b, d, tx, ty)`）を返す。"""
        return "matrix(" + ", ".join(repr(v) for v in self.to_css_matrix()) + ")"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AffineMatrix):
            return NotImplemented
        return bool(np.array_equal(self._m, other._m))

    def __hash__(self) -> int:
        return hash(self._m.tobytes())

    def __repr__(self) -> str:
        (a, b, tx), (c, d, ty) = self.rows()
        return f"AffineMatrix(a={a!r}, b={b!r}, c={c!r}, d={d!r}, tx={tx!r}, ty={ty!r})"


__all__ = ["AffineMatrix"]
