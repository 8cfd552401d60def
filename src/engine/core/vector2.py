"""
どこで: `engine.core` の 2D ベクトル値型。
何を: 不変な `Vector2`（x, y, norm）と成分検証（非有限値は 0 に置換して警告）。
なぜ: ピボット/アニメーション始終値など、行列構築の入力を一様に扱うため。
"""

from __future__ import annotations

import math
from numbers import Real

from common.diagnostics import DiagnosticSink, report
from common.types import Vec2


def _finite_or_zero(value: object, axis: str, sink: DiagnosticSink | None) -> float:
    if isinstance(value, Real) and not isinstance(value, bool):
        v = float(value)
        if math.isfinite(v):
            return v
    report(sink, f"invalid {axis} to create 2D vector, switching to 0 by default")
    return 0.0


class Vector2:
    """2D 点/ベクトル（不変）。

    非有限（NaN/±inf）または数値でない成分は 0.0 に置換され、`sink` へ警告が通知される。
    """

    __slots__ = ("_x", "_y")

    def __init__(
        self, x: float = 0.0, y: float = 0.0, *, sink: DiagnosticSink | None = None
    ) -> None:
        object.__setattr__(self, "_x", _finite_or_zero(x, "x", sink))
        object.__setattr__(self, "_y", _finite_or_zero(y, "y", sink))

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError("Vector2 is immutable")

    @property
    def x(self) -> float:
        return self._x

    @property
    def y(self) -> float:
        return self._y

    def norm(self) -> float:
        """ユークリッドノルム `sqrt(x^2 + y^2)`。"""
        return math.hypot(self._x, self._y)

    def lerp(
        self, other: "Vector2", tau: float, *, sink: DiagnosticSink | None = None
    ) -> "Vector2":
        """成分ごとの線形補間 `(1 - tau) * self + tau * other`。"""
        return Vector2(
            (1.0 - tau) * self._x + tau * other._x,
            (1.0 - tau) * self._y + tau * other._y,
            sink=sink,
        )

    def as_tuple(self) -> Vec2:
        return (self._x, self._y)

    def __iter__(self):
        yield self._x
        yield self._y

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vector2):
            return NotImplemented
        return self._x == other._x and self._y == other._y

    def __hash__(self) -> int:
        return hash((self._x, self._y))

    def __repr__(self) -> str:
        return f"Vector2({self._x!r}, {self._y!r})"


ORIGIN = Vector2(0.0, 0.0)

__all__ = ["Vector2", "ORIGIN"]
