"""
どこで: `engine.core` のアニメーション。
何を: 時刻 t [秒] から 2D アフィン行列を返すループアニメーション `Animation` と、
      その順序付きリストを 1 行列へ畳み込む `AnimationStack`。
なぜ: 時計ウィジェットの見た目の変換を、描画面に依存しない純粋な計算として扱うため。

設計方針:
- 種別は閉じた `AnimationKind`（IntEnum）で表し、行列への写像は `_MATRIX_BUILDERS` で網羅する。
- 進捗は `(t - time_offset) / duration` の小数部（負の時刻でも 0..1 に収まる）で、両方向に無限ループ。
- `duration == 0` は常に終了値（時刻は参照しない）。
- 合成は左から右へ右掛け: `acc = acc.multiply(anim.sample(t))`。先頭ほど外側の変換になる。
- 構築時の不正値は既定値へ置換し、診断シンクへ通知する（例外は送出しない）。
"""

from __future__ import annotations

import math
from enum import IntEnum
from numbers import Real
from typing import Callable, Iterable, Iterator

from common.diagnostics import DiagnosticSink, report

from .affine_matrix import AffineMatrix
from .vector2 import ORIGIN, Vector2


class SamplingError(ValueError):
    """非有限の時刻でアニメーションを評価しようとした。"""


class AnimationKind(IntEnum):
    NONE = 0
    TRANSLATION = 1
    CIRCULAR_TRANSLATION = 2
    HOMOTHETY = 3
    ROTATION = 4

    @property
    def uses_angle(self) -> bool:
        """値の x 成分を角度 [deg] として使う種別か（y は無視）。"""
        return self in (AnimationKind.CIRCULAR_TRANSLATION, AnimationKind.ROTATION)

    @property
    def uses_pivot(self) -> bool:
        return self in (
            AnimationKind.CIRCULAR_TRANSLATION,
            AnimationKind.HOMOTHETY,
            AnimationKind.ROTATION,
        )

    def field_labels(self) -> tuple[str, str]:
        """入力フォームの (見出し, 単位) を返す。"""
        if self.uses_angle:
            return ("angle:", "degrees")
        if self is AnimationKind.HOMOTHETY:
            return ("X:", "factor")
        return ("X:", "pixels")

    @classmethod
    def parse(cls, value: object) -> "AnimationKind | None":
        """整数コード/名前（大文字小文字・ハイフン無視）から種別を得る。未知なら None。"""
        if isinstance(value, AnimationKind):
            return value
        if isinstance(value, str):
            key = value.strip().upper().replace("-", "_").replace(" ", "_")
            if key in cls.__members__:
                return cls[key]
            try:
                value = int(key)
            except ValueError:
                return None
        if isinstance(value, Real) and not isinstance(value, bool):
            f = float(value)
            if math.isfinite(f) and f.is_integer():
                try:
                    return cls(int(f))
                except ValueError:
                    return None
        return None


_MATRIX_BUILDERS: dict[AnimationKind, Callable[[Vector2, Vector2], AffineMatrix]] = {
    AnimationKind.NONE: lambda value, pivot: AffineMatrix.identity(),
    AnimationKind.TRANSLATION: lambda value, pivot: AffineMatrix.translation(value.x, value.y),
    AnimationKind.CIRCULAR_TRANSLATION: lambda value, pivot: AffineMatrix.circular_translation(
        value.x, pivot
    ),
    AnimationKind.HOMOTHETY: lambda value, pivot: AffineMatrix.homothety(value.x, value.y, pivot),
    AnimationKind.ROTATION: lambda value, pivot: AffineMatrix.rotation(value.x, pivot),
}


def _frac(x: float) -> float:
    """x の小数部（0.0 <= r < 1.0）。負の値にも安定。"""
    r = x - math.floor(x)
    # ULP 誤差で 1.0 に丸まるケース
    if r >= 1.0 or r < 0.0:
        return 0.0
    return r


def _finite_real(value: object) -> float | None:
    if isinstance(value, Real) and not isinstance(value, bool):
        v = float(value)
        if math.isfinite(v):
            return v
    return None


class Animation:
    """開始値→終了値をループ補間し、種別に応じた行列へ写像するアニメーション（不変）。

    引数:
        kind: 変換種別（`AnimationKind` / 整数コード / 名前）。不正なら NONE。
        pivot: 変換の基準点（平行移動では未使用）。
        start_value: ループ開始時の値（角度種別では x のみ使用）。
        end_value: ループ終了時の値。
        time_offset: 時間オフセット [秒]。不正なら 0。
        duration: 1 ループの長さ [秒]。不正/負なら 0（常に終了値）。
        sink: 構築時の警告の通知先。None で既定シンク。
    """

    __slots__ = ("_kind", "_pivot", "_start", "_end", "_time_offset", "_duration")

    def __init__(
        self,
        kind: AnimationKind | int | str,
        pivot: Vector2 = ORIGIN,
        start_value: Vector2 = ORIGIN,
        end_value: Vector2 = ORIGIN,
        time_offset: float = 0.0,
        duration: float = 0.0,
        *,
        sink: DiagnosticSink | None = None,
    ) -> None:
        k = AnimationKind.parse(kind)
        if k is None:
            report(sink, "invalid 2D animation type, switching to none by default")
            k = AnimationKind.NONE

        offset = _finite_real(time_offset)
        if offset is None:
            report(sink, "invalid 2D animation time offset, switching to 0 by default")
            offset = 0.0

        dur = _finite_real(duration)
        if dur is None or dur < 0.0:
            report(sink, "invalid 2D animation duration, switching to 0 by default")
            dur = 0.0

        self._kind = k
        self._pivot = pivot
        self._start = start_value
        self._end = end_value
        self._time_offset = offset
        self._duration = dur

    # ---- 属性 -----------------------------------------------------------
    @property
    def kind(self) -> AnimationKind:
        return self._kind

    @property
    def pivot(self) -> Vector2:
        return self._pivot

    @property
    def start_value(self) -> Vector2:
        return self._start

    @property
    def end_value(self) -> Vector2:
        return self._end

    @property
    def time_offset(self) -> float:
        return self._time_offset

    @property
    def duration(self) -> float:
        return self._duration

    # ---- 評価 -----------------------------------------------------------
    def progress(self, t: float) -> float:
        """時刻 `t` におけるループ進捗 [0, 1)。`duration == 0` では 1.0。"""
        if self._duration == 0.0:
            return 1.0
        t = float(t)
        if not math.isfinite(t):
            raise SamplingError(f"invalid time to sample animation: {t!r}")
        return _frac((t - self._time_offset) / self._duration)

    def value_at(self, t: float, *, sink: DiagnosticSink | None = None) -> Vector2:
        """時刻 `t` の補間値を返す。非有限の `t` では `SamplingError`。"""
        if self._duration == 0.0:
            return self._end
        return self._start.lerp(self._end, self.progress(t), sink=sink)

    def sample(self, t: float, *, sink: DiagnosticSink | None = None) -> AffineMatrix:
        """時刻 `t` [秒] の変換行列を返す。非有限の `t` では `SamplingError`。"""
        if self._kind is AnimationKind.NONE:
            return AffineMatrix.identity()
        return _MATRIX_BUILDERS[self._kind](self.value_at(t, sink=sink), self._pivot)

    def __repr__(self) -> str:
        return (
            f"Animation({self._kind.name}, pivot={self._pivot!r}, start={self._start!r}, "
            f"end={self._end!r}, time_offset={self._time_offset!r}, duration={self._duration!r})"
        )


def compose(
    animations: Iterable[Animation], t: float, *, sink: DiagnosticSink | None = None
) -> AffineMatrix:
    """アニメーション列を時刻 `t` で評価し、左から右へ合成した行列を返す。

    - NONE 種別はスキップ（恒等寄与）。
    - 評価に失敗した要素は恒等行列で置換し、`sink` へ通知する（描画は止めない）。
    """
    acc = AffineMatrix.identity()
    for anim in animations:
        if anim.kind is AnimationKind.NONE:
            continue
        try:
            m = anim.sample(t, sink=sink)
        except SamplingError:
            report(sink, "invalid time to get animation matrix, switching to identity by default")
            m = AffineMatrix.identity()
        acc = acc.multiply(m)
    return acc


class AnimationStack:
    """1 つの時計に紐づく追加専用のアニメーション列。"""

    def __init__(
        self, animations: Iterable[Animation] = (), *, sink: DiagnosticSink | None = None
    ) -> None:
        self._animations: list[Animation] = list(animations)
        self._sink = sink

    def add(self, animation: Animation) -> None:
        self._animations.append(animation)

    def compose(self, t: float) -> AffineMatrix:
        return compose(self._animations, t, sink=self._sink)

    def __len__(self) -> int:
        return len(self._animations)

    def __iter__(self) -> Iterator[Animation]:
        return iter(tuple(self._animations))

    def __getitem__(self, index: int) -> Animation:
        return self._animations[index]


__all__ = [
    "AnimationKind",
    "Animation",
    "AnimationStack",
    "SamplingError",
    "compose",
]
