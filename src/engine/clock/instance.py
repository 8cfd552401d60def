"""
どこで: `engine.clock` の時計インスタンス。
何を: `ClockTimeState` と `AnimationStack` を 1 つずつ所有し、ティック毎に
      「表示文字列 + 合成変換」を計算して描画先へ渡す `ClockInstance`。作成パラメータの検証も担う。
なぜ: ボタン操作（編集/増加/リセット/表記/ライト）と周期更新を同じ計算経路に揃えるため。
"""

from __future__ import annotations

import math
from numbers import Real

from common.diagnostics import DiagnosticSink, report
from engine.core.animation import Animation, AnimationStack

from .frame import ClockFrame, NullTarget, RenderTarget
from .time_source import SystemTimeSource, TimeSource
from .time_state import ClockTimeState, EditMode, combine_utc_offset

HOUR_OFFSET_RANGE = (-12, 14)
ALLOWED_MINUTE_OFFSETS = (0, 30, 45)


def coerce_int(value: object) -> int | None:
    """整数/整数値の浮動小数/整数文字列を int にする。それ以外は None。"""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    if isinstance(value, Real):
        f = float(value)
        if math.isfinite(f) and f.is_integer():
            return int(f)
    return None


def validate_utc_offsets(
    hour_offset: object, minute_offset: object, *, sink: DiagnosticSink | None = None
) -> tuple[int, int] | None:
    """時 [-12, 14] と分 {0, 30, 45} を検証する。不正なら通知して None。"""
    lo, hi = HOUR_OFFSET_RANGE
    hour = coerce_int(hour_offset)
    if hour is None or not (lo <= hour <= hi):
        report(sink, f"invalid hour offset to create clock: {hour_offset!r}")
        return None
    minute = coerce_int(minute_offset)
    if minute not in ALLOWED_MINUTE_OFFSETS:
        report(sink, f"invalid minute offset to create clock: {minute_offset!r}")
        return None
    return hour, minute


class ClockInstance:
    """1 つの時計。識別子（作成順インデックス）は不変、アニメーションは追加のみ。"""

    def __init__(
        self,
        index: int,
        utc_offset_minutes: int,
        *,
        time_source: TimeSource | None = None,
        target: RenderTarget | None = None,
        sink: DiagnosticSink | None = None,
    ) -> None:
        self._index = int(index)
        self.state = ClockTimeState(utc_offset_minutes=utc_offset_minutes)
        self.animations = AnimationStack(sink=sink)
        self._time_source: TimeSource = time_source if time_source is not None else SystemTimeSource()
        self._target: RenderTarget = target if target is not None else NullTarget()

    @classmethod
    def from_offsets(
        cls,
        index: int,
        hour_offset: int,
        minute_offset: int,
        **kwargs,
    ) -> "ClockInstance":
        return cls(index, combine_utc_offset(hour_offset, minute_offset), **kwargs)

    @property
    def index(self) -> int:
        return self._index

    @property
    def utc_offset_minutes(self) -> int:
        return self.state.utc_offset_minutes

    @property
    def target(self) -> RenderTarget:
        return self._target

    @target.setter
    def target(self, target: RenderTarget) -> None:
        self._target = target

    def add_animation(self, animation: Animation) -> None:
        self.animations.add(animation)

    # ---- 計算 -----------------------------------------------------------
    def frame(self, now_utc_millis: int, local_utc_offset_minutes: int) -> ClockFrame:
        """与えた時刻における表示と変換を計算する（副作用なし）。"""
        return ClockFrame(
            index=self._index,
            text=self.state.compute_display(now_utc_millis, local_utc_offset_minutes),
            timezone_label=self.state.timezone_label,
            matrix=self.animations.compose(now_utc_millis / 1000.0),
            light_on=self.state.light_on,
            light_color=self.state.light_color,
        )

    def refresh(self) -> ClockFrame:
        """時刻源から現在時刻を読み、計算結果を描画先へ渡す。"""
        ts = self._time_source
        return self.publish(ts.now_utc_millis(), ts.local_utc_offset_minutes())

    def publish(self, now_utc_millis: int, local_utc_offset_minutes: int) -> ClockFrame:
        frame = self.frame(now_utc_millis, local_utc_offset_minutes)
        self._target.render(frame)
        return frame

    # ---- ボタン操作 -------------------------------------------------------
    def press_edit_mode(self) -> EditMode:
        return self.state.cycle_edit_mode()

    def press_increase(self) -> ClockFrame | None:
        if self.state.apply_increase():
            return self.refresh()
        return None

    def press_reset(self) -> ClockFrame:
        self.state.reset()
        return self.refresh()

    def press_hour_format(self) -> ClockFrame:
        self.state.toggle_format()
        return self.refresh()

    def press_light(self) -> ClockFrame:
        self.state.toggle_light()
        return self.refresh()

    def __repr__(self) -> str:
        return (
            f"ClockInstance(index={self._index}, {self.state.timezone_label}, "
            f"animations={len(self.animations)})"
        )


__all__ = [
    "ClockInstance",
    "coerce_int",
    "validate_utc_offsets",
    "HOUR_OFFSET_RANGE",
    "ALLOWED_MINUTE_OFFSETS",
]
