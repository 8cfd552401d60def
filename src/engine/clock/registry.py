"""
どこで: `engine.clock` のレジストリ。
何を: 作成済み時計を作成順に保持する追加専用の `ClockRegistry`（`Tickable`）。
なぜ: モジュール大域の配列/タイマーを使わず、合成ルートが所有して周期ドライバへ注入するため。

不変条件:
- インデックスは 0 から連番。作成失敗時は採番しない。
- 削除操作は存在しない。
- `tick` は登録順に逐次更新し、実行中の再入は無視する。
"""

from __future__ import annotations

import logging
from numbers import Integral
from typing import Iterator

from common.diagnostics import DiagnosticSink, report
from engine.core.animation import Animation

from .frame import ClockFrame, NullTarget, RenderTarget
from .instance import ClockInstance, validate_utc_offsets
from .time_source import SystemTimeSource, TimeSource
from .time_state import combine_utc_offset

logger = logging.getLogger(__name__)


class ClockRegistry:
    def __init__(
        self,
        time_source: TimeSource | None = None,
        target: RenderTarget | None = None,
        *,
        sink: DiagnosticSink | None = None,
    ) -> None:
        self.time_source: TimeSource = time_source if time_source is not None else SystemTimeSource()
        self.target: RenderTarget = target if target is not None else NullTarget()
        self._sink = sink
        self._instances: list[ClockInstance] = []
        self._ticking = False

    # ---- 作成/追加 ---------------------------------------------------------
    def create(self, hour_offset: object, minute_offset: object) -> int | None:
        """時計を作成して登録し、そのインデックスを返す。検証失敗時は None。"""
        offsets = validate_utc_offsets(hour_offset, minute_offset, sink=self._sink)
        if offsets is None:
            return None
        index = len(self._instances)
        clock = ClockInstance(
            index,
            combine_utc_offset(*offsets),
            time_source=self.time_source,
            target=self.target,
            sink=self._sink,
        )
        self._instances.append(clock)
        logger.debug("clock #%d created (%s)", index, clock.state.timezone_label)
        # 作成直後に表示を更新
        clock.refresh()
        return index

    def add_animation(self, animation: Animation, clock_index: object) -> bool:
        """`clock_index` の時計へアニメーションを追加する。不正なインデックスは通知して無視。"""
        if (
            isinstance(clock_index, bool)
            or not isinstance(clock_index, Integral)
            or not (0 <= int(clock_index) < len(self._instances))
        ):
            report(self._sink, f"invalid clock index to add an animation: {clock_index!r}")
            return False
        self._instances[int(clock_index)].add_animation(animation)
        return True

    def attach_target(self, target: RenderTarget) -> None:
        """描画先を差し替える（既存の時計にも反映）。"""
        self.target = target
        for clock in self._instances:
            clock.target = target

    # ---- 更新 -----------------------------------------------------------
    def refresh_all(self) -> list[ClockFrame]:
        """時刻源を 1 度だけ読み、全時計を登録順に更新する。"""
        now = self.time_source.now_utc_millis()
        local_offset = self.time_source.local_utc_offset_minutes()
        return [clock.publish(now, local_offset) for clock in self._instances]

    def tick(self, dt: float) -> None:
        if self._ticking:
            logger.debug("ClockRegistry.tick re-entered; skipped")
            return
        self._ticking = True
        try:
            self.refresh_all()
        finally:
            self._ticking = False

    # ---- 参照 -----------------------------------------------------------
    @property
    def instances(self) -> tuple[ClockInstance, ...]:
        return tuple(self._instances)

    def get(self, index: int) -> ClockInstance | None:
        if 0 <= index < len(self._instances):
            return self._instances[index]
        return None

    def __getitem__(self, index: int) -> ClockInstance:
        return self._instances[index]

    def __len__(self) -> int:
        return len(self._instances)

    def __iter__(self) -> Iterator[ClockInstance]:
        return iter(tuple(self._instances))


__all__ = ["ClockRegistry"]
