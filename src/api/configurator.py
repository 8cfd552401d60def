"""
どこで: `api.configurator`（設定の取り込み口）。
何を: 時計作成/アニメーション追加フォーム相当の入力と、YAML 設定の `clocks:` 一覧から
      `ClockRegistry` へ時計とアニメーションを登録する。
なぜ: 文字列/数値混在の外部入力をここで数値化・検証し、コアへは型の揃った値だけを渡すため。

フォームの挙動:
- 対象インデックスが負なら新しい時計を作成し、そのインデックスへアニメーションを追加する。
- 種別が NONE のアニメーションは追加しない。
- 空欄は 0 として扱い（非表示の y 欄など）、数値化できない入力は NaN として
  `Vector2`/`Animation` 側の既定値置換（警告付き）に委ねる。

YAML 例:
    clocks:
      - utc: [9, 30]
        animations:
          - {kind: rotation, pivot: [95, 95], start: [0, 0], end: [360, 0], duration: 60}
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, Iterable, Mapping

from common.diagnostics import DiagnosticSink, report
from engine.clock.instance import coerce_int
from engine.clock.registry import ClockRegistry
from engine.core.animation import Animation, AnimationKind
from engine.core.vector2 import Vector2

logger = logging.getLogger(__name__)


def _num(value: object) -> float:
    """フォーム値を float にする（空欄は 0.0、不正は NaN）。"""
    if value is None or isinstance(value, bool):
        return math.nan
    # 非表示の入力欄は空文字で届く
    if isinstance(value, str) and not value.strip():
        return 0.0
    try:
        return float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return math.nan


def _pair(value: object) -> tuple[float, float]:
    if isinstance(value, Mapping):
        return _num(value.get("x")), _num(value.get("y"))
    if isinstance(value, (list, tuple)) and len(value) == 2:
        return _num(value[0]), _num(value[1])
    return math.nan, math.nan


@dataclass(frozen=True)
class AnimationForm:
    """アニメーション入力欄の生の値。"""

    kind: object = AnimationKind.NONE
    pivot: tuple[object, object] = (0.0, 0.0)
    start: tuple[object, object] = (0.0, 0.0)
    end: tuple[object, object] = (0.0, 0.0)
    time_offset: object = 0.0
    duration: object = 0.0

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "AnimationForm":
        return cls(
            kind=data.get("kind", AnimationKind.NONE),
            pivot=_pair(data.get("pivot", (0.0, 0.0))),
            start=_pair(data.get("start", (0.0, 0.0))),
            end=_pair(data.get("end", (0.0, 0.0))),
            time_offset=data.get("time_offset", 0.0),
            duration=data.get("duration", 0.0),
        )

    def is_none(self) -> bool:
        return AnimationKind.parse(self.kind) is AnimationKind.NONE

    def to_animation(self, *, sink: DiagnosticSink | None = None) -> Animation:
        px, py = (_num(v) for v in self.pivot)
        sx, sy = (_num(v) for v in self.start)
        ex, ey = (_num(v) for v in self.end)
        return Animation(
            self.kind,  # type: ignore[arg-type]
            Vector2(px, py, sink=sink),
            Vector2(sx, sy, sink=sink),
            Vector2(ex, ey, sink=sink),
            _num(self.time_offset),
            _num(self.duration),
            sink=sink,
        )


def default_timezone_selection(local_utc_offset_minutes: int) -> tuple[int, int]:
    """観測者のオフセットから、フォームの初期選択 (時, 分) を返す。

    時は 0 方向への切り捨て、分は絶対値（例: -210 -> (-3, 30)）。
    """
    minutes = int(local_utc_offset_minutes)
    hour = int(minutes / 60)
    return hour, abs(minutes - hour * 60)


def submit_button_label(target_index: int) -> str:
    return "Add animation" if target_index >= 0 else "Create clock"


class ClockConfigurator:
    """`ClockRegistry` へのフォーム/設定入力の窓口。"""

    def __init__(self, registry: ClockRegistry, *, sink: DiagnosticSink | None = None) -> None:
        self.registry = registry
        self._sink = sink

    def submit(
        self,
        target_index: object,
        hour_offset: object,
        minute_offset: object,
        form: AnimationForm | None = None,
    ) -> int | None:
        """フォーム送信 1 回分を処理し、対象時計のインデックス（作成失敗時 None）を返す。

        `target_index` は選択欄の値（整数または整数文字列）。負なら新規作成。
        """
        index = coerce_int(target_index)
        if index is None:
            report(self._sink, f"invalid clock index in form: {target_index!r}")
            return None
        target_index = index
        if target_index < 0:
            created = self.registry.create(hour_offset, minute_offset)
            if created is None:
                return None
            target_index = created

        if form is not None and not form.is_none():
            self.registry.add_animation(form.to_animation(sink=self._sink), target_index)
        return target_index

    def load_clocks(self, config: Mapping[str, Any]) -> list[int]:
        """設定の `clocks:` 一覧から時計を作成し、作成できたインデックスを返す。"""
        entries = config.get("clocks") or []
        if not isinstance(entries, list):
            report(self._sink, "invalid 'clocks' section in configuration, ignored")
            return []
        created: list[int] = []
        for entry in entries:
            if not isinstance(entry, Mapping):
                report(self._sink, f"invalid clock entry in configuration: {entry!r}")
                continue
            utc = entry.get("utc")
            hour, minute = utc if _is_pair(utc) else (None, None)
            index = self.registry.create(hour, minute)
            if index is None:
                continue
            for anim in _iter_mappings(entry.get("animations")):
                form = AnimationForm.from_mapping(anim)
                if not form.is_none():
                    self.registry.add_animation(form.to_animation(sink=self._sink), index)
            created.append(index)
        logger.info("loaded %d clock(s) from configuration", len(created))
        return created


def _is_pair(value: object) -> bool:
    return isinstance(value, (list, tuple)) and len(value) == 2


def _iter_mappings(value: object) -> Iterable[Mapping[str, Any]]:
    if not isinstance(value, list):
        return ()
    return [v for v in value if isinstance(v, Mapping)]


__all__ = [
    "AnimationForm",
    "ClockConfigurator",
    "default_timezone_selection",
    "submit_button_label",
]
