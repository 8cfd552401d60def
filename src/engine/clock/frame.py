"""
どこで: `engine.clock` の描画境界。
何を: 1 時計 1 ティック分の出力 `ClockFrame` と、それを受け取る `RenderTarget` Protocol、
      最小実装（`RecordingTarget`/`NullTarget`）。
なぜ: コアは「状態の計算」までを担当し、描画面への適用は協調オブジェクトへ委ねるため。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

from common.types import CssMatrix
from engine.core.affine_matrix import AffineMatrix


@dataclass(frozen=True)
class ClockFrame:
    index: int
    text: str
    timezone_label: str
    matrix: AffineMatrix = field(default_factory=AffineMatrix.identity)
    light_on: bool = False
    light_color: str = "transparent"

    @property
    def css_matrix(self) -> CssMatrix:
        return self.matrix.to_css_matrix()


class RenderTarget(Protocol):
    def render(self, frame: ClockFrame) -> None: ...


class NullTarget:
    """何も描画しない。"""

    def render(self, frame: ClockFrame) -> None:
        return None


class RecordingTarget:
    """時計ごとの最新フレームと描画回数を保持する（ヘッドレス/テスト用）。"""

    def __init__(self) -> None:
        self.frames: dict[int, ClockFrame] = {}
        self.render_count = 0

    def render(self, frame: ClockFrame) -> None:
        self.frames[frame.index] = frame
        self.render_count += 1

    def latest(self, index: int) -> ClockFrame | None:
        return self.frames.get(index)


__all__ = ["ClockFrame", "RenderTarget", "NullTarget", "RecordingTarget"]
