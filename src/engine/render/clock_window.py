"""
どこで: `engine.render` の時計ウィンドウ（pyglet）。
何を: `RenderTarget` として `ClockFrame` を受け取り、時計ごとに表示枠・時刻・タイムゾーンの
      ラベルを描画する pyglet Window。各時計のバッチはアニメーション変換をビュー行列として描く。
なぜ: コアが計算した「文字列 + 6 成分行列 + ライト状態」を実際の画面へ適用する最小の描画先として。

使用例:
    win = ClockWindow(760, 400, cell_size=(190, 190))
    registry = ClockRegistry(target=win)
    pyglet.app.run()
"""

from __future__ import annotations

import pyglet
from pyglet.gl import glClearColor
from pyglet.math import Mat4

from engine.clock.frame import ClockFrame
from engine.clock.time_state import LIGHT_ON_COLOR

from .transform import cell_origin, cell_view_matrix, to_mat4_values

# 表示枠/文字の既定（ピクセル）
DISPLAY_SIZE = (150, 40)
TEXT_COLOR = (0, 0, 0, 255)
LIGHT_COLORS: dict[str, tuple[int, int, int]] = {
    LIGHT_ON_COLOR: (64, 224, 208),
}


class _ClockWidget:
    """1 時計分のバッチ（セル内 y 上向き座標で配置）。"""

    def __init__(self, cell_size: tuple[int, int]) -> None:
        cw, ch = cell_size
        dw, dh = DISPLAY_SIZE
        cx, cy = cw / 2, ch / 2
        self.batch = pyglet.graphics.Batch()
        self.dial = pyglet.shapes.Arc(
            cx, cy, min(cw, ch) / 2 - 2, color=(0, 0, 0, 255), batch=self.batch
        )
        self.light = pyglet.shapes.Rectangle(
            cx - dw / 2, cy - dh / 2, dw, dh, color=(64, 224, 208, 255), batch=self.batch
        )
        self.light.visible = False
        self.time_label = pyglet.text.Label(
            "",
            x=cx,
            y=cy + 6,
            anchor_x="center",
            anchor_y="center",
            font_size=16,
            color=TEXT_COLOR,
            batch=self.batch,
        )
        self.zone_label = pyglet.text.Label(
            "",
            x=cx,
            y=cy - 12,
            anchor_x="center",
            anchor_y="center",
            font_size=9,
            color=TEXT_COLOR,
            batch=self.batch,
        )

    def update(self, frame: ClockFrame) -> None:
        self.time_label.text = frame.text
        self.zone_label.text = frame.timezone_label
        rgb = LIGHT_COLORS.get(frame.light_color)
        self.light.visible = rgb is not None
        if rgb is not None:
            self.light.color = (*rgb, 255)


class ClockWindow(pyglet.window.Window):
    def __init__(
        self,
        width: int,
        height: int,
        *,
        cell_size: tuple[int, int] = (190, 190),
        bg_color: tuple[float, float, float, float] = (1.0, 1.0, 1.0, 1.0),
    ):
        """ウィンドウを生成する。

        引数:
            width: ウィンドウ幅（ピクセル）。
            height: ウィンドウ高さ（ピクセル）。
            cell_size: 1 時計ぶんの描画セル（ピクセル）。
            bg_color: 背景色 RGBA（0.0〜1.0）。
        """
        super().__init__(width=width, height=height, caption="Clocks")
        self._bg_color = bg_color
        self._cell_size = (int(cell_size[0]), int(cell_size[1]))
        self._widgets: dict[int, _ClockWidget] = {}
        self._frames: dict[int, ClockFrame] = {}

    # RenderTarget
    def render(self, frame: ClockFrame) -> None:
        widget = self._widgets.get(frame.index)
        if widget is None:
            widget = self._widgets[frame.index] = _ClockWidget(self._cell_size)
        widget.update(frame)
        self._frames[frame.index] = frame

    def on_draw(self):  # Pyglet 既定のイベント名
        r, g, b, a = self._bg_color
        glClearColor(r, g, b, a)
        self.clear()
        for index, widget in self._widgets.items():
            frame = self._frames[index]
            origin = cell_origin(index, self._cell_size, self.width)
            view = cell_view_matrix(frame.matrix, origin, self._cell_size, self.height)
            self.view = Mat4(*to_mat4_values(view))
            widget.batch.draw()
        self.view = Mat4()
