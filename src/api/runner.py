"""
どこで: `api.runner`（実行ランナー）。
何を: 設定から時計を作成し、pyglet ウィンドウを描画先として 1 本の周期タイマーで全時計を更新する。
なぜ: コア（表示計算/変換合成）に、時刻源・描画先・スケジューラを結線する合成ルートとして。

実行フロー（概要）:
1) 設定解決: `config is None` の場合は `util.utils.load_config()`（YAML）を読む。
2) FPS 解決: 引数 > `clock_runner.fps` > `PXC_CLOCK_FPS`（既定 8）。
3) レジストリ: 未指定なら `SystemTimeSource` で作成し、`clocks:` 一覧から時計/アニメーションを登録。
4) `init_only=True` ならここで返す（pyglet を import しない）。
5) ウィンドウ: `ClockWindow` を描画先として接続し、キー入力を時計のボタン操作へ割り当てる。
6) フレーム駆動: `FrameClock([registry])` を `pyglet.clock.schedule_interval` で `1/fps` 秒毎に呼ぶ。

キー操作（選択中の時計に対して）:
- `0`〜`9`: 時計を選択 / `E`: 編集モード / `UP` or `+`: 増加 / `R`: リセット
- `F`: 12/24 時間表記 / `L`: ライト / `ESC`: 終了（pyglet 既定）
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from common.diagnostics import DiagnosticSink
from common.logging import setup_default_logging
from engine.clock.frame import RecordingTarget
from engine.clock.registry import ClockRegistry
from engine.clock.time_source import SystemTimeSource
from util.utils import load_config, resolve_fps

from .configurator import ClockConfigurator

logger = logging.getLogger(__name__)

DEFAULT_WINDOW_SIZE = (760, 400)
DEFAULT_CELL_SIZE = (190, 190)


def _runner_section(cfg: Mapping[str, Any]) -> Mapping[str, Any]:
    section = cfg.get("clock_runner", {})
    return section if isinstance(section, Mapping) else {}


def resolve_size(
    requested: tuple[int, int] | None, cfg_value: object, default: tuple[int, int]
) -> tuple[int, int]:
    """(幅, 高さ) を解決する。明示指定が不正なら `ValueError`、設定値が不正なら既定値。"""
    if requested is not None:
        w, h = int(requested[0]), int(requested[1])
        if w <= 0 or h <= 0:
            raise ValueError(f"size must be positive, got: {(w, h)}")
        return w, h
    if isinstance(cfg_value, (list, tuple)) and len(cfg_value) == 2:
        try:
            w, h = int(cfg_value[0]), int(cfg_value[1])
        except (TypeError, ValueError):
            return default
        if w > 0 and h > 0:
            return w, h
    return default


def _resolve_background(value: object) -> tuple[float, float, float, float]:
    if isinstance(value, (list, tuple)) and len(value) in (3, 4):
        try:
            rgba = [float(v) for v in value]
        except (TypeError, ValueError):
            return (1.0, 1.0, 1.0, 1.0)
        if len(rgba) == 3:
            rgba.append(1.0)
        return (rgba[0], rgba[1], rgba[2], rgba[3])
    return (1.0, 1.0, 1.0, 1.0)


def run_clocks(
    registry: ClockRegistry | None = None,
    *,
    config: Mapping[str, Any] | None = None,
    fps: int | None = None,
    window_size: tuple[int, int] | None = None,
    cell_size: tuple[int, int] | None = None,
    sink: DiagnosticSink | None = None,
    init_only: bool = False,
) -> ClockRegistry:
    """時計群を作成/接続して実行し、使用したレジストリを返す。

    Parameters
    ----------
    registry : ClockRegistry | None
        既存のレジストリ。None なら設定の `clocks:` から作成する。
    config : Mapping | None
        設定辞書。None で `load_config()`。
    fps : int | None
        更新レート。None で設定/環境変数から解決。
    window_size, cell_size : tuple[int, int] | None
        ウィンドウ/1 時計セルのピクセルサイズ。None で設定/既定値。
    sink : DiagnosticSink | None
        診断の通知先。None で既定（ログ or strict 例外）。
    init_only : bool, default False
        True で pyglet を読み込まずに構築だけ行って返す。
    """
    setup_default_logging()
    cfg = dict(config) if config is not None else load_config()
    runner_cfg = _runner_section(cfg)
    fps = resolve_fps(fps, cfg)
    win_w, win_h = resolve_size(window_size, runner_cfg.get("window_size"), DEFAULT_WINDOW_SIZE)
    cells = resolve_size(cell_size, runner_cfg.get("cell_size"), DEFAULT_CELL_SIZE)

    if registry is None:
        registry = ClockRegistry(SystemTimeSource(), RecordingTarget(), sink=sink)
        ClockConfigurator(registry, sink=sink).load_clocks(cfg)

    if init_only:
        return registry

    # 遅延インポート（ヘッドレス環境でのウィンドウ生成を避ける）
    import pyglet
    from pyglet.window import key

    from engine.core.frame_clock import FrameClock
    from engine.render.clock_window import ClockWindow

    window = ClockWindow(
        win_w,
        win_h,
        cell_size=cells,
        bg_color=_resolve_background(runner_cfg.get("background")),
    )
    registry.attach_target(window)
    registry.refresh_all()

    selected = {"index": 0}

    def on_key_press(symbol: int, modifiers: int) -> None:
        if key._0 <= symbol <= key._9:
            selected["index"] = symbol - key._0
            logger.info("clock #%d selected", selected["index"])
            return
        clock = registry.get(selected["index"])
        if clock is None:
            return
        if symbol == key.E:
            logger.info("clock #%d edit mode: %s", clock.index, clock.press_edit_mode().name)
        elif symbol in (key.UP, key.PLUS, key.NUM_ADD):
            clock.press_increase()
        elif symbol == key.R:
            clock.press_reset()
        elif symbol == key.F:
            clock.press_hour_format()
        elif symbol == key.L:
            clock.press_light()

    window.push_handlers(on_key_press=on_key_press)

    frame_clock = FrameClock([registry])
    pyglet.clock.schedule_interval(frame_clock.tick, 1.0 / fps)
    logger.info("running %d clock(s) at %d fps", len(registry), fps)
    pyglet.app.run()
    pyglet.clock.unschedule(frame_clock.tick)
    return registry


__all__ = ["run_clocks", "resolve_size"]
