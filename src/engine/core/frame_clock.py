"""
どこで: `engine.core` の簡易フレームドライバ。
何を: `Tickable` の列を固定順序で呼び出す FrameClock（dt 測定と再入防止）。
なぜ: 1 本の周期タイマーから複数コンポーネントの更新順を統一するため。
"""

from __future__ import annotations

import logging
import time
from typing import Sequence

from .tickable import Tickable

logger = logging.getLogger(__name__)


class FrameClock:
    """登録された Tickable を固定順序で実行するだけの極小クラス。

    - 1 回の `tick` 内では各 Tickable を逐次に呼ぶ（重なりなし）。
    - `tick` 実行中に再度 `tick` が呼ばれた場合は無視する。
    """

    def __init__(self, tickables: Sequence[Tickable]):
        self._tickables = tuple(tickables)
        self._last_time = time.perf_counter()
        self._running = False
        self.frame_count = 0

    # GUI フレームワークから schedule_interval で呼ばせる
    def tick(self, dt: float | None = None) -> None:
        if self._running:
            logger.debug("FrameClock.tick re-entered; skipped")
            return
        if dt is None:  # pyglet は dt を渡してくれる
            now = time.perf_counter()  # 他フレームワーク用
            dt = now - self._last_time
            self._last_time = now

        self._running = True
        try:
            for t in self._tickables:
                t.tick(dt)
        finally:
            self._running = False
        self.frame_count += 1
