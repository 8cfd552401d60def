"""
どこで: `common.diagnostics`
何を: 回復可能な異常（入力の既定値への置換・不正インデックス・非有限時刻）を通知する差し替え可能なシンク。
なぜ: コアはダイアログ等でブロックせず、通知方法（ログ/収集/例外）を境界側で選べるようにするため。

使い方:
    sink = CollectingSink()
    Vector2(float("nan"), 1.0, sink=sink)
    assert sink.messages  # ["invalid x to create 2D vector, switching to 0 by default"]
"""

from __future__ import annotations

import logging
from typing import Protocol

_DEFAULT_LOGGER = "engine.clock"


class ClockDiagnosticError(RuntimeError):
    """`RaisingSink` が送出する例外（strict モード）。"""


class DiagnosticSink(Protocol):
    """警告メッセージ 1 件を受け取る呼び出し可能。"""

    def __call__(self, message: str) -> None: ...


class LoggingSink:
    """`logging` の WARNING として出力する既定シンク。"""

    __slots__ = ("_logger",)

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger if logger is not None else logging.getLogger(_DEFAULT_LOGGER)

    def __call__(self, message: str) -> None:
        self._logger.warning("%s", message)


class CollectingSink:
    """受け取ったメッセージを順に保持する（テスト/フォーム検証用）。"""

    def __init__(self) -> None:
        self.messages: list[str] = []

    def __call__(self, message: str) -> None:
        self.messages.append(message)

    def __len__(self) -> int:
        return len(self.messages)

    def clear(self) -> None:
        self.messages.clear()


class RaisingSink:
    """警告を `ClockDiagnosticError` として送出する。"""

    def __call__(self, message: str) -> None:
        raise ClockDiagnosticError(message)


def default_sink() -> DiagnosticSink:
    """設定（`PXC_STRICT_DIAGNOSTICS`）に応じた既定シンクを返す。"""
    from . import settings

    if settings.get().STRICT_DIAGNOSTICS:
        return RaisingSink()
    return LoggingSink()


def report(sink: DiagnosticSink | None, message: str) -> None:
    """`sink` が None なら既定シンクへ委譲して通知する。"""
    (sink if sink is not None else default_sink())(message)


__all__ = [
    "ClockDiagnosticError",
    "DiagnosticSink",
    "LoggingSink",
    "CollectingSink",
    "RaisingSink",
    "default_sink",
    "report",
]
