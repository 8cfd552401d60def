"""
どこで: `common` パッケージ。
何を: 環境変数/設定・ロギング・診断シンクなど、コア/ランナー双方で使う軽量ユーティリティ。
なぜ: 上位層（api）から再利用する共通基盤を分離し、依存の向きを単純化するため。
"""

from .diagnostics import (
    ClockDiagnosticError,
    CollectingSink,
    DiagnosticSink,
    LoggingSink,
    RaisingSink,
)

__all__ = [
    "ClockDiagnosticError",
    "CollectingSink",
    "DiagnosticSink",
    "LoggingSink",
    "RaisingSink",
]
