"""
どこで: `engine.clock` の時刻入力。
何を: 現在時刻（UTC ミリ秒）と観測者のローカル UTC オフセット（分）を供給する `TimeSource` と実装。
なぜ: コアは時刻を自ら読まず、純粋な入力として受け取るため（テストでは固定時刻を注入）。
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Protocol


class TimeSource(Protocol):
    def now_utc_millis(self) -> int: ...

    def local_utc_offset_minutes(self) -> int: ...


class SystemTimeSource:
    """OS の壁時計とローカルタイムゾーンを読む。"""

    def now_utc_millis(self) -> int:
        now = datetime.now(timezone.utc)
        return int(now.timestamp() * 1000)

    def local_utc_offset_minutes(self) -> int:
        offset = datetime.now().astimezone().utcoffset()
        if offset is None:
            return 0
        return int(offset.total_seconds() // 60)


class FixedTimeSource:
    """任意に設定/前進できる時刻源。"""

    def __init__(self, now_utc_millis: int = 0, local_utc_offset_minutes: int = 0) -> None:
        self._now = int(now_utc_millis)
        self._local_offset = int(local_utc_offset_minutes)

    def now_utc_millis(self) -> int:
        return self._now

    def local_utc_offset_minutes(self) -> int:
        return self._local_offset

    def set(self, now_utc_millis: int) -> None:
        self._now = int(now_utc_millis)

    def advance(self, seconds: float) -> None:
        self._now += int(round(float(seconds) * 1000))


__all__ = ["TimeSource", "SystemTimeSource", "FixedTimeSource"]
