"""共通フィクスチャ。

- 警告の収集シンク
- 固定時刻源（UTC 00:00:00、観測者オフセット 0）
- 収集シンク/記録ターゲット付きのレジストリ
"""

from __future__ import annotations

import pytest

from common.diagnostics import CollectingSink
from engine.clock.frame import RecordingTarget
from engine.clock.registry import ClockRegistry
from engine.clock.time_source import FixedTimeSource


@pytest.fixture()
def sink() -> CollectingSink:
    return CollectingSink()


@pytest.fixture()
def time_source() -> FixedTimeSource:
    return FixedTimeSource(now_utc_millis=0, local_utc_offset_minutes=0)


@pytest.fixture()
def target() -> RecordingTarget:
    return RecordingTarget()


@pytest.fixture()
def registry(
    time_source: FixedTimeSource, target: RecordingTarget, sink: CollectingSink
) -> ClockRegistry:
    return ClockRegistry(time_source, target, sink=sink)
