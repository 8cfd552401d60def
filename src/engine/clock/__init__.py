"""
どこで: `engine.clock` サブパッケージ。
何を: 時計状態（表示計算/編集モード）・時計インスタンス・レジストリ・時刻源・描画境界を提供。
なぜ: 時刻演算と変換合成をまとめ、周期ドライバ/描画面から独立に扱えるようにするため。
"""

from .frame import ClockFrame, NullTarget, RecordingTarget, RenderTarget
from .instance import ClockInstance, validate_utc_offsets
from .registry import ClockRegistry
from .time_source import FixedTimeSource, SystemTimeSource, TimeSource
from .time_state import ClockTimeState, EditMode, combine_utc_offset, format_utc_offset

__all__ = [
    "ClockFrame",
    "ClockInstance",
    "ClockRegistry",
    "ClockTimeState",
    "EditMode",
    "FixedTimeSource",
    "NullTarget",
    "RecordingTarget",
    "RenderTarget",
    "SystemTimeSource",
    "TimeSource",
    "combine_utc_offset",
    "format_utc_offset",
    "validate_utc_offsets",
]
