"""
どこで: `api` 入口（高レベル公開 API）。
何を: 行列/アニメーション/時計レジストリ・設定取り込み・ランナーを再輸出。
なぜ: 利用者が単一名前空間から時計作成→アニメーション追加→実行まで完結できるようにするため。

Usage:
    from api import Animation, AnimationKind, ClockRegistry, Vector2, run_clocks

    registry = ClockRegistry()
    index = registry.create(9, 30)
    registry.add_animation(
        Animation(AnimationKind.ROTATION, Vector2(95, 95), Vector2(0, 0), Vector2(360, 0), 0, 60),
        index,
    )
    run_clocks(registry)
"""

from engine.clock import (
    ClockFrame,
    ClockInstance,
    ClockRegistry,
    ClockTimeState,
    EditMode,
    FixedTimeSource,
    RecordingTarget,
    SystemTimeSource,
)
from engine.core import AffineMatrix, Animation, AnimationKind, AnimationStack, Vector2

from .configurator import (
    AnimationForm,
    ClockConfigurator,
    default_timezone_selection,
    submit_button_label,
)
from .runner import run_clocks

__all__ = [
    # コア
    "AffineMatrix",
    "Animation",
    "AnimationKind",
    "AnimationStack",
    "Vector2",
    # 時計
    "ClockFrame",
    "ClockInstance",
    "ClockRegistry",
    "ClockTimeState",
    "EditMode",
    "FixedTimeSource",
    "RecordingTarget",
    "SystemTimeSource",
    # 入力/実行
    "AnimationForm",
    "ClockConfigurator",
    "default_timezone_selection",
    "submit_button_label",
    "run_clocks",
]

# バージョン情報
__version__ = "2026.10"
