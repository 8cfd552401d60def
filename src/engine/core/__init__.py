"""
どこで: `engine.core` サブパッケージ。
何を: 2D ベクトル・アフィン行列・アニメーション合成・フレーム駆動（Tickable/FrameClock）を提供。
なぜ: 描画面に依存しない変換計算の基盤を構成し、上位層（clock/render/api）から再利用可能にするため。
"""

from .affine_matrix import AffineMatrix
from .animation import Animation, AnimationKind, AnimationStack, SamplingError, compose
from .vector2 import Vector2

__all__ = [
    "AffineMatrix",
    "Animation",
    "AnimationKind",
    "AnimationStack",
    "SamplingError",
    "Vector2",
    "compose",
]
