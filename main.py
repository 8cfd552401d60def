from __future__ import annotations

from api import Animation, AnimationKind, ClockRegistry, SystemTimeSource, Vector2, run_clocks

CELL = 190


def build() -> ClockRegistry:
    """デモ用の 3 時計（東京・UTC・ニューファンドランド）。"""
    registry = ClockRegistry(SystemTimeSource())
    tokyo = registry.create(9, 0)
    utc = registry.create(0, 0)
    newfoundland = registry.create(-3, 30)

    center = Vector2(CELL / 2, CELL / 2)
    registry.add_animation(
        Animation(AnimationKind.ROTATION, center, Vector2(0, 0), Vector2(360, 0), 0, 60), tokyo
    )
    registry.add_animation(
        Animation(AnimationKind.HOMOTHETY, center, Vector2(0.9, 0.9), Vector2(1.1, 1.1), 0, 2), utc
    )
    registry.add_animation(
        Animation(
            AnimationKind.CIRCULAR_TRANSLATION,
            Vector2(CELL / 2, CELL / 2 + 10),
            Vector2(0, 0),
            Vector2(360, 0),
            0,
            10,
        ),
        newfoundland,
    )
    return registry


if __name__ == "__main__":
    run_clocks(build())
